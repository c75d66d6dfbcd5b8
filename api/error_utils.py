"""
Standardized error handling utilities for EcoScan API endpoints.
Provides consistent error formats, HTTP status codes, and error codes across all endpoints.
"""

import logging
from flask import jsonify
from typing import Any, Optional

# Standard error codes for consistent API responses
ERROR_CODES = {
    # Client errors (400-499)
    "MISSING_IMAGE": "No se proporcionó ninguna imagen.",
    "INVALID_IMAGE": "El archivo enviado no es una imagen.",
    "VALIDATION_ERROR": "Request validation failed",
    "NOT_FOUND": "The requested resource was not found.",
    "METHOD_NOT_ALLOWED": "The method is not allowed for the requested URL.",
    "PAYLOAD_TOO_LARGE": "La imagen supera el tamaño máximo permitido.",
    "RATE_LIMITED": "Too many requests, please slow down.",

    # Upstream / system errors (500-599)
    "UPSTREAM_ERROR": "Error al procesar la imagen.",
    "SERVER_ERROR": "Internal server error",
}


class EcoScanError(Exception):
    """Base class for errors that map onto a JSON error envelope."""
    error_code = "SERVER_ERROR"
    status_code = 500

    def __init__(self, message: Optional[str] = None, details: Optional[Any] = None):
        self.message = message or ERROR_CODES[self.error_code]
        self.details = details
        super().__init__(self.message)


class MissingInputError(EcoScanError):
    error_code = "MISSING_IMAGE"
    status_code = 400


class InvalidInputError(EcoScanError):
    error_code = "INVALID_IMAGE"
    status_code = 400


class UpstreamServiceError(EcoScanError):
    """The vision/LLM call failed or returned content we could not use."""
    error_code = "UPSTREAM_ERROR"
    status_code = 502


def create_error_response(
    error_code: str,
    message: Optional[str] = None,
    details: Optional[Any] = None,
    status_code: int = 500
) -> tuple:
    """
    Create a standardized error response with consistent format.

    Args:
        error_code: One of the standard ERROR_CODES keys
        message: Optional custom message (defaults to standard message)
        details: Optional additional error details
        status_code: HTTP status code

    Returns:
        Tuple of (JSON response, HTTP status code)
    """
    if error_code not in ERROR_CODES:
        logging.warning(f"Unknown error code used: {error_code}")
        error_code = "SERVER_ERROR"

    error_message = message or ERROR_CODES[error_code]

    response_data = {
        "error": error_message,
        "error_code": error_code,
    }

    if details:
        response_data["details"] = details

    logging.error(f"API Error [{error_code}]: {error_message} - Status: {status_code}")

    return jsonify(response_data), status_code


def error_response_from(e: EcoScanError) -> tuple:
    return create_error_response(e.error_code, e.message, e.details, status_code=e.status_code)


def handle_exception(e: Exception, context: str = "API endpoint") -> tuple:
    """
    Handle unexpected exceptions with standardized error response.

    Args:
        e: The exception that occurred
        context: Context information for logging

    Returns:
        Tuple of (JSON response, HTTP status code)
    """
    if isinstance(e, EcoScanError):
        return error_response_from(e)

    error_type = type(e).__name__
    error_message = str(e)

    logging.error(f"Unexpected error in {context}: {error_type} - {error_message}", exc_info=True)

    return create_error_response(
        error_code="SERVER_ERROR",
        message="An unexpected error occurred",
        details=f"{error_type}: {error_message}",
        status_code=500
    )


# Common error response shortcuts
def validation_error(message: Optional[str] = None, details: Optional[Any] = None) -> tuple:
    return create_error_response("VALIDATION_ERROR", message, details, status_code=400)

