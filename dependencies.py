"""
Configuration and shared services for the EcoScan backend.
Settings come from the environment (populated from .env by load_dotenv() in main.py);
the Gemini service lives in app.extensions so tests can swap in a fake.
"""

import os
import logging
from flask import current_app

from gemini_service import GeminiService

ANALYZE_STRATEGIES = ("keyword", "structured")
QUIZ_STRATEGIES = ("images", "questions")


def load_settings() -> dict:
    """Reads every setting from the environment. Called once per app in create_app()."""
    return {
        "GEMINI_API_KEY": os.environ.get("GEMINI_API_KEY"),
        "GEMINI_TEXT_MODEL": os.environ.get("GEMINI_TEXT_MODEL", "gemini-2.5-flash"),
        "GEMINI_IMAGE_MODEL": os.environ.get("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image"),
        "ANALYZE_STRATEGY": os.environ.get("ANALYZE_STRATEGY", "keyword").strip().lower(),
        "QUIZ_STRATEGY": os.environ.get("QUIZ_STRATEGY", "images").strip().lower(),
        "CORS_ORIGINS": [o.strip() for o in os.environ.get("CORS_ORIGINS", "http://localhost:5173").split(",") if o.strip()],
        "MAX_CONTENT_LENGTH": int(os.environ.get("MAX_UPLOAD_MB", "10")) * 1024 * 1024,
        "RATELIMIT_STORAGE_URI": os.environ.get("RATELIMIT_STORAGE_URI", "memory://"),
        "ANALYZE_RATE_LIMIT": os.environ.get("ANALYZE_RATE_LIMIT", "30 per minute"),
    }


def validate_settings(config) -> None:
    if config["ANALYZE_STRATEGY"] not in ANALYZE_STRATEGIES:
        raise ValueError(f"Unknown ANALYZE_STRATEGY '{config['ANALYZE_STRATEGY']}'. Expected one of {ANALYZE_STRATEGIES}.")
    if config["QUIZ_STRATEGY"] not in QUIZ_STRATEGIES:
        raise ValueError(f"Unknown QUIZ_STRATEGY '{config['QUIZ_STRATEGY']}'. Expected one of {QUIZ_STRATEGIES}.")


def init_gemini_service(app) -> None:
    """Registers the Gemini service unless one was injected already (tests)."""
    if "gemini_service" in app.extensions:
        return
    app.extensions["gemini_service"] = GeminiService(
        api_key=app.config["GEMINI_API_KEY"],
        text_model=app.config["GEMINI_TEXT_MODEL"],
        image_model=app.config["GEMINI_IMAGE_MODEL"],
    )
    logging.info(f"Gemini service configured (text model: {app.config['GEMINI_TEXT_MODEL']}, image model: {app.config['GEMINI_IMAGE_MODEL']})")


def get_gemini_service():
    return current_app.extensions["gemini_service"]
