import logging
from flask import Blueprint, request, jsonify, current_app
from werkzeug.exceptions import HTTPException

from classifier import CategoryLabel, classify, describe_label, container_for, label_for_container
from dependencies import get_gemini_service
from extensions import limiter
from .error_utils import MissingInputError, InvalidInputError, EcoScanError, error_response_from, handle_exception
from .pydantic_models import AnalyzeResponse
from .sanitization import sanitize_string

analyze_bp = Blueprint('analyze_bp', __name__)

MAX_DESCRIPTION_LENGTH = 2000


def _read_upload():
    """Returns (bytes, mime_type) for the 'image' form field or raises."""
    upload = request.files.get('image')
    if upload is None or not upload.filename:
        raise MissingInputError()

    mime_type = (upload.mimetype or "").lower()
    if not mime_type.startswith("image/"):
        raise InvalidInputError(details=f"Unsupported content type: {mime_type or 'unknown'}")

    image_bytes = upload.read()
    if not image_bytes:
        raise MissingInputError("La imagen enviada está vacía.")
    return image_bytes, mime_type


def analyze_with_keywords(image_bytes: bytes, mime_type: str) -> AnalyzeResponse:
    """Describe the image with Gemini, then classify the description locally."""
    description = get_gemini_service().describe_image(image_bytes, mime_type)
    label = classify(description)
    return AnalyzeResponse(
        description=sanitize_string(description, max_length=MAX_DESCRIPTION_LENGTH),
        classification=describe_label(label),
        category=label.value,
        container=container_for(label),
        strategy="keyword",
    )


def analyze_structured(image_bytes: bytes, mime_type: str) -> AnalyzeResponse:
    """Let Gemini pick the bin, but only accept bins from the closed set."""
    result = get_gemini_service().classify_image(image_bytes, mime_type)
    label = label_for_container(result.container)
    if label is CategoryLabel.UNRECOGNIZED:
        logging.warning(f"Gemini reported an unknown container '{result.container}'; treating as unrecognized")

    details = result.details
    details.objectName = sanitize_string(details.objectName, max_length=200)
    details.reason = sanitize_string(details.reason, max_length=MAX_DESCRIPTION_LENGTH)
    details.confidence = sanitize_string(details.confidence, max_length=50)
    description = details.objectName or details.reason

    return AnalyzeResponse(
        description=description,
        classification=describe_label(label),
        category=label.value,
        container=container_for(label),
        strategy="structured",
        details=details,
    )


ANALYZE_STRATEGY_HANDLERS = {
    "keyword": analyze_with_keywords,
    "structured": analyze_structured,
}


@analyze_bp.route('/analyze', methods=['POST'])
@limiter.limit(lambda: current_app.config["ANALYZE_RATE_LIMIT"])
def analyze():
    """
    Classifies an uploaded waste photo into one of the recycling bins.
    An unrecognized item is a normal 200 answer, not an error.
    """
    try:
        image_bytes, mime_type = _read_upload()
        strategy = current_app.config["ANALYZE_STRATEGY"]
        logging.info(f"Analyzing upload ({mime_type}, {len(image_bytes)} bytes) with '{strategy}' strategy")

        result = ANALYZE_STRATEGY_HANDLERS[strategy](image_bytes, mime_type)
        logging.info(f"Analysis result: category={result.category}, container={result.container}")
        payload = result.model_dump()
        if payload["details"] is None:
            payload.pop("details")
        return jsonify(payload), 200
    except EcoScanError as e:
        return error_response_from(e)
    except HTTPException:
        # 413 and friends are answered by the app-level handlers
        raise
    except Exception as e:
        return handle_exception(e, "analyze endpoint")
