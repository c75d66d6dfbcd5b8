import logging
from flask import Blueprint, jsonify, current_app

status_bp = Blueprint('status_bp', __name__)

# --- Helper Check Functions ---

def check_gemini():
    """Checks that a Gemini service is configured. Makes no network call."""
    if "gemini_service" not in current_app.extensions:
        return {"status": "ERROR", "details": "Gemini service is not configured."}
    if not current_app.config.get("GEMINI_API_KEY"):
        return {"status": "ERROR", "details": "GEMINI_API_KEY is not set."}
    return {"status": "OK", "details": f"Text model '{current_app.config['GEMINI_TEXT_MODEL']}', image model '{current_app.config['GEMINI_IMAGE_MODEL']}'."}

def check_strategies():
    return {
        "status": "OK",
        "details": f"analyze={current_app.config['ANALYZE_STRATEGY']}, quiz={current_app.config['QUIZ_STRATEGY']}"
    }


@status_bp.route('/health', methods=['GET'])
def health():
    checks = {
        "gemini": check_gemini(),
        "strategies": check_strategies(),
    }
    overall = "OK" if all(c["status"] == "OK" for c in checks.values()) else "DEGRADED"
    if overall != "OK":
        logging.warning(f"Health check degraded: {checks}")
    return jsonify({"status": overall, "details": "EcoScan backend", "checks": checks}), 200
