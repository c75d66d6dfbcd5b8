# FILE: ecoscan-backend/main.py

import os
import sys
import logging
from flask import Flask
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException
from logging_config import setup_logging
from extensions import limiter, cors
from dependencies import load_settings, validate_settings, init_gemini_service
from api.error_utils import EcoScanError, create_error_response, error_response_from

# --- SETUP & CONFIG ---
# Load environment variables for the Flask app process.
load_dotenv()
setup_logging()


def create_app(test_config=None, gemini_service=None):
    app = Flask(__name__)
    app.config.update(load_settings())
    if test_config:
        app.config.update(test_config)
    validate_settings(app.config)

    if gemini_service is not None:
        app.extensions["gemini_service"] = gemini_service
    elif not app.config.get("GEMINI_API_KEY"):
        # Nothing useful can be served without a way to reach Gemini.
        logging.critical("FATAL: GEMINI_API_KEY not found in environment variables.")
        sys.exit(1)
    init_gemini_service(app)

    # --- Initialize Extensions ---
    cors.init_app(app, origins=app.config["CORS_ORIGINS"], methods=["GET", "POST"])
    limiter.init_app(app)

    # --- Import and Register Blueprints ---
    from api.analyze import analyze_bp
    from api.quiz import quiz_bp
    from api.status import status_bp

    app.register_blueprint(analyze_bp, url_prefix='/api')
    app.register_blueprint(quiz_bp, url_prefix='/api')
    app.register_blueprint(status_bp, url_prefix='/api')

    register_error_handlers(app)
    logging.info(f"EcoScan backend ready (analyze strategy: {app.config['ANALYZE_STRATEGY']}, quiz strategy: {app.config['QUIZ_STRATEGY']})")
    return app


def register_error_handlers(app):
    # --- Global Error Handlers ---
    @app.errorhandler(EcoScanError)
    def handle_ecoscan_error(e):
        return error_response_from(e)

    @app.errorhandler(404)
    def resource_not_found(e):
        """Handles 404 Not Found errors for a clean API response."""
        return create_error_response("NOT_FOUND", status_code=404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return create_error_response("METHOD_NOT_ALLOWED", status_code=405)

    @app.errorhandler(413)
    def payload_too_large(e):
        limit_mb = app.config["MAX_CONTENT_LENGTH"] // (1024 * 1024)
        return create_error_response("PAYLOAD_TOO_LARGE", f"La imagen supera el tamaño máximo permitido ({limit_mb} MB).", status_code=413)

    @app.errorhandler(429)
    def rate_limited(e):
        return create_error_response("RATE_LIMITED", details=str(e.description), status_code=429)

    @app.errorhandler(500)
    def internal_server_error(e):
        """Handles unexpected 500 Internal Server Errors for a clean API response."""
        original = getattr(e, "original_exception", None) or e
        if not isinstance(original, HTTPException):
            logging.critical(f"An unhandled exception occurred: {original}", exc_info=original)
        return create_error_response("SERVER_ERROR", "An unexpected error occurred on the server.", status_code=500)


app = create_app()

if __name__ == "__main__":
    app.run(host=os.environ.get("HOST", "0.0.0.0"), port=int(os.environ.get("PORT", 3000)))
