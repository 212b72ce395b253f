# This file defines the main entry point for the Bond Yield Calculator Flask web application.
# It uses the Application Factory pattern (`create_app`) to initialize and configure the app:
# - Creating the Flask application instance and loading `config.py`.
# - Ensuring the instance folder exists (log files live there).
# - Centralizing logging configuration (rotating file + console handlers).
# - Registering the `bond_bp` and `health_bp` blueprints from the `views` directory.
# - Adding CORS headers for the configured front-end origins.
# - Running the development server when executed directly.

from flask import Flask, Response, request
import os
import logging
from logging.handlers import RotatingFileHandler

from core.settings_loader import get_app_config, get_cors_origins
from core.utils import is_api_timing_enabled, setup_timing_logger


def _configure_logging(app: Flask) -> None:
    app_cfg = get_app_config()
    level = getattr(logging, str(app_cfg.get("log_level", "DEBUG")).upper(), logging.DEBUG)

    # Remove Flask's default handlers
    app.logger.handlers.clear()
    app.logger.setLevel(level)

    log_formatter = logging.Formatter(
        "%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"
    )

    log_file_path = os.path.join(app.instance_path, "app.log")
    max_log_size = int(app_cfg.get("log_max_bytes", 1024 * 1024 * 10))
    backup_count = int(app_cfg.get("log_backup_count", 5))
    try:
        file_handler = RotatingFileHandler(
            log_file_path, maxBytes=max_log_size, backupCount=backup_count
        )
        file_handler.setFormatter(log_formatter)
        file_handler.setLevel(level)
        app.logger.addHandler(file_handler)
        logging.getLogger().addHandler(file_handler)
        logging.getLogger().setLevel(level)
        app.logger.info(f"File logging configured to: {log_file_path}")
    except OSError as e:
        app.logger.error(
            f"Failed to configure file logging to {log_file_path}: {e}", exc_info=True
        )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(level)
    app.logger.addHandler(console_handler)
    logging.getLogger().addHandler(console_handler)

    # Flask's logger already reaches the handlers directly
    app.logger.propagate = False

    app.logger.info("Centralized logging configured (File & Console).")


def _register_cors(app: Flask) -> None:
    allowed_origins = set(get_cors_origins())

    @app.after_request
    def add_cors_headers(response: Response) -> Response:
        origin = request.headers.get("Origin")
        if origin and origin in allowed_origins:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"
            response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type"
            response.headers["Vary"] = "Origin"
        return response

    app.logger.info(f"CORS enabled for origins: {sorted(allowed_origins)}")


def create_app(test_config=None, instance_path=None) -> Flask:
    """Factory function to create and configure the Flask app."""
    app = Flask(__name__, instance_path=instance_path, instance_relative_config=True)

    app.config.from_mapping(SECRET_KEY=os.environ.get("SECRET_KEY", "dev"))
    app.config.from_object("config")
    if test_config is not None:
        app.config.update(test_config)

    app.json.sort_keys = False

    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError as e:
        app.logger.error(
            f"Could not create instance folder at {app.instance_path}: {e}",
            exc_info=True,
        )

    _configure_logging(app)

    if is_api_timing_enabled():
        setup_timing_logger(app)
        app.logger.info("API timing log enabled")

    # --- Register Blueprints ---
    try:
        from views.bond_views import bond_bp
        from views.health_views import health_bp
    except ImportError as imp_err:
        app.logger.error(f"Blueprint import failed: {imp_err}", exc_info=True)
        raise

    app.register_blueprint(bond_bp)
    app.register_blueprint(health_bp)

    app.logger.info("Registered Blueprints:")
    app.logger.info(f"- {bond_bp.name} (prefix: {bond_bp.url_prefix})")
    app.logger.info(f"- {health_bp.name} (prefix: {health_bp.url_prefix})")

    _register_cors(app)

    return app


# --- Application Execution ---
if __name__ == "__main__":
    app = create_app()
    port = app.config.get("PORT", 3000)
    app.logger.info(f"API endpoint: http://localhost:{port}/api/bond/calculate")
    app.run(debug=True, host="0.0.0.0", port=port)
