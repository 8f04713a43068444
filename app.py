"""
PrintOrderMail - Flask Application Entry Point.

This is a slim app factory that:
1. Loads configuration (.env + config.Config) once
2. Builds the immutable mail settings and upload rules
3. Creates the mail transport and order notifier
4. Registers route blueprints
5. Sets up error handlers

ARCHITECTURE:
    Request thread (one per request)
    ├── validate uploads + fields     (no side effects)
    ├── compute price                 (pure)
    └── send notification email       (only blocking call, bounded timeout)

NO SHARED MUTABLE STATE between requests. Settings are frozen after startup.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from flask import Flask, render_template, url_for
from werkzeug.exceptions import NotFound, RequestEntityTooLarge

from config import MailSettings, UploadRules, get_config_class
from core.mail_transport import SMTPTransport
from logging_config import get_logger, setup_logging
from models.order_result import OrderResult, OrderStatus
from modules.pdf_analyzer import PDFAnalyzer
from modules.upload_handler import format_size
from routes import register_blueprints
from services.notifier import MailTransport, OrderNotifier


# Module logger (configured after setup_logging)
logger = get_logger(__name__)

LOOPBACK_HOST = "127.0.0.1"


def _get_base_path() -> Path:
    """
    Get the base path for the application.

    In a frozen bundle: Returns the directory containing the executable
    In development: Returns the directory containing app.py
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent


def create_app(
    config_object: Union[str, type, None] = None,
    transport: Optional[MailTransport] = None,
) -> Flask:
    """
    Application factory - creates and configures Flask app.

    Args:
        config_object: Import path or class passed to app.config.from_object;
            None picks the class named by FLASK_ENV
        transport: Mail transport to use instead of SMTP (tests)

    Returns:
        Configured Flask application
    """
    # Load .env from base path (next to executable in production)
    base_path = _get_base_path()
    env_file = base_path / '.env'
    if env_file.exists():
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)

    if config_object is None:
        config_object = get_config_class()

    app = Flask(__name__)
    app.config.from_object(config_object)

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    log_file = app.config.get("LOG_FILE")

    app_logger = setup_logging(
        log_level=log_level,
        log_file=Path(log_file) if log_file else None,
    )

    # Set Flask's logger to use our configured logger
    app.logger.handlers = app_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting PrintOrderMail in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # SETTINGS (read once, immutable afterwards)
    # =========================================================================

    mail_settings = MailSettings.from_config(app.config)
    upload_rules = UploadRules.from_config(app.config)

    if not mail_settings.username or not mail_settings.password:
        logger.warning("EMAIL_USER / EMAIL_PASS not set - order emails will fail to send")
    logger.info(
        f"Notifications go to {mail_settings.recipient or '(unset)'} "
        f"via {mail_settings.host}:{mail_settings.port}"
    )

    # =========================================================================
    # SERVICES
    # =========================================================================

    if transport is None:
        transport = SMTPTransport(mail_settings)

    app.config["MAIL_SETTINGS"] = mail_settings
    app.config["UPLOAD_RULES"] = upload_rules
    app.config["PDF_ANALYZER"] = PDFAnalyzer()
    app.config["ORDER_NOTIFIER"] = OrderNotifier(mail_settings, transport)

    # =========================================================================
    # REGISTER BLUEPRINTS
    # =========================================================================

    register_blueprints(app)

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    def _error_page(message: str, status: int, title: str):
        result = OrderResult(status=OrderStatus.FAILED, message=message)
        return (
            render_template(
                "error.html",
                title=title,
                result=result.to_dict(),
                retry_url=url_for("main.order_form"),
            ),
            status,
        )

    @app.errorhandler(RequestEntityTooLarge)
    def handle_file_too_large(e):
        max_size = format_size(app.config.get("MAX_CONTENT_LENGTH") or 0)
        logger.warning(f"Request body over {max_size} rejected")
        return _error_page(
            f"Upload too large. The whole submission may not exceed {max_size}.",
            413,
            "Please check your order",
        )

    @app.errorhandler(NotFound)
    def handle_not_found(e):
        return _error_page("Page not found.", 404, "Not found")

    @app.errorhandler(500)
    def handle_server_error(e):
        logger.error(f"500 error: {e}", exc_info=True)
        return _error_page(
            "An unexpected error occurred. Please try again.",
            500,
            "Something went wrong",
        )

    logger.info("Application initialized successfully")
    return app


def run_options(app: Flask) -> dict:
    """
    Keyword arguments for app.run().

    The Werkzeug debugger executes code typed into the browser, so with DEBUG
    on the server binds to the loopback interface whatever HOST says.
    """
    host = app.config.get("HOST", LOOPBACK_HOST)
    debug = bool(app.config.get("DEBUG"))
    if debug and host != LOOPBACK_HOST:
        logger.warning(f"DEBUG is on - binding to {LOOPBACK_HOST} instead of {host}")
        host = LOOPBACK_HOST
    return {"host": host, "port": app.config["PORT"], "debug": debug}


if __name__ == "__main__":
    app = create_app()
    app.run(**run_options(app))
