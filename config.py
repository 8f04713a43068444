"""
Configuration for PrintOrderMail.

Values are read from the environment once, when this module is imported.
create_app() turns them into immutable MailSettings / UploadRules objects
that are passed explicitly to the notifier and the routes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, FrozenSet, Mapping

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
# This must happen before the Config class is defined
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent

MEGABYTE = 1024 * 1024

# Document types accepted for printing
DOCUMENT_MIME_TYPES = {
    "application/pdf": "PDF",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "DOCX",
    "image/jpeg": "JPEG",
    "image/png": "PNG",
}


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")
    DEBUG = os.environ.get("FLASK_DEBUG", "0") == "1"
    HOST = os.environ.get("HOST", "127.0.0.1")
    PORT = int(os.environ.get("PORT", "3000"))

    # Rotating log file; None logs to the console only
    LOG_FILE = os.environ.get("LOG_FILE") or None

    # Whole request body (both files + fields); Werkzeug rejects anything larger
    MAX_CONTENT_LENGTH = 25 * MEGABYTE

    # ==========================================================================
    # Uploads
    # ==========================================================================
    DOCUMENT_MAX_BYTES = int(os.environ.get("DOCUMENT_MAX_BYTES", str(10 * MEGABYTE)))

    # ==========================================================================
    # Mail account and recipient
    # ==========================================================================
    # EMAIL_USER / EMAIL_PASS: account used to log in to the SMTP server.
    # RECEIVER_EMAIL: where order notifications go (defaults to EMAIL_USER).
    # SMTP_USE_SSL: 1 = implicit TLS (port 465), 0 = STARTTLS (port 587).
    # ==========================================================================
    EMAIL_USER = os.environ.get("EMAIL_USER", "")
    EMAIL_PASS = os.environ.get("EMAIL_PASS", "")
    RECEIVER_EMAIL = os.environ.get("RECEIVER_EMAIL") or EMAIL_USER
    MAIL_SENDER_NAME = os.environ.get("MAIL_SENDER_NAME", "Print Service")
    SMTP_HOST = os.environ.get("SMTP_HOST", "smtp.gmail.com")
    SMTP_PORT = int(os.environ.get("SMTP_PORT", "465"))
    SMTP_USE_SSL = _env_flag("SMTP_USE_SSL", "1")
    MAIL_TIMEOUT_SECONDS = float(os.environ.get("MAIL_TIMEOUT_SECONDS", "30"))

    # Display
    CURRENCY_SYMBOL = os.environ.get("CURRENCY_SYMBOL", "₹")


class ProductionConfig(Config):
    """Production configuration: no debugger, rotating log file."""
    ENVIRONMENT = "production"
    DEBUG = False
    TESTING = False
    LOG_FILE = os.environ.get("LOG_FILE") or str(BASE_DIR / "logs" / "print_order_mail.log")


class DevelopmentConfig(Config):
    """Development configuration (debugger on, still bound to localhost)."""
    ENVIRONMENT = "development"
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    ENVIRONMENT = "testing"
    DEBUG = False
    TESTING = True
    EMAIL_USER = "orders@example.com"
    EMAIL_PASS = "secret"
    RECEIVER_EMAIL = "printshop@example.com"
    SMTP_HOST = "localhost"
    SMTP_PORT = 2525
    SMTP_USE_SSL = False
    MAIL_TIMEOUT_SECONDS = 5.0
    DOCUMENT_MAX_BYTES = 1024


CONFIG_BY_ENV = {
    "production": ProductionConfig,
    "development": DevelopmentConfig,
    "testing": TestingConfig,
}


def get_config_class(env: str | None = None) -> type[Config]:
    """Config class for a FLASK_ENV value; unknown or unset names get Config."""
    if env is None:
        env = os.environ.get("FLASK_ENV", "")
    return CONFIG_BY_ENV.get(env.strip().lower(), Config)


# =============================================================================
# IMMUTABLE SETTINGS (built once at process start)
# =============================================================================

@dataclass(frozen=True)
class MailSettings:
    """SMTP account, recipient and timeout used by the transport and notifier."""

    username: str
    password: str
    recipient: str
    sender_name: str
    host: str
    port: int
    use_ssl: bool
    timeout_seconds: float
    currency: str = "₹"

    @property
    def sender(self) -> str:
        """Formatted From header value."""
        return f'"{self.sender_name}" <{self.username}>'

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "MailSettings":
        """Build settings from a Flask config mapping."""
        username = config.get("EMAIL_USER", "")
        return cls(
            username=username,
            password=config.get("EMAIL_PASS", ""),
            recipient=config.get("RECEIVER_EMAIL") or username,
            sender_name=config.get("MAIL_SENDER_NAME", "Print Service"),
            host=config.get("SMTP_HOST", "smtp.gmail.com"),
            port=int(config.get("SMTP_PORT", 465)),
            use_ssl=bool(config.get("SMTP_USE_SSL", True)),
            timeout_seconds=float(config.get("MAIL_TIMEOUT_SECONDS", 30)),
            currency=config.get("CURRENCY_SYMBOL", "₹"),
        )


@dataclass(frozen=True)
class UploadRules:
    """Limits applied to the two uploaded files."""

    max_bytes: int = 10 * MEGABYTE
    document_types: FrozenSet[str] = frozenset(DOCUMENT_MIME_TYPES)

    @property
    def allowed_labels(self) -> list[str]:
        """Short names of the allowed document types, e.g. ['PDF', 'DOCX']."""
        return [
            DOCUMENT_MIME_TYPES.get(mime, mime)
            for mime in DOCUMENT_MIME_TYPES
            if mime in self.document_types
        ]

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "UploadRules":
        """Build rules from a Flask config mapping."""
        return cls(max_bytes=int(config.get("DOCUMENT_MAX_BYTES", 10 * MEGABYTE)))
