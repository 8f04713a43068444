"""
SMTP mail transport.

The only outbound collaborator of the application. Every send opens its own
connection, so concurrent requests never share a socket.

Timeouts:
    The connection and every SMTP command are bounded by
    MailSettings.timeout_seconds; a hung server surfaces as MailTimeoutError
    instead of blocking the request forever.

Errors:
    smtplib and socket failures never leave this module; they are wrapped in
    DeliveryError (or MailTimeoutError) with the server's message preserved.
"""

from __future__ import annotations

import smtplib
import ssl
from email.message import EmailMessage

from config import MailSettings
from core.exceptions import DeliveryError, MailTimeoutError
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


class SMTPTransport:
    """
    Sends composed messages through the configured SMTP server.

    Usage:
        transport = SMTPTransport(settings)
        transport.send(message)  # raises DeliveryError on failure
    """

    def __init__(self, settings: MailSettings):
        self.settings = settings

    def _connect(self) -> smtplib.SMTP:
        s = self.settings
        if s.use_ssl:
            return smtplib.SMTP_SSL(
                s.host, s.port, timeout=s.timeout_seconds,
                context=ssl.create_default_context(),
            )
        server = smtplib.SMTP(s.host, s.port, timeout=s.timeout_seconds)
        try:
            server.starttls(context=ssl.create_default_context())
        except (smtplib.SMTPException, OSError):
            server.close()
            raise
        return server

    def send(self, message: EmailMessage) -> None:
        """
        Deliver one message.

        Args:
            message: Fully composed message (From/To/Subject set)

        Raises:
            MailTimeoutError: Server did not answer in time
            DeliveryError: Connection, authentication or send failed
        """
        s = self.settings
        recipient = str(message.get("To") or s.recipient)
        logger.debug(f"Connecting to {s.host}:{s.port} (ssl={s.use_ssl})")

        try:
            with self._connect() as server:
                if s.username:
                    server.login(s.username, s.password)
                server.send_message(message)
        except TimeoutError as e:
            logger.error(f"SMTP timeout after {s.timeout_seconds}s: {e}")
            raise MailTimeoutError(s.timeout_seconds, recipient) from e
        except smtplib.SMTPException as e:
            logger.error(f"SMTP error: {e}")
            raise DeliveryError(str(e), recipient) from e
        except OSError as e:
            logger.error(f"Cannot reach mail server {s.host}:{s.port}: {e}")
            raise DeliveryError(f"Cannot reach mail server: {e}", recipient) from e

        logger.info(f"Message delivered to {recipient}")
