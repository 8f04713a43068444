"""
Logging setup for PrintOrderMail.

Every record is tagged with the request it belongs to: the URL path of the
current Flask request and, once POST /send has built a submission, the order
reference. Lines from concurrent submissions can then be told apart without
relying on thread names.

Log Format:
    2026-10-19 10:15:32 [INFO    ] [POST /send #a1b2c3d4] print_order_mail.services.notifier - Order notification sent
    2026-10-19 10:15:30 [INFO    ] [- #-] print_order_mail.app - Application initialized successfully

Usage:
    from logging_config import setup_logging, get_logger, order_context

    setup_logging(log_level=logging.INFO)
    logger = get_logger(__name__)

    with order_context(submission.order_id):
        logger.info("tagged with #<order id>")
"""

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterator, Optional

from flask import has_request_context, request

APP_NAMESPACE = "print_order_mail"
NO_CONTEXT = "-"

LOG_FORMAT = "%(asctime)s [%(levelname)-8s] [%(request_path)s #%(order_ref)s] %(name)s - %(message)s"

_order_ref: ContextVar[str] = ContextVar("order_ref", default=NO_CONTEXT)


class RequestContextFilter(logging.Filter):
    """Adds request_path and order_ref to every record passing a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        if has_request_context():
            record.request_path = f"{request.method} {request.path}"
        else:
            record.request_path = NO_CONTEXT
        record.order_ref = _order_ref.get()
        return True


@contextmanager
def order_context(order_id: str) -> Iterator[None]:
    """Tag log records emitted inside the block with the order reference."""
    token = _order_ref.set(order_id)
    try:
        yield
    finally:
        _order_ref.reset(token)


def setup_logging(
    log_level: int = logging.INFO,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure the application logger.

    Console output always; one rotating file (10 MB x 5) when log_file is given.
    Calling it again replaces the previous handlers.

    Returns:
        The "print_order_mail" logger
    """
    logger = logging.getLogger(APP_NAMESPACE)
    logger.setLevel(log_level)
    logger.propagate = False
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
        )

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(RequestContextFilter())
        logger.addHandler(handler)

    logger.debug(f"Logging configured at level {logging.getLevelName(log_level)}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger under the application namespace, e.g. print_order_mail.routes.order."""
    if not name.startswith(APP_NAMESPACE):
        name = f"{APP_NAMESPACE}.{name}"
    return logging.getLogger(name)
