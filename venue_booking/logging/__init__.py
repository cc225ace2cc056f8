"""Structured logging configuration using structlog."""

import logging
import re
import sys

import structlog

# Credentials embedded in connection URLs
# Format: <scheme>://<user>:<password>@<host> e.g., redis://:s3cret@cache:6379/0
_URL_CREDENTIALS_PATTERN = re.compile(r"(?P<scheme>[a-z][a-z0-9+.-]*://)(?P<user>[^:/@\s]*):[^@/\s]+@")


def redact_credentials(value: str) -> str:
    """Mask the password part of any connection URL in a string."""
    return _URL_CREDENTIALS_PATTERN.sub(r"\g<scheme>\g<user>:***@", value)


class CredentialRedactingFilter(logging.Filter):
    """Filter that redacts connection URL credentials from log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact credentials from log message."""
        if record.msg and isinstance(record.msg, str):
            record.msg = redact_credentials(record.msg)
        if record.args:
            record.args = tuple(
                redact_credentials(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )
        return True


def _redact_credentials(
    logger: logging.Logger, method_name: str, event_dict: dict
) -> dict:
    """Structlog processor to redact credentials from event dictionaries."""
    for key, value in list(event_dict.items()):
        if isinstance(value, str):
            event_dict[key] = redact_credentials(value)
    return event_dict


def setup_logging(log_level: str = "INFO") -> None:
    """Configure structured logging for the application."""
    credential_filter = CredentialRedactingFilter()
    level = getattr(logging, log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    root_logger.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.addFilter(credential_filter)
    root_logger.addHandler(handler)

    # Driver loggers may echo connection URLs
    for logger_name in ("sqlalchemy.engine", "aiosqlite", "redis"):
        logging.getLogger(logger_name).addFilter(credential_filter)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _redact_credentials,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
