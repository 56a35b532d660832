"""Logging configuration for the application."""

import logging
import re
import sys

# tg_admin cookie values and init data hashes must never reach the logs in full
_SECRET_PATTERNS = [
    re.compile(r"(tg_admin=)[^;\s]+"),
    re.compile(r"(hash=)[0-9a-fA-F]+"),
]


class RedactSecretsFilter(logging.Filter):
    """Mask admin cookie values and init data signatures in log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = message
        for pattern in _SECRET_PATTERNS:
            redacted = pattern.sub(r"\1[redacted]", redacted)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging(level: str = "INFO") -> None:
    """
    Configure application logging.

    Args:
        level: Logging level name (e.g. "DEBUG", "INFO")
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RedactSecretsFilter())

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[handler],
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
