"""Central logging setup for the project."""
from __future__ import annotations
import logging
import sys
from typing import Iterable
from urllib.parse import quote, quote_plus

REDACTED = "***"


def _variants(secret: str) -> list[str]:
    """The secret as written and as it may appear percent-encoded in a URL."""
    forms = [secret, quote(secret, safe=""), quote(secret, safe="/"), quote_plus(secret, safe="")]
    return sorted(set(forms), key=len, reverse=True)


def redact(text: str, secrets: Iterable[str | None]) -> str:
    """Replace every non-empty secret occurring in text with a placeholder."""
    for secret in secrets:
        if secret:
            for form in _variants(secret):
                text = text.replace(form, REDACTED)
    return text


class RedactingFilter(logging.Filter):
    """Scrub secrets from the rendered message of every record."""

    def __init__(self, secrets: Iterable[str | None]) -> None:
        super().__init__()
        self._secrets = tuple(s for s in secrets if s)

    def filter(self, record: logging.LogRecord) -> bool:
        if self._secrets:
            record.msg = redact(record.getMessage(), self._secrets)
            record.args = None
        return True


def setup_logging(level: int | str = logging.INFO, secrets: Iterable[str | None] = ()) -> None:
    """
    Configure root logger with sane defaults.

    Args:
        level: Logging level.
        secrets: Values that must never appear in log output.
    """
    handler = logging.StreamHandler(sys.stdout)
    fmt = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    handler.addFilter(RedactingFilter(secrets))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    # httpx logs full request URLs, query string included, at INFO.
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
