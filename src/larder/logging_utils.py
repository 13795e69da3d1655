"""Process-wide logging setup for the API server and the CLI.

Every handler installed here carries ``SensitiveDataFilter`` so API tokens and
LLM keys never reach the log stream, whether they arrive in a request header
echoed by the access log or inside an httpx error message.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Iterable, Optional, Pattern

REDACTED = "[redacted]"

PLAIN_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
PLAIN_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"

# (pattern, replacement) pairs; a ``\1`` keeps the label and masks the value.
MASK_RULES: tuple[tuple[Pattern[str], str], ...] = (
    (re.compile(r"(Bearer\s+)[A-Za-z0-9\-._~+/=]+", re.IGNORECASE), r"\1" + REDACTED),
    (re.compile(r"(api_token=)[^&\s]+", re.IGNORECASE), r"\1" + REDACTED),
    (re.compile(r"(X-API-Key[=:]\s*)[^&\s]+", re.IGNORECASE), r"\1" + REDACTED),
    (re.compile(r"\bsk-[A-Za-z0-9_\-]{16,}"), REDACTED),
)

# Third-party loggers routed through the root handler. ``None`` follows the
# configured level; httpx logs every request URL at INFO so it is held at WARNING.
LIBRARY_LOGGER_FLOORS: dict[str, Optional[int]] = {
    "uvicorn": None,
    "uvicorn.error": None,
    "uvicorn.access": None,
    "httpx": logging.WARNING,
}


def redact(value: str, secrets: Iterable[str] = ()) -> str:
    """Mask well-known credential shapes and every literal secret in ``value``."""

    for pattern, replacement in MASK_RULES:
        value = pattern.sub(replacement, value)
    for secret in secrets:
        if secret:
            value = value.replace(secret, REDACTED)
    return value


class SensitiveDataFilter(logging.Filter):
    """Redact credentials from the rendered message and string ``extra`` fields."""

    def __init__(self, secrets: Iterable[str]):
        super().__init__()
        self._secrets = tuple(
            sorted({secret.strip() for secret in secrets if secret and secret.strip()}, key=len, reverse=True)
        )

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - standard interface
        message = record.getMessage()
        redacted = redact(message, self._secrets)
        if redacted != message:
            record.msg = redacted
            record.args = ()

        for key, value in vars(record).copy().items():
            if key != "msg" and isinstance(value, str):
                setattr(record, key, redact(value, self._secrets))
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line, carrying the request id when the access log sets one."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - override
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = getattr(record, "request_id", None)
        if request_id:
            payload["request_id"] = request_id
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = record.stack_info
        return json.dumps(payload, ensure_ascii=True)


def _build_formatter(fmt: str) -> logging.Formatter:
    if (fmt or "plain").lower() == "json":
        return JsonFormatter()
    return logging.Formatter(PLAIN_FORMAT, datefmt=PLAIN_DATEFMT)


def configure_logging(level_name: str, fmt: str, secrets: Iterable[str]) -> None:
    """Replace the root handlers with one redacting stream handler."""

    level = getattr(logging, (level_name or "INFO").upper(), logging.INFO)
    redactor = SensitiveDataFilter(secrets)

    handler = logging.StreamHandler()
    handler.setFormatter(_build_formatter(fmt))
    handler.addFilter(redactor)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
    logging.captureWarnings(True)

    for name, floor in LIBRARY_LOGGER_FLOORS.items():
        library_logger = logging.getLogger(name)
        library_logger.handlers = []
        library_logger.propagate = True
        library_logger.setLevel(level if floor is None else max(level, floor))
        library_logger.addFilter(redactor)


__all__ = [
    "JsonFormatter",
    "LIBRARY_LOGGER_FLOORS",
    "MASK_RULES",
    "REDACTED",
    "SensitiveDataFilter",
    "configure_logging",
    "redact",
]
