"""Logging setup: one JSON object per line, or plain text for local runs.

Records emitted while a request is served carry its ``request_id``, taken
from a contextvar the request context middleware sets. Anything passed via
``extra=`` becomes a top-level JSON field.
"""

import contextvars
import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Optional

request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="")

# Attributes every LogRecord has; anything else on a record came from ``extra=``.
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({})))

_TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

# Credentials that can leak through client errors: bearer headers, key=value
# pairs, and passwords embedded in Redis URLs.
_SECRET_PATTERNS = (
    re.compile(r'(?i)(bearer\s+)[a-zA-Z0-9._\-]{20,}'),
    re.compile(r'(?i)((?:secret_key|access_key|secret|password|token)[=:]\s*)[^\s,\'"]{4,}'),
    re.compile(r'(redis://[^:/@\s]*:)[^@\s]+(?=@)'),
)
_MASK = "***"

_NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "urllib3", "PIL")


def redact(text: str) -> str:
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(lambda m: m.group(1) + _MASK, text)
    return text


class _JsonFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = request_id_var.get()
        if request_id:
            entry["request_id"] = request_id

        entry.update(
            (k, v) for k, v in vars(record).items()
            if k not in _STANDARD_ATTRS and k not in entry
        )
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class _SecretFilter(logging.Filter):
    """Masks credentials in the rendered message and in traceback text."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact(record.getMessage())
        record.args = ()
        if record.exc_text:
            record.exc_text = redact(record.exc_text)
        return True


def setup_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Install a single stdout handler on the root logger.

    Args:
        log_level: Standard level name, INFO when omitted.
        log_format: ``"json"`` (default) or ``"text"``.
    """
    level = (log_level or "INFO").upper()
    as_json = (log_format or "json").lower() == "json"

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(_SecretFilter())
    handler.setFormatter(_JsonFormatter() if as_json else logging.Formatter(_TEXT_FORMAT))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
