"""
Structured logging for the structured-data API.

Every line is one JSON object. Request summaries pass their fields through
``extra=`` (see ``validation_context``) and end up under ``"context"`` so log
queries can filter on schema type or validity without parsing messages.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from seo_schema.core.diagnostics import ValidationResult

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Attributes every LogRecord carries; anything else came in through extra=.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))) | {
    "message",
    "asctime",
}


class JSONFormatter(logging.Formatter):
    """Render records as single-line JSON with request id and log context."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = request_id_var.get()
        if request_id:
            payload["request_id"] = request_id

        context = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        if context:
            payload["context"] = context

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def validation_context(result: ValidationResult, schema_type: Any = None) -> Dict[str, Any]:
    """Fields logged for one validated document."""
    return {
        "schema_type": schema_type,
        "is_valid": result.is_valid,
        "severity": result.severity,
        "diagnostic_count": len(result.diagnostics),
        "error_count": len(result.errors),
    }


def setup_logging(level: str = "INFO", use_json: bool = True) -> logging.Logger:
    """Route all logging to a single stdout handler."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    if use_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    root_logger = logging.getLogger()
    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)
        existing_handler.close()
    root_logger.setLevel(log_level)
    root_logger.addHandler(handler)

    # Request ids and summaries come from our own middleware and router.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def set_request_id(request_id: str):
    request_id_var.set(request_id)


def get_request_id() -> Optional[str]:
    return request_id_var.get()
