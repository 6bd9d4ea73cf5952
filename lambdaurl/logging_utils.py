"""Logging utilities for lambdaurl.

Provides JSON logging configuration and header sanitization for invocation
logs.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional

from pythonjsonlogger import json as jsonlogger

# Sensitive header names and prefixes (case-insensitive)
SENSITIVE_HEADER_PREFIXES = [
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
    "x-auth",
    "x-token",
    "x-secret",
    "x-amz-security-token",
]

# Record attributes that are not "extra" fields
_RESERVED_ATTRS = frozenset(
    (
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName",
        "relativeCreated", "thread", "threadName", "exc_info",
        "exc_text", "stack_info", "asctime", "datefmt", "taskName",
    )
)


def configure_json_logging(level: str = "INFO", pretty: bool = False) -> None:
    """Configure the root logger to emit JSON.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        pretty: If True, use indented JSON (for local development).
                If False, use compact JSON (for CloudWatch).
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    handler = logging.StreamHandler()
    handler.setLevel(log_level)

    if pretty:
        formatter: logging.Formatter = _PrettyJsonFormatter()
    else:
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            timestamp=True,
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


class _PrettyJsonFormatter(logging.Formatter):
    """Indented JSON formatter for local development.

    Long string values are truncated to keep terminal output readable.
    """

    def __init__(self, max_string_length: int = 500) -> None:
        super().__init__()
        self.max_string_length = max_string_length

    def _truncate(self, value: Any) -> Any:
        if isinstance(value, str) and len(value) > self.max_string_length:
            return value[:self.max_string_length] + f"... (truncated, {len(value)} chars)"
        return value

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = self._truncate(value)

        if record.exc_info:
            log_data["exc_info"] = self.formatException(record.exc_info)

        try:
            return json.dumps(log_data, indent=2, ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            return json.dumps({"message": str(record.getMessage())}, indent=2)


def _is_sensitive_header(key: str) -> bool:
    key_lower = key.lower()
    return any(key_lower.startswith(prefix) for prefix in SENSITIVE_HEADER_PREFIXES)


def sanitize_headers(headers: Mapping[str, Any]) -> Dict[str, Any]:
    """Replace values of credential-bearing headers with ``[REDACTED]``.

    Args:
        headers: Header mapping (single- or multi-valued)

    Returns:
        Sanitized copy of the headers
    """
    return {
        key: "[REDACTED]" if _is_sensitive_header(key) else value
        for key, value in headers.items()
    }


def format_request_log(
    request_id: str,
    http_method: str,
    request_path: str,
    headers: Mapping[str, Any],
    body_size: int,
    lambda_context: Optional[Any] = None,
) -> Dict[str, Any]:
    """Format structured request log entry.

    Args:
        request_id: Request ID (from Lambda context)
        http_method: HTTP method (GET, POST, etc.)
        request_path: Request path
        headers: Request headers
        body_size: Request body length
        lambda_context: Optional Lambda context for metadata

    Returns:
        Dictionary with structured log data
    """
    log_data = {
        "request_id": request_id,
        "http_method": http_method,
        "request_path": request_path,
        "request_headers": sanitize_headers(headers),
        "request_body_size": body_size,
    }

    if lambda_context:
        log_data["lambda_function_name"] = getattr(lambda_context, "function_name", None)
        log_data["lambda_memory_limit"] = getattr(lambda_context, "memory_limit_in_mb", None)

    return log_data


def format_response_log(
    request_id: str,
    status_code: int,
    headers: Mapping[str, Any],
    body_size: int,
    duration_ms: float,
) -> Dict[str, Any]:
    """Format structured response log entry."""
    return {
        "request_id": request_id,
        "response_status": status_code,
        "response_headers": sanitize_headers(headers),
        "response_body_size": body_size,
        "duration_ms": round(duration_ms, 2),
    }
