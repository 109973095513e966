"""
Logging for tezwallet.

Every module logs through a ``StructuredLogger`` which attaches keyword data
to the record under ``record.data``, masked first. Identity provider tokens,
API keys in query strings and credentials embedded in endpoint URLs never
reach a handler.

tezwallet installs no handlers on import. Host applications either
configure logging themselves or call ``setup_logging`` to apply the
``TEZWALLET_LOG_LEVEL`` / ``TEZWALLET_LOG_JSON`` settings to the
``tezwallet`` logger.

Usage:
    from tezwallet.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Published client snapshot", build_id=snapshot.build_id)
"""
from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Optional, Union

from .constants import LoggingConfig
from .settings import TezWalletSettings, load_settings

_INLINE_SECRETS = [
    (re.compile(r"(Bearer\s+)[\w.-]+", re.IGNORECASE), r"\1***"),
    (re.compile(r"(https?://)[^:/@\s]+:[^@/\s]+@", re.IGNORECASE), r"\1***:***@"),
    (
        re.compile(r"([?&](?:api_?key|access_token|id_token|token)=)[^&\s]+", re.IGNORECASE),
        r"\1***",
    ),
    # JWTs handed back by the identity provider
    (re.compile(r"\beyJ[\w-]+\.eyJ[\w-]+\.[\w-]+"), "***JWT***"),
]


def is_sensitive_key(key: str) -> bool:
    """Whether values stored under ``key`` must be masked."""
    normalized = key.lower().replace("-", "_")
    if normalized in LoggingConfig.SENSITIVE_FIELDS:
        return True
    return any(part in normalized for part in LoggingConfig.SENSITIVE_KEY_PARTS)


def mask_text(text: str) -> str:
    """Mask secrets embedded in free text and truncate overlong values."""
    if len(text) > LoggingConfig.MAX_LOG_MESSAGE_LENGTH:
        text = text[: LoggingConfig.MAX_LOG_MESSAGE_LENGTH] + "...[truncated]"
    for pattern, replacement in _INLINE_SECRETS:
        text = pattern.sub(replacement, text)
    return text


def mask_sensitive_data(data: Any) -> Any:
    """Masked copy of ``data``; dicts, lists and tuples are walked recursively."""
    if isinstance(data, dict):
        return {
            key: LoggingConfig.MASK_PATTERN if is_sensitive_key(str(key)) else mask_sensitive_data(value)
            for key, value in data.items()
        }
    if isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item) for item in data)
    if isinstance(data, str):
        return mask_text(data)
    return data


class StructuredLogger:
    """Logger wrapper that attaches masked keyword data to each record."""

    def __init__(self, name: str) -> None:
        self._logger = logging.getLogger(name)

    @property
    def name(self) -> str:
        return self._logger.name

    def log(self, level: int, message: str, **kwargs: Any) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(level, message, extra={"data": mask_sensitive_data(kwargs)})

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log(logging.ERROR, message, **kwargs)


def get_logger(name: str) -> StructuredLogger:
    return StructuredLogger(name)


# =============================================================================
# HTTP helpers used by the transport
# =============================================================================

def log_request(
    logger: StructuredLogger,
    method: str,
    url: str,
    params: Optional[dict[str, Any]] = None,
    build_id: Optional[str] = None,
) -> None:
    """Log an outgoing request at DEBUG."""
    data: dict[str, Any] = {"direction": "request", "method": method, "url": url}
    if params:
        data["params"] = params
    if build_id:
        data["build_id"] = build_id
    logger.debug(f"HTTP {method} {mask_text(url)}", **data)


def log_response(
    logger: StructuredLogger,
    status_code: int,
    body: Optional[Any] = None,
    duration_ms: Optional[float] = None,
    build_id: Optional[str] = None,
) -> None:
    """Log a response: DEBUG for success, WARNING for 4xx/5xx with the body."""
    data: dict[str, Any] = {"direction": "response", "status_code": status_code}
    if duration_ms is not None:
        data["duration_ms"] = duration_ms
    if build_id:
        data["build_id"] = build_id
    if body is not None:
        rendered = json.dumps(mask_sensitive_data(body), default=str)
        data["body"] = rendered[: LoggingConfig.MAX_RESPONSE_BODY_LOG_LENGTH]

    message = f"HTTP {status_code}"
    if duration_ms is not None:
        message += f" ({duration_ms:.0f}ms)"
    logger.log(logging.WARNING if status_code >= 400 else logging.DEBUG, message, **data)


# =============================================================================
# Handler setup for host applications
# =============================================================================

class JsonFormatter(logging.Formatter):
    """One JSON object per record, including the structured ``data``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        data = getattr(record, "data", None)
        if data:
            payload["data"] = data
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    json_format: bool = False,
) -> logging.Handler:
    """Attach a stream handler to the ``tezwallet`` logger.

    Calling it again replaces the handler installed by the previous call;
    handlers added by the host application are left alone.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    package_logger = logging.getLogger(LoggingConfig.PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        if existing.get_name() == LoggingConfig.PACKAGE_LOGGER:
            package_logger.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(LoggingConfig.PACKAGE_LOGGER)
    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler


def setup_logging(settings: Optional[TezWalletSettings] = None) -> logging.Handler:
    """Apply ``log_level`` and ``log_json`` from settings."""
    settings = settings or load_settings()
    return configure_logging(settings.log_level, json_format=settings.log_json)


__all__ = [
    "StructuredLogger",
    "get_logger",
    "is_sensitive_key",
    "mask_text",
    "mask_sensitive_data",
    "log_request",
    "log_response",
    "JsonFormatter",
    "configure_logging",
    "setup_logging",
]
