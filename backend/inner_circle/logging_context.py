from __future__ import annotations

import logging
from contextvars import ContextVar, Token
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

_CONTEXT_FIELDS = ("request_id", "http_method", "http_path")


class RequestContextFilter(logging.Filter):
    """Copy the active request's id, method and path onto every log record."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - formatting only
        context = _log_context.get({})
        for field in _CONTEXT_FIELDS:
            setattr(record, field, context.get(field))
        return True


def push_request_context(
    request_id: str,
    method: str | None = None,
    path: str | None = None,
) -> Token:
    return _log_context.set(
        {"request_id": request_id, "http_method": method, "http_path": path}
    )


def pop_request_context(token: Token) -> None:
    _log_context.reset(token)


def current_request_id() -> str | None:
    return _log_context.get({}).get("request_id")


__all__ = [
    "RequestContextFilter",
    "current_request_id",
    "push_request_context",
    "pop_request_context",
]
