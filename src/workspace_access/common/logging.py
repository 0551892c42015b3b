"""Console logging setup and structured ``extra`` helpers.

All output goes through the standard :mod:`logging` package. The formatter
renders one line per record: UTC timestamp, level, logger name, the bound
correlation id, the event name, then every ``extra`` field as ``key=value``.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

from workspace_access.settings import Settings

_CORRELATION_ID: ContextVar[str | None] = ContextVar(
    "workspace_access_correlation_id",
    default=None,
)

# LogRecord attributes that never belong in the key=value tail.
_RESERVED_ATTRS: frozenset[str] = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "asctime",
        "correlation_id",
        "taskName",
        "color_message",
    }
)

_CONFIGURED_FLAG = "_workspace_access_configured"

_THIRD_PARTY_LOGGERS = (
    "uvicorn",
    "uvicorn.error",
    "uvicorn.access",
    "sqlalchemy",
)


class ConsoleLogFormatter(logging.Formatter):
    """Render records as a single console line.

    Example::

        2026-10-19T09:12:44.031Z INFO  workspace_access.features.roles.service
        [cid=4be1] roles.custom.create.success tenant_id=t1 role_id=role_1
    """

    _time_format = "%Y-%m-%dT%H:%M:%S"

    def __init__(self) -> None:
        fmt = "%(asctime)s %(levelname)-5s %(name)s [cid=%(correlation_id)s] %(message)s"
        super().__init__(fmt=fmt, datefmt=self._time_format)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=UTC)
        return f"{stamp.strftime(datefmt or self._time_format)}.{int(record.msecs):03d}Z"

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - std signature
        record.correlation_id = (
            getattr(record, "correlation_id", None) or _CORRELATION_ID.get() or "-"
        )
        line = super().format(record)

        pairs = [
            f"{key}={_render_value(value)}"
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        ]
        if pairs:
            return f"{line} {' '.join(pairs)}"
        return line


def setup_logging(settings: Settings) -> None:
    """Install the console handler on the root logger.

    The handler is installed once per process; later calls only adjust the
    level from ``settings.logging_level``.
    """

    root = logging.getLogger()
    level = getattr(logging, settings.logging_level.upper(), logging.INFO)

    if getattr(root, _CONFIGURED_FLAG, False):
        root.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(ConsoleLogFormatter())
    root.handlers = [handler]
    root.setLevel(level)

    for name in _THIRD_PARTY_LOGGERS:
        third_party = logging.getLogger(name)
        third_party.handlers.clear()
        third_party.propagate = True

    setattr(root, _CONFIGURED_FLAG, True)


def bind_request_context(correlation_id: str | None) -> None:
    """Bind ``correlation_id`` to log records emitted by the current task."""

    _CORRELATION_ID.set(correlation_id)


def clear_request_context() -> None:
    _CORRELATION_ID.set(None)


def log_context(
    *,
    tenant_id: str | None = None,
    project_id: str | None = None,
    role_id: str | None = None,
    user_id: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build the ``extra`` mapping for a structured log call.

    ``None`` identifiers are omitted so records only carry what is known::

        logger.info(
            "roles.custom.delete.success",
            extra=log_context(tenant_id=tenant_id, role_id=role_id, user_id=actor_id),
        )
    """

    ctx: dict[str, Any] = {}
    for key, value in (
        ("tenant_id", tenant_id),
        ("project_id", project_id),
        ("role_id", role_id),
        ("user_id", user_id),
    ):
        if value is not None:
            ctx[key] = value
    ctx.update(extra)
    return ctx


def _render_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(str(item) for item in value)
    return str(value)


__all__ = [
    "ConsoleLogFormatter",
    "bind_request_context",
    "clear_request_context",
    "log_context",
    "setup_logging",
]
