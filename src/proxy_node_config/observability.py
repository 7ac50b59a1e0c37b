"""Structured logging helpers shared by the loader, adapters, and CLI.

Purpose
    Keep every emission of logging data predictable and contextual without
    forcing the host server to adopt a specific logging backend.

Contents
    - ``TRACE_ID``: context variable storing the active trace identifier.
    - ``get_logger``: returns the shared package logger (quiet by default).
    - ``bind_trace_id``: binds or clears the active trace identifier.
    - ``log_debug`` / ``log_info`` / ``log_warning`` / ``log_error``: emit
      structured entries via a single private emitter.
    - ``make_event``: convenience builder for structured event payloads.

System Integration
    Used by adapters and the composition root so all diagnostics carry the same
    trace metadata. The domain layer stays free from logging concerns.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("proxy_node_config_trace_id", default=None)
"""Current trace identifier propagated through logging helpers."""

_LOGGER: Final[logging.Logger] = logging.getLogger("proxy_node_config")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Expose the package logger so the server may attach handlers.

    Why
        Leaves the library silent by default while giving the host process full
        control over handler and formatter configuration.
    """

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Bind or clear the active trace identifier.

    Examples
    --------
    >>> bind_trace_id('boot-1')
    >>> TRACE_ID.get()
    'boot-1'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug log entry that includes the trace context."""

    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    """Emit a structured info log entry that includes the trace context."""

    _emit(logging.INFO, message, fields)


def log_warning(message: str, **fields: Any) -> None:
    """Emit a structured warning log entry that includes the trace context."""

    _emit(logging.WARNING, message, fields)


def log_error(message: str, **fields: Any) -> None:
    """Emit a structured error log entry that includes the trace context."""

    _emit(logging.ERROR, message, fields)


def make_event(
    node: str | None,
    path: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a structured logging payload for configuration lifecycle events.

    Why
        Keeps event construction consistent so log processors can rely on
        stable keys.
    Inputs
        node: Name of the node record being observed, if any.
        path: Filesystem path associated with the event, if available.
        payload: Optional mapping with extra diagnostic detail.

    Examples
    --------
    >>> make_event('default', None, {'port': 2020})
    {'node': 'default', 'path': None, 'port': 2020}
    """

    event = {"node": node, "path": path}
    if payload:
        event |= dict(payload)
    return event


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a log entry through the shared logger with contextual metadata."""

    _LOGGER.log(level, message, extra={"context": _with_trace(fields)})


def _with_trace(fields: Mapping[str, Any]) -> dict[str, Any]:
    context = {"trace_id": TRACE_ID.get()}
    context.update(fields)
    return context
