"""Unit tests for structured logging utilities in ``observability``."""

from __future__ import annotations

import logging

import pytest

from proxy_node_config import bind_trace_id, get_logger
from proxy_node_config.observability import TRACE_ID, log_info, log_warning, make_event


def test_null_handler_present() -> None:
    """Package logger should always include a NullHandler to avoid surprises."""

    logger = get_logger()
    assert any(isinstance(handler, logging.NullHandler) for handler in logger.handlers)


def test_trace_id_in_log(caplog: pytest.LogCaptureFixture) -> None:
    """Structured logs should include the bound trace identifier and contextual fields."""

    caplog.set_level(logging.INFO, logger="proxy_node_config")
    bind_trace_id("trace-123")
    try:
        log_info("configuration_loaded", node=None, path="/srv/config.json")
    finally:
        bind_trace_id(None)
    record = caplog.records[-1]
    assert getattr(record, "context") == {"trace_id": "trace-123", "node": None, "path": "/srv/config.json"}


def test_warning_level(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="proxy_node_config")
    log_warning("duplicate_node_name", node="n1", path=None)
    assert caplog.records[-1].levelno == logging.WARNING


def test_bind_trace_id_clears_context() -> None:
    bind_trace_id("trace-temp")
    bind_trace_id(None)
    assert TRACE_ID.get() is None


def test_make_event_merges_optional_payload() -> None:
    assert make_event("n1", None, {"port": 0}) == {"node": "n1", "path": None, "port": 0}
    assert make_event(None, "/tmp/x") == {"node": None, "path": "/tmp/x"}
