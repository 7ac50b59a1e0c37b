"""Public package surface for the proxy server node configuration loader.

Exports the composition root (:func:`load_server_config`, :func:`bootstrap`),
the domain types the server consumes, the error taxonomy, and the logging
hooks host applications attach handlers to.
"""

from __future__ import annotations

from .core import CONFIG_FILE_NAME, bootstrap, load_server_config, resolve_location
from .domain.config import CONFIG_NAME, ServerConfig
from .domain.errors import (
    ConfigError,
    ConfigInitializationError,
    FatalConfigError,
    InvalidFormat,
    NotFound,
    ValidationError,
)
from .domain.node import AuthType, EncryptType, Node, SimpleAuth, UserAuth
from .observability import bind_trace_id, get_logger

__all__ = [
    "AuthType",
    "CONFIG_FILE_NAME",
    "CONFIG_NAME",
    "ConfigError",
    "ConfigInitializationError",
    "EncryptType",
    "FatalConfigError",
    "InvalidFormat",
    "Node",
    "NotFound",
    "ServerConfig",
    "SimpleAuth",
    "UserAuth",
    "ValidationError",
    "bind_trace_id",
    "bootstrap",
    "get_logger",
    "load_server_config",
    "resolve_location",
]
