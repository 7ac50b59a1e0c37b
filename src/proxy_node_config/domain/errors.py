"""Domain-level exception hierarchy.

Purpose
-------
Expose the error taxonomy shared by adapters, the composition root, and the
server process that consumes the node registry. The hierarchy lives in the
domain layer so outer rings may depend on it without the reverse dependency.

Contents
--------
* :class:`ConfigError` – umbrella base class for all configuration issues.
* :class:`InvalidFormat` – the document (or location table) cannot be parsed
  into the expected structure.
* :class:`ValidationError` – a well-formed record failed a semantic check.
* :class:`NotFound` – an expected file or table entry is missing.
* :class:`FatalConfigError` – a node can never bind (illegal port or cert
  port); the outer boundary terminates the process.
* :class:`ConfigInitializationError` – the single wrapped "initialisation
  failed" kind surfaced by :func:`proxy_node_config.core.load_server_config`.

System Role
-----------
Adapters and the validator raise the specific subclasses. The composition root
re-wraps everything except :class:`FatalConfigError` into
:class:`ConfigInitializationError`, keeping the original exception as
``__cause__``.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Base type for all exceptions emitted by ``proxy_node_config``."""


class InvalidFormat(ConfigError):
    """Raised when an input artifact cannot be parsed into structured data.

    Typical Sources
    ---------------
    The JSON document loader (not JSON, not an array of objects) and the
    packaged location table.
    """


class ValidationError(ConfigError):
    """Signifies that a syntactically valid node record failed semantic checks.

    Raised for unknown ``encrypt`` or ``auth-type`` values, a missing ``name``,
    and numeric fields that are not integers.
    """


class NotFound(ConfigError):
    """Represents a missing resource (file or platform entry in the location table)."""


class FatalConfigError(ConfigError):
    """A node definition that can never be served, e.g. an unbindable port.

    Why
    ----
    A server cannot run with a listening port outside ``1..65535``. The loader
    reports the condition as a value so tests can observe it; the boundary in
    :func:`proxy_node_config.core.bootstrap` decides to exit.

    Attributes
    ----------
    field:
        Document key that failed (``"port"`` or ``"cert-port"``).
    value:
        Offending value as read from the document.
    node:
        Name of the node record, when known.
    """

    def __init__(self, message: str, *, field: str, value: object, node: str | None = None) -> None:
        super().__init__(message)
        self.field = field
        self.value = value
        self.node = node


class ConfigInitializationError(ConfigError):
    """Configuration initialisation failed; the original error is chained as ``__cause__``."""
