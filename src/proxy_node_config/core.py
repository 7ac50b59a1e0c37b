"""Composition root for ``proxy_node_config``.

Purpose
-------
Provide the single entry point that resolves the storage location, bootstraps
a template on first run, parses and validates the node document, and returns
the immutable :class:`ServerConfig`.

Contents
--------
* :func:`resolve_location` – base directory with trailing separator, created
  when absent.
* :func:`load_server_config` – the load pipeline; raises instead of exiting.
* :func:`bootstrap` – process boundary that turns fatal errors into
  :class:`SystemExit`.

System Role
-----------
The server calls :func:`bootstrap` once at startup and passes the result to
every component that needs nodes. Tests call :func:`load_server_config` with
injected adapters and observe failures as exceptions.
"""

from __future__ import annotations

from pathlib import Path

from .adapters.file_loaders.structured import JSONFileLoader
from .adapters.path_resolvers.default import DefaultLocationResolver
from .adapters.template.default import DefaultTemplateWriter
from .application.factory import build_nodes
from .application.ports import DocumentLoader, LocationResolver, TemplateWriter
from .application.validate import validate_records
from .domain.config import CONFIG_FILE_NAME, ServerConfig, location_url_for
from .domain.errors import ConfigError, ConfigInitializationError, FatalConfigError
from .observability import bind_trace_id, log_debug, log_error, log_info, make_event


def resolve_location(resolver: LocationResolver) -> str:
    """Return the resolver's base directory, creating it when absent.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> target = Path(tmp.name) / "nested" / "nodes"
    >>> resolver = DefaultLocationResolver(platform="linux", table={"linux": str(target)})
    >>> resolve_location(resolver).endswith("nodes/"), target.is_dir()
    (True, True)
    >>> tmp.cleanup()
    """

    location = resolver.base_directory()
    folder = Path(location)
    if not folder.exists():
        folder.mkdir(parents=True, exist_ok=True)
        log_info("location_created", **make_event(None, str(folder)))
    if not location.endswith(("/", "\\")):
        location += "/"
    return location


def load_server_config(
    *,
    resolver: LocationResolver | None = None,
    loader: DocumentLoader | None = None,
    template_writer: TemplateWriter | None = None,
    platform: str | None = None,
    trace_id: str | None = None,
) -> ServerConfig:
    """Run the full pipeline and return the node registry.

    Parameters
    ----------
    resolver / loader / template_writer:
        Adapters; defaults are the packaged implementations.
    platform:
        ``sys.platform`` clone used when *resolver* is not supplied.
    trace_id:
        Identifier bound to every log entry emitted during the load.

    Returns
    -------
    ServerConfig
        Location, URL and nodes in document order.

    Raises
    ------
    FatalConfigError
        A node has an unbindable ``port`` (or ``cert-port`` under OpenSSL).
        Raised unwrapped; the error is already logged.
    ConfigInitializationError
        Any other failure, with the original exception as ``__cause__``.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> resolver = DefaultLocationResolver(platform="linux", table={"linux": tmp.name})
    >>> cfg = load_server_config(resolver=resolver)
    >>> [(node.name, node.port, node.cert_port) for node in cfg]
    [('default', 2020, 7060)]
    >>> tmp.cleanup()
    """

    bind_trace_id(trace_id)
    try:
        if resolver is None:
            resolver = DefaultLocationResolver(platform=platform)
        location = resolve_location(resolver)
        location_url = location_url_for(location, windows=resolver.is_windows)

        config_path = Path(location) / CONFIG_FILE_NAME
        if not config_path.exists():
            (template_writer or DefaultTemplateWriter()).write(str(config_path))

        records = (loader or JSONFileLoader()).load(str(config_path))
        log_debug("records_parsed", **make_event(None, str(config_path), {"records": len(records)}))
        nodes = build_nodes(validate_records(records))
    except FatalConfigError:
        raise
    except (ConfigError, OSError) as exc:
        log_error("configuration_failed", node=None, path=None, error=str(exc), kind=type(exc).__name__)
        raise ConfigInitializationError(f"Configuration initialisation failed: {exc}") from exc

    config = ServerConfig(location=location, location_url=location_url, nodes=tuple(nodes))
    log_info("configuration_loaded", **make_event(None, config.config_file, {"nodes": len(config)}))
    return config


def bootstrap(
    *,
    resolver: LocationResolver | None = None,
    loader: DocumentLoader | None = None,
    template_writer: TemplateWriter | None = None,
    platform: str | None = None,
    trace_id: str | None = None,
) -> ServerConfig:
    """Load the registry for a server process; exit with status 1 on a fatal node.

    Why
    ----
    A node with an unbindable port can never be served, so the process stops
    instead of starting with a partial registry. Other failures propagate as
    :class:`ConfigInitializationError` for the caller to report.
    """

    try:
        return load_server_config(
            resolver=resolver,
            loader=loader,
            template_writer=template_writer,
            platform=platform,
            trace_id=trace_id,
        )
    except FatalConfigError as exc:
        raise SystemExit(1) from exc


__all__ = [
    "CONFIG_FILE_NAME",
    "bootstrap",
    "load_server_config",
    "resolve_location",
]
