"""Domain-level server configuration value object.

Purpose
-------
Anchor the immutable :class:`ServerConfig` that carries the resolved storage
location and the ordered node registry from the loader to the server. The
module contains no I/O.

Contents
--------
* :data:`CONFIG_NAME` – section name under which the server registers this
  configuration.
* :data:`CONFIG_FILE_NAME` – name of the node document inside the location.
* :func:`location_url_for` – builds the ``file:`` URI form of a location.
* :class:`ServerConfig` – read-only registry with lookup and export helpers.

System Role
-----------
:func:`proxy_node_config.core.load_server_config` returns one instance at
startup. The owner passes it explicitly to every component that needs it;
there is no process-wide lookup and no mutation path.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Iterable, Iterator

from .node import Node

CONFIG_NAME = "config.server"
CONFIG_FILE_NAME = "config.json"


def location_url_for(location: str, *, windows: bool) -> str:
    """Return the ``file:`` URI for *location*.

    Why
    ----
    Consumers that load resources by URL (certificates, key stores) need the
    directory as a URI.

    What
    ----
    Uses ``file:///`` when the platform is Windows or the path is not rooted
    with ``/``; ``file://`` otherwise so the root slash supplies the third one.
    Backslashes are turned into forward slashes.

    Examples
    --------
    >>> location_url_for("/etc/proxy-node/", windows=False)
    'file:///etc/proxy-node/'
    >>> location_url_for("C:\\\\ProgramData\\\\proxy-node\\\\", windows=True)
    'file:///C:/ProgramData/proxy-node/'
    >>> location_url_for("relative/dir/", windows=False)
    'file:///relative/dir/'
    """

    if windows or not location.startswith("/"):
        return "file:///" + location.replace("\\", "/")
    return "file://" + location


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Immutable node registry returned to the server at startup.

    Attributes
    ----------
    location:
        Resolved base directory, always ending in a path separator.
    location_url:
        ``file:`` URI form of :attr:`location`.
    nodes:
        Nodes in document order.

    Examples
    --------
    >>> from proxy_node_config.domain.node import EncryptType, SimpleAuth
    >>> node = Node("n1", 2020, 7060, 10, EncryptType.OpenSSL, SimpleAuth("abc123"))
    >>> cfg = ServerConfig("/etc/demo/", "file:///etc/demo/", [node])
    >>> len(cfg), cfg.node("n1").port
    (1, 2020)
    >>> cfg.nodes[0] is node
    True
    """

    location: str
    location_url: str
    nodes: tuple[Node, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", tuple(self.nodes))

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def config_file(self) -> str:
        """Absolute path of the node document the nodes were read from."""

        return self.location + CONFIG_FILE_NAME

    def node(self, name: str) -> Node:
        """Return the first node called *name*.

        Raises
        ------
        KeyError
            When no node carries *name*.
        """

        for candidate in self.nodes:
            if candidate.name == name:
                return candidate
        raise KeyError(name)

    def names(self) -> list[str]:
        return [node.name for node in self.nodes]

    def as_list(self, *, reveal_secrets: bool = False) -> list[dict[str, object]]:
        """Return the registry in document shape for tooling output."""

        return _export(self.nodes, reveal_secrets)

    def to_json(self, *, indent: int | None = None, reveal_secrets: bool = False) -> str:
        """Serialise location, URL and nodes to JSON.

        Secrets are masked unless *reveal_secrets* is set.
        """

        payload = {
            "location": self.location,
            "location_url": self.location_url,
            "nodes": self.as_list(reveal_secrets=reveal_secrets),
        }
        return json.dumps(payload, indent=indent, ensure_ascii=False)


def _export(nodes: Iterable[Node], reveal_secrets: bool) -> list[dict[str, object]]:
    return [node.as_dict(reveal_secrets=reveal_secrets) for node in nodes]
