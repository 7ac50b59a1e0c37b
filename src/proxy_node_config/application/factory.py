"""Assemble :class:`Node` values from validated records.

Purpose
-------
Keep the mapping from :class:`AuthType` to its payload shape in one table so
the node is complete the moment it is constructed.

Contents
--------
* :data:`AUTH_BUILDERS` – one payload constructor per auth type.
* :func:`build_node` / :func:`build_nodes` – construct nodes in order.

System Role
-----------
Runs after :mod:`proxy_node_config.application.validate`. Emits a
``node_created`` event for every node.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Iterable, Mapping

from ..domain.node import AuthType, Node, NodeAuth, SimpleAuth, UserAuth
from ..observability import log_info, make_event
from .validate import NodeRecord

AUTH_BUILDERS: Mapping[AuthType, Callable[[str | None], NodeAuth]] = MappingProxyType(
    {
        AuthType.SIMPLE: SimpleAuth,
        AuthType.USER: UserAuth,
    }
)


def _require_exhaustive(builders: Mapping[AuthType, object]) -> None:
    """Fail at import time when an :class:`AuthType` has no payload builder.

    Examples
    --------
    >>> _require_exhaustive({AuthType.SIMPLE: SimpleAuth})
    Traceback (most recent call last):
    ...
    TypeError: No auth payload builder for: USER
    """

    missing = [member.value for member in AuthType if member not in builders]
    if missing:
        raise TypeError(f"No auth payload builder for: {', '.join(missing)}")


_require_exhaustive(AUTH_BUILDERS)


def build_node(record: NodeRecord) -> Node:
    """Return the immutable node described by *record*.

    Examples
    --------
    >>> from proxy_node_config.application.validate import validate_record
    >>> rec = validate_record({"name": "n1", "port": 2020, "cert-port": 7060, "max-client": 10,
    ...                        "encrypt": "OpenSSL", "auth-type": "simple", "password": "abc123"})
    >>> build_node(rec).argument("password")
    'abc123'
    """

    auth = AUTH_BUILDERS[record.auth_type](record.auth_argument)
    return Node(
        name=record.name,
        port=record.port,
        cert_port=record.cert_port,
        max_client=record.max_client,
        encrypt_type=record.encrypt_type,
        auth=auth,
    )


def build_nodes(records: Iterable[NodeRecord]) -> list[Node]:
    """Build nodes in record order and log each one."""

    nodes: list[Node] = []
    for record in records:
        node = build_node(record)
        log_info("node_created", **make_event(node.name, None, {"summary": node.describe()}))
        nodes.append(node)
    return nodes
