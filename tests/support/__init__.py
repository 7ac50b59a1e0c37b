"""Shared sandbox helpers for node configuration tests.

The sandbox points a :class:`DefaultLocationResolver` at a temporary
directory so tests never touch real platform locations.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence

from proxy_node_config.adapters.path_resolvers.default import PLATFORM_KEYS, DefaultLocationResolver


def node_record(**overrides: Any) -> dict[str, Any]:
    """Return a valid SIMPLE/OpenSSL record with *overrides* applied.

    Keys use underscores (``cert_port``) and are translated to the document
    spelling (``cert-port``); pass ``None`` to drop a key.
    """

    record: dict[str, Any] = {
        "name": "n1",
        "port": 2020,
        "cert-port": 7060,
        "max-client": 10,
        "encrypt": "OpenSSL",
        "auth-type": "simple",
        "password": "abc123",
    }
    for key, value in overrides.items():
        document_key = key.replace("_", "-")
        if value is None:
            record.pop(document_key, None)
        else:
            record[document_key] = value
    return record


@dataclass
class NodeSandbox:
    """Temporary location plus the resolver that points at it."""

    root: Path
    platform: str = "linux"
    table: dict[str, str] = field(default_factory=dict)

    @property
    def config_file(self) -> Path:
        return self.root / "config.json"

    def resolver(self) -> DefaultLocationResolver:
        return DefaultLocationResolver(platform=self.platform, table=self.table)

    def write_document(self, records: Sequence[Mapping[str, Any]] | str) -> Path:
        """Write *records* (or raw text) as ``config.json``."""

        self.root.mkdir(parents=True, exist_ok=True)
        body = records if isinstance(records, str) else json.dumps(list(records))
        self.config_file.write_text(body, encoding="utf-8")
        return self.config_file

    def read_document(self) -> list[dict[str, Any]]:
        return json.loads(self.config_file.read_text(encoding="utf-8"))


def create_node_sandbox(tmp_path: Path, *, platform: str = "linux", subdir: str = "nodes") -> NodeSandbox:
    """Return a sandbox whose location table maps every family to ``tmp_path/subdir``."""

    root = tmp_path / subdir
    table = {family: str(root) for family in PLATFORM_KEYS}
    return NodeSandbox(root=root, platform=platform, table=table)


__all__ = ["NodeSandbox", "create_node_sandbox", "node_record"]
