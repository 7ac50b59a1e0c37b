"""First-run template for ``config.json``.

Purpose
-------
Write a minimal, loadable node document when none exists so a fresh install
starts with one working node and its own secret.

Contents
--------
* :data:`TEMPLATE_NODE` – literal defaults of the bootstrap node.
* :func:`generate_password` – fresh 8-character lowercase hex secret.
* :func:`build_template` – template records with a new password.
* :class:`DefaultTemplateWriter` – writes the template to disk.

System Role
-----------
Called by :func:`proxy_node_config.core.load_server_config` when the config
file is absent, and by the ``template`` CLI command.
"""

from __future__ import annotations

import json
import secrets
from pathlib import Path
from types import MappingProxyType
from typing import Final, Mapping

from ...observability import log_info

PASSWORD_LENGTH: Final[int] = 8

TEMPLATE_NODE: Final[Mapping[str, object]] = MappingProxyType(
    {
        "name": "default",
        "port": 2020,
        "cert-port": 7060,
        "max-client": 10,
        "encrypt": "OpenSSL",
        "auth-type": "simple",
    }
)


def generate_password() -> str:
    """Return a uniformly random 8-character lowercase hex string.

    Examples
    --------
    >>> password = generate_password()
    >>> len(password), password == password.lower()
    (8, True)
    """

    return secrets.token_hex(PASSWORD_LENGTH // 2)


def build_template() -> list[dict[str, object]]:
    """Return the single-node template document with a fresh password."""

    node = dict(TEMPLATE_NODE)
    node["password"] = generate_password()
    return [node]


class DefaultTemplateWriter:
    """Write the template document to disk.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> record = DefaultTemplateWriter().write(str(Path(tmp.name) / "config.json"))
    >>> record["port"], len(record["password"])
    (2020, 8)
    >>> tmp.cleanup()
    """

    def __init__(self, *, indent: int | None = 2) -> None:
        self.indent = indent

    def write(self, path: str) -> Mapping[str, object]:
        """Write a fresh template to *path* and return the node record.

        Side Effects
        ------------
        Creates missing parent directories, overwrites *path*, and emits a
        ``template_written`` info event. I/O errors propagate unchanged.
        """

        document = build_template()
        target = Path(path)
        _ensure_parent(target)
        target.write_text(json.dumps(document, indent=self.indent) + "\n", encoding="utf-8")
        log_info("template_written", node=document[0]["name"], path=str(target))
        return document[0]


def _ensure_parent(path: Path) -> None:
    """Create parent directories for *path* when missing."""

    path.parent.mkdir(parents=True, exist_ok=True)
