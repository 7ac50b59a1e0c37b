from __future__ import annotations

import json
import re
from pathlib import Path

from proxy_node_config.adapters.template.default import (
    TEMPLATE_NODE,
    DefaultTemplateWriter,
    build_template,
    generate_password,
)

_HEX8 = re.compile(r"^[0-9a-f]{8}$")


def test_generated_password_is_lowercase_hex() -> None:
    assert _HEX8.match(generate_password())


def test_passwords_differ_between_runs(tmp_path: Path) -> None:
    first = DefaultTemplateWriter().write(str(tmp_path / "a" / "config.json"))
    second = DefaultTemplateWriter().write(str(tmp_path / "b" / "config.json"))
    assert first["password"] != second["password"]


def test_template_document_literals(tmp_path: Path) -> None:
    path = tmp_path / "nodes" / "config.json"
    returned = DefaultTemplateWriter().write(str(path))
    document = json.loads(path.read_text(encoding="utf-8"))
    assert len(document) == 1
    node = document[0]
    assert node == returned
    assert {key: node[key] for key in TEMPLATE_NODE} == {
        "name": "default",
        "port": 2020,
        "cert-port": 7060,
        "max-client": 10,
        "encrypt": "OpenSSL",
        "auth-type": "simple",
    }
    assert _HEX8.match(node["password"])


def test_build_template_does_not_touch_defaults() -> None:
    build_template()
    assert "password" not in TEMPLATE_NODE
