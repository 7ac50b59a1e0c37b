"""Unit tests for the node value objects and selector enums."""

from __future__ import annotations

import dataclasses

import pytest

from proxy_node_config.domain.node import AuthType, EncryptType, Node, SimpleAuth, UserAuth


def _simple_node(password: str | None = "abc123") -> Node:
    return Node("n1", 2020, 7060, 10, EncryptType.OpenSSL, SimpleAuth(password))


def test_node_is_frozen() -> None:
    node = _simple_node()
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.port = 1  # type: ignore[misc]


def test_arguments_hold_exactly_the_auth_key() -> None:
    assert dict(_simple_node().arguments) == {"password": "abc123"}
    user = Node("n2", 2021, 0, 5, EncryptType.None_, UserAuth("staff"))
    assert dict(user.arguments) == {"group": "staff"}
    assert user.auth_type is AuthType.USER


def test_arguments_view_is_read_only() -> None:
    node = _simple_node()
    with pytest.raises(TypeError):
        node.arguments["password"] = "changed"  # type: ignore[index]
    assert node.argument("password") == "abc123"


def test_argument_accessor_returns_default_for_foreign_key() -> None:
    node = _simple_node()
    assert node.argument("group") is None
    assert node.argument("group", "fallback") == "fallback"
    assert _simple_node(password=None).argument("password", "unset") == "unset"


def test_encrypt_type_lookup_is_by_document_spelling() -> None:
    assert EncryptType("None") is EncryptType.None_
    assert EncryptType("OpenSSL").requires_cert_port
    assert not EncryptType("JKS").requires_cert_port
    with pytest.raises(ValueError):
        EncryptType("openssl")


def test_describe_masks_password_unless_revealed() -> None:
    node = _simple_node()
    assert "password:********" in node.describe()
    assert "password:abc123" in node.describe(reveal_secrets=True)
    assert node.describe().startswith("[name:n1 port:2020 cert-port:7060 maxClient:10 Auth:SIMPLE")


def test_as_dict_uses_document_keys() -> None:
    payload = _simple_node().as_dict(reveal_secrets=True)
    assert payload == {
        "name": "n1",
        "port": 2020,
        "cert-port": 7060,
        "max-client": 10,
        "encrypt": "OpenSSL",
        "auth-type": "simple",
        "password": "abc123",
    }


def test_direct_construction_does_not_range_check_ports() -> None:
    node = Node("raw", 0, 70000, 1, EncryptType.OpenSSL, UserAuth("staff"))
    assert (node.port, node.cert_port) == (0, 70000)
