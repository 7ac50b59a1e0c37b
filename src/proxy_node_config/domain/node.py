"""Node value objects describing one configured server endpoint.

Purpose
-------
Model a server node as an immutable value so the rest of the server can read
ports, limits, and scheme selectors without ever seeing a half-built record.

Contents
--------
* :class:`AuthType` / :class:`EncryptType` – closed selector enumerations.
* :class:`SimpleAuth` / :class:`UserAuth` – one payload shape per auth type.
* :data:`NodeAuth` – union of the payload shapes.
* :class:`Node` – frozen dataclass with read-only argument accessors.

System Role
-----------
Instances are produced by :mod:`proxy_node_config.application.factory` and
held by :class:`proxy_node_config.domain.config.ServerConfig`. The module has
no I/O and no logging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import ClassVar, Mapping, Union

_MASK = "********"


class AuthType(str, Enum):
    """Authentication scheme selected for a node."""

    SIMPLE = "SIMPLE"
    USER = "USER"

    @property
    def argument_key(self) -> str:
        """Return the single document key that carries this scheme's parameter.

        Examples
        --------
        >>> AuthType.SIMPLE.argument_key
        'password'
        >>> AuthType.USER.argument_key
        'group'
        """

        return _ARGUMENT_KEYS[self]


_ARGUMENT_KEYS: Mapping[AuthType, str] = MappingProxyType({AuthType.SIMPLE: "password", AuthType.USER: "group"})


class EncryptType(str, Enum):
    """Transport encryption scheme; member names match the document spelling."""

    # ``None`` is a keyword; look members up by value.
    None_ = "None"
    OpenSSL = "OpenSSL"
    JKS = "JKS"

    @property
    def requires_cert_port(self) -> bool:
        """Only OpenSSL exchanges certificates on a secondary port."""

        return self is EncryptType.OpenSSL


@dataclass(frozen=True, slots=True)
class SimpleAuth:
    """Shared-password authentication payload."""

    auth_type: ClassVar[AuthType] = AuthType.SIMPLE
    password: str | None

    def arguments(self) -> Mapping[str, str | None]:
        return MappingProxyType({"password": self.password})

    def describe(self, *, reveal_secrets: bool = False) -> str:
        shown = self.password if reveal_secrets or self.password is None else _MASK
        return f"password:{shown}"


@dataclass(frozen=True, slots=True)
class UserAuth:
    """Group-based credential payload."""

    auth_type: ClassVar[AuthType] = AuthType.USER
    group: str | None

    def arguments(self) -> Mapping[str, str | None]:
        return MappingProxyType({"group": self.group})

    def describe(self, *, reveal_secrets: bool = False) -> str:
        return f"group:{self.group}"


NodeAuth = Union[SimpleAuth, UserAuth]


@dataclass(frozen=True, slots=True)
class Node:
    """One independently configured server endpoint.

    Why
    ----
    Consumers open listening sockets from these values; they must never change
    after load. Range checks live in
    :func:`proxy_node_config.application.validate.validate_record`; direct
    construction trusts the caller.

    Attributes
    ----------
    name:
        Identifier of the node (uniqueness is not enforced).
    port:
        Listening port. Nodes returned by the loader have it within
        ``1..65535``.
    cert_port:
        Certificate-exchange port. The loader only range-checks it when
        ``encrypt_type`` is :attr:`EncryptType.OpenSSL`.
    max_client:
        Maximum number of concurrent clients; not bounds-checked.
    encrypt_type:
        Transport encryption selector.
    auth:
        Auth payload; its concrete type determines :attr:`auth_type`.

    Examples
    --------
    >>> node = Node("n1", 2020, 7060, 10, EncryptType.OpenSSL, SimpleAuth("abc123"))
    >>> node.auth_type
    <AuthType.SIMPLE: 'SIMPLE'>
    >>> node.argument("password")
    'abc123'
    >>> node.argument("group") is None
    True
    """

    name: str
    port: int
    cert_port: int
    max_client: int
    encrypt_type: EncryptType
    auth: NodeAuth
    _arguments: Mapping[str, str | None] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_arguments", self.auth.arguments())

    @property
    def auth_type(self) -> AuthType:
        return self.auth.auth_type

    @property
    def arguments(self) -> Mapping[str, str | None]:
        """Read-only view of the auth-scheme parameters (exactly one key)."""

        return self._arguments

    def argument(self, key: str, default: str | None = None) -> str | None:
        """Return the auth argument stored under *key* or *default*."""

        value = self._arguments.get(key)
        return default if value is None else value

    def describe(self, *, reveal_secrets: bool = False) -> str:
        """Render the one-line summary used in ``node_created`` log entries.

        Examples
        --------
        >>> Node("n1", 2020, 7060, 10, EncryptType.JKS, UserAuth("staff")).describe()
        '[name:n1 port:2020 cert-port:7060 maxClient:10 Auth:USER group:staff Encrypt:JKS]'
        """

        return (
            f"[name:{self.name} port:{self.port} cert-port:{self.cert_port} maxClient:{self.max_client}"
            f" Auth:{self.auth_type.value} {self.auth.describe(reveal_secrets=reveal_secrets)}"
            f" Encrypt:{self.encrypt_type.value}]"
        )

    def as_dict(self, *, reveal_secrets: bool = False) -> dict[str, object]:
        """Return the node in document shape (``cert-port``, ``auth-type``...)."""

        payload: dict[str, object] = {
            "name": self.name,
            "port": self.port,
            "cert-port": self.cert_port,
            "max-client": self.max_client,
            "encrypt": self.encrypt_type.value,
            "auth-type": self.auth_type.value.lower(),
        }
        for key, value in self._arguments.items():
            if key == "password" and value is not None and not reveal_secrets:
                value = _MASK
            payload[key] = value
        return payload
