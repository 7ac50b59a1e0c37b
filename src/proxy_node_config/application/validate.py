"""Per-record validation of node definitions.

Purpose
-------
Turn loosely typed document records into :class:`NodeRecord` values whose
fields are known to be well-typed, and stop the load on the first record that
cannot be served.

Contents
--------
* :func:`is_port` – TCP port range predicate.
* :class:`NodeRecord` – validated, still un-assembled node fields.
* :func:`validate_records` – validates every record in document order.
* :func:`validate_record` – validates a single record.

System Role
-----------
Called by :func:`proxy_node_config.core.load_server_config` between the
document loader and :mod:`proxy_node_config.application.factory`. Illegal
``port`` / ``cert-port`` values raise :class:`FatalConfigError`; every other
violation raises :class:`ValidationError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from ..domain.errors import FatalConfigError, ValidationError
from ..domain.node import AuthType, EncryptType
from ..observability import log_error, log_warning, make_event

_PORT_RULE = "should be larger than 0 and smaller than 65536"


def is_port(value: int) -> bool:
    """Return ``True`` when *value* is a bindable TCP port.

    Examples
    --------
    >>> [is_port(p) for p in (0, 1, 65535, 65536)]
    [False, True, True, False]
    """

    return 0 < value < 65536


@dataclass(frozen=True, slots=True)
class NodeRecord:
    """Fields of one node after validation, in document order.

    ``auth_argument`` holds the ``password`` (SIMPLE) or ``group`` (USER)
    value, or ``None`` when the document omitted it.
    """

    index: int
    name: str
    port: int
    cert_port: int
    max_client: int
    encrypt_type: EncryptType
    auth_type: AuthType
    auth_argument: str | None


def validate_records(records: Iterable[Mapping[str, object]]) -> list[NodeRecord]:
    """Validate *records* in order, failing on the first invalid one.

    Duplicate node names are accepted but reported as ``duplicate_node_name``
    warnings.
    """

    validated: list[NodeRecord] = []
    seen: set[str] = set()
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise ValidationError(f"Node #{index} is not an object")
        item = validate_record(record, index=index)
        if item.name in seen:
            log_warning("duplicate_node_name", **make_event(item.name, None, {"index": index}))
        seen.add(item.name)
        validated.append(item)
    return validated


def validate_record(record: Mapping[str, object], *, index: int = 0) -> NodeRecord:
    """Validate a single document record.

    Parameters
    ----------
    record:
        Untyped field map as produced by the document loader.
    index:
        Position of the record in the document, used in error messages.

    Raises
    ------
    FatalConfigError
        When ``port`` is outside ``1..65535``, or ``cert-port`` is when the
        node uses OpenSSL.
    ValidationError
        For a missing name, non-integer numbers, or unknown ``encrypt`` /
        ``auth-type`` values.

    Examples
    --------
    >>> rec = validate_record({"name": "n1", "port": 2020, "cert-port": 0, "max-client": 5,
    ...                        "encrypt": "None", "auth-type": "User", "group": "staff"})
    >>> rec.auth_type, rec.encrypt_type.value, rec.auth_argument
    (<AuthType.USER: 'USER'>, 'None', 'staff')
    """

    name = _read_name(record, index)
    port = _read_int(record, "port", name)
    cert_port = _read_int(record, "cert-port", name)
    max_client = _read_int(record, "max-client", name)

    if not is_port(port):
        _fail_port("port", port, name, index)

    encrypt_type = _read_encrypt(record, name)
    auth_type = _read_auth_type(record, name)

    if encrypt_type.requires_cert_port and not is_port(cert_port):
        _fail_port("cert-port", cert_port, name, index)

    return NodeRecord(
        index=index,
        name=name,
        port=port,
        cert_port=cert_port,
        max_client=max_client,
        encrypt_type=encrypt_type,
        auth_type=auth_type,
        auth_argument=_read_auth_argument(record, auth_type, name),
    )


def _read_name(record: Mapping[str, object], index: int) -> str:
    name = record.get("name")
    if isinstance(name, (int, float)) and not isinstance(name, bool):
        name = str(name)
    if not isinstance(name, str) or not name:
        raise ValidationError(f"Node #{index} has no name")
    return name


def _read_int(record: Mapping[str, object], key: str, node: str) -> int:
    """Return ``record[key]`` as ``int``; an absent key reads as ``0``."""

    value = record.get(key)
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValidationError(f"Node {node}: {key} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as exc:
            raise ValidationError(f"Node {node}: {key} must be an integer, got {value!r}") from exc
    raise ValidationError(f"Node {node}: {key} must be an integer, got {value!r}")


def _read_encrypt(record: Mapping[str, object], node: str) -> EncryptType:
    value = record.get("encrypt")
    try:
        return EncryptType(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in EncryptType)
        raise ValidationError(f"Node {node}: unknown encrypt {value!r} (expected one of {allowed})") from exc


def _read_auth_type(record: Mapping[str, object], node: str) -> AuthType:
    value = record.get("auth-type")
    if not isinstance(value, str):
        raise ValidationError(f"Node {node}: auth-type must be a string, got {value!r}")
    try:
        return AuthType(value.upper())
    except ValueError as exc:
        allowed = ", ".join(member.value.lower() for member in AuthType)
        raise ValidationError(f"Node {node}: unknown auth-type {value!r} (expected one of {allowed})") from exc


def _read_auth_argument(record: Mapping[str, object], auth_type: AuthType, node: str) -> str | None:
    key = auth_type.argument_key
    value = record.get(key)
    if value is None:
        log_warning("auth_argument_missing", **make_event(node, None, {"auth_type": auth_type.value, "key": key}))
        return None
    if isinstance(value, (Mapping, list)):
        raise ValidationError(f"Node {node}: {key} must be a string")
    return str(value)


def _fail_port(field: str, value: int, node: str, index: int) -> None:
    label = "Port" if field == "port" else "CertPort"
    message = f"Illegal {label} {value}, {_PORT_RULE}"
    event = "illegal_port" if field == "port" else "illegal_cert_port"
    log_error(event, **make_event(node, None, {"field": field, "value": value, "index": index, "error": message}))
    raise FatalConfigError(message, field=field, value=value, node=node)
