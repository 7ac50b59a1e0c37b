"""Structured node document loader.

Purpose
-------
Convert the on-disk ``config.json`` into an ordered list of untyped records.
Only structural well-formedness is checked here; field semantics belong to
:mod:`proxy_node_config.application.validate`.

Contents
--------
* :class:`BaseFileLoader` – shared helpers for reading files and checking the
  top-level shape.
* :class:`JSONFileLoader` – JSON array loader.

System Role
-----------
Invoked by :func:`proxy_node_config.core.load_server_config` after the
template bootstrap step.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping, Sequence

from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug, log_error


class BaseFileLoader:
    """Common utilities shared by document loaders."""

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`NotFound` when the file is missing.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile(delete=False)
        >>> _ = tmp.write(b"[]")
        >>> tmp.close()
        >>> BaseFileLoader()._read(tmp.name)
        b'[]'
        >>> Path(tmp.name).unlink()
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Configuration file not found: {path}")
        payload = file_path.read_bytes()
        log_debug("config_file_read", node=None, path=path, size=len(payload))
        return payload

    @staticmethod
    def _ensure_records(data: object, *, path: str) -> list[Mapping[str, object]]:
        """Ensure *data* is a list of objects, otherwise raise ``InvalidFormat``.

        Examples
        --------
        >>> BaseFileLoader._ensure_records([{"name": "n1"}], path="demo")
        [{'name': 'n1'}]
        >>> BaseFileLoader._ensure_records({"name": "n1"}, path="demo")
        Traceback (most recent call last):
        ...
        proxy_node_config.domain.errors.InvalidFormat: File demo did not produce a list of node objects
        """

        if not isinstance(data, list):
            raise InvalidFormat(f"File {path} did not produce a list of node objects")
        for index, item in enumerate(data):
            if not isinstance(item, Mapping):
                raise InvalidFormat(f"File {path}: entry #{index} is not an object")
        return data


class JSONFileLoader(BaseFileLoader):
    """Load the JSON node array."""

    def load(self, path: str) -> Sequence[Mapping[str, object]]:
        """Return the records of the JSON array stored at *path*.

        Side Effects
        ------------
        Emits ``config_file_loaded`` debug events and ``config_file_invalid``
        errors.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile('w', delete=False, encoding='utf-8')
        >>> _ = tmp.write('[{"name": "n1"}, {"name": "n2"}]')
        >>> tmp.close()
        >>> [record["name"] for record in JSONFileLoader().load(tmp.name)]
        ['n1', 'n2']
        >>> Path(tmp.name).unlink()
        """

        try:
            data = json.loads(self._read(path))
        except (ValueError, RecursionError) as exc:
            log_error("config_file_invalid", node=None, path=path, format="json", error=str(exc))
            raise InvalidFormat(f"Invalid JSON in {path}: {exc}") from exc
        records = self._ensure_records(data, path=path)
        log_debug("config_file_loaded", node=None, path=path, format="json", records=len(records))
        return records
