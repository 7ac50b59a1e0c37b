"""Platform-dependent location resolution.

Purpose
-------
Implement the :class:`proxy_node_config.application.ports.LocationResolver`
protocol by classifying the running platform and reading its base directory
from a small platform→path table.

Contents
--------
* :data:`PLATFORM_KEYS` – table keys, one per platform family.
* :func:`load_location_table` – parses the packaged ``locations.toml``.
* :class:`DefaultLocationResolver` – resolves the base directory.

System Role
-----------
Queried once by :func:`proxy_node_config.core.load_server_config`. The
resolver never touches the filesystem beyond reading the table; directory
creation is the composition root's job.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Final, Mapping

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug

PLATFORM_KEYS: Final[tuple[str, ...]] = ("windows", "mac", "linux")
_TABLE_RESOURCE: Final[str] = "locations.toml"


def load_location_table(text: str | None = None) -> dict[str, str]:
    """Return the ``[location]`` table as a ``{family: path}`` mapping.

    Parameters
    ----------
    text:
        TOML source to parse. Defaults to the packaged ``locations.toml``.

    Raises
    ------
    InvalidFormat
        When the TOML is malformed or the ``[location]`` table is missing.

    Examples
    --------
    >>> load_location_table('[location]\\nlinux = "/srv/nodes"\\n')
    {'linux': '/srv/nodes'}
    >>> sorted(load_location_table())
    ['linux', 'mac', 'windows']
    """

    if text is None:
        text = Path(__file__).with_name(_TABLE_RESOURCE).read_text(encoding="utf-8")
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise InvalidFormat(f"Invalid location table: {exc}") from exc
    table = data.get("location")
    if not isinstance(table, Mapping):
        raise InvalidFormat("Location table has no [location] section")
    return {str(key): str(value) for key, value in table.items()}


class DefaultLocationResolver:
    """Resolve the base directory for the running (or injected) platform.

    Why
    ----
    Keep platform branching out of the composition root and make it testable
    with any platform string and any table.

    Examples
    --------
    >>> resolver = DefaultLocationResolver(platform="darwin", table={"mac": "/tmp/nodes"})
    >>> resolver.family, resolver.base_directory()
    ('mac', '/tmp/nodes')
    >>> DefaultLocationResolver(platform="freebsd13", table={}).family
    'linux'
    """

    def __init__(self, *, platform: str | None = None, table: Mapping[str, str] | None = None) -> None:
        """Store the platform identifier and location table.

        Parameters
        ----------
        platform:
            ``sys.platform`` clone. Defaults to the current interpreter.
        table:
            Family → directory mapping. Defaults to the packaged table.
        """

        self.platform = platform or sys.platform
        self.table = dict(table) if table is not None else load_location_table()

    @property
    def is_windows(self) -> bool:
        return self.platform.startswith("win")

    @property
    def is_macos(self) -> bool:
        return self.platform == "darwin"

    @property
    def family(self) -> str:
        """Return the table key for the platform (``windows``, ``mac`` or ``linux``)."""

        if self.is_windows:
            return "windows"
        if self.is_macos:
            return "mac"
        return "linux"

    def base_directory(self) -> str:
        """Return the configured directory for :attr:`family`.

        Raises
        ------
        NotFound
            When the table has no (or an empty) entry for the family.
        """

        family = self.family
        location = self.table.get(family)
        if not location:
            raise NotFound(f"No configuration location for platform {family!r}")
        log_debug("location_resolved", node=None, path=location, platform=self.platform, family=family)
        return location
