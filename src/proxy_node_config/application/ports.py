"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts adapters satisfy so the composition root can
orchestrate loading without depending on concrete implementations.

Contents
--------
* :class:`LocationResolver` – maps the running platform to a base directory.
* :class:`DocumentLoader` – parses the node document into untyped records.
* :class:`TemplateWriter` – bootstraps a default document on first run.
"""

from __future__ import annotations

from typing import Mapping, Protocol, Sequence, runtime_checkable


@runtime_checkable
class LocationResolver(Protocol):
    """Resolve the base storage directory for the running platform.

    Attributes
    ----------
    is_windows:
        Selects the ``file:///`` URL prefix regardless of path shape.
    """

    @property
    def is_windows(self) -> bool:
        """Return ``True`` when the resolved platform is Windows."""

    def base_directory(self) -> str:
        """Return the base directory string from the platform table."""


@runtime_checkable
class DocumentLoader(Protocol):
    """Parse the node document into an ordered sequence of field maps."""

    def load(self, path: str) -> Sequence[Mapping[str, object]]:
        """Read *path* or raise ``NotFound`` / ``InvalidFormat``."""


@runtime_checkable
class TemplateWriter(Protocol):
    """Write a first-run default document."""

    def write(self, path: str) -> Mapping[str, object]:
        """Write the template to *path* and return the single record written."""
