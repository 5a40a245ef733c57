"""
Ports
======
Interfaces the services depend on for sheet metadata and file storage.

Adapters (database, object storage, local filesystem) implement these
protocols; the services never touch a backend directly.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol
from uuid import UUID

from ..models.sheet import SheetReference


class SheetReferencePort(Protocol):
    """Persistent store of :class:`SheetReference` records."""

    def find_by_id(self, sheet_id: UUID) -> SheetReference | None:
        """Return the reference for ``sheet_id``, or None if unknown."""
        ...

    def create(self, reference: SheetReference) -> None:
        ...


class SheetStoragePort(Protocol):
    """File storage holding the sheet PDFs."""

    def read(self, path: Path) -> Path:
        """Fetch the file stored at ``path`` and return a local path to it."""
        ...

    def write(self, local_path: Path, path: Path) -> None:
        """Upload the local file back to the storage ``path``."""
        ...

    def create(self, reference: SheetReference) -> SheetReference:
        """
        Store the file at ``reference.path`` and return the reference with
        ``path`` pointing at its storage location.
        """
        ...
