"""
Sheet Service
==============
Imports uploaded sheets, lists their calculable fields and exports them.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from uuid import UUID

from ..errors import InvalidFileName, SheetNotFound
from ..models.sheet import SheetField, SheetReference
from ..pdf.reader import list_calculable_fields
from ..validator.compatibility import CompatibilityValidator
from .ports import SheetReferencePort, SheetStoragePort

logger = logging.getLogger(__name__)


def split_filename(filename: str | None) -> tuple[str, str | None]:
    """Split an uploaded file name into ``(original_name, extension)``."""
    if not filename:
        raise InvalidFileName()
    name = Path(filename)
    extension = name.suffix[1:] or None
    return name.stem or filename, extension


class SheetService:
    def __init__(
        self,
        references: SheetReferencePort,
        storage: SheetStoragePort,
        validator: CompatibilityValidator | None = None,
    ) -> None:
        self._references = references
        self._storage = storage
        self._validator = validator or CompatibilityValidator()

    def import_sheet(self, path: str | Path, filename: str | None) -> SheetReference:
        """
        Validate the uploaded file at ``path`` and store it under a generated name.

        The original name is kept only for download.

        Raises
        ------
        PdfError
            The upload is not a compatible AcroForm sheet.
        InvalidFileName
            ``filename`` is missing.
        """
        logger.debug("validating uploaded sheet %s", path)
        self._validator.validate(path)

        original_name, extension = split_filename(filename)
        sheet_id = uuid.uuid4()
        name = uuid.uuid4().hex
        logger.info(
            "creating sheet reference %s (original_name=%r, generated_name=%s)",
            sheet_id, original_name, name,
        )

        reference = SheetReference(
            id=sheet_id,
            original_name=original_name,
            name=name,
            extension=extension,
            path=Path(path),
        )
        reference = self._storage.create(reference)
        logger.info("stored sheet %s at %s", sheet_id, reference.path)

        self._references.create(reference)
        logger.info("stored sheet reference %s", sheet_id)
        return reference

    def find_sheet(self, sheet_id: UUID) -> SheetReference:
        reference = self._references.find_by_id(sheet_id)
        if reference is None:
            logger.error("sheet reference %s not found", sheet_id)
            raise SheetNotFound(sheet_id)
        return reference

    def list_fields(self, sheet_id: UUID) -> list[SheetField]:
        """Calculable fields of a stored sheet."""
        reference = self.find_sheet(sheet_id)
        local_path = self._storage.read(reference.path)
        logger.debug("read sheet %s to %s", sheet_id, local_path)
        return list_calculable_fields(local_path)

    def export_sheet(self, sheet_id: UUID) -> tuple[Path, str]:
        """Return the local path of a stored sheet and its download file name."""
        reference = self.find_sheet(sheet_id)
        local_path = self._storage.read(reference.path)
        logger.debug("read sheet %s to %s", sheet_id, local_path)
        return local_path, reference.filename
