"""
Sheet Reader
=============
Discovers the AcroForm fields of a sheet that can receive a calculation.

Walks the field hierarchy from the AcroForm ``/Fields`` array:

- parent nodes (``/Kids``) are never reported, their descendants are
- text (``/Tx``) and choice (``/Ch``) fields are always capable
- button (``/Btn``) fields are capable when they are radio buttons and not
  pushbuttons; a button without flags is a checkbox and is capable too
- capable fields must also carry a widget (``/Subtype``, ``/Rect`` or ``/AP``)

Failures under a parent's ``/Kids`` are logged and skipped so one broken
child does not hide the rest of the sheet. A type or name that cannot be
read on a top-level field is fatal for the whole listing.

Example::

    from sheet_actions.pdf import SheetReader

    with SheetReader("character-sheet.pdf") as reader:
        for field in reader.list_calculable_fields():
            print(field.name)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pikepdf
from pikepdf import Name

from ..errors import NotSupported, PdfError, PdfParseError
from ..models.sheet import SheetField
from .objects import (
    ObjectId,
    ObjectShapeError,
    as_name,
    as_text,
    get_acroform,
    get_catalog,
    get_fields,
    object_id,
)

logger = logging.getLogger(__name__)

# Field flag bits (/Ff), 1-based bit positions 16 and 17 in ISO 32000
RADIO_FLAG = 1 << 15
PUSHBUTTON_FLAG = 1 << 16

WIDGET_KEYS = ("/Subtype", "/Rect", "/AP")


class SheetReader:
    """Context-manager-based reader listing calculable AcroForm fields."""

    def __init__(self, source: str | Path) -> None:
        self._path = Path(source)
        try:
            self._pdf = pikepdf.open(str(source))
        except (pikepdf.PdfError, OSError) as e:
            logger.error("failed to load PDF document %s: %s", self._path, e)
            raise PdfParseError(str(e)) from e

    def __enter__(self) -> "SheetReader":
        return self

    def __exit__(self, *_: Any) -> None:
        self._pdf.close()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_calculable_fields(self) -> list[SheetField]:
        """
        Return every field that supports a calculation action, in
        depth-first document order.

        Raises
        ------
        NotSupported
            The catalog, AcroForm or Fields array cannot be resolved.
        PdfParseError
            A top-level field has an unreadable type or name.
        """
        try:
            fields = get_fields(get_acroform(get_catalog(self._pdf)))
        except ObjectShapeError as e:
            logger.error("failed to resolve form fields: %s", e)
            raise NotSupported(str(e)) from e

        found: list[SheetField] = []
        visited: set[ObjectId] = set()
        for field_obj in fields:
            self._collect(field_obj, found, visited)

        logger.debug("completed field collection: %d field(s)", len(found))
        return found

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _collect(
        self,
        node: Any,
        found: list[SheetField],
        visited: set[ObjectId],
        is_kid: bool = False,
    ) -> None:
        node_id = object_id(node)
        if not isinstance(node, pikepdf.Dictionary):
            log = logger.warning if is_kid else logger.debug
            log("unexpected object %s in field tree; skipping", node_id)
            return
        if node_id is not None:
            if node_id in visited:
                logger.debug("field %s already visited; skipping", node_id)
                return
            visited.add(node_id)

        kids = node.get("/Kids")
        if isinstance(kids, pikepdf.Array):
            logger.debug("processing parent field %s with %d kid(s)", node_id, len(kids))
            for kid in kids:
                # Best effort: one broken child must not hide its siblings
                try:
                    self._collect(kid, found, visited, is_kid=True)
                except PdfError as e:
                    logger.warning("failed to collect child field; skipping: %s", e)
            return

        try:
            field_type = as_name(node.get("/FT"), "field type /FT")
        except ObjectShapeError as e:
            logger.error("failed to get field type of %s: %s", node_id, e)
            raise PdfParseError(str(e)) from e

        if not supports_calculation(node, field_type):
            logger.debug("skipping field %s: %s does not support calculation", node_id, field_type)
            return

        if not has_widget(node):
            logger.debug("skipping field %s: no widget annotation", node_id)
            return

        try:
            field_name = as_text(node.get("/T"), "field name /T")
        except ObjectShapeError as e:
            logger.error("failed to get field name of %s: %s", node_id, e)
            raise PdfParseError(str(e)) from e

        logger.debug("adding field %r (%s)", field_name, field_type)
        found.append(SheetField(name=field_name))


def supports_calculation(field: pikepdf.Dictionary, field_type: pikepdf.Name) -> bool:
    """Whether a terminal field of ``field_type`` can hold a calculated value."""
    if field_type in (Name.Tx, Name.Ch):
        return True
    if field_type == Name.Btn:
        flags = field.get("/Ff")
        if not isinstance(flags, int):
            # No flags: a checkbox
            return True
        return bool(flags & RADIO_FLAG) and not flags & PUSHBUTTON_FLAG
    return False


def has_widget(field: pikepdf.Dictionary) -> bool:
    # Widgets split out as separate /Parent-linked annotations are not detected.
    return any(key in field for key in WIDGET_KEYS)


def list_calculable_fields(path: str | Path) -> list[SheetField]:
    """Load ``path`` and list its calculable fields."""
    with SheetReader(path) as reader:
        return reader.list_calculable_fields()
