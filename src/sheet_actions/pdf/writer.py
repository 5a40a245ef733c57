"""
Sheet Writer
=============
Attaches calculation scripts to AcroForm fields using pikepdf.

Supports:
- Registering the shared helper script in the catalog's
  ``/Names /JavaScript`` name tree under a fixed key
- Wiring a JavaScript calculation action into a field's ``/AA /C`` entry
- Registering the field in the AcroForm calculation order (``/CO``)
- Setting ``/NeedAppearances`` so viewers recompute rendered values

The sheet is saved back over the path it was opened from. Nothing is
written when an operation fails, so the file on disk is left untouched.

Example::

    from sheet_actions.pdf import SheetWriter

    with SheetWriter("sheet.pdf") as writer:
        writer.register_helper_script(helper_source)
        writer.attach_field_calculation('calculateModifierFromScore("STR");', "STRmod")
        writer.save()

Concurrent writers on the same path are not coordinated here: the last
save wins. Callers must serialize writes per document.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pikepdf
from pikepdf import Name, NameTree

from ..errors import FieldNotFound, InvalidPdfSheet, LoadPdfError, SavePdfError
from .locator import find_field_by_name
from .objects import (
    ObjectId,
    ObjectShapeError,
    get_acroform,
    get_catalog,
    get_fields,
    object_id,
)

logger = logging.getLogger(__name__)

HELPER_SCRIPT_NAME = "HelpersJS"


class SheetWriter:
    """
    Context-manager-based writer for calculation actions.

    Usage::

        with SheetWriter("sheet.pdf") as w:
            w.attach_field_calculation(js, "STRmod")
            w.save()
    """

    def __init__(self, source: str | Path) -> None:
        self._path = Path(source)
        try:
            self._pdf = pikepdf.open(str(source), allow_overwriting_input=True)
        except (pikepdf.PdfError, OSError) as e:
            logger.error("failed to load PDF sheet %s: %s", self._path, e)
            raise LoadPdfError() from e

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> "SheetWriter":
        return self

    def __exit__(self, *_: Any) -> None:
        self._pdf.close()

    # ------------------------------------------------------------------
    # Helper script
    # ------------------------------------------------------------------

    def register_helper_script(
        self,
        script_source: str,
        name: str = HELPER_SCRIPT_NAME,
    ) -> pikepdf.Object:
        """
        Register ``script_source`` as a document-level JavaScript under ``name``.

        A fresh action and a fresh name tree are created on every call. The
        new tree keeps the other entries of the existing JavaScript tree and
        replaces the one stored under ``name``, so the key is never
        duplicated. The previous objects stay in the file, unreferenced.

        Returns
        -------
        The indirect JavaScript action object.
        """
        catalog = self._catalog()

        js_action = self._make_js_action(script_source)

        js_tree = NameTree.new(self._pdf)
        for key, value in self._existing_scripts(catalog).items():
            if key != name:
                js_tree[key] = value
        js_tree[name] = js_action

        names_dict = catalog.get("/Names")
        if not isinstance(names_dict, pikepdf.Dictionary):
            names_dict = self._pdf.make_indirect(pikepdf.Dictionary())
        names_dict["/JavaScript"] = js_tree.obj
        catalog["/Names"] = names_dict

        logger.info("registered document-level script %r", name)
        return js_action

    # ------------------------------------------------------------------
    # Field calculation
    # ------------------------------------------------------------------

    def attach_field_calculation(
        self,
        javascript: str,
        target_field_name: str,
    ) -> pikepdf.Object:
        """
        Make ``javascript`` the "on calculate" action of ``target_field_name``.

        Any previous calculate action of the field is replaced. The field is
        added once to the AcroForm ``/CO`` array and ``/NeedAppearances`` is
        set so viewers regenerate field appearances.

        Raises
        ------
        InvalidPdfSheet
            The catalog, AcroForm or Fields array cannot be resolved.
        FieldNotFound
            No field named ``target_field_name`` exists in the hierarchy.

        Returns
        -------
        The indirect target field object.
        """
        catalog = self._catalog()
        try:
            acroform = get_acroform(catalog)
            fields = get_fields(acroform)
        except ObjectShapeError as e:
            logger.error("failed to resolve form fields: %s", e)
            raise InvalidPdfSheet(str(e)) from e

        field = find_field_by_name(fields, target_field_name)
        if field is None:
            logger.error("field %r not found in PDF sheet", target_field_name)
            raise FieldNotFound(target_field_name)

        js_action = self._make_js_action(javascript)

        aa = field.get("/AA")
        if not isinstance(aa, pikepdf.Dictionary):
            aa = pikepdf.Dictionary()
        aa["/C"] = js_action
        field["/AA"] = aa

        self._register_calculation_order(acroform, field)

        # Document-wide: the format has no portable per-field invalidation
        acroform["/NeedAppearances"] = True

        logger.info("attached calculation script to field %r", target_field_name)
        return field

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self, output: str | Path | None = None) -> None:
        """Save the sheet, by default over the file it was opened from."""
        target = Path(output) if output is not None else self._path
        try:
            self._pdf.save(str(target))
        except (pikepdf.PdfError, OSError) as e:
            logger.error("failed to save PDF sheet %s: %s", target, e)
            raise SavePdfError() from e

    @property
    def pdf(self) -> pikepdf.Pdf:
        """Direct access to the underlying pikepdf.Pdf object."""
        return self._pdf

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _catalog(self) -> pikepdf.Dictionary:
        try:
            return get_catalog(self._pdf)
        except ObjectShapeError as e:
            logger.error("failed to get catalog from PDF trailer: %s", e)
            raise InvalidPdfSheet(str(e)) from e

    def _make_js_action(self, javascript: str) -> pikepdf.Object:
        return self._pdf.make_indirect(
            pikepdf.Dictionary(S=Name.JavaScript, JS=pikepdf.String(javascript))
        )

    @staticmethod
    def _existing_scripts(catalog: pikepdf.Dictionary) -> dict[str, pikepdf.Object]:
        """Entries of the current JavaScript name tree, nested /Kids included."""
        names_dict = catalog.get("/Names")
        if not isinstance(names_dict, pikepdf.Dictionary):
            return {}
        js_tree = names_dict.get("/JavaScript")
        if not isinstance(js_tree, pikepdf.Dictionary):
            return {}
        try:
            return dict(NameTree(js_tree).items())
        except (pikepdf.PdfError, ValueError) as e:
            logger.warning("dropping unreadable JavaScript name tree: %s", e)
            return {}

    @staticmethod
    def _register_calculation_order(
        acroform: pikepdf.Dictionary, field: pikepdf.Object
    ) -> None:
        # Insertion-ordered set keyed by object identity
        order: dict[ObjectId, pikepdf.Object] = {}
        co = acroform.get("/CO")
        if isinstance(co, pikepdf.Array):
            for ref in co:
                ref_id = object_id(ref)
                if ref_id is not None:
                    order.setdefault(ref_id, ref)

        order.setdefault(field.objgen, field)
        acroform["/CO"] = pikepdf.Array(list(order.values()))


# ---------------------------------------------------------------------------
# Load-mutate-save operations
# ---------------------------------------------------------------------------


def register_helper_script(
    path: str | Path,
    script_source: str,
    name: str = HELPER_SCRIPT_NAME,
) -> None:
    """Register the helper script in the sheet at ``path`` and save it in place."""
    with SheetWriter(path) as writer:
        writer.register_helper_script(script_source, name)
        writer.save()


def attach_field_calculation(
    path: str | Path,
    javascript: str,
    target_field_name: str,
) -> None:
    """Attach ``javascript`` to ``target_field_name`` in the sheet at ``path`` and save it in place."""
    with SheetWriter(path) as writer:
        writer.attach_field_calculation(javascript, target_field_name)
        writer.save()
