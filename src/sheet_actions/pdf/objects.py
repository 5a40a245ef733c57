"""
Object Accessors
=================
Typed accessors over pikepdf objects.

pikepdf resolves indirect references transparently, so every object read
out of a dictionary or array is already the referenced object. What the
engine still needs is a way to ask "is this a dictionary / array / text
string" and get a typed answer or a clear failure, instead of ad hoc
``isinstance`` checks scattered through the traversal code.

Accessors raise :class:`ObjectShapeError`; callers translate it into the
error kind that fits their operation (``NotSupported`` while validating,
``InvalidPdfSheet`` while attaching, ...).
"""

from __future__ import annotations

from typing import Any

import pikepdf

ObjectId = tuple[int, int]

UTF16_BOM = b"\xfe\xff"
UTF8_BOM = b"\xef\xbb\xbf"


class ObjectShapeError(ValueError):
    """An object is missing or does not have the expected shape."""


def as_dictionary(obj: Any, what: str) -> pikepdf.Dictionary:
    if not isinstance(obj, pikepdf.Dictionary):
        raise ObjectShapeError(f"{what} is not a dictionary")
    return obj


def as_array(obj: Any, what: str) -> pikepdf.Array:
    if not isinstance(obj, pikepdf.Array):
        raise ObjectShapeError(f"{what} is not an array")
    return obj


def as_name(obj: Any, what: str) -> pikepdf.Name:
    if not isinstance(obj, pikepdf.Name):
        raise ObjectShapeError(f"{what} is not a name")
    return obj


def as_text(obj: Any, what: str) -> str:
    """Decode a PDF text string: UTF-16BE after a BOM, UTF-8 otherwise."""
    if not isinstance(obj, pikepdf.String):
        raise ObjectShapeError(f"{what} is not a string")
    raw = bytes(obj)
    try:
        if raw.startswith(UTF16_BOM):
            return raw[len(UTF16_BOM):].decode("utf-16-be")
        if raw.startswith(UTF8_BOM):
            return raw[len(UTF8_BOM):].decode("utf-8")
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ObjectShapeError(f"{what} is not decodable text: {e}") from e


def object_id(obj: Any) -> ObjectId | None:
    """(number, generation) of an indirect object, None for direct objects."""
    # Scalars come back from pikepdf as plain Python values.
    if not isinstance(obj, pikepdf.Object) or not obj.is_indirect:
        return None
    return obj.objgen


def get_catalog(pdf: pikepdf.Pdf) -> pikepdf.Dictionary:
    return as_dictionary(pdf.trailer.get("/Root"), "trailer /Root (catalog)")


def get_acroform(catalog: pikepdf.Dictionary) -> pikepdf.Dictionary:
    return as_dictionary(catalog.get("/AcroForm"), "catalog /AcroForm")


def get_fields(acroform: pikepdf.Dictionary) -> pikepdf.Array:
    return as_array(acroform.get("/Fields"), "AcroForm /Fields")
