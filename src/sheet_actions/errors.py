"""
Error Taxonomy
===============
Typed errors raised by the validator, field discovery, the script compiler
and the attachment engine.

Every error carries a :class:`ErrorCategory` so that an outer layer (web
handler, CLI) can map it to a response without the engine knowing about
HTTP::

    try:
        attach_field_calculation(path, js, "STRmod")
    except SheetActionsError as e:
        if e.category is ErrorCategory.NOT_FOUND:
            ...
"""

from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    NOT_FOUND = "NotFound"
    BAD_REQUEST = "BadRequest"
    INTERNAL = "Internal"


class SheetActionsError(Exception):
    """Base class for all engine errors."""

    category: ErrorCategory = ErrorCategory.INTERNAL
    default_message = "sheet actions error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


# ---------------------------------------------------------------------------
# Validation / discovery errors
# ---------------------------------------------------------------------------


class PdfError(SheetActionsError):
    """Raised while validating or inspecting an uploaded PDF sheet."""


class PdfFileNotFound(PdfError):
    category = ErrorCategory.NOT_FOUND
    default_message = "file does not exist"


class PdfReadError(PdfError):
    default_message = "failed to read PDF file"


class InvalidHeader(PdfError):
    category = ErrorCategory.BAD_REQUEST
    default_message = "invalid PDF header - file is not a PDF"


class PdfParseError(PdfError):
    category = ErrorCategory.BAD_REQUEST
    default_message = "failed to parse PDF"


class NotSupported(PdfError):
    """A compatibility rule rejected the document."""

    category = ErrorCategory.BAD_REQUEST
    default_message = "PDF sheet is not supported"

    def __init__(self, reason: str | None = None, rule_id: str | None = None) -> None:
        super().__init__(reason)
        self.reason = str(self)
        self.rule_id = rule_id


# ---------------------------------------------------------------------------
# Action errors
# ---------------------------------------------------------------------------


class ActionError(SheetActionsError):
    """Raised while compiling or attaching a calculation action."""


class LoadPdfError(ActionError):
    default_message = "failed to load PDF sheet"


class SavePdfError(ActionError):
    default_message = "failed to save PDF sheet"


class InvalidPdfSheet(ActionError):
    category = ErrorCategory.BAD_REQUEST
    default_message = "invalid PDF sheet"

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(f"invalid PDF sheet: {reason}" if reason else None)
        self.reason = reason


class FieldNotFound(ActionError):
    category = ErrorCategory.NOT_FOUND

    def __init__(self, field_name: str) -> None:
        super().__init__(f"field not found in PDF sheet: {field_name}")
        self.field_name = field_name


class InvalidAction(ActionError):
    category = ErrorCategory.BAD_REQUEST

    def __init__(self, reason: str) -> None:
        super().__init__(f"invalid action: {reason}")
        self.reason = reason


# ---------------------------------------------------------------------------
# Service errors
# ---------------------------------------------------------------------------


class SheetNotFound(SheetActionsError):
    category = ErrorCategory.NOT_FOUND

    def __init__(self, sheet_id: object) -> None:
        super().__init__(f"sheet not found: {sheet_id}")
        self.sheet_id = sheet_id


class InvalidFileName(SheetActionsError):
    category = ErrorCategory.BAD_REQUEST
    default_message = "invalid sheet name"
