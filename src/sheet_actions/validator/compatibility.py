"""
Compatibility Validator
========================
Decides whether an uploaded PDF can receive calculation actions.

Rules run in order and stop at the first failure:

- PDF-001  File must exist
- PDF-002  File must start with the ``%PDF-`` magic header
- PDF-003  File must load as a PDF object graph
- PDF-004  Document must not be encrypted
- PDF-005  Trailer /Root must resolve to a catalog dictionary
- PDF-006  Catalog must have an /AcroForm dictionary
- PDF-007  AcroForm must not be an XFA form
- PDF-008  AcroForm must have a /Fields array (it may be empty)
- PDF-009  Document must not be locked by DocMDP permissions

Validation is read-only.

Example::

    from sheet_actions.validator import CompatibilityValidator

    result = CompatibilityValidator().check("sheet.pdf")
    if not result.passed:
        print(f"[{result.rule_id}] {result.message}")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import pikepdf

from ..errors import (
    InvalidHeader,
    NotSupported,
    PdfError,
    PdfFileNotFound,
    PdfParseError,
    PdfReadError,
)
from ..pdf.objects import ObjectShapeError, get_acroform, get_catalog, get_fields

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF-"

MISSING_ROOT_MESSAGE = "unable to find /Root dictionary"
NO_CATALOG = "PDF sheet does not have a catalog"


@dataclass
class CompatibilityResult:
    """Outcome of a compatibility check."""
    passed: bool
    rule_id: str | None = None
    message: str | None = None
    error: PdfError | None = None

    def __str__(self) -> str:
        if self.passed:
            return "[PASS] compatible AcroForm sheet"
        return f"[FAIL] {self.rule_id}: {self.message}"


class CompatibilityValidator:
    """Validates a PDF file against the AcroForm compatibility rules."""

    def validate(self, path: str | Path) -> None:
        """
        Raise the error of the first failing rule, return None if all pass.

        Raises
        ------
        PdfFileNotFound, PdfReadError, InvalidHeader, PdfParseError, NotSupported
        """
        path = Path(path)

        # PDF-001 Existence
        if not path.exists():
            raise PdfFileNotFound(f"file does not exist: {path}")

        # PDF-002 Magic header
        try:
            with open(path, "rb") as f:
                header = f.read(len(PDF_MAGIC))
        except OSError as e:
            logger.error("failed to read %s: %s", path, e)
            raise PdfReadError(str(e)) from e
        valid_header = header == PDF_MAGIC
        logger.debug("checked pdf magic header: valid=%s", valid_header)
        if not valid_header:
            raise InvalidHeader()

        # PDF-003 Load
        try:
            pdf = pikepdf.open(str(path))
        except pikepdf.PasswordError as e:
            # Cannot be opened at all without a user password
            raise NotSupported("PDF sheet is encrypted", rule_id="PDF-004") from e
        except pikepdf.PdfError as e:
            # qpdf refuses to open a trailer without /Root
            if MISSING_ROOT_MESSAGE in str(e):
                logger.error("PDF document %s has no catalog: %s", path, e)
                raise NotSupported(NO_CATALOG, rule_id="PDF-005") from e
            logger.error("failed to load PDF document %s: %s", path, e)
            raise PdfParseError(str(e)) from e
        except OSError as e:
            logger.error("failed to load PDF document %s: %s", path, e)
            raise PdfParseError(str(e)) from e

        with pdf:
            self._check_structure(pdf)

    def check(self, path: str | Path) -> CompatibilityResult:
        """Run :meth:`validate` and report the outcome instead of raising."""
        try:
            self.validate(path)
        except PdfError as e:
            return CompatibilityResult(
                passed=False,
                rule_id=_rule_for(e),
                message=str(e),
                error=e,
            )
        return CompatibilityResult(passed=True)

    # ------------------------------------------------------------------
    # Structural rules
    # ------------------------------------------------------------------

    @staticmethod
    def _check_structure(pdf: pikepdf.Pdf) -> None:
        # PDF-004 Encryption
        if pdf.is_encrypted or "/Encrypt" in pdf.trailer:
            raise NotSupported("PDF sheet is encrypted", rule_id="PDF-004")

        # PDF-005 Catalog
        try:
            catalog = get_catalog(pdf)
        except ObjectShapeError as e:
            raise NotSupported(NO_CATALOG, rule_id="PDF-005") from e

        # PDF-006 AcroForm
        try:
            acroform = get_acroform(catalog)
        except ObjectShapeError as e:
            logger.error("failed to get AcroForm dictionary: %s", e)
            raise NotSupported("PDF sheet does not have an AcroForm", rule_id="PDF-006") from e

        # PDF-007 XFA: script hooks live in XML, not /AA /C
        if "/XFA" in acroform:
            raise NotSupported("PDF sheet has an XFA form", rule_id="PDF-007")

        # PDF-008 Fields array
        try:
            get_fields(acroform)
        except ObjectShapeError as e:
            logger.error("failed to get Fields array from AcroForm: %s", e)
            raise NotSupported(
                "PDF sheet does not have a Fields array", rule_id="PDF-008"
            ) from e

        # PDF-009 DocMDP lock
        perms = catalog.get("/Perms")
        if isinstance(perms, pikepdf.Dictionary) and "/DocMDP" in perms:
            raise NotSupported("PDF sheet is locked", rule_id="PDF-009")


_RULES_BY_ERROR: dict[type[PdfError], str] = {
    PdfFileNotFound: "PDF-001",
    PdfReadError: "PDF-002",
    InvalidHeader: "PDF-002",
    PdfParseError: "PDF-003",
}


def _rule_for(error: PdfError) -> str | None:
    if isinstance(error, NotSupported):
        return error.rule_id
    return _RULES_BY_ERROR.get(type(error))


def validate(path: str | Path) -> None:
    """Validate ``path`` with the default :class:`CompatibilityValidator`."""
    CompatibilityValidator().validate(path)
