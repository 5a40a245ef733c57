"""
sheet-actions – calculation scripts for PDF character sheets
=============================================================
Validates D&D 5e AcroForm character sheets, discovers the fields that can
receive a calculation and attaches ability, saving throw and skill modifier
scripts that run in the PDF viewer.

Quick Start::

    from sheet_actions import (
        CalculationActionBuilder,
        SheetReader,
        SheetWriter,
        compile_action,
        load_helper_script,
        validate,
    )

    validate("character-sheet.pdf")

    with SheetReader("character-sheet.pdf") as reader:
        print([f.name for f in reader.list_calculable_fields()])

    action = CalculationActionBuilder.ability_modifier("STR").build("STRmod")
    compiled = compile_action(action)

    with SheetWriter("character-sheet.pdf") as writer:
        writer.register_helper_script(load_helper_script())
        writer.attach_field_calculation(compiled.javascript, compiled.target_field)
        writer.save("character-sheet-calc.pdf")
"""

__version__ = "0.1.0"

# Errors
from .errors import (
    ActionError,
    ErrorCategory,
    FieldNotFound,
    InvalidAction,
    InvalidFileName,
    InvalidHeader,
    InvalidPdfSheet,
    LoadPdfError,
    NotSupported,
    PdfError,
    PdfFileNotFound,
    PdfParseError,
    PdfReadError,
    SavePdfError,
    SheetActionsError,
    SheetNotFound,
)

# Models
from .models import (
    AbilityModifier,
    CalculationAction,
    SavingThrowModifier,
    SheetField,
    SheetReference,
    SkillModifier,
    parse_action,
)

# Builders
from .builder import CalculationActionBuilder, CompiledAction, compile_action

# PDF I/O
from .pdf import (
    HELPER_SCRIPT_NAME,
    SheetReader,
    SheetWriter,
    attach_field_calculation,
    find_field_by_name,
    list_calculable_fields,
    register_helper_script,
)
from .scripts import load_helper_script

# Validator
from .validator import CompatibilityResult, CompatibilityValidator, validate

# Services
from .config import EngineSettings
from .services import ActionService, SheetService

__all__ = [
    # Errors
    "ActionError",
    "ErrorCategory",
    "FieldNotFound",
    "InvalidAction",
    "InvalidFileName",
    "InvalidHeader",
    "InvalidPdfSheet",
    "LoadPdfError",
    "NotSupported",
    "PdfError",
    "PdfFileNotFound",
    "PdfParseError",
    "PdfReadError",
    "SavePdfError",
    "SheetActionsError",
    "SheetNotFound",
    # Models
    "AbilityModifier",
    "CalculationAction",
    "SavingThrowModifier",
    "SheetField",
    "SheetReference",
    "SkillModifier",
    "parse_action",
    # Builders
    "CalculationActionBuilder",
    "CompiledAction",
    "compile_action",
    # PDF I/O
    "HELPER_SCRIPT_NAME",
    "SheetReader",
    "SheetWriter",
    "attach_field_calculation",
    "find_field_by_name",
    "list_calculable_fields",
    "register_helper_script",
    "load_helper_script",
    # Validation
    "CompatibilityResult",
    "CompatibilityValidator",
    "validate",
    # Services
    "EngineSettings",
    "ActionService",
    "SheetService",
]
