from .locator import find_field_by_name
from .reader import SheetReader, list_calculable_fields
from .writer import (
    HELPER_SCRIPT_NAME,
    SheetWriter,
    attach_field_calculation,
    register_helper_script,
)

__all__ = [
    "find_field_by_name",
    "SheetReader",
    "list_calculable_fields",
    "HELPER_SCRIPT_NAME",
    "SheetWriter",
    "attach_field_calculation",
    "register_helper_script",
]
