from .action_builder import CalculationActionBuilder
from .script_compiler import CompiledAction, compile_action, serialize_field_name

__all__ = [
    "CalculationActionBuilder",
    "CompiledAction",
    "compile_action",
    "serialize_field_name",
]
