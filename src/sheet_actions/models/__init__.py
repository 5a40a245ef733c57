from .action import (
    AbilityModifier,
    CalculationAction,
    SavingThrowModifier,
    SkillModifier,
    parse_action,
)
from .sheet import SheetField, SheetReference

__all__ = [
    "AbilityModifier",
    "CalculationAction",
    "SavingThrowModifier",
    "SkillModifier",
    "parse_action",
    "SheetField",
    "SheetReference",
]
