"""
Calculation Script Compiler
============================
Turns a declarative calculation action into the JavaScript statement that
runs in the field's "on calculate" trigger.

Every field name is emitted as a JSON string literal, which is also a valid
JavaScript string literal, so quotes and backslashes in names survive.
Missing optional arguments become the bare token ``undefined``.

Example::

    >>> compile_action(AbilityModifier(score_field_name="STR", modifier_field_name="STRmod"))
    CompiledAction(target_field='STRmod', javascript='calculateModifierFromScore("STR");')
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from ..errors import InvalidAction
from ..models.action import AbilityModifier, SavingThrowModifier, SkillModifier

ABILITY_MODIFIER_FUNCTION = "calculateModifierFromScore"
SAVING_THROW_FUNCTION = "calculateSaveFromFields"
SKILL_FUNCTION = "calculateSkillFromFields"

UNDEFINED = "undefined"


@dataclass(frozen=True)
class CompiledAction:
    target_field: str
    javascript: str


def serialize_field_name(field_name: str | None) -> str:
    """Quote a field name as a JavaScript string literal (``undefined`` for None)."""
    if field_name is None:
        return UNDEFINED
    try:
        literal = json.dumps(field_name, ensure_ascii=False)
        # PDF strings are written from UTF-8 text; lone surrogates cannot be.
        literal.encode("utf-8")
    except (TypeError, ValueError) as e:
        raise InvalidAction(f"failed to serialize field name: {e}") from e
    return literal


def _call(function: str, *args: str | None) -> str:
    return f"{function}({', '.join(serialize_field_name(a) for a in args)});"


def compile_action(
    action: AbilityModifier | SavingThrowModifier | SkillModifier,
) -> CompiledAction:
    """Compile ``action`` into its target field and calculation script."""
    if isinstance(action, AbilityModifier):
        js = _call(ABILITY_MODIFIER_FUNCTION, action.score_field_name)
    elif isinstance(action, SavingThrowModifier):
        js = _call(
            SAVING_THROW_FUNCTION,
            action.ability_modifier_field_name,
            action.proficiency_field_name,
            action.proficiency_bonus_field_name,
        )
    elif isinstance(action, SkillModifier):
        js = _call(
            SKILL_FUNCTION,
            action.ability_modifier_field_name,
            action.proficiency_field_name,
            action.expertise_field_name,
            action.half_prof_field_name,
            action.proficiency_bonus_field_name,
        )
    else:
        raise InvalidAction(f"unsupported action type: {type(action).__name__}")
    return CompiledAction(target_field=action.target_field, javascript=js)
