"""
Calculation Actions – Model
============================
Declarative calculation actions that can be attached to an AcroForm field.

Each action names the fields it reads from and the *target* field whose
value it computes. The script compiler turns an action into a single call
to one of the bundled helper functions.

Actions are a tagged union discriminated by ``kind``, so a JSON request
body can be parsed straight into the right variant::

    from sheet_actions.models.action import parse_action

    action = parse_action({
        "kind": "ability_modifier",
        "score_field_name": "STR",
        "modifier_field_name": "STRmod",
    })
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


FieldName = Annotated[str, Field(min_length=1)]


class _ActionBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def target_field(self) -> str:
        raise NotImplementedError


class AbilityModifier(_ActionBase):
    """Ability modifier computed from a raw ability score field."""

    kind: Literal["ability_modifier"] = "ability_modifier"

    score_field_name: FieldName = Field(
        ..., description="Text field containing the ability score",
    )
    modifier_field_name: FieldName = Field(
        ..., description="Target text field receiving the ability modifier",
    )

    @property
    def target_field(self) -> str:
        return self.modifier_field_name


class SavingThrowModifier(_ActionBase):
    """Saving throw = ability modifier + proficiency bonus when proficient."""

    kind: Literal["saving_throw_modifier"] = "saving_throw_modifier"

    ability_modifier_field_name: FieldName = Field(
        ..., description="Field holding the relevant ability modifier",
    )
    proficiency_field_name: FieldName = Field(
        ..., description="Checkbox/choice field deciding proficiency for this save",
    )
    proficiency_bonus_field_name: FieldName = Field(
        ..., description="Field holding the character's proficiency bonus",
    )
    saving_throw_modifier_field_name: FieldName = Field(
        ..., description="Target field receiving the saving throw modifier",
    )

    @property
    def target_field(self) -> str:
        return self.saving_throw_modifier_field_name


class SkillModifier(_ActionBase):
    """
    Skill modifier with optional expertise (double proficiency) and
    half proficiency (e.g. Jack of All Trades).
    """

    kind: Literal["skill_modifier"] = "skill_modifier"

    ability_modifier_field_name: FieldName
    proficiency_field_name: FieldName
    expertise_field_name: FieldName | None = None
    half_prof_field_name: FieldName | None = None
    proficiency_bonus_field_name: FieldName
    skill_modifier_field_name: FieldName

    @property
    def target_field(self) -> str:
        return self.skill_modifier_field_name


CalculationAction = Annotated[
    Union[AbilityModifier, SavingThrowModifier, SkillModifier],
    Field(discriminator="kind"),
]

_action_adapter: TypeAdapter[Any] = TypeAdapter(CalculationAction)


def parse_action(data: dict[str, Any] | str | bytes) -> AbilityModifier | SavingThrowModifier | SkillModifier:
    """Parse a dict or JSON document into the matching action variant."""
    if isinstance(data, (str, bytes)):
        return _action_adapter.validate_json(data)
    return _action_adapter.validate_python(data)
