"""
Calculation Action Builder
===========================
Fluent builder API for constructing calculation actions.

Example::

    from sheet_actions.builder import CalculationActionBuilder

    action = (
        CalculationActionBuilder.skill(
            ability_modifier="DEXmod",
            proficiency="Acrobatics Prof",
            proficiency_bonus="ProfBonus",
        )
        .with_expertise("Acrobatics Exp")
        .build("Acrobatics")
    )
"""

from __future__ import annotations

from ..models.action import AbilityModifier, SavingThrowModifier, SkillModifier


class CalculationActionBuilder:
    """
    Fluent builder for the three calculation action kinds.

    Start with one of the factory methods, optionally add skill
    extras, then call :meth:`build` with the target field name.
    """

    def __init__(self, kind: str, **sources: str) -> None:
        self._kind = kind
        self._sources = sources
        self._expertise: str | None = None
        self._half_proficiency: str | None = None

    # --- Factories ---

    @classmethod
    def ability_modifier(cls, score: str) -> "CalculationActionBuilder":
        return cls("ability_modifier", score=score)

    @classmethod
    def saving_throw(
        cls,
        ability_modifier: str,
        proficiency: str,
        proficiency_bonus: str,
    ) -> "CalculationActionBuilder":
        return cls(
            "saving_throw_modifier",
            ability_modifier=ability_modifier,
            proficiency=proficiency,
            proficiency_bonus=proficiency_bonus,
        )

    @classmethod
    def skill(
        cls,
        ability_modifier: str,
        proficiency: str,
        proficiency_bonus: str,
    ) -> "CalculationActionBuilder":
        return cls(
            "skill_modifier",
            ability_modifier=ability_modifier,
            proficiency=proficiency,
            proficiency_bonus=proficiency_bonus,
        )

    # --- Skill extras ---

    def with_expertise(self, field_name: str) -> "CalculationActionBuilder":
        """Field deciding whether double proficiency applies."""
        self._require_skill("expertise")
        self._expertise = field_name
        return self

    def with_half_proficiency(self, field_name: str) -> "CalculationActionBuilder":
        """Field deciding whether half proficiency applies (Jack of All Trades)."""
        self._require_skill("half proficiency")
        self._half_proficiency = field_name
        return self

    # --- Build ---

    def build(
        self, target: str
    ) -> AbilityModifier | SavingThrowModifier | SkillModifier:
        """
        Build the action computing into ``target``.

        Raises pydantic ``ValidationError`` for empty field names.
        """
        s = self._sources
        if self._kind == "ability_modifier":
            return AbilityModifier(
                score_field_name=s["score"],
                modifier_field_name=target,
            )
        if self._kind == "saving_throw_modifier":
            return SavingThrowModifier(
                ability_modifier_field_name=s["ability_modifier"],
                proficiency_field_name=s["proficiency"],
                proficiency_bonus_field_name=s["proficiency_bonus"],
                saving_throw_modifier_field_name=target,
            )
        return SkillModifier(
            ability_modifier_field_name=s["ability_modifier"],
            proficiency_field_name=s["proficiency"],
            expertise_field_name=self._expertise,
            half_prof_field_name=self._half_proficiency,
            proficiency_bonus_field_name=s["proficiency_bonus"],
            skill_modifier_field_name=target,
        )

    def _require_skill(self, what: str) -> None:
        if self._kind != "skill_modifier":
            raise ValueError(f"{what} only applies to skill modifiers, not {self._kind}")
