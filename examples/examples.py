"""
Examples for sheet-actions
===========================
Two complete examples wiring calculations into a D&D 5e character sheet.

Run:
    python examples/examples.py
"""

from __future__ import annotations

import sys
import tempfile
from pathlib import Path

import pikepdf

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sheet_actions import (
    CalculationActionBuilder,
    CompatibilityValidator,
    SheetReader,
    SheetWriter,
    compile_action,
    load_helper_script,
)

ABILITIES = ("STR", "DEX", "CON", "INT", "WIS", "CHA")


def make_blank_sheet(path: Path) -> Path:
    """A one-page sheet with score, modifier and save fields per ability."""
    pdf = pikepdf.new()
    pdf.add_blank_page(page_size=(612, 792))
    fields = pikepdf.Array()
    y = 700
    for ability in ABILITIES:
        for suffix, ft in (("", "/Tx"), ("mod", "/Tx"), (" Save", "/Tx"), (" Prof", "/Btn")):
            field = pikepdf.Dictionary(
                Type=pikepdf.Name.Annot,
                Subtype=pikepdf.Name.Widget,
                FT=pikepdf.Name(ft),
                T=pikepdf.String(f"{ability}{suffix}"),
                Rect=[72, y, 172, y + 20],
            )
            fields.append(pdf.make_indirect(field))
            y -= 25
    fields.append(pdf.make_indirect(pikepdf.Dictionary(
        Type=pikepdf.Name.Annot,
        Subtype=pikepdf.Name.Widget,
        FT=pikepdf.Name.Tx,
        T=pikepdf.String("ProfBonus"),
        Rect=[300, 700, 400, 720],
    )))
    pdf.Root["/AcroForm"] = pdf.make_indirect(pikepdf.Dictionary(Fields=fields))
    pdf.save(str(path))
    return path


# ---------------------------------------------------------------------------
# Example 1: Ability modifiers
# ---------------------------------------------------------------------------


def example_ability_modifiers(sheet: Path) -> None:
    """
    Example 1: Every ability modifier computed from its score.

    The helper script is registered once; each modifier field gets a
    one-line calculation that calls into it.
    """
    print("\n" + "="*60)
    print("EXAMPLE 1: Ability modifiers")
    print("="*60)

    result = CompatibilityValidator().check(sheet)
    print(f"\n{result}")

    with SheetReader(sheet) as reader:
        names = [f.name for f in reader.list_calculable_fields()]
    print(f"Calculable fields: {len(names)}")

    with SheetWriter(sheet) as writer:
        writer.register_helper_script(load_helper_script())
        for ability in ABILITIES:
            compiled = compile_action(
                CalculationActionBuilder.ability_modifier(ability).build(f"{ability}mod")
            )
            writer.attach_field_calculation(compiled.javascript, compiled.target_field)
            print(f"  {compiled.target_field:<8} {compiled.javascript}")
        writer.save()


# ---------------------------------------------------------------------------
# Example 2: Saving throws
# ---------------------------------------------------------------------------


def example_saving_throws(sheet: Path) -> None:
    """Example 2: Saving throws from modifier, proficiency box and bonus."""
    print("\n" + "="*60)
    print("EXAMPLE 2: Saving throws")
    print("="*60)

    with SheetWriter(sheet) as writer:
        for ability in ABILITIES:
            action = CalculationActionBuilder.saving_throw(
                f"{ability}mod", f"{ability} Prof", "ProfBonus"
            ).build(f"{ability} Save")
            compiled = compile_action(action)
            writer.attach_field_calculation(compiled.javascript, compiled.target_field)
        writer.save()

    with pikepdf.open(str(sheet)) as pdf:
        order = pdf.Root["/AcroForm"]["/CO"]
        print(f"\nCalculation order holds {len(order)} fields")


if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as tmp:
        sheet = make_blank_sheet(Path(tmp) / "character-sheet.pdf")
        example_ability_modifiers(sheet)
        example_saving_throws(sheet)
