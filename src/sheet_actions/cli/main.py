"""
sheet-actions CLI
==================
Command-line interface for the sheet-actions library.

Commands:
    validate    Check whether a PDF can receive calculation actions
    fields      List the fields that can receive a calculation
    compile     Print the calculation script for an action
    attach      Attach a calculation action to a field of a PDF
    version     Show version information

Usage::

    sheet-actions validate character-sheet.pdf
    sheet-actions fields character-sheet.pdf --format json
    sheet-actions attach ability-modifier sheet.pdf --score STR --target STRmod
    sheet-actions attach from-json sheet.pdf action.json -o out.pdf
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .. import __version__
from ..builder import CalculationActionBuilder, compile_action
from ..config import EngineSettings
from ..errors import ErrorCategory, SheetActionsError
from ..models.action import CalculationAction, parse_action
from ..pdf.reader import list_calculable_fields
from ..pdf.writer import SheetWriter
from ..validator.compatibility import CompatibilityValidator

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

EXIT_CODES = {
    ErrorCategory.BAD_REQUEST: 1,
    ErrorCategory.NOT_FOUND: 1,
    ErrorCategory.INTERNAL: 2,
}


def _configure_logging(level: str | int) -> None:
    package_logger = logging.getLogger("sheet_actions")
    package_logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=err_console, show_path=False, rich_tracebacks=True)
        )


def _fail(error: SheetActionsError) -> NoReturn:
    err_console.print(f"[red]✗ {error.message}[/red]")
    sys.exit(EXIT_CODES[error.category])


def _load_action(text: str) -> CalculationAction:
    try:
        return parse_action(text)
    except ValidationError as e:
        err_console.print(f"[red]✗ invalid action:[/red]\n{e}")
        sys.exit(EXIT_CODES[ErrorCategory.BAD_REQUEST])


@click.group()
@click.version_option(version=__version__, prog_name="sheet-actions")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """
    sheet-actions – calculation scripts for D&D 5e PDF character sheets.

    Validates AcroForm sheets, lists their calculable fields and attaches
    ability, saving throw and skill modifier calculations.
    """
    try:
        settings = EngineSettings.from_env()
    except ValidationError as e:
        err_console.print(f"[red]✗ invalid SHEET_ACTIONS_* settings:[/red]\n{e}")
        sys.exit(2)
    _configure_logging(logging.DEBUG if verbose else settings.log_level)
    ctx.obj = settings


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("pdf_path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--json-output", is_flag=True, help="Output the result as JSON")
def validate(pdf_path: Path, json_output: bool) -> None:
    """Check whether a PDF sheet can receive calculation actions."""
    result = CompatibilityValidator().check(pdf_path)

    if json_output:
        output = {
            "file": str(pdf_path),
            "passed": result.passed,
            "rule": result.rule_id,
            "message": result.message,
        }
        click.echo(json.dumps(output, indent=2))
    else:
        console.print()
        status_str = "[bold green]PASS[/bold green]" if result.passed else "[bold red]FAIL[/bold red]"
        detail = "" if result.passed else f"\n[{result.rule_id}] {result.message}"
        console.print(Panel(
            f"[bold]{pdf_path.name}[/bold]\nStatus: {status_str}{detail}",
            title="Sheet Compatibility",
            border_style="blue",
        ))
        console.print()

    if not result.passed:
        sys.exit(EXIT_CODES[result.error.category] if result.error else 1)


# ---------------------------------------------------------------------------
# fields
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("pdf_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "output_format", type=click.Choice(["rich", "json"]), default="rich")
def fields(pdf_path: Path, output_format: str) -> None:
    """List the fields of a PDF sheet that can receive a calculation."""
    try:
        sheet_fields = list_calculable_fields(pdf_path)
    except SheetActionsError as e:
        _fail(e)

    if output_format == "json":
        output = {
            "file": str(pdf_path),
            "fields": [f.model_dump(mode="json") for f in sheet_fields],
        }
        click.echo(json.dumps(output, indent=2))
        return

    console.print()
    if not sheet_fields:
        console.print("[yellow]No calculable fields found in this PDF.[/yellow]")
        console.print()
        return

    t = Table(title=f"Calculable Fields – {pdf_path.name}", box=box.ROUNDED)
    t.add_column("#", style="dim")
    t.add_column("Name", style="cyan")
    for i, field in enumerate(sheet_fields, 1):
        t.add_row(str(i), field.name)
    console.print(t)
    console.print()


# ---------------------------------------------------------------------------
# compile
# ---------------------------------------------------------------------------


@cli.command("compile")
@click.argument("action_file", type=click.File("r", encoding="utf-8"))
def compile_command(action_file) -> None:
    """Print the calculation script for a JSON action ('-' reads stdin)."""
    action = _load_action(action_file.read())
    try:
        compiled = compile_action(action)
    except SheetActionsError as e:
        _fail(e)
    click.echo(compiled.javascript)


# ---------------------------------------------------------------------------
# attach
# ---------------------------------------------------------------------------


_output_option = click.option(
    "--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None,
    help="Output path (default: overwrite input)",
)
_helper_option = click.option(
    "--helper-script", type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None, help="Helper script to register instead of the bundled one",
)
_pdf_argument = click.argument(
    "pdf_path", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)


def _attach(
    settings: EngineSettings,
    pdf_path: Path,
    action: CalculationAction,
    output: Path | None,
    helper_script: Path | None,
) -> None:
    if helper_script is not None:
        settings = settings.model_copy(update={"helper_script_path": helper_script})
    output_path = output or pdf_path

    try:
        compiled = compile_action(action)
        helper_source = settings.helper_script()
        with SheetWriter(pdf_path) as writer:
            writer.register_helper_script(helper_source, settings.helper_script_name)
            writer.attach_field_calculation(compiled.javascript, compiled.target_field)
            writer.save(output_path)
    except SheetActionsError as e:
        _fail(e)
    except OSError as e:
        err_console.print(f"[red]✗ failed to read helper script: {e}[/red]")
        sys.exit(2)

    console.print(
        f"[green]✓[/green] {action.kind} calculation attached to "
        f"[bold]{compiled.target_field}[/bold] in [bold]{output_path}[/bold]"
    )
    console.print(f"  Script: {compiled.javascript}")


@cli.group()
def attach() -> None:
    """Attach a calculation action to a field of a PDF sheet."""


@attach.command("ability-modifier")
@_pdf_argument
@click.option("--score", required=True, help="Ability score field")
@click.option("--target", required=True, help="Modifier field receiving the calculation")
@_output_option
@_helper_option
@click.pass_obj
def attach_ability_modifier(
    settings: EngineSettings,
    pdf_path: Path,
    score: str,
    target: str,
    output: Path | None,
    helper_script: Path | None,
) -> None:
    """Compute an ability modifier from an ability score."""
    try:
        action = CalculationActionBuilder.ability_modifier(score).build(target)
    except ValidationError as e:
        raise click.BadParameter(str(e)) from e
    _attach(settings, pdf_path, action, output, helper_script)


@attach.command("saving-throw")
@_pdf_argument
@click.option("--ability-modifier", required=True, help="Ability modifier field")
@click.option("--proficiency", required=True, help="Save proficiency checkbox")
@click.option("--proficiency-bonus", required=True, help="Proficiency bonus field")
@click.option("--target", required=True, help="Saving throw field receiving the calculation")
@_output_option
@_helper_option
@click.pass_obj
def attach_saving_throw(
    settings: EngineSettings,
    pdf_path: Path,
    ability_modifier: str,
    proficiency: str,
    proficiency_bonus: str,
    target: str,
    output: Path | None,
    helper_script: Path | None,
) -> None:
    """Compute a saving throw modifier."""
    try:
        action = CalculationActionBuilder.saving_throw(
            ability_modifier, proficiency, proficiency_bonus
        ).build(target)
    except ValidationError as e:
        raise click.BadParameter(str(e)) from e
    _attach(settings, pdf_path, action, output, helper_script)


@attach.command("skill")
@_pdf_argument
@click.option("--ability-modifier", required=True, help="Ability modifier field")
@click.option("--proficiency", required=True, help="Skill proficiency checkbox")
@click.option("--proficiency-bonus", required=True, help="Proficiency bonus field")
@click.option("--expertise", default=None, help="Expertise checkbox (double proficiency)")
@click.option("--half-proficiency", default=None, help="Half proficiency checkbox")
@click.option("--target", required=True, help="Skill field receiving the calculation")
@_output_option
@_helper_option
@click.pass_obj
def attach_skill(
    settings: EngineSettings,
    pdf_path: Path,
    ability_modifier: str,
    proficiency: str,
    proficiency_bonus: str,
    expertise: str | None,
    half_proficiency: str | None,
    target: str,
    output: Path | None,
    helper_script: Path | None,
) -> None:
    """Compute a skill modifier."""
    builder = CalculationActionBuilder.skill(ability_modifier, proficiency, proficiency_bonus)
    if expertise:
        builder.with_expertise(expertise)
    if half_proficiency:
        builder.with_half_proficiency(half_proficiency)
    try:
        action = builder.build(target)
    except ValidationError as e:
        raise click.BadParameter(str(e)) from e
    _attach(settings, pdf_path, action, output, helper_script)


@attach.command("from-json")
@_pdf_argument
@click.argument("action_file", type=click.File("r", encoding="utf-8"))
@_output_option
@_helper_option
@click.pass_obj
def attach_from_json(
    settings: EngineSettings,
    pdf_path: Path,
    action_file,
    output: Path | None,
    helper_script: Path | None,
) -> None:
    """Attach the action described by a JSON file ('-' reads stdin)."""
    action = _load_action(action_file.read())
    _attach(settings, pdf_path, action, output, helper_script)


# ---------------------------------------------------------------------------
# version info
# ---------------------------------------------------------------------------


@cli.command("version")
def show_version() -> None:
    """Show version information."""
    console.print(Panel(
        f"[bold cyan]sheet-actions[/bold cyan] v{__version__}\n\n"
        "Calculation scripts for D&D 5e PDF character sheets\n"
        "Helper functions: calculateModifierFromScore, calculateSaveFromFields,\n"
        "                  calculateSkillFromFields",
        title="sheet-actions",
        border_style="cyan",
    ))
