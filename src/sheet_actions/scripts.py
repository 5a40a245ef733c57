"""Bundled document-level JavaScript used by compiled calculation actions."""

from __future__ import annotations

from importlib.resources import files
from pathlib import Path

HELPER_FUNCTIONS = (
    "calculateModifierFromScore",
    "calculateSaveFromFields",
    "calculateSkillFromFields",
)


def load_helper_script(path: str | Path | None = None) -> str:
    """Return the helper script source, from ``path`` if given, else the bundled copy."""
    if path is not None:
        return Path(path).read_text(encoding="utf-8")
    return (files("sheet_actions") / "js" / "dnd_helpers.js").read_text(encoding="utf-8")
