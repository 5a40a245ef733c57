"""
Engine Settings
================
Settings shared by the services and the CLI.

Values come from keyword arguments or, via :meth:`EngineSettings.from_env`,
from ``SHEET_ACTIONS_*`` environment variables:

- ``SHEET_ACTIONS_HELPER_SCRIPT_NAME``  name tree key of the helper script
- ``SHEET_ACTIONS_HELPER_SCRIPT``       path to a helper script overriding the bundled one
- ``SHEET_ACTIONS_LOG_LEVEL``           CLI log level
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field

from .pdf.writer import HELPER_SCRIPT_NAME
from .scripts import load_helper_script

ENV_PREFIX = "SHEET_ACTIONS_"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EngineSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    helper_script_name: str = Field(HELPER_SCRIPT_NAME, min_length=1)
    helper_script_path: Path | None = None
    log_level: LogLevel = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EngineSettings":
        env = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for field_name, var in (
            ("helper_script_name", "HELPER_SCRIPT_NAME"),
            ("helper_script_path", "HELPER_SCRIPT"),
            ("log_level", "LOG_LEVEL"),
        ):
            raw = env.get(ENV_PREFIX + var)
            if raw:
                values[field_name] = raw.upper() if field_name == "log_level" else raw
        return cls(**values)

    def helper_script(self) -> str:
        """Helper script source for these settings."""
        return load_helper_script(self.helper_script_path)
