"""
Sheet Models
=============
Descriptors for uploaded sheets and their calculable fields.
"""

from __future__ import annotations

from pathlib import Path
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SheetField(BaseModel):
    """A terminal AcroForm field that can receive a calculation action."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Partial field name (/T)")


class SheetReference(BaseModel):
    """Where an uploaded sheet lives and what it was called on upload."""
    model_config = ConfigDict(frozen=True)

    id: UUID
    original_name: str = Field(..., description="Uploaded file name without extension")
    name: str = Field(..., description="Generated storage name")
    extension: str | None = None
    path: Path

    @property
    def filename(self) -> str:
        """File name offered on download (original name plus extension)."""
        if self.extension:
            return f"{self.original_name}.{self.extension}"
        return self.original_name
