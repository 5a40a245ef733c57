"""Shared fixtures: small AcroForm character sheets built with pikepdf."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pikepdf
import pytest
from pikepdf import Name

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

RECT = [0, 0, 100, 20]


def make_field(pdf: pikepdf.Pdf, name: str | bytes, ft: str = "/Tx", widget: bool = True, **extra: Any) -> pikepdf.Object:
    """An indirect terminal field, merged with its widget annotation by default."""
    field = pikepdf.Dictionary(T=pikepdf.String(name), FT=Name(ft))
    if widget:
        field["/Type"] = Name.Annot
        field["/Subtype"] = Name.Widget
        field["/Rect"] = pikepdf.Array(RECT)
    for key, value in extra.items():
        field[f"/{key}"] = value
    return pdf.make_indirect(field)


def make_sheet(
    path: Path,
    names: tuple[str, ...] = ("STR", "STRmod"),
    build=None,
) -> Path:
    """
    Save a one-page sheet with a text field per name to ``path``.

    ``build(pdf, fields)`` can add further fields or mutate the document
    before it is saved.
    """
    pdf = pikepdf.new()
    pdf.add_blank_page(page_size=(612, 792))
    fields = pikepdf.Array([make_field(pdf, name) for name in names])
    pdf.Root["/AcroForm"] = pdf.make_indirect(pikepdf.Dictionary(Fields=fields))
    if build is not None:
        build(pdf, fields)
    pdf.save(str(path))
    pdf.close()
    return path


@pytest.fixture
def sheet_pdf(tmp_path: Path) -> Path:
    """Sheet with the STR / STRmod pair used by the ability modifier scenario."""
    return make_sheet(tmp_path / "sheet.pdf")


@pytest.fixture
def character_sheet_pdf(tmp_path: Path) -> Path:
    """Sheet with every field kind the discovery rules distinguish."""

    def build(pdf: pikepdf.Pdf, fields: pikepdf.Array) -> None:
        fields.append(make_field(pdf, "Roll", "/Btn", Ff=1 << 16))
        fields.append(make_field(pdf, "Inspiration", "/Btn", Ff=1 << 15))
        fields.append(make_field(pdf, "StrProf", "/Btn"))
        fields.append(make_field(pdf, "Toggle", "/Btn", Ff=0))
        fields.append(make_field(pdf, "Class", "/Ch"))
        fields.append(make_field(pdf, "Signature", "/Sig"))
        fields.append(make_field(pdf, "Hidden", widget=False))

        parent = pdf.make_indirect(pikepdf.Dictionary(T=pikepdf.String("Skills")))
        kid = make_field(pdf, "Acrobatics", Parent=parent)
        parent["/Kids"] = pikepdf.Array([kid])
        fields.append(parent)

    return make_sheet(tmp_path / "character.pdf", build=build)


def read_sheet(path: Path) -> pikepdf.Pdf:
    return pikepdf.open(str(path))


def document_scripts(pdf: pikepdf.Pdf) -> list[tuple[str, str]]:
    """(name, script) pairs of the catalog JavaScript name tree."""
    tree = pikepdf.NameTree(pdf.Root["/Names"]["/JavaScript"])
    return [(key, str(action["/JS"])) for key, action in tree.items()]


def field_named(pdf: pikepdf.Pdf, name: str) -> pikepdf.Object:
    stack = list(pdf.Root["/AcroForm"]["/Fields"])
    while stack:
        node = stack.pop(0)
        if "/T" in node and bytes(node["/T"]).decode("utf-8", "replace") == name:
            return node
        if "/Kids" in node:
            stack.extend(node["/Kids"])
    raise KeyError(name)


def calculation_script(pdf: pikepdf.Pdf, name: str) -> str:
    return str(field_named(pdf, name)["/AA"]["/C"]["/JS"])


def write_rootless_pdf(path: Path) -> Path:
    """A well-formed PDF whose trailer has no /Root."""
    header = b"%PDF-1.4\n"
    body = b"1 0 obj\n<< >>\nendobj\n"
    xref = (
        b"xref\n0 2\n0000000000 65535 f \n"
        + f"{len(header):010d} 00000 n \n".encode("ascii")
    )
    startxref = len(header) + len(body)
    trailer = b"trailer\n<< /Size 2 >>\nstartxref\n" + str(startxref).encode("ascii") + b"\n%%EOF\n"
    path.write_bytes(header + body + xref + trailer)
    return path
