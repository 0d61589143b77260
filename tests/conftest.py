from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Sequence, Tuple
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdf_acroforms.document import PDFDocument

PDFObject = Tuple[int, Sequence[str]]

CATALOG = (1, ["<<", "/Type /Catalog", "/AcroForm <<", "/Fields [ 2 0 R ]", ">>", ">>"])


def build_pdf(
    objects: Iterable[PDFObject],
    *,
    trailer: Sequence[str] = (),
) -> str:
    """Assemble a classical PDF with a correct xref table and startxref."""

    lines = ["%PDF-1.4"]
    position = len(lines[0]) + 1
    offsets = []

    def add(line: str) -> None:
        nonlocal position
        lines.append(line)
        position += len(line) + 1

    objects = list(objects)
    for number, body in objects:
        offsets.append(position)
        add(f"{number} 0 obj")
        for line in body:
            add(line)
        add("endobj")

    xref_position = position
    add("xref")
    add(f"0 {len(objects) + 1}")
    add("0000000000 65535 f ")
    for offset in offsets:
        add(f"{offset:010d} 00000 n ")
    add("trailer")
    add("<<")
    add(f"/Size {len(objects) + 1}")
    add("/Root 1 0 R")
    for line in trailer:
        add(line)
    add(">>")
    add("startxref")
    add(str(xref_position))
    add("%%EOF")
    return "\n".join(lines) + "\n"


@pytest.fixture()
def pdf_document() -> Callable[..., PDFDocument]:
    def _create(objects: Iterable[PDFObject], **kwargs) -> PDFDocument:
        return PDFDocument.from_bytes(build_pdf(objects, **kwargs).encode("latin-1"))

    return _create


@pytest.fixture()
def raw_document() -> Callable[[str], PDFDocument]:
    def _create(text: str) -> PDFDocument:
        return PDFDocument.from_bytes(text.encode("latin-1"))

    return _create


@pytest.fixture()
def form_pdf(tmp_path: Path) -> Path:
    path = tmp_path / "form.pdf"
    text = build_pdf(
        [
            CATALOG,
            (2, ["<<", "/FT /Tx", "/T (Name1)", "/V (hello)", "/MaxLen 12", ">>"]),
            (3, ["<<", "/Title (Quarterly report)", "/Author (Jane Doe)", ">>"]),
        ],
        trailer=["/Info 3 0 R", "/ID [ <AABBCCDD><11223344> ]"],
    )
    path.write_bytes(text.encode("latin-1"))
    return path
