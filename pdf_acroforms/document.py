"""Line buffer holding a PDF file and the structures parsed out of it."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterator, List, Optional

from .exceptions import InvalidPDFError
from .types import AcroField, CrossReference
from .utils import PathLike, to_path

LOGGER = logging.getLogger(__name__)

NEED_APPEARANCES_PATTERN = re.compile(r"/NeedAppearances\s+true\b")

# Latin-1 maps every byte to one character, keeping string lengths equal to
# byte lengths.
ENCODING = "latin-1"


class PDFDocument:
    """
    In-memory PDF file split into lines, shared between parser and writer.

    Each entry is one physical line of the file without its ``\\n``
    separator. The parser records metadata, fields, object offsets and the
    cross-reference table here.
    """

    def __init__(self, lines: List[str]) -> None:
        self._entries: List[str] = list(lines)
        self._metadata: Dict[str, Any] = {}
        self._fields: Dict[str, AcroField] = {}
        self._offsets: Dict[int, int] = {}
        self._positions: Dict[int, int] = {}
        self._shifts: Dict[int, int] = {}
        self._cross_reference: Optional[CrossReference] = None
        self._need_appearances = any(
            NEED_APPEARANCES_PATTERN.search(entry) for entry in self._entries
        )

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    @classmethod
    def from_bytes(cls, data: bytes) -> "PDFDocument":
        return cls(data.decode(ENCODING).split("\n"))

    @classmethod
    def from_file(cls, pdf_path: PathLike) -> "PDFDocument":
        path = to_path(pdf_path)
        if not path.is_file():
            raise InvalidPDFError(f"PDF file not found: {path}")
        data = path.read_bytes()
        if not data.startswith(b"%PDF-"):
            raise InvalidPDFError(f"Missing %PDF- header: {path}")
        LOGGER.debug("Loaded %s (%d bytes)", path, len(data))
        return cls.from_bytes(data)

    def to_bytes(self) -> bytes:
        return "\n".join(self._entries).encode(ENCODING)

    # ------------------------------------------------------------------
    # Line access
    # ------------------------------------------------------------------
    @property
    def entries_count(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get_entry(self, index: int) -> str:
        return self._entries[index]

    def set_entry(self, index: int, entry: str) -> None:
        self._entries[index] = entry
        if NEED_APPEARANCES_PATTERN.search(entry):
            self._need_appearances = True

    def is_need_appearances_true(self) -> bool:
        return self._need_appearances

    # ------------------------------------------------------------------
    # Metadata and fields
    # ------------------------------------------------------------------
    @property
    def metadata(self) -> Dict[str, Any]:
        return self._metadata

    def add_meta(self, key: str, value: Any) -> None:
        self._metadata[key] = value

    @property
    def fields(self) -> Dict[str, AcroField]:
        return self._fields

    def set_field(self, name: str, field: AcroField) -> None:
        self._fields[name] = field

    def get_field(self, name: str) -> Optional[AcroField]:
        return self._fields.get(name)

    # ------------------------------------------------------------------
    # Object bookkeeping
    # ------------------------------------------------------------------
    def set_offset(self, object_id: int, offset: int) -> None:
        self._offsets[object_id] = offset

    def get_offset(self, object_id: int) -> Optional[int]:
        return self._offsets.get(object_id)

    def set_position(self, object_id: int, position: int) -> None:
        self._positions[object_id] = position

    def get_position(self, object_id: int) -> Optional[int]:
        return self._positions.get(object_id)

    def set_shift(self, position: int, value: int) -> None:
        self._shifts[position] = value

    def get_shift(self, position: int) -> Optional[int]:
        return self._shifts.get(position)

    @property
    def offsets(self) -> Dict[int, int]:
        return self._offsets

    def set_cross_reference(self, cross_reference: CrossReference) -> None:
        self._cross_reference = cross_reference

    def get_cross_reference(self) -> Optional[CrossReference]:
        return self._cross_reference
