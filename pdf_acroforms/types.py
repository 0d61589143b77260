"""
Type definitions and dataclasses for PDF AcroForms.

This module defines the records filled in by :class:`pdf_acroforms.parser.PDFParser`.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# /Ff bit positions, PDF 32000-1 tables 221, 226, 228 and 230.
FLAG_READ_ONLY = 1 << 0
FLAG_REQUIRED = 1 << 1
FLAG_MULTILINE = 1 << 12
FLAG_PASSWORD = 1 << 13
FLAG_RADIO = 1 << 15
FLAG_PUSH_BUTTON = 1 << 16
FLAG_COMBO = 1 << 17
FLAG_MULTI_SELECT = 1 << 21


@dataclass
class AcroField:
    """
    Interactive form field collected from one indirect object.

    Value attributes hold line indices into the document buffer rather than
    decoded values; rewriting them is left to the caller.

    Attributes:
        id: Indirect object number, fixed at creation
        type: Field type (Tx, Btn, Ch, Sig) or empty when unset
        name: Own name segment, possibly ending in an array index
        full_name: Dot-joined names of known ancestors followed by ``name``
        name_line: Line holding the /T entry
        current_value_line: Line holding the /V entry
        default_value_line: Line holding the /DV entry
        tooltip_line: Line holding the /TU entry, 0 when absent
        max_len: Maximum length, 0 meaning unlimited
        flags: /Ff bit field
        options: Export value to display value mapping for choice fields
        top_index: /TI value of a list box
        selecteds: /I indices of a multi-select list box
    """
    id: int
    type: str = ""
    name: str = ""
    full_name: str = ""
    name_line: int = 0
    current_value_line: int = 0
    default_value_line: int = 0
    tooltip_line: int = 0
    max_len: int = 0
    flags: int = 0
    options: Optional[Dict[str, str]] = None
    top_index: Optional[str] = None
    selecteds: List[int] = field(default_factory=list)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("AcroField.id cannot be reassigned")
        super().__setattr__(name, value)

    def has_flag(self, flag: int) -> bool:
        return bool(self.flags & flag)

    @property
    def is_text(self) -> bool:
        return self.type == "Tx"

    @property
    def is_button(self) -> bool:
        return self.type == "Btn"

    @property
    def is_choice(self) -> bool:
        return self.type == "Ch"

    @property
    def is_signature(self) -> bool:
        return self.type == "Sig"

    @property
    def is_read_only(self) -> bool:
        return self.has_flag(FLAG_READ_ONLY)

    @property
    def is_required(self) -> bool:
        return self.has_flag(FLAG_REQUIRED)

    @property
    def is_multiline(self) -> bool:
        return self.is_text and self.has_flag(FLAG_MULTILINE)

    @property
    def is_password(self) -> bool:
        return self.is_text and self.has_flag(FLAG_PASSWORD)

    @property
    def is_push_button(self) -> bool:
        return self.is_button and self.has_flag(FLAG_PUSH_BUTTON)

    @property
    def is_radio(self) -> bool:
        return self.is_button and not self.is_push_button and self.has_flag(FLAG_RADIO)

    @property
    def is_checkbox(self) -> bool:
        return self.is_button and not (self.has_flag(FLAG_PUSH_BUTTON) or self.has_flag(FLAG_RADIO))

    @property
    def is_combo(self) -> bool:
        return self.is_choice and self.has_flag(FLAG_COMBO)

    @property
    def is_multi_select(self) -> bool:
        return self.is_choice and self.has_flag(FLAG_MULTI_SELECT)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly view of the field."""
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "full_name": self.full_name,
            "name_line": self.name_line,
            "current_value_line": self.current_value_line,
            "default_value_line": self.default_value_line,
            "tooltip_line": self.tooltip_line,
            "max_len": self.max_len,
            "flags": self.flags,
            "options": dict(self.options) if self.options is not None else None,
            "top_index": self.top_index,
            "selecteds": list(self.selecteds),
        }


@dataclass
class ObjectRecord:
    """Name and parent object number of an object whose /T was parsed."""
    name: str
    parent: int = 0


@dataclass
class CrossReference:
    """
    Classical cross-reference table located near the end of the document.

    Attributes:
        line: Line index of the ``xref`` keyword
        start_pointer: Byte offset of the literal ``xref``
        count: Number of data entries, excluding the free-list head
        entries: Raw entry lines, zero-based
        start_value: Integer following ``startxref``
        start_line: Line index holding ``start_value``
    """
    line: int = 0
    start_pointer: int = 0
    count: int = 0
    entries: List[str] = field(default_factory=list)
    start_value: Optional[int] = None
    start_line: Optional[int] = None

    def add_entry(self, entry: str) -> None:
        self.entries.append(entry)

    def get_entry(self, index: int) -> str:
        return self.entries[index]

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line": self.line,
            "start_pointer": self.start_pointer,
            "count": self.count,
            "entries": list(self.entries),
            "start_value": self.start_value,
            "start_line": self.start_line,
        }
