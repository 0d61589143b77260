"""Line-oriented parser for AcroForm fields and PDF structural anchors.

:class:`PDFParser` walks the lines of a :class:`~pdf_acroforms.document.PDFDocument`
once forward to collect indirect objects and form fields, then locates the
cross-reference table, the trailer dictionary and the ``startxref`` pointer
with three backward scans from the end of the file. Only classical
cross-reference tables are understood; cross-reference streams and object
streams are not.

The parser records *where* values live (line indices and byte offsets) so
that an incremental writer can rewrite them later.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from re import Match, Pattern
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .document import PDFDocument
from .exceptions import CorruptedPDFError, MalformedValueError, StructureNotFoundError
from .filters import ASCIIHexDecoder, HexDecoder, decode_text
from .types import AcroField, CrossReference, ObjectRecord
from .utils import PathLike, protect_parentheses, time_block, unprotect_parentheses

__all__ = ["PDFParser", "compute_line_offsets", "parse_options", "parse_pdf"]

LOGGER = logging.getLogger(__name__)

METAS = ("Title", "Author", "Subject", "Keywords", "Creator", "Producer", "CreationDate", "ModDate")

# -- Patterns ------------------------------------------------------------------

OBJECT_HEADER = re.compile(r"^(\d+) (\d+) obj")
END_OBJECT = re.compile(r"endobj")
ARRAY_INDEX_SUFFIX = re.compile(r"\[\d+\]$")

META_LITERAL = {meta: re.compile(r"/%s\s*\(([^)]+)\)" % meta) for meta in METAS}
META_HEX = {meta: re.compile(r"/%s\s*<([\da-fA-F\s]+)>" % meta) for meta in METAS}

TRAPPED = re.compile(r"/Trapped\s*/(\w+)")
NAME = re.compile(r"^/T\s?\((.+)\)\s*$")
VALUE = re.compile(r"^/(V|DV|TU)\s+([<(/])")
MAX_LEN = re.compile(r"^/MaxLen\s+(\d+)")
REMOVED = re.compile(r"^/removed\s+true")
PARENT = re.compile(r"^/Parent\s+(\d+)")
FIELD_TYPE = re.compile(r"^/FT\s+/(\w+)")
FLAGS = re.compile(r"^/Ff\s+(\d+)")
OPTIONS = re.compile(r"^/Opt\s+\[(.+)\]\s*$")
TOP_INDEX = re.compile(r"^/TI\s+/?(\w+)")
SELECTEDS = re.compile(r"^/I\s+\[([\d\s]+)\]\s*$")
FIELDS_KEY = "/Fields"
NEED_APPEARANCES_PREFIX = "/NeedAppearances true "

OPTION_ARRAY = re.compile(r"\[([^\]]+)\]")
OPTION_PAIR = re.compile(r"^\s*\(([^)]+)\)\s*\(([^)]+)\)\s*$")
OPTION_SINGLE = re.compile(r"^\s*\(([^)]+)\)\s*$")

XREF = re.compile(r"\bxref\b")
XREF_SUBSECTION = re.compile(r"^(\d+) (\d+)")
TRAILER = re.compile(r"^trailer")
STARTXREF = re.compile(r"^startxref")
STARTXREF_VALUE = re.compile(r"^(\d+)")

SIZE = re.compile(r"/Size\s+(\d+)")
ID_OPEN = re.compile(r"/ID\s*\[\s*<([\da-fA-F]+)")
ID_SECOND_ON_SAME_LINE = re.compile(r"\s*>\s*<([\da-fA-F]+)>")
ID_CLOSE = re.compile(r"<?([\da-fA-F]+)>")
DOC_CHECKSUM = re.compile(r"/DocChecksum\s*/([\da-fA-F]+)")


def compute_line_offsets(lines: Iterable[str]) -> List[int]:
    """Return the byte offset of the first byte of every line.

    Each line is assumed to have been followed by a single ``\\n`` byte.
    """

    offsets: List[int] = []
    position = 0
    for line in lines:
        offsets.append(position)
        position += len(line) + 1
    return offsets


def parse_options(array: str) -> Optional[Dict[str, str]]:
    """Parse the interior of an ``/Opt`` array into export -> display values.

    Only bracketed sub-arrays are considered; ``[(export)(display)]`` and
    ``[(value)]`` are recognised and anything else is skipped. Returns
    ``None`` when nothing was recognised.
    """

    options: Dict[str, str] = {}
    for option in OPTION_ARRAY.findall(array):
        pair = OPTION_PAIR.match(option)
        if pair:
            options[unprotect_parentheses(pair.group(1))] = unprotect_parentheses(pair.group(2))
            continue
        single = OPTION_SINGLE.match(option)
        if single:
            value = unprotect_parentheses(single.group(1))
            options[value] = value
    return options or None


@dataclass
class _ObjectContext:
    """Mutable state of the indirect object being scanned."""

    field: AcroField
    parent_id: int = 0
    removed: bool = False


class _IDState(enum.Enum):
    IDLE = "idle"
    AWAITING_SECOND_CHUNK = "awaiting_second_chunk"


PropertyHandler = Callable[[Match[str], int, _ObjectContext], None]


class PDFParser:
    """Parse the lines of a PDF document into fields and structural anchors."""

    def __init__(self, document: PDFDocument, *, decoder: Optional[HexDecoder] = None) -> None:
        self.document = document
        self.decoder: HexDecoder = decoder or ASCIIHexDecoder()
        self._lines_count = 0
        self._offsets: List[int] = []
        self._objects: Dict[int, ObjectRecord] = {}
        self._object_position = 0

        # Evaluated in order; the first matching pattern wins.
        self._property_handlers: Tuple[Tuple[Pattern[str], PropertyHandler], ...] = (
            (TRAPPED, self._parse_trapped),
            (NAME, self._parse_name),
            (VALUE, self._parse_value),
            (MAX_LEN, self._parse_max_len),
            (REMOVED, self._parse_removed),
            (PARENT, self._parse_parent),
            (FIELD_TYPE, self._parse_field_type),
            (FLAGS, self._parse_flags),
            (OPTIONS, self._parse_options),
            (TOP_INDEX, self._parse_top_index),
            (SELECTEDS, self._parse_selecteds),
        )

    def parse(self) -> PDFDocument:
        """Run the object pass, then the xref, trailer and startxref scans.

        The object pass patches ``/Fields`` lines of the document in place,
        so a document must not be parsed twice.
        """

        self._lines_count = self.document.entries_count
        LOGGER.info("Parsing %d lines", self._lines_count)
        with time_block(LOGGER, "PDF form parsing"):
            self._offsets = compute_line_offsets(self.document)
            self._objects = {}
            self._object_position = 0
            self._parse_objects()
            self._parse_cross_reference()
            self._parse_trailer()
            self._parse_startxref()
        LOGGER.info(
            "Found %d form fields in %d objects",
            len(self.document.fields),
            self._object_position,
        )
        return self.document

    @property
    def offsets(self) -> List[int]:
        return list(self._offsets)

    # ------------------------------------------------------------------
    # Indirect objects
    # ------------------------------------------------------------------
    def _parse_objects(self) -> None:
        cursor = 0
        while cursor < self._lines_count:
            cursor = self._parse_object(cursor)

    def _parse_object(self, start: int) -> int:
        index = start
        header: Optional[Match[str]] = None
        while index < self._lines_count:
            header = OBJECT_HEADER.match(self.document.get_entry(index))
            if header:
                break
            index += 1
        if header is None:
            return self._lines_count

        object_id = int(header.group(1))
        self.document.set_offset(object_id, self._offsets[index])
        self.document.set_position(object_id, self._object_position)
        self.document.set_shift(self._object_position, 0)
        self._object_position += 1

        if END_OBJECT.search(self.document.get_entry(index), header.end()):
            # whole object on its header line
            return index + 1

        context = _ObjectContext(AcroField(object_id, max_len=0, tooltip_line=0))
        index += 1
        while index < self._lines_count:
            entry = self.document.get_entry(index)
            if END_OBJECT.search(entry):
                break
            self._parse_field_property(entry, index, context)
            index += 1

        self._register_field(context.field, context.removed)
        return index + 1

    def _register_field(self, field: AcroField, removed: bool) -> None:
        if not field.type or not field.name or removed or field.is_push_button:
            return
        name = ARRAY_INDEX_SUFFIX.sub("", field.name)
        LOGGER.debug("Registering %s field %r (object %d)", field.type, name, field.id)
        self.document.set_field(name, field)

    def _parse_field_property(self, entry: str, index: int, context: _ObjectContext) -> None:
        """Apply one object line to the field being built."""

        text = protect_parentheses(entry)
        self._parse_metadata(text)
        for pattern, handler in self._property_handlers:
            match = pattern.search(text)
            if match:
                handler(match, index, context)
                break
        if entry.startswith(FIELDS_KEY) and not self.document.is_need_appearances_true():
            LOGGER.debug("Enabling NeedAppearances on line %d", index)
            self.document.set_entry(index, NEED_APPEARANCES_PREFIX + entry)

    def _parse_metadata(self, text: str) -> None:
        for meta in METAS:
            literal = META_LITERAL[meta].search(text)
            if literal:
                self.document.add_meta(meta, unprotect_parentheses(literal.group(1)))
                continue
            encoded = META_HEX[meta].search(text)
            if encoded:
                self.document.add_meta(meta, decode_text(self.decoder.decode(encoded.group(1))))

    # ------------------------------------------------------------------
    # Property handlers
    # ------------------------------------------------------------------
    def _parse_trapped(self, match: Match[str], index: int, context: _ObjectContext) -> None:
        self.document.add_meta("Trapped", match.group(1).lower())

    def _parse_name(self, match: Match[str], index: int, context: _ObjectContext) -> None:
        field = context.field
        name = unprotect_parentheses(match.group(1))
        field.name = name
        field.name_line = index
        self._objects[field.id] = ObjectRecord(name, context.parent_id)

        ancestors: List[str] = []
        seen = {field.id}
        parent_id = context.parent_id
        while parent_id in self._objects and parent_id not in seen:
            seen.add(parent_id)
            record = self._objects[parent_id]
            ancestors.insert(0, record.name)
            parent_id = record.parent
        if parent_id in seen:
            LOGGER.warning("Cyclic /Parent chain at object %d", field.id)
        field.full_name = ".".join(ancestors + [name])

    def _parse_value(self, match: Match[str], index: int, context: _ObjectContext) -> None:
        key = match.group(1)
        if key == "TU":
            context.field.tooltip_line = index
        elif key == "DV":
            context.field.default_value_line = index
        else:
            context.field.current_value_line = index

    def _parse_max_len(self, match: Match[str], index: int, context: _ObjectContext) -> None:
        context.field.max_len = int(match.group(1))

    def _parse_removed(self, match: Match[str], index: int, context: _ObjectContext) -> None:
        context.removed = True

    def _parse_parent(self, match: Match[str], index: int, context: _ObjectContext) -> None:
        context.parent_id = int(match.group(1))

    def _parse_field_type(self, match: Match[str], index: int, context: _ObjectContext) -> None:
        context.field.type = match.group(1)

    def _parse_flags(self, match: Match[str], index: int, context: _ObjectContext) -> None:
        context.field.flags = int(match.group(1))

    def _parse_options(self, match: Match[str], index: int, context: _ObjectContext) -> None:
        options = parse_options(match.group(1))
        if options is not None:
            context.field.options = options

    def _parse_top_index(self, match: Match[str], index: int, context: _ObjectContext) -> None:
        context.field.top_index = match.group(1)

    def _parse_selecteds(self, match: Match[str], index: int, context: _ObjectContext) -> None:
        context.field.selecteds = [int(selected) for selected in match.group(1).split()]

    # ------------------------------------------------------------------
    # Structural anchors
    # ------------------------------------------------------------------
    def _find_last(self, pattern: Pattern[str], keyword: str) -> Tuple[int, Match[str]]:
        """Return the last line matching ``pattern``; it must not be the final line."""

        index = self._lines_count - 1
        while index >= 0:
            entry = self.document.get_entry(index)
            match = pattern.search(entry)
            if match:
                break
            index -= 1
        else:
            raise StructureNotFoundError(f"{keyword} keyword not found")
        if index == self._lines_count - 1:
            raise CorruptedPDFError(
                f"PDF document is corrupted, {keyword} found on the last line: {entry!r}"
            )
        return index, match

    def _parse_cross_reference(self) -> None:
        index, keyword = self._find_last(XREF, "xref")
        cross_reference = CrossReference(
            line=index,
            start_pointer=self._offsets[index] + keyword.start(),
        )

        index += 1
        entry = self.document.get_entry(index)
        subsection = XREF_SUBSECTION.match(entry)
        if subsection is None:
            raise MalformedValueError(f"xref subsection header expected, found: {entry!r}")
        declared = int(subsection.group(2))
        cross_reference.count = max(declared - 1, 0)

        # the first declared entry is the free-list head and is not kept
        remaining = declared
        index += 1
        while index < self._lines_count:
            entry = self.document.get_entry(index)
            if TRAILER.match(entry):
                break
            if remaining == 0:
                raise CorruptedPDFError(
                    f"xref table longer than its declared {declared} entries, "
                    f"trailer expected on line {index}"
                )
            if remaining < declared:
                cross_reference.add_entry(entry)
            remaining -= 1
            index += 1
        if remaining > 0:
            raise CorruptedPDFError(
                f"xref table declares {declared} entries but only "
                f"{declared - remaining} precede the trailer"
            )

        LOGGER.debug(
            "xref on line %d at byte %d with %d entries",
            cross_reference.line,
            cross_reference.start_pointer,
            cross_reference.count,
        )
        self.document.set_cross_reference(cross_reference)

    def _parse_trailer(self) -> None:
        index, _ = self._find_last(TRAILER, "trailer")
        state = _IDState.IDLE
        first_chunk = ""

        # the trailer line itself may already carry the dictionary
        while index < self._lines_count:
            entry = self.document.get_entry(index)
            if STARTXREF.match(entry):
                break

            if state is _IDState.AWAITING_SECOND_CHUNK:
                closing = ID_CLOSE.search(entry)
                if closing is None:
                    raise CorruptedPDFError(
                        f"trailer corrupted, second ID chunk expected on line {index}: {entry!r}"
                    )
                self.document.add_meta("ID", (first_chunk, closing.group(1)))
                state = _IDState.IDLE
                index += 1
                continue

            size = SIZE.search(entry)
            if size:
                self.document.add_meta("size", size.group(1))

            opening = ID_OPEN.search(entry)
            if opening:
                first_chunk = opening.group(1)
                second = ID_SECOND_ON_SAME_LINE.match(entry, opening.end())
                if second:
                    self.document.add_meta("ID", (first_chunk, second.group(1)))
                else:
                    state = _IDState.AWAITING_SECOND_CHUNK

            checksum = DOC_CHECKSUM.search(entry)
            if checksum:
                self.document.add_meta("checksum", checksum.group(1))
            index += 1

        if state is _IDState.AWAITING_SECOND_CHUNK:
            raise CorruptedPDFError("trailer corrupted, second ID chunk not found")

    def _parse_startxref(self) -> None:
        index, _ = self._find_last(STARTXREF, "startxref")
        index += 1
        entry = self.document.get_entry(index)
        value = STARTXREF_VALUE.match(entry)
        if value is None:
            raise MalformedValueError(f"startxref value expected, found: {entry!r}")
        cross_reference = self.document.get_cross_reference()
        cross_reference.start_value = int(value.group(1))
        cross_reference.start_line = index
        LOGGER.debug("startxref %d on line %d", cross_reference.start_value, index)


def parse_pdf(pdf_path: PathLike, *, decoder: Optional[HexDecoder] = None) -> PDFDocument:
    """Load ``pdf_path`` and parse it, returning the populated document."""

    document = PDFDocument.from_file(pdf_path)
    return PDFParser(document, decoder=decoder).parse()
