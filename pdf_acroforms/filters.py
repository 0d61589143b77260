"""Hex string decoding built on the pypdf filter implementation."""

from __future__ import annotations

import logging
from typing import Protocol

from pypdf.filters import ASCIIHexDecode
from pypdf.generic import TextStringObject, create_string_object

LOGGER = logging.getLogger(__name__)


class HexDecoder(Protocol):
    """Protocol for objects able to decode a hex digit string."""

    def decode(self, value: str) -> bytes:
        """Return the raw bytes encoded by ``value``."""


class ASCIIHexDecoder:
    """Decode the body of a PDF hex string (the text between ``<`` and ``>``)."""

    def decode(self, value: str) -> bytes:
        digits = "".join(value.split())
        if len(digits) % 2:
            # a missing final digit is taken as 0
            digits += "0"
        return ASCIIHexDecode.decode(digits + ">")


def decode_text(raw: bytes) -> str:
    """Decode a PDF text string (UTF-16 with BOM or PDFDocEncoding)."""

    decoded = create_string_object(raw)
    if isinstance(decoded, TextStringObject):
        return str(decoded)
    LOGGER.debug("Falling back to latin-1 for undecodable text string %r", raw)
    return bytes(decoded).decode("latin-1")
