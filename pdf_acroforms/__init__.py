"""
PDF AcroForms - Structural parser for interactive PDF forms.

This library reads a PDF file as a sequence of lines and collects its form
fields, document metadata and the structural anchors (cross-reference
table, trailer, startxref) an incremental writer needs to update it.

Quick Start:
    >>> from pdf_acroforms import parse_pdf
    >>> document = parse_pdf('form.pdf')
    >>> for name, field in document.fields.items():
    ...     print(name, field.type, field.full_name)

Main Classes:
    - PDFDocument: Line buffer and parse results
    - PDFParser: Parses a PDFDocument in place

Data Classes:
    - AcroField: One form field
    - CrossReference: Classical cross-reference table

Exceptions:
    - PDFAcroFormsException: Base exception
    - InvalidPDFError: Missing or non-PDF input
    - StructureNotFoundError: xref, trailer or startxref missing
    - CorruptedPDFError: Inconsistent structure
    - MalformedValueError: Non-numeric value where a number is expected

For CLI usage, use the 'pdf-acroforms' command after installation.
"""

__version__ = "1.0.0"
__author__ = "PDF AcroForms Contributors"
__license__ = "MIT"

# Core classes
from pdf_acroforms.document import PDFDocument
from pdf_acroforms.parser import PDFParser, compute_line_offsets, parse_options, parse_pdf

# Data types
from pdf_acroforms.types import AcroField, CrossReference

# Exceptions
from pdf_acroforms.exceptions import (
    PDFAcroFormsException,
    InvalidPDFError,
    StructureNotFoundError,
    CorruptedPDFError,
    MalformedValueError,
)

__all__ = [
    # Main classes
    "PDFDocument",
    "PDFParser",
    # Data types
    "AcroField",
    "CrossReference",
    # Exceptions
    "PDFAcroFormsException",
    "InvalidPDFError",
    "StructureNotFoundError",
    "CorruptedPDFError",
    "MalformedValueError",
    # Functions
    "parse_pdf",
    "parse_options",
    "compute_line_offsets",
    # Version info
    "__version__",
]
