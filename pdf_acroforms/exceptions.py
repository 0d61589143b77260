"""
Custom exceptions for PDF AcroForms.

This module defines all custom exceptions raised while loading and parsing
a PDF document.
"""


class PDFAcroFormsException(Exception):
    """Base exception for all PDF AcroForms errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF form parsing error occurred."


class InvalidPDFError(PDFAcroFormsException):
    """Raised when the input is missing or is not a PDF file."""

    @property
    def default_message(self) -> str:
        return "Invalid or unreadable PDF file."


class StructureNotFoundError(PDFAcroFormsException):
    """Raised when a required structural keyword is absent from the document."""

    @property
    def default_message(self) -> str:
        return "Required PDF structure not found."


class CorruptedPDFError(PDFAcroFormsException):
    """Raised when a structural keyword is found but its content is inconsistent."""

    @property
    def default_message(self) -> str:
        return "PDF document is corrupted."


class MalformedValueError(PDFAcroFormsException):
    """Raised when a value expected to be numeric is not."""

    @property
    def default_message(self) -> str:
        return "Malformed value in PDF document."
