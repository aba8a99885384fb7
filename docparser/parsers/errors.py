from __future__ import annotations

"""Error taxonomy for document parsing.

Every error is fatal to the current parse call. Callers (batch service, CLI)
map the concrete class to an UPPER_SNAKE error type via ``error_type``.
"""

__all__ = [
    "DocumentParserError",
    "UnsupportedFormatError",
    "SourceReadError",
    "StructureError",
    "EmptyResultError",
    "NoParserError",
]


class DocumentParserError(Exception):
    """Base class for all parse failures."""

    error_type = "PARSE_ERROR"


class UnsupportedFormatError(DocumentParserError):
    """Raised before any read when the file extension is not accepted."""

    error_type = "UNSUPPORTED_FORMAT"

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(f"Unsupported file type: {extension or '(none)'}")


class SourceReadError(DocumentParserError):
    """Raised when the file cannot be read or decoded."""

    error_type = "READ_ERROR"


class StructureError(DocumentParserError):
    """Raised when an input grid lacks a header row plus at least one data row."""

    error_type = "STRUCTURE_ERROR"

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(
            f"Invalid {source}: No data rows found. "
            "File must have at least a header row and one data row."
        )


class EmptyResultError(DocumentParserError):
    """Raised when a full pass reconstructs zero records (wrong format selected)."""

    error_type = "EMPTY_RESULT"


class NoParserError(DocumentParserError):
    """Raised when a software / doc type pair has no registered parser."""

    error_type = "NO_PARSER"

    def __init__(self, software: str | None, doc_type: str | None) -> None:
        self.software = software
        self.doc_type = doc_type
        super().__init__(f"No parser available for {software} - {doc_type}")
