"""Accounting-export row reconstruction: classify, fold, match."""

from .errors import (
    DocumentParserError,
    EmptyResultError,
    NoParserError,
    SourceReadError,
    StructureError,
    UnsupportedFormatError,
)
from .registry import REGISTRY, ParserEntry, get_parser

__all__ = [
    "DocumentParserError",
    "EmptyResultError",
    "NoParserError",
    "SourceReadError",
    "StructureError",
    "UnsupportedFormatError",
    "REGISTRY",
    "ParserEntry",
    "get_parser",
]
