from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..models.parse_result import ParseResult
from .errors import NoParserError
from .sql_accounting import (
    parse_gl_document_or,
    parse_gl_document_pv,
    parse_invoice_with_item,
    parse_invoice_with_item_dual,
    parse_supplier_invoice,
    parse_supplier_invoice_dual,
)

"""Document-type registry.

A closed mapping of (software, doc_type) to exactly one parser. Lookup
happens before any file I/O so an unknown selection fails fast.
"""

__all__ = [
    "SQL_ACCOUNTING",
    "AUTOCOUNT",
    "SOFTWARE_LABELS",
    "ParserEntry",
    "REGISTRY",
    "get_parser",
    "list_document_types",
]

SQL_ACCOUNTING = "sql-accounting"
AUTOCOUNT = "autocount"

SOFTWARE_LABELS = {
    SQL_ACCOUNTING: "SQL Accounting Software",
    AUTOCOUNT: "Autocount Accounting Software",
}


@dataclass(frozen=True)
class ParserEntry:
    software: str
    doc_type: str
    label: str
    parser: Callable[..., ParseResult]
    file_count: int = 1  # 2 = dual-file (primary + secondary)
    secondary_label: str | None = None

    @property
    def is_dual(self) -> bool:
        return self.file_count == 2

    def parse(self, primary: Any, secondary: Any = None) -> ParseResult:
        if self.is_dual:
            return self.parser(primary, secondary)
        return self.parser(primary)


_ENTRIES = (
    ParserEntry(SQL_ACCOUNTING, "invoice-with-item", "Customer Document Listing - Invoice with Item", parse_invoice_with_item),
    ParserEntry(SQL_ACCOUNTING, "supplier-invoice", "Supplier Document Listing", parse_supplier_invoice),
    ParserEntry(SQL_ACCOUNTING, "gl-document-or", "GL Document Listing - OR", parse_gl_document_or),
    ParserEntry(SQL_ACCOUNTING, "gl-document-pv", "GL Document Listing - PV", parse_gl_document_pv),
    ParserEntry(
        SQL_ACCOUNTING,
        "invoice-with-item-dual",
        "Customer Document Listing - Invoice with Item (Dual)",
        parse_invoice_with_item_dual,
        file_count=2,
        secondary_label="Sales Document Listing",
    ),
    ParserEntry(
        SQL_ACCOUNTING,
        "supplier-invoice-dual",
        "Supplier Document Listing (Dual)",
        parse_supplier_invoice_dual,
        file_count=2,
        secondary_label="Purchase Document Listing",
    ),
)

REGISTRY: dict[tuple[str, str], ParserEntry] = {(e.software, e.doc_type): e for e in _ENTRIES}


def get_parser(software: str | None, doc_type: str | None) -> ParserEntry:
    """Return the registered entry or raise NoParserError naming both labels."""
    entry = REGISTRY.get((software or "", doc_type or ""))
    if entry is None:
        raise NoParserError(software, doc_type)
    return entry


def list_document_types(software: str) -> list[ParserEntry]:
    # autocount はまだ未対応 (空リスト)
    return [e for e in _ENTRIES if e.software == software]
