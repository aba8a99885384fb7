"""Parsers for SQL Accounting exports."""

from .gl_document import parse_gl_document_or, parse_gl_document_pv
from .invoice_with_item import parse_invoice_with_item, parse_invoice_with_item_dual
from .supplier_invoice import parse_supplier_invoice, parse_supplier_invoice_dual

__all__ = [
    "parse_gl_document_or",
    "parse_gl_document_pv",
    "parse_invoice_with_item",
    "parse_invoice_with_item_dual",
    "parse_supplier_invoice",
    "parse_supplier_invoice_dual",
]
