from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ...models.parse_result import ParseResult
from ..classifier import item_header_rule, parent_row_rule
from ..engine import DocumentSchema, FieldKind, item_field, parent_field, parse_document
from ..matcher import MergeSpec, parse_dual
from .document_listing import PURCHASE_DOCUMENT

"""SQL Accounting "Supplier Document Listing".

- Parent row: '-' in col0 and anything in col1 (col1 holds the doc date,
  the doc number sits in col5)
- Item header row: '' in col0, 'Seq' in col1, 'Account ...' in col2
- Item rows: Seq(1) Account Code(2) Description(4) Amount(8)
"""

__all__ = [
    "SUPPLIER_RULES",
    "SUPPLIER_INVOICE",
    "SUPPLIER_PURCHASE_MERGE",
    "parse_supplier_invoice",
    "parse_supplier_invoice_dual",
]

SUPPLIER_RULES = (
    item_header_rule("seq", "account"),
    parent_row_rule(),
)

SUPPLIER_INVOICE = DocumentSchema(
    doc_type="Supplier Document Listing",
    rules=SUPPLIER_RULES,
    fields=(
        parent_field("Doc Date", 1, FieldKind.DATE),
        parent_field("Post Date", 3, FieldKind.DATE),
        parent_field("Doc No", 5),
        parent_field("Code", 6),
        parent_field("Company Name", 7),
        parent_field("Terms", 10),
        parent_field("Due Date", 11, FieldKind.DATE),
        parent_field("Description", 12),
        parent_field("Agent", 13, FieldKind.PLACEHOLDER),
        parent_field("Area", 14, FieldKind.PLACEHOLDER),
        parent_field("Currency Code", 15, FieldKind.PLACEHOLDER),
        parent_field("Currency Rate", 16, FieldKind.PLACEHOLDER),
        item_field("Seq", 1, labels=("Seq",)),
        item_field("Account Code", 2, labels=("Account Code", "Account")),
        item_field("Item Description", 4, labels=("Description",)),
        item_field("Item Amount", 8, FieldKind.NUMBER, labels=("Amount",)),
        parent_field("Amount", 17, FieldKind.NUMBER),
        parent_field("Local Amount", 18, FieldKind.NUMBER),
        parent_field("Payment Amount", 19, FieldKind.NUMBER),
        parent_field("Cancelled", 20, FieldKind.BOOLEAN),
        parent_field("Doc Type", 21),
        parent_field("Project", 22, FieldKind.PLACEHOLDER),
        parent_field("From Doc Type", 23),
        parent_field("Ext. No", 24),
        parent_field("Company Category", 25),
        parent_field("Tax Exempt No.", 26),
        parent_field("Journal", 27),
        parent_field("Tax Date", 28, FieldKind.DATE),
    ),
    doc_no_index=5,
    empty_message="Invalid file: No supplier invoice with item data found after parsing.",
)

SUPPLIER_PURCHASE_MERGE = MergeSpec(
    doc_type="Supplier Document Listing (Dual)",
    insert_after="Currency Rate",
    primary_source="Supplier Document",
    secondary_source="Purchase Document",
    primary_label="supplierInvoices",
    secondary_label="purchaseInvoices",
    renames={"Project": "Project2"},
    empty_message="Invalid files: No supplier invoice with item data found after parsing.",
)


def parse_supplier_invoice(raw_data: Sequence[Sequence[Any]]) -> ParseResult:
    return parse_document(raw_data, SUPPLIER_INVOICE)


def parse_supplier_invoice_dual(
    supplier_data: Sequence[Sequence[Any]], purchase_data: Sequence[Sequence[Any]]
) -> ParseResult:
    return parse_dual(supplier_data, purchase_data, SUPPLIER_INVOICE, PURCHASE_DOCUMENT, SUPPLIER_PURCHASE_MERGE)
