from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ...models.parse_result import ParseResult
from ..classifier import DOC_NO_PATTERN, item_header_rule, parent_row_rule
from ..engine import DocumentSchema, FieldKind, item_field, parent_field, parse_document
from ..matcher import MergeSpec, parse_dual
from .document_listing import SALES_DOCUMENT

"""SQL Accounting "Customer Document Listing - Invoice with Item".

- Parent (invoice) row: '-' in col0, doc number (IV-24-001) in col1
- Item header row: '' in col0, 'Seq' in col1, 'Account ...' in col2
- Item rows: Seq(1) Account Code(2) Description(3) Amount(7)

Output inserts the item columns between Currency Rate and Amount.

Dual mode (with a Sales Document Listing) additionally inserts the sales
item columns right after Currency Rate; the invoice Project column becomes
Project2 so it does not collide with the sales Project.
"""

__all__ = [
    "INVOICE_RULES",
    "INVOICE_WITH_ITEM",
    "INVOICE_SALES_MERGE",
    "parse_invoice_with_item",
    "parse_invoice_with_item_dual",
]

INVOICE_RULES = (
    item_header_rule("seq", "account"),
    parent_row_rule(DOC_NO_PATTERN),
)

INVOICE_WITH_ITEM = DocumentSchema(
    doc_type="Customer Document Listing - Invoice with Item",
    rules=INVOICE_RULES,
    fields=(
        parent_field("Doc No", 1),
        parent_field("Doc Date", 4, FieldKind.DATE),
        parent_field("Post Date", 5, FieldKind.DATE),
        parent_field("Code", 6),
        parent_field("Company Name", 8),
        parent_field("Terms", 10),
        parent_field("Due Date", 11, FieldKind.DATE),
        parent_field("Description", 12),
        parent_field("Agent", 13, FieldKind.PLACEHOLDER),
        parent_field("Area", 14, FieldKind.PLACEHOLDER),
        parent_field("Currency Code", 15, FieldKind.PLACEHOLDER),
        parent_field("Currency Rate", 16, FieldKind.PLACEHOLDER),
        item_field("Seq", 1, labels=("Seq",)),
        item_field("Account Code", 2, labels=("Account Code", "Account")),
        item_field("Item Description", 3, labels=("Description",)),
        item_field("Item Amount", 7, FieldKind.NUMBER, labels=("Amount",)),
        parent_field("Amount", 17, FieldKind.NUMBER),
        parent_field("Local", 18, FieldKind.NUMBER),
        parent_field("Payment Amount", 19, FieldKind.NUMBER),
        parent_field("Cancelled", 20, FieldKind.BOOLEAN),
        parent_field("Project", 21, FieldKind.PLACEHOLDER),
        parent_field("From", 22),
        parent_field("Ext. No", 23),
        parent_field("Company", 24),
        parent_field("Tax Exempt", 25),
        parent_field("Journal", 26),
        parent_field("Tax Date", 27, FieldKind.DATE),
    ),
    doc_no_index=1,
    empty_message="Invalid file: No invoice with item data found after parsing.",
)

INVOICE_SALES_MERGE = MergeSpec(
    doc_type="Customer Document Listing - Invoice with Item (Dual)",
    insert_after="Currency Rate",
    primary_source="Customer Document",
    secondary_source="Sales Document",
    primary_label="customerInvoices",
    secondary_label="salesInvoices",
    renames={"Project": "Project2"},
    empty_message="Invalid files: No invoice with item data found after parsing.",
)


def parse_invoice_with_item(raw_data: Sequence[Sequence[Any]]) -> ParseResult:
    return parse_document(raw_data, INVOICE_WITH_ITEM)


def parse_invoice_with_item_dual(
    customer_data: Sequence[Sequence[Any]], sales_data: Sequence[Sequence[Any]]
) -> ParseResult:
    """Customer Document Listing enriched with Sales Document Listing items."""
    return parse_dual(customer_data, sales_data, INVOICE_WITH_ITEM, SALES_DOCUMENT, INVOICE_SALES_MERGE)
