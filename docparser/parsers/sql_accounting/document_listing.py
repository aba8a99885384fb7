from __future__ import annotations

from ..classifier import DOC_NO_PATTERN, falsy_blank_rule, listing_item_header_rule, parent_row_rule
from ..engine import DocumentSchema, FieldKind, item_field

"""SQL Accounting "Sales / Purchase Document Listing" (secondary item listings).

These listings are only read to enrich a primary listing in dual-file mode.

- Parent row: '-' in col0, doc number (IV-24-001 style) in col1
- Item header: 'Item Code' in col1, or 'Project' in col2, or 'Qty' in col3
- Item rows (merged cells): Item Code(1) Project(2-3) Qty(4) UOM(5-6)
  SubTotal(7) From Doc No(8) From Doc Date(9)

Parent rows are tested before item headers here (unlike the primary
listings); item rows may also carry '-' in col0, so the doc number pattern
is what tells the two apart. A row whose cells are all empty or numeric
zero counts as blank.
"""

__all__ = [
    "LISTING_RULES",
    "SALES_DOCUMENT",
    "PURCHASE_DOCUMENT",
]

LISTING_RULES = (
    falsy_blank_rule(),
    parent_row_rule(DOC_NO_PATTERN),
    listing_item_header_rule(),
)

_LISTING_FIELDS = (
    item_field("Item Code", 1, labels=("Item Code",)),
    item_field("Project", 2, labels=("Project",)),
    item_field("Qty", 4, FieldKind.NUMBER, labels=("Qty",)),
    item_field("UOM", 5, labels=("UOM",)),
    item_field("SubTotal", 7, FieldKind.NUMBER, labels=("SubTotal", "Sub Total")),
    item_field("From Doc No", 8, labels=("From Doc No", "From Doc No.")),
    item_field("From Doc Date", 9, FieldKind.DATE, labels=("From Doc Date",)),
)

SALES_DOCUMENT = DocumentSchema(
    doc_type="Sales Document Listing",
    rules=LISTING_RULES,
    fields=_LISTING_FIELDS,
    doc_no_index=1,
)

PURCHASE_DOCUMENT = DocumentSchema(
    doc_type="Purchase Document Listing",
    rules=LISTING_RULES,
    fields=_LISTING_FIELDS,
    doc_no_index=1,
)
