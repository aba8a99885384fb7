from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ...models.parse_result import ParseResult
from ..classifier import count_row_rule, item_header_rule, parent_row_rule
from ..engine import DocumentSchema, FieldKind, item_field, parent_field, parse_document

"""SQL Accounting "GL Document Listing" (PV and OR).

Grid layout (merged cells leave gaps between populated columns):
- Row 0: document headers
- Parent row: '-' in col0, doc type (PV / OR) in col1, doc fields up to col30
- Item header row: '' in col0, 'Account' in col1
  (Account, Description, Project, Amount, Local Amount)
- Item rows: Account(1) Description(3) Project(6) Amount(8) Local Amount(10)
- Trailing 'Count = N' rows (the cell often holds just N)

Output: parent columns with the item columns inserted between
Bank Charge and Doc Amount.
"""

__all__ = [
    "GL_RULES",
    "GL_DOCUMENT_PV",
    "GL_DOCUMENT_OR",
    "parse_gl_document_pv",
    "parse_gl_document_or",
]

# 判定順序: item header -> count -> parent (それ以外は item)
GL_RULES = (
    item_header_rule("account"),
    count_row_rule(),
    parent_row_rule(),
)

_GL_FIELDS = (
    parent_field("Doc Type", 1),
    parent_field("Doc No", 2),
    parent_field("Doc Date", 4, FieldKind.DATE),
    parent_field("Post Date", 5, FieldKind.DATE),
    parent_field("Journal", 7),
    parent_field("Description", 9),
    parent_field("Pay Code", 11),
    parent_field("Pay Method", 13),
    parent_field("Cheque No.", 14),
    parent_field("Currency Code", 15, FieldKind.PLACEHOLDER),
    parent_field("Currency Rate", 16, FieldKind.PLACEHOLDER),
    parent_field("Bank Charge", 17, FieldKind.NUMBER),
    item_field("Account", 1, labels=("Account",)),
    item_field("Item Description", 3, labels=("Description",)),
    item_field("Item Project", 6, FieldKind.PLACEHOLDER, labels=("Project",)),
    item_field("Item Amount", 8, FieldKind.NUMBER, labels=("Amount",)),
    item_field("Item Local Amount", 10, FieldKind.NUMBER, labels=("Local Amount",)),
    parent_field("Doc Amount", 18, FieldKind.NUMBER),
    parent_field("Local Doc Amount", 19, FieldKind.NUMBER),
    parent_field("Cancelled", 20, FieldKind.BOOLEAN),
    parent_field("From Doc Type", 21),
    parent_field("Project", 22, FieldKind.PLACEHOLDER),
    parent_field("Agent", 23),
    parent_field("Area", 24, FieldKind.PLACEHOLDER),
    parent_field("Tax Date", 25, FieldKind.DATE),
    parent_field("Description 2", 26),
    parent_field("Print Count", 27),
    parent_field("Bank Charge Account", 28),
    parent_field("Bounced Date", 29, FieldKind.DATE),
    parent_field("Consolidate No.", 30),
)

GL_DOCUMENT_PV = DocumentSchema(
    doc_type="GL Document Listing - PV",
    rules=GL_RULES,
    fields=_GL_FIELDS,
    doc_no_index=2,
    empty_message="Invalid file: No GL document with item data found after parsing.",
)

GL_DOCUMENT_OR = DocumentSchema(
    doc_type="GL Document Listing - OR",
    rules=GL_RULES,
    fields=_GL_FIELDS,
    doc_no_index=2,
    empty_message="Invalid file: No GL document with item data found after parsing.",
)


def parse_gl_document_pv(raw_data: Sequence[Sequence[Any]]) -> ParseResult:
    return parse_document(raw_data, GL_DOCUMENT_PV)


def parse_gl_document_or(raw_data: Sequence[Sequence[Any]]) -> ParseResult:
    return parse_document(raw_data, GL_DOCUMENT_OR)
