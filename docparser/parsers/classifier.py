from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ..models.rows import ClassifiedRow, RowCategory
from .normalizers import is_missing, text_value

"""Row classifier.

Each document format declares an ordered tuple of RowRule. classify_row()
always checks blank first, then walks the rules in order; the first match
wins. A row that matches no rule is an ITEM_DETAIL row (fallthrough), and
the reconstructor drops it when no parent has been seen yet.

The rule order is part of each format's contract: e.g. GL listings test
item-header before count-row before parent, while the Sales/Purchase item
listings test parent before item-header.
"""

__all__ = [
    "DOC_NO_PATTERN",
    "PARENT_MARKER",
    "RowPredicate",
    "RowRule",
    "cell_text",
    "is_blank_row",
    "is_falsy_cell",
    "falsy_blank_rule",
    "is_count_row",
    "item_header_rule",
    "listing_item_header_rule",
    "count_row_rule",
    "parent_row_rule",
    "classify_row",
    "classify_grid",
]

PARENT_MARKER = "-"
# IV-24-001 / PI-2024-0001 形式
DOC_NO_PATTERN = re.compile(r"^[A-Z]+-\d+-\d+")
_NUMERIC = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_COUNT_TEXT = "count ="

RowPredicate = Callable[[Sequence[Any]], bool]


@dataclass(frozen=True)
class RowRule:
    name: str
    category: RowCategory
    predicate: RowPredicate

    def matches(self, row: Sequence[Any]) -> bool:
        return self.predicate(row)


def cell_text(row: Sequence[Any], index: int) -> str:
    """Trimmed text of row[index]; '' when missing or out of range."""
    if index >= len(row):
        return ""
    return text_value(row[index])


def is_blank_row(row: Sequence[Any] | None) -> bool:
    if not row:
        return True
    return all(is_missing(cell) for cell in row)


def is_falsy_cell(value: Any) -> bool:
    """Empty cell, False, or a numeric zero. The text "0" is not falsy."""
    if is_missing(value) or value is False:
        return True
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float, Decimal)) and value == 0


def falsy_blank_rule() -> RowRule:
    """Blank in the looser sense: every cell falsy (a row of zeros included)."""
    return RowRule(
        "falsy_blank",
        RowCategory.BLANK,
        lambda row: all(is_falsy_cell(cell) for cell in row),
    )


def is_count_row(row: Sequence[Any]) -> bool:
    """'Count = N' summary row of GL listings.

    The exported cell usually holds just N (the text is a number format), so
    a purely numeric column 1 counts too, but only when nothing follows it;
    an account code followed by description/amount cells is an item row.
    """
    if len(row) < 2:
        return False
    col1 = cell_text(row, 1)
    if _COUNT_TEXT in col1.lower():
        return True
    if not _NUMERIC.match(col1):
        return False
    return all(is_missing(cell) for cell in row[2:])


def item_header_rule(marker: str, secondary_marker: str | None = None) -> RowRule:
    """Item sub-header: col0 empty, col1 == marker, optionally marker in col2."""

    def predicate(row: Sequence[Any]) -> bool:
        if len(row) < 4:
            return False
        if cell_text(row, 0) != "" or cell_text(row, 1).lower() != marker:
            return False
        if secondary_marker is None:
            return True
        return secondary_marker in cell_text(row, 2).lower()

    return RowRule("item_header", RowCategory.ITEM_HEADER, predicate)


def _is_listing_item_header(row: Sequence[Any]) -> bool:
    if len(row) < 4:
        return False
    return (
        cell_text(row, 1).lower() == "item code"
        or cell_text(row, 2).lower() == "project"
        or cell_text(row, 3).lower() == "qty"
    )


def listing_item_header_rule() -> RowRule:
    """Item sub-header of Sales/Purchase Document Listings."""
    return RowRule("listing_item_header", RowCategory.ITEM_HEADER, _is_listing_item_header)


def count_row_rule() -> RowRule:
    return RowRule("count_row", RowCategory.COUNT_SUMMARY, is_count_row)


def parent_row_rule(doc_no_pattern: re.Pattern[str] | None = None) -> RowRule:
    """Parent row: '-' in col0 and col1 non-empty (or matching doc_no_pattern)."""

    def predicate(row: Sequence[Any]) -> bool:
        if len(row) < 2 or cell_text(row, 0) != PARENT_MARKER:
            return False
        col1 = cell_text(row, 1)
        if doc_no_pattern is None:
            return col1 != ""
        return doc_no_pattern.match(col1) is not None

    name = "parent_row" if doc_no_pattern is None else "parent_doc_no"
    return RowRule(name, RowCategory.PARENT, predicate)


def classify_row(row: Sequence[Any] | None, rules: Sequence[RowRule]) -> tuple[RowCategory, str | None]:
    if row is None or is_blank_row(row):
        return RowCategory.BLANK, "blank"
    for rule in rules:
        if rule.matches(row):
            return rule.category, rule.name
    return RowCategory.ITEM_DETAIL, None


def classify_grid(grid: Sequence[Sequence[Any] | None], rules: Sequence[RowRule]) -> list[ClassifiedRow]:
    """Classify every data row (row 0 is the header and is never classified)."""
    classified: list[ClassifiedRow] = []
    for row_number, row in enumerate(grid):
        if row_number == 0:
            continue
        category, rule = classify_row(row, rules)
        cells = tuple(row) if row is not None else ()
        classified.append(ClassifiedRow(row_number=row_number, category=category, cells=cells, rule=rule))
    return classified
