from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

"""Row-level domain models for grid reconstruction.

A raw grid row is tagged with exactly one RowCategory by the ordered
classifier rules of its document format. The reconstructor consumes the
resulting ClassifiedRow stream.
"""

__all__ = [
    "RowCategory",
    "ClassifiedRow",
]


class RowCategory(Enum):
    """Category of a single raw grid row.

    - PARENT: document header row (invoice, GL entry) that items attach to
    - ITEM_HEADER: cosmetic sub-header before a block of items (skipped)
    - ITEM_DETAIL: line item belonging to the current parent
    - COUNT_SUMMARY: trailing "Count = N" summary row (skipped)
    - BLANK: every cell empty (skipped)
    """
    PARENT = "parent"
    ITEM_HEADER = "item_header"
    ITEM_DETAIL = "item_detail"
    COUNT_SUMMARY = "count_summary"
    BLANK = "blank"


@dataclass(frozen=True)
class ClassifiedRow:
    row_number: int  # 元グリッドの行番号 (0 = ヘッダ行)
    category: RowCategory
    cells: tuple[Any, ...]
    rule: str | None = None  # 判定したルール名 (fallthrough の場合 None)
