from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..models.parse_result import MatchStats, ParseResult
from .engine import DocumentSchema, ReconstructedItem, build_result, reconstruct, require_rows
from .errors import EmptyResultError

"""Cross-file matcher for dual-file parsing.

A secondary item listing (Sales / Purchase Document Listing) is
reconstructed on its own and grouped into a MatchIndex keyed by document
number. The primary listing is then reconstructed and every primary item
N of a document is paired with secondary item N of the same document
number (positional matching; no content key is checked). Secondary
columns are inserted into the primary column order at a fixed point.

Item ordering of the two listings is assumed to correspond. When the item
counts of a matched document differ the pairing is suspect, so it is
logged at WARN and counted in metadata.itemCountMismatches.
"""

__all__ = [
    "MatchIndex",
    "MergeSpec",
    "build_match_index",
    "merged_headers",
    "parse_dual",
]

logger = logging.getLogger(__name__)

MatchIndex = dict[str, list[dict[str, Any]]]


@dataclass(frozen=True)
class MergeSpec:
    """How a secondary listing is folded into a primary listing."""
    doc_type: str
    insert_after: str  # この列の直後に二次側の列を挿入
    primary_source: str  # エラーメッセージ用 ("Customer Document" 等)
    secondary_source: str
    primary_label: str  # metadata キー ("customerInvoices" 等)
    secondary_label: str
    renames: Mapping[str, str] = field(default_factory=dict)  # 一次側列名の衝突回避
    empty_message: str = "Invalid files: No document with item data found after parsing."


def build_match_index(items: Sequence[ReconstructedItem]) -> MatchIndex:
    """Group secondary items by document number, preserving item order.

    Documents without items never enter the index. A document number that
    reappears under a later parent row replaces the earlier entry.
    """
    index: MatchIndex = {}
    owner: dict[str, int] = {}
    for item in items:
        if not item.doc_no:
            continue
        if owner.get(item.doc_no) != item.parent_row:
            owner[item.doc_no] = item.parent_row
            index[item.doc_no] = []
        index[item.doc_no].append(item.values)
    return index


def merged_headers(primary: DocumentSchema, secondary: DocumentSchema, merge: MergeSpec) -> tuple[str, ...]:
    headers: list[str] = []
    for name in primary.headers:
        headers.append(merge.renames.get(name, name))
        if name == merge.insert_after:
            headers.extend(secondary.headers)
    return tuple(headers)


def _merge_record(
    primary_values: Mapping[str, Any],
    secondary_values: Mapping[str, Any] | None,
    headers: Sequence[str],
    secondary_headers: Sequence[str],
    renames: Mapping[str, str],
) -> dict[str, Any]:
    renamed = {renames.get(k, k): v for k, v in primary_values.items()}
    record: dict[str, Any] = {}
    for name in headers:
        if name in secondary_headers:
            record[name] = "" if secondary_values is None else secondary_values.get(name, "")
        else:
            record[name] = renamed.get(name, "")
    return record


def parse_dual(
    primary_grid: Sequence[Sequence[Any] | None],
    secondary_grid: Sequence[Sequence[Any] | None],
    primary: DocumentSchema,
    secondary: DocumentSchema,
    merge: MergeSpec,
) -> ParseResult:
    require_rows(primary_grid, merge.primary_source)
    require_rows(secondary_grid, merge.secondary_source)

    match_index = build_match_index(reconstruct(secondary_grid, secondary))
    primary_items = reconstruct(primary_grid, primary)
    if not primary_items:
        raise EmptyResultError(merge.empty_message)

    headers = merged_headers(primary, secondary, merge)
    secondary_headers = secondary.headers
    rows: list[dict[str, Any]] = []
    for item in primary_items:
        candidates = match_index.get(item.doc_no)
        matched = None
        if candidates is not None and item.item_index < len(candidates):
            matched = candidates[item.item_index]
        rows.append(_merge_record(item.values, matched, headers, secondary_headers, merge.renames))

    primary_counts = Counter(item.doc_no for item in primary_items)
    matched_docs = [doc_no for doc_no in primary_counts if doc_no in match_index]
    mismatches = 0
    for doc_no in matched_docs:
        if primary_counts[doc_no] != len(match_index[doc_no]):
            mismatches += 1
            logger.warning(
                f"item count mismatch doc_no={doc_no} "
                f"{merge.primary_source}={primary_counts[doc_no]} "
                f"{merge.secondary_source}={len(match_index[doc_no])}"
            )

    stats = MatchStats(
        primary_label=merge.primary_label,
        secondary_label=merge.secondary_label,
        primary_documents=len(primary_counts),
        secondary_documents=len(match_index),
        matched_documents=len(matched_docs),
        item_count_mismatches=mismatches,
    )
    return build_result(
        headers,
        rows,
        doc_type=merge.doc_type,
        original_row_count=len(primary_grid) - 1,
        software=primary.software,
        match_stats=stats,
    )
