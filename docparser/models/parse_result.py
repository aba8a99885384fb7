from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""ParseResult model: the immutable output of one parse call.

headers -- fixed, ordered column names for the document type
rows    -- flat records keyed exactly by headers
metadata -- counts, labels and (dual mode) matching statistics
"""

__all__ = [
    "MatchStats",
    "ParseMetadata",
    "ParseResult",
]


@dataclass(frozen=True)
class MatchStats:
    """Dual-file matching statistics.

    primary_label / secondary_label pick the metadata keys, e.g.
    ("customerInvoices", "salesInvoices").
    """
    primary_label: str
    secondary_label: str
    primary_documents: int  # 一次側のユニーク Doc No 数
    secondary_documents: int  # MatchIndex の件数
    matched_documents: int  # 二次側に1件以上ヒットした一次 Doc No 数
    item_count_mismatches: int = 0


@dataclass(frozen=True)
class ParseMetadata:
    total_rows: int
    software: str
    doc_type: str
    parsed_at: str  # ISO-8601 UTC
    original_row_count: int
    match_stats: MatchStats | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "totalRows": self.total_rows,
            "software": self.software,
            "docType": self.doc_type,
            "parsedAt": self.parsed_at,
            "originalRowCount": self.original_row_count,
        }
        if self.match_stats is not None:
            stats = self.match_stats
            data[stats.primary_label] = stats.primary_documents
            data[stats.secondary_label] = stats.secondary_documents
            data["matchedInvoices"] = stats.matched_documents
            data["itemCountMismatches"] = stats.item_count_mismatches
        return data


@dataclass(frozen=True)
class ParseResult:
    headers: tuple[str, ...]
    rows: tuple[dict[str, Any], ...]
    metadata: ParseMetadata

    def to_dict(self) -> dict[str, Any]:
        return {
            "headers": list(self.headers),
            "rows": [dict(r) for r in self.rows],
            "metadata": self.metadata.to_dict(),
        }
