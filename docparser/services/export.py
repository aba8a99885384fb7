from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.parse_result import ParseResult
from ..parsers.errors import DocumentParserError
from ..parsers.normalizers import format_number

"""CSV export of a ParseResult.

Amounts are kept as Decimal inside records and only formatted here (two
decimal places). Booleans become 'true' / 'false'; None becomes ''.
Output file name: parsed_<original base name>_<YYYY-MM-DDTHH-MM-SS>.csv
with a -2, -3, ... suffix when that name is already taken in the output directory.
"""

__all__ = [
    "ExportError",
    "export_filename",
    "format_cell",
    "unique_path",
    "to_export_frame",
    "write_csv",
]

EXPORT_TIMESTAMP_FMT = "%Y-%m-%dT%H-%M-%S"


class ExportError(DocumentParserError):
    error_type = "WRITE_ERROR"


def export_filename(original_name: str | None, now: datetime | None = None) -> str:
    stamp = (now or datetime.now(UTC)).strftime(EXPORT_TIMESTAMP_FMT)
    base = Path(original_name).stem if original_name else ""
    return f"parsed_{base or 'export'}_{stamp}.csv"


def unique_path(path: Path) -> Path:
    """path itself when free, otherwise the first free name with a -N suffix."""
    if not path.exists():
        return path
    n = 2
    while True:
        candidate = path.with_name(f"{path.stem}-{n}{path.suffix}")
        if not candidate.exists():
            return candidate
        n += 1


def format_cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        return format_number(value)
    return value


def to_export_frame(result: ParseResult) -> pd.DataFrame:
    """DataFrame with columns exactly result.headers, cells export-formatted."""
    records = [[format_cell(row.get(h)) for h in result.headers] for row in result.rows]
    return pd.DataFrame(records, columns=list(result.headers), dtype=object)


def write_csv(result: ParseResult, path: Path) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        to_export_frame(result).to_csv(path, index=False, encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Failed to write {path}: {e}") from e
    return path
