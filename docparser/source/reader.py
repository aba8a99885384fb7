from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import IO, Any

import numpy as np
import pandas as pd

from ..parsers.errors import SourceReadError, UnsupportedFormatError

"""Tabular source reader.

Turns an uploaded CSV / Excel file into a RawGrid (list of rows, each a list
of raw cell values). No header interpretation happens here: row 0 is the
export's header row and downstream parsers treat it as metadata only.

- CSV: every value stays a string (no type inference); empty lines skipped;
  a line wider than csv_max_columns is a read error, never silently shifted
- Excel (.xlsx / .xls): first worksheet only; date cells become datetime,
  numbers stay numbers, empty cells become ''
"""

__all__ = [
    "ACCEPTED_EXTENSIONS",
    "DEFAULT_CSV_MAX_COLUMNS",
    "RawGrid",
    "normalize_extension",
    "check_extension",
    "read_tabular_file",
    "read_csv_file",
    "read_excel_file",
    "frame_to_grid",
]

ACCEPTED_EXTENSIONS = (".xlsx", ".xls", ".csv")
# SQL Accounting の CSV は行ごとに列数が揃わないため、列名を事前に確保して読む
DEFAULT_CSV_MAX_COLUMNS = 64

RawGrid = list[list[Any]]
Source = str | Path | IO[bytes]


def normalize_extension(extension: str) -> str:
    ext = extension.strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


def check_extension(name_or_ext: str | Path, accepted: Iterable[str] = ACCEPTED_EXTENSIONS) -> str:
    """Return the normalized extension or raise UnsupportedFormatError."""
    raw = str(name_or_ext)
    ext = Path(raw).suffix if Path(raw).suffix else raw
    ext = normalize_extension(ext)
    if ext not in {normalize_extension(a) for a in accepted}:
        raise UnsupportedFormatError(ext)
    return ext


def _convert_cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, np.generic):
        value = value.item()
    # NaT は datetime のサブクラスなので先に欠損判定する
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    return value


def frame_to_grid(df: pd.DataFrame) -> RawGrid:
    """Row-major list of lists with NaN/NaT replaced by ''."""
    return [[_convert_cell(v) for v in row] for row in df.itertuples(index=False, name=None)]


def _trim_empty_columns(grid: RawGrid) -> RawGrid:
    width = 0
    for row in grid:
        for index in range(len(row) - 1, -1, -1):
            if row[index] != "":
                width = max(width, index + 1)
                break
    return [row[:width] for row in grid]


def read_csv_file(source: Source, max_columns: int = DEFAULT_CSV_MAX_COLUMNS) -> RawGrid:
    # 上限 + 1 列目を番兵にして、上限を超える行を検出する
    df = pd.read_csv(
        source,
        header=None,
        names=range(max_columns + 1),
        index_col=False,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        encoding="utf-8-sig",
    )
    grid = frame_to_grid(df)
    for row_number, row in enumerate(grid):
        if row[max_columns] != "":
            raise SourceReadError(
                f"Failed to read CSV file: row {row_number + 1} has more than {max_columns} columns"
                " (csv_max_columns)"
            )
    return _trim_empty_columns([row[:max_columns] for row in grid])


def read_excel_file(source: Source) -> RawGrid:
    # 先頭シートのみ。keep_default_na=False で 'NA' 等の文字列をそのまま残す
    df = pd.read_excel(source, sheet_name=0, header=None, dtype=object, keep_default_na=False)
    return frame_to_grid(df)


def read_tabular_file(
    source: Source,
    extension: str | None = None,
    *,
    accepted: Iterable[str] = ACCEPTED_EXTENSIONS,
    csv_max_columns: int = DEFAULT_CSV_MAX_COLUMNS,
) -> RawGrid:
    """Read a CSV / Excel source into a RawGrid.

    Parameters
    ----------
    source: path or binary file object
    extension: declared extension (required for file objects; defaults to the path suffix)
    accepted: accepted extensions, checked before any read attempt
    csv_max_columns: upper bound of columns per CSV line

    Raises
    ------
    UnsupportedFormatError: extension not accepted
    SourceReadError: the file is missing, unreadable or corrupt
    """
    if extension is None:
        if not isinstance(source, (str, Path)):
            raise UnsupportedFormatError("")
        extension = Path(source).suffix
    ext = check_extension(normalize_extension(extension), accepted)

    kind = "CSV" if ext == ".csv" else "Excel"
    try:
        if ext == ".csv":
            return read_csv_file(source, csv_max_columns)
        return read_excel_file(source)
    except SourceReadError:
        raise
    except Exception as e:
        raise SourceReadError(f"Failed to read {kind} file: {e}") from e
