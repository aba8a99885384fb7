"""Tabular source reading (CSV / Excel -> RawGrid)."""

from .reader import ACCEPTED_EXTENSIONS, RawGrid, check_extension, read_tabular_file

__all__ = [
    "ACCEPTED_EXTENSIONS",
    "RawGrid",
    "check_extension",
    "read_tabular_file",
]
