from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from ..models.parse_result import MatchStats, ParseMetadata, ParseResult
from ..models.rows import ClassifiedRow, RowCategory
from .classifier import RowRule, classify_grid, cell_text
from .errors import EmptyResultError, StructureError
from .normalizers import clean_placeholder, format_date, parse_boolean, parse_decimal, text_value

"""Generic document reconstructor.

One engine, many formats: each format is a DocumentSchema (ordered row
rules + fixed output field list). Reconstruction is a fold over classified
rows with an explicit FoldState:

    NoParentSeen --PARENT--> HasCurrentParent --PARENT--> (parent replaced)
    ITEM_DETAIL with a parent  -> one record, parent stays current
    ITEM_DETAIL without parent -> dropped
    ITEM_HEADER                -> records the item column layout, no record
    COUNT_SUMMARY / BLANK      -> ignored

No state survives between calls; every parse starts from a fresh FoldState.
"""

__all__ = [
    "FieldKind",
    "FieldSource",
    "FieldSpec",
    "DocumentSchema",
    "FoldState",
    "ReconstructedItem",
    "parent_field",
    "item_field",
    "pad_row",
    "require_rows",
    "step",
    "reconstruct",
    "build_result",
    "parse_document",
    "utc_timestamp",
]

logger = logging.getLogger(__name__)

SOFTWARE_SQL_ACCOUNTING = "SQL Accounting"


class FieldKind(Enum):
    TEXT = "text"
    DATE = "date"
    NUMBER = "number"
    BOOLEAN = "boolean"
    PLACEHOLDER = "placeholder"


class FieldSource(Enum):
    PARENT = "parent"
    ITEM = "item"


_CONVERTERS: dict[FieldKind, Callable[[Any], Any]] = {
    FieldKind.TEXT: text_value,
    FieldKind.DATE: format_date,
    FieldKind.NUMBER: parse_decimal,
    FieldKind.BOOLEAN: parse_boolean,
    FieldKind.PLACEHOLDER: lambda v: text_value(clean_placeholder(v)),
}


@dataclass(frozen=True)
class FieldSpec:
    """One output column.

    index is the fixed position in the padded parent/item row. For item
    fields, labels are matched (case-insensitive) against the last item
    header row; a hit overrides index.
    """
    name: str
    source: FieldSource
    index: int
    kind: FieldKind = FieldKind.TEXT
    labels: tuple[str, ...] = ()

    def convert(self, value: Any) -> Any:
        return _CONVERTERS[self.kind](value)


def parent_field(name: str, index: int, kind: FieldKind = FieldKind.TEXT) -> FieldSpec:
    return FieldSpec(name, FieldSource.PARENT, index, kind)


def item_field(name: str, index: int, kind: FieldKind = FieldKind.TEXT, labels: Iterable[str] = ()) -> FieldSpec:
    return FieldSpec(name, FieldSource.ITEM, index, kind, tuple(label.lower() for label in labels))


@dataclass(frozen=True)
class DocumentSchema:
    """Declarative description of one document format."""
    doc_type: str  # 表示ラベル (metadata.docType)
    rules: tuple[RowRule, ...]
    fields: tuple[FieldSpec, ...]
    doc_no_index: int  # 親行の Doc No 位置 (dual 照合キー)
    empty_message: str = "Invalid file: No document with item data found after parsing."
    software: str = SOFTWARE_SQL_ACCOUNTING

    @property
    def headers(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def parent_width(self) -> int:
        return max((f.index + 1 for f in self.fields if f.source is FieldSource.PARENT), default=0)

    @property
    def item_width(self) -> int:
        return max((f.index + 1 for f in self.fields if f.source is FieldSource.ITEM), default=0)


@dataclass(frozen=True)
class ReconstructedItem:
    doc_no: str
    parent_row: int  # 親行の行番号 (同一 Doc No の再出現を区別)
    item_index: int  # 親内での 0 始まり連番
    values: dict[str, Any]


@dataclass(frozen=True)
class FoldState:
    parent: ClassifiedRow | None = None
    item_index: int = 0
    item_layout: Mapping[str, int] = field(default_factory=dict)
    emitted: int = 0
    dropped: int = 0


def pad_row(cells: Sequence[Any], width: int) -> list[Any]:
    padded = list(cells)
    if len(padded) < width:
        padded.extend([""] * (width - len(padded)))
    return padded


def require_rows(grid: Sequence[Any] | None, source: str = "file") -> None:
    if not grid or len(grid) < 2:
        raise StructureError(source)


def _layout_from_header(cells: Sequence[Any]) -> dict[str, int]:
    layout: dict[str, int] = {}
    for index in range(len(cells)):
        label = cell_text(cells, index).lower()
        if label and label not in layout:
            layout[label] = index
    return layout


def _resolve_index(spec: FieldSpec, layout: Mapping[str, int]) -> int:
    for label in spec.labels:
        if label in layout:
            return layout[label]
    return spec.index


def _build_values(
    schema: DocumentSchema, parent: Sequence[Any], item: Sequence[Any], layout: Mapping[str, int]
) -> dict[str, Any]:
    item_indices = {f.name: _resolve_index(f, layout) for f in schema.fields if f.source is FieldSource.ITEM}
    item_width = max([schema.item_width, *(i + 1 for i in item_indices.values())])
    padded_parent = pad_row(parent, schema.parent_width)
    padded_item = pad_row(item, item_width)
    values: dict[str, Any] = {}
    for spec in schema.fields:
        if spec.source is FieldSource.PARENT:
            values[spec.name] = spec.convert(padded_parent[spec.index])
        else:
            values[spec.name] = spec.convert(padded_item[item_indices[spec.name]])
    return values


def step(
    state: FoldState, row: ClassifiedRow, schema: DocumentSchema
) -> tuple[FoldState, ReconstructedItem | None]:
    """Advance the fold by one classified row."""
    category = row.category
    if category is RowCategory.PARENT:
        return replace(state, parent=row, item_index=0), None
    if category is RowCategory.ITEM_HEADER:
        return replace(state, item_layout=_layout_from_header(row.cells)), None
    if category is not RowCategory.ITEM_DETAIL:
        return state, None
    if state.parent is None:
        return replace(state, dropped=state.dropped + 1), None

    parent_cells = state.parent.cells
    item = ReconstructedItem(
        doc_no=cell_text(parent_cells, schema.doc_no_index),
        parent_row=state.parent.row_number,
        item_index=state.item_index,
        values=_build_values(schema, parent_cells, row.cells, state.item_layout),
    )
    return replace(state, item_index=state.item_index + 1, emitted=state.emitted + 1), item


def reconstruct(grid: Sequence[Sequence[Any] | None], schema: DocumentSchema) -> list[ReconstructedItem]:
    """Classify and fold a whole grid; returns items in source order."""
    classified = classify_grid(grid, schema.rules)
    state = FoldState()
    items: list[ReconstructedItem] = []
    for row in classified:
        state, item = step(state, row, schema)
        if item is not None:
            items.append(item)

    if logger.isEnabledFor(logging.DEBUG):
        counts = Counter(r.category.value for r in classified)
        logger.debug(
            f"{schema.doc_type}: classified={dict(counts)} emitted={state.emitted} "
            f"dropped_before_parent={state.dropped}"
        )
    return items


def utc_timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def build_result(
    headers: Sequence[str],
    rows: Sequence[dict[str, Any]],
    *,
    doc_type: str,
    original_row_count: int,
    software: str = SOFTWARE_SQL_ACCOUNTING,
    match_stats: MatchStats | None = None,
) -> ParseResult:
    metadata = ParseMetadata(
        total_rows=len(rows),
        software=software,
        doc_type=doc_type,
        parsed_at=utc_timestamp(),
        original_row_count=original_row_count,
        match_stats=match_stats,
    )
    return ParseResult(headers=tuple(headers), rows=tuple(rows), metadata=metadata)


def parse_document(grid: Sequence[Sequence[Any] | None], schema: DocumentSchema) -> ParseResult:
    """Single-file parse: structure check, reconstruction, result."""
    require_rows(grid)
    items = reconstruct(grid, schema)
    if not items:
        raise EmptyResultError(schema.empty_message)
    return build_result(
        schema.headers,
        [item.values for item in items],
        doc_type=schema.doc_type,
        original_row_count=len(grid) - 1,
        software=schema.software,
    )
