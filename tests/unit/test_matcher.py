from __future__ import annotations

from docparser.parsers.engine import ReconstructedItem
from docparser.parsers.matcher import build_match_index, merged_headers
from docparser.parsers.sql_accounting.document_listing import SALES_DOCUMENT
from docparser.parsers.sql_accounting.invoice_with_item import INVOICE_SALES_MERGE, INVOICE_WITH_ITEM


def _item(doc_no: str, parent_row: int, index: int, code: str) -> ReconstructedItem:
    return ReconstructedItem(doc_no=doc_no, parent_row=parent_row, item_index=index, values={"Item Code": code})


def test_build_match_index_groups_in_order():
    index = build_match_index([
        _item("IV-1", 1, 0, "A"),
        _item("IV-1", 1, 1, "B"),
        _item("IV-2", 4, 0, "C"),
    ])
    assert list(index) == ["IV-1", "IV-2"]
    assert [v["Item Code"] for v in index["IV-1"]] == ["A", "B"]


def test_build_match_index_reappearing_doc_replaces_entry():
    index = build_match_index([
        _item("IV-1", 1, 0, "A"),
        _item("IV-1", 1, 1, "B"),
        _item("IV-1", 7, 0, "Z"),
    ])
    assert [v["Item Code"] for v in index["IV-1"]] == ["Z"]


def test_build_match_index_skips_empty_doc_no():
    assert build_match_index([_item("", 1, 0, "A")]) == {}


def test_secondary_doc_without_items_is_not_indexed(sales_grid):
    from docparser.parsers.engine import reconstruct

    grid = [*sales_grid, ["-", "IV-24-009"]]
    index = build_match_index(reconstruct(grid, SALES_DOCUMENT))
    assert "IV-24-009" not in index
    assert len(index["IV-24-001"]) == 2


def test_merged_headers_rename_and_insert():
    headers = merged_headers(INVOICE_WITH_ITEM, SALES_DOCUMENT, INVOICE_SALES_MERGE)
    assert len(headers) == len(INVOICE_WITH_ITEM.headers) + len(SALES_DOCUMENT.headers)
    assert headers.index("Item Code") == headers.index("Currency Rate") + 1
    assert "Project2" in headers
    assert len(set(headers)) == len(headers)


def test_zero_row_in_secondary_does_not_shift_items(sales_grid):
    from docparser.parsers.engine import reconstruct

    zero_row = ["", 0, 0.0, "", 0, "", "", 0.0, "", ""]
    grid = [*sales_grid[:4], zero_row, *sales_grid[4:]]
    index = build_match_index(reconstruct(grid, SALES_DOCUMENT))
    assert [v["Item Code"] for v in index["IV-24-001"]] == ["WID-A", "WID-B"]
