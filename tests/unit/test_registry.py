from __future__ import annotations

import pytest

from docparser.parsers import NoParserError, get_parser
from docparser.parsers.registry import AUTOCOUNT, REGISTRY, SQL_ACCOUNTING, list_document_types


def test_registry_keys():
    assert set(REGISTRY) == {
        (SQL_ACCOUNTING, "invoice-with-item"),
        (SQL_ACCOUNTING, "supplier-invoice"),
        (SQL_ACCOUNTING, "gl-document-or"),
        (SQL_ACCOUNTING, "gl-document-pv"),
        (SQL_ACCOUNTING, "invoice-with-item-dual"),
        (SQL_ACCOUNTING, "supplier-invoice-dual"),
    }


def test_dual_entries():
    assert get_parser(SQL_ACCOUNTING, "invoice-with-item-dual").is_dual
    assert get_parser(SQL_ACCOUNTING, "supplier-invoice-dual").secondary_label == "Purchase Document Listing"
    assert not get_parser(SQL_ACCOUNTING, "gl-document-pv").is_dual


def test_entry_parse_dispatches(gl_pv_grid, invoice_grid, sales_grid):
    assert get_parser(SQL_ACCOUNTING, "gl-document-pv").parse(gl_pv_grid).metadata.total_rows == 3
    result = get_parser(SQL_ACCOUNTING, "invoice-with-item-dual").parse(invoice_grid, sales_grid)
    assert result.metadata.match_stats is not None


@pytest.mark.parametrize(
    "software,doc_type",
    [(AUTOCOUNT, "invoice-with-item"), (SQL_ACCOUNTING, "credit-note"), (None, None)],
)
def test_unknown_selection_raises(software, doc_type):
    with pytest.raises(NoParserError) as ei:
        get_parser(software, doc_type)
    assert str(ei.value) == f"No parser available for {software} - {doc_type}"
    assert ei.value.error_type == "NO_PARSER"


def test_list_document_types():
    assert len(list_document_types(SQL_ACCOUNTING)) == 6
    assert list_document_types(AUTOCOUNT) == []
