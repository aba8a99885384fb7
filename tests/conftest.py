# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from docparser.logging.init import reset_logging


def _make_row(width: int, cells: dict[int, Any]) -> list[Any]:
    row: list[Any] = [""] * width
    for index, value in cells.items():
        row[index] = value
    return row


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("DOCPARSER_CONFIG", raising=False)
        monkeypatch.delenv("DOCPARSER_OUTPUT_DIR", raising=False)
        yield p


@pytest.fixture()
def make_row() -> Callable[[int, dict[int, Any]], list[Any]]:
    return _make_row


@pytest.fixture()
def gl_pv_grid() -> list[list[Any]]:
    """GL Document Listing - PV: 2 vouchers, 3 items, header rows and a count row."""
    header = _make_row(31, {1: "Doc Type", 2: "Doc No", 4: "Doc Date", 5: "Post Date", 18: "Doc Amount"})
    item_header = _make_row(11, {1: "Account", 3: "Description", 6: "Project", 8: "Amount", 10: "Local Amount"})
    pv1 = _make_row(31, {
        0: "-", 1: "PV", 2: "PV-0001", 4: datetime(2024, 1, 5), 5: datetime(2024, 1, 6),
        7: "CB", 9: "Office rent", 11: "MBB", 13: "Cheque", 14: "CHQ-881",
        15: "----", 16: "----", 17: "0.00", 18: "4,679.00", 19: "4,679.00", 20: "False",
        21: "", 22: "----", 23: "ALI", 24: "----", 25: datetime(2024, 1, 5), 27: "1",
    })
    pv2 = _make_row(31, {
        0: "-", 1: "PV", 2: "PV-0002", 4: datetime(2024, 1, 9), 5: datetime(2024, 1, 9),
        9: "Utilities", 15: "MYR", 16: "1.0000", 17: "1.50", 18: "210.50", 19: "210.50", 20: "True",
    })
    return [
        header,
        pv1,
        item_header,
        _make_row(11, {1: "900-000", 3: "Rent January", 6: "----", 8: "4,000.00", 10: "4,000.00"}),
        _make_row(11, {1: "901-000", 3: "Service charge", 6: "HQ", 8: "679.00", 10: "679.00"}),
        pv2,
        item_header,
        _make_row(11, {1: "910-000", 3: "Electricity", 8: "210.50", 10: "210.50"}),
        ["", "2"],
        [""] * 11,
    ]


@pytest.fixture()
def invoice_grid() -> list[list[Any]]:
    """Customer Document Listing - Invoice with Item: IV-24-001 (2 items), IV-24-002 (1 item)."""
    header = _make_row(28, {1: "Doc No", 4: "Doc Date", 6: "Code", 8: "Company Name"})
    item_header = _make_row(8, {1: "Seq", 2: "Account Code", 3: "Description", 7: "Amount"})
    iv1 = _make_row(28, {
        0: "-", 1: "IV-24-001", 4: datetime(2024, 1, 5), 5: datetime(2024, 1, 5), 6: "300-C001",
        8: "Acme Sdn Bhd", 10: "30 Days", 11: datetime(2024, 2, 4), 12: "Sales", 13: "----",
        14: "----", 15: "MYR", 16: "1.00", 17: "1,500.00", 18: "1,500.00", 19: "0.00",
        20: "False", 21: "----", 22: "SO", 23: "EXT-1", 24: "Retail", 26: "SALES",
        27: datetime(2024, 1, 5),
    })
    iv2 = _make_row(28, {
        0: "-", 1: "IV-24-002", 4: datetime(2024, 1, 8), 6: "300-C002", 8: "Beta Trading",
        15: "MYR", 16: "1.00", 17: "80.00", 18: "80.00", 20: "True", 21: "KL",
    })
    return [
        header,
        iv1,
        item_header,
        _make_row(8, {1: "1", 2: "500-000", 3: "Widget A", 7: "1,000.00"}),
        _make_row(8, {1: "2", 2: "500-000", 3: "Widget B", 7: "500.00"}),
        iv2,
        item_header,
        _make_row(8, {1: "1", 2: "500-100", 3: "Delivery", 7: "80.00"}),
    ]


@pytest.fixture()
def sales_grid() -> list[list[Any]]:
    """Sales Document Listing with items for IV-24-001 only."""
    header = _make_row(10, {1: "Doc No", 2: "Doc Date"})
    item_header = _make_row(10, {1: "Item Code", 2: "Project", 4: "Qty", 5: "UOM", 7: "SubTotal",
                                 8: "From Doc No", 9: "From Doc Date"})
    return [
        header,
        _make_row(10, {0: "-", 1: "IV-24-001", 2: datetime(2024, 1, 5)}),
        item_header,
        _make_row(10, {0: "-", 1: "WID-A", 2: "PRJ-1", 4: "2", 5: "PCS", 7: "1,000.00",
                       8: "DO-24-001", 9: datetime(2024, 1, 3)}),
        _make_row(10, {0: "-", 1: "WID-B", 2: "PRJ-1", 4: "1", 5: "PCS", 7: "500.00",
                       8: "DO-24-001", 9: datetime(2024, 1, 3)}),
    ]


@pytest.fixture()
def supplier_grid() -> list[list[Any]]:
    """Supplier Document Listing: PI-24-001 (1 item), PI-24-002 (2 items)."""
    header = _make_row(29, {1: "Doc Date", 3: "Post Date", 5: "Doc No"})
    item_header = _make_row(9, {1: "Seq", 2: "Account Code", 4: "Description", 8: "Amount"})
    pi1 = _make_row(29, {
        0: "-", 1: datetime(2024, 3, 1), 3: datetime(2024, 3, 2), 5: "PI-24-001", 6: "400-S001",
        7: "Paper Supply Co", 10: "C.O.D.", 15: "----", 16: "----", 17: "250.00", 18: "250.00",
        19: "250.00", 20: "FALSE", 21: "PI", 22: "----", 27: "PURCHASE", 28: datetime(2024, 3, 1),
    })
    pi2 = _make_row(29, {
        0: "-", 1: datetime(2024, 3, 4), 5: "PI-24-002", 6: "400-S002", 7: "Ink Works",
        17: "90.00", 18: "90.00", 20: "TRUE", 21: "PI", 22: "HQ",
    })
    return [
        header,
        pi1,
        item_header,
        _make_row(9, {1: "1", 2: "600-000", 4: "A4 paper", 8: "250.00"}),
        pi2,
        item_header,
        _make_row(9, {1: "1", 2: "600-100", 4: "Black ink", 8: "60.00"}),
        _make_row(9, {1: "2", 2: "600-100", 4: "Colour ink", 8: "30.00"}),
    ]


@pytest.fixture()
def purchase_grid() -> list[list[Any]]:
    """Purchase Document Listing: PI-24-002 has a single item (count mismatch with supplier)."""
    header = _make_row(10, {1: "Doc No"})
    return [
        header,
        _make_row(10, {0: "-", 1: "PI-24-002"}),
        _make_row(10, {1: "Item Code", 2: "Project", 4: "Qty"}),
        _make_row(10, {0: "-", 1: "INK-BK", 2: "HQ", 4: "3", 5: "BTL", 7: "60.00", 8: "PO-24-010"}),
    ]


@pytest.fixture()
def write_excel(temp_workdir: Path) -> Callable[[str, list[list[Any]]], Path]:
    def _write(name: str, rows: list[list[Any]]) -> Path:
        path = temp_workdir / "data" / name
        width = max(len(r) for r in rows)
        padded = [list(r) + [""] * (width - len(r)) for r in rows]
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            pd.DataFrame(padded).to_excel(writer, sheet_name="Sheet1", header=False, index=False)
        return path

    return _write


@pytest.fixture()
def sample_config_yaml() -> str:
    return """output_directory: ./output
max_file_size_mb: 5
accepted_extensions: [.xlsx, .xls, .csv]
jobs:
  - software: sql-accounting
    doc_type: gl-document-pv
    input: ./data/pv.xlsx
  - software: sql-accounting
    doc_type: invoice-with-item-dual
    input: ./data/customer.xlsx
    secondary_input: ./data/sales.xlsx
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "docparser.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
