from __future__ import annotations

from pathlib import Path

import pandas as pd

from docparser.cli import main as cli_main

"""End-to-end: YAML config -> Excel / CSV inputs -> parsed CSV exports."""


def _read_export(output_dir: Path, prefix: str) -> pd.DataFrame:
    matches = list(output_dir.glob(f"parsed_{prefix}_*.csv"))
    assert len(matches) == 1
    return pd.read_csv(matches[0], dtype=str, keep_default_na=False)


def test_run_success_end_to_end(temp_workdir: Path, write_excel, gl_pv_grid, supplier_grid, purchase_grid, capsys):
    write_excel("pv.xlsx", gl_pv_grid)
    write_excel("supplier.xlsx", supplier_grid)
    write_excel("purchase.xlsx", purchase_grid)
    (temp_workdir / "data" / "invoice.csv").write_text(
        "Doc No,Doc Date\n"
        "-,IV-24-100,,,05/01/2024,05/01/2024,300-C009,,Gamma Bhd\n"
        ",Seq,Account Code,Description,,,,Amount\n"
        ",1,500-000,Consulting,,,,\"2,000.00\"\n",
        encoding="utf-8",
    )
    (temp_workdir / "config" / "docparser.yml").write_text(
        """output_directory: ./output
jobs:
  - software: sql-accounting
    doc_type: gl-document-pv
    input: ./data/pv.xlsx
  - software: sql-accounting
    doc_type: supplier-invoice-dual
    input: ./data/supplier.xlsx
    secondary_input: ./data/purchase.xlsx
  - software: sql-accounting
    doc_type: invoice-with-item
    input: ./data/invoice.csv
""",
        encoding="utf-8",
    )

    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY jobs=3 success=3 failed=0 rows=7" in out

    output_dir = temp_workdir / "output"
    pv = _read_export(output_dir, "pv")
    assert pv["Doc No"].tolist() == ["PV-0001", "PV-0001", "PV-0002"]
    assert pv["Item Amount"].tolist() == ["4000.00", "679.00", "210.50"]
    assert pv["Cancelled"].tolist() == ["false", "false", "true"]
    assert pv["Doc Date"].tolist()[0] == "2024-01-05"

    supplier = _read_export(output_dir, "supplier")
    assert supplier["Item Code"].tolist() == ["", "INK-BK", ""]
    assert "Project2" in supplier.columns

    invoice = _read_export(output_dir, "invoice")
    assert invoice.loc[0, "Doc No"] == "IV-24-100"
    assert invoice.loc[0, "Doc Date"] == "05/01/2024"
    assert invoice.loc[0, "Item Amount"] == "2000.00"
    assert invoice.loc[0, "Amount"] == "0.00"
