from __future__ import annotations

import re
from pathlib import Path

from docparser.cli import main as cli_main

SUMMARY_RE = re.compile(r"^SUMMARY jobs=\d+ success=\d+ failed=\d+ rows=\d+ elapsed_sec=[0-9.]+$")


def test_summary_line_emitted_once(temp_workdir: Path, capsys):
    (temp_workdir / "config" / "docparser.yml").write_text(
        "output_directory: ./output\njobs:\n"
        "  - software: sql-accounting\n    doc_type: gl-document-or\n    input: ./data/none.csv\n",
        encoding="utf-8",
    )
    cli_main([])
    lines = [ln for ln in capsys.readouterr().out.splitlines() if ln.startswith("SUMMARY")]
    assert len(lines) == 1
    assert SUMMARY_RE.match(lines[0])
    assert "jobs=1 success=0 failed=1 rows=0" in lines[0]
