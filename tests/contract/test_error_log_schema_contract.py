from __future__ import annotations

import json
import re

from docparser.models.error_record import ErrorRecord

"""Error log line contract: fixed key set, UPPER_SNAKE error_type, UTC timestamp."""

EXPECTED_KEYS = {"timestamp", "file", "software", "doc_type", "error_type", "message"}
KNOWN_ERROR_TYPES = {
    "UNSUPPORTED_FORMAT",
    "READ_ERROR",
    "STRUCTURE_ERROR",
    "EMPTY_RESULT",
    "NO_PARSER",
    "FILE_TOO_LARGE",
    "FILE_NOT_FOUND",
    "WRITE_ERROR",
}


def test_error_record_keys_and_format():
    rec = ErrorRecord.create("pv.xlsx", "sql-accounting", "gl-document-pv", "STRUCTURE_ERROR", "Invalid file: 請求書")
    data = json.loads(rec.to_json_line())
    assert set(data) == EXPECTED_KEYS
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z", data["timestamp"])
    assert data["message"] == "Invalid file: 請求書"
    assert "\\u" not in rec.to_json_line()


def test_error_types_are_upper_snake():
    from docparser.parsers import errors
    from docparser.services import export, orchestrator

    classes = [
        errors.UnsupportedFormatError,
        errors.SourceReadError,
        errors.StructureError,
        errors.EmptyResultError,
        errors.NoParserError,
        orchestrator.FileTooLargeError,
        orchestrator.InputNotFoundError,
        export.ExportError,
    ]
    assert {c.error_type for c in classes} == KNOWN_ERROR_TYPES
