from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the JSON Lines error log.

One record per failed parse job. The key set is fixed (no extra keys) so the
log can be validated line by line.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: input file name of the failed job
        software: registry software key (e.g. sql-accounting)
        doc_type: registry doc type key (e.g. gl-document-pv)
        error_type: error classification in UPPER_SNAKE_CASE
        message: human readable error message
    """
    timestamp: str
    file: str
    software: str
    doc_type: str
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, software: str, doc_type: str, error_type: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            software=software,
            doc_type=doc_type,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        # 追加キー阻止: dataclass -> dict して json.dumps
        return json.dumps(asdict(self), ensure_ascii=False)
