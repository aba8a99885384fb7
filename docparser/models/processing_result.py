from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

"""Batch processing result models.

JobStat holds the outcome of a single parse job; ProcessingResult
aggregates a whole run and feeds the SUMMARY line.
"""


class JobStatus(Enum):
    """Outcome of one job: success | failed"""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class JobStat:
    input_name: str  # 一次ファイル名
    doc_type: str
    status: JobStatus
    rows: int  # 出力レコード数 (失敗時 0)
    elapsed_seconds: float
    output_path: str | None = None
    error_type: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    success_jobs: int
    failed_jobs: int
    total_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    job_stats: list[JobStat] | None = None

    @property
    def total_jobs(self) -> int:
        return self.success_jobs + self.failed_jobs
