from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import AppConfig, JobConfig
from ..models.error_record import ErrorRecord
from ..models.parse_result import ParseResult
from ..models.processing_result import JobStat, JobStatus, ProcessingResult
from ..parsers.errors import DocumentParserError
from ..parsers.registry import get_parser
from ..source.reader import RawGrid, check_extension, read_tabular_file
from .export import export_filename, unique_path, write_csv
from .progress import ProgressTracker

"""Batch orchestration of parse jobs.

For each configured job:
1. Resolve the parser from the registry (fails before any file I/O)
2. Check the input file(s): existence, accepted extension, size limit
3. Read the grid(s) and run the parser
4. Write the CSV export into the output directory (unless disabled)

A failing job is logged, appended to the JSON Lines error log and counted;
it never stops the jobs after it. Only fatal setup problems raise
ProcessingError.
"""

__all__ = [
    "ProcessingError",
    "InputNotFoundError",
    "FileTooLargeError",
    "check_input",
    "parse_job",
    "run_jobs",
]

logger = logging.getLogger(__name__)

ResultCallback = Callable[[JobConfig, ParseResult], None]


class ProcessingError(Exception):
    """Fatal error that prevents the batch from running."""
    pass


class InputNotFoundError(DocumentParserError):
    error_type = "FILE_NOT_FOUND"


class FileTooLargeError(DocumentParserError):
    error_type = "FILE_TOO_LARGE"


def check_input(path: Path, config: AppConfig) -> None:
    """Upload limits: existence, accepted extension, max size."""
    if not path.is_file():
        raise InputNotFoundError(f"Input file not found: {path}")
    check_extension(path, config.accepted_extensions)
    size = path.stat().st_size
    if size > config.max_file_size_bytes:
        raise FileTooLargeError(
            f"File too large: {path.name} is {size} bytes (max {config.max_file_size_mb} MB)"
        )


def _read(path: Path, config: AppConfig) -> RawGrid:
    check_input(path, config)
    return read_tabular_file(
        path, accepted=config.accepted_extensions, csv_max_columns=config.csv_max_columns
    )


def parse_job(job: JobConfig, config: AppConfig) -> ParseResult:
    entry = get_parser(job.software, job.doc_type)
    if entry.is_dual and not job.secondary_input:
        raise InputNotFoundError(
            f"{job.doc_type} requires a secondary input ({entry.secondary_label})"
        )
    primary = _read(Path(job.input), config)
    secondary = _read(Path(job.secondary_input), config) if entry.is_dual else None
    return entry.parse(primary, secondary)


def _describe(result: ParseResult) -> str:
    meta = result.metadata
    text = f"rows={meta.total_rows} source_rows={meta.original_row_count}"
    stats = meta.match_stats
    if stats is not None:
        text += (
            f" {stats.primary_label}={stats.primary_documents}"
            f" {stats.secondary_label}={stats.secondary_documents}"
            f" matched={stats.matched_documents}"
        )
    return text


def run_jobs(
    config: AppConfig,
    *,
    write_output: bool = True,
    on_result: ResultCallback | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Run every job in config and aggregate the outcome.

    Args:
        config: application config (jobs + limits + output directory)
        write_output: write a CSV per successful job
        on_result: optional callback per successful job (preview)
        error_log: buffer for failed jobs (a fresh one by default)

    Raises:
        ProcessingError: the output directory cannot be created
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    output_dir = Path(config.output_directory)
    if write_output and config.jobs:
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ProcessingError(f"cannot create output directory {output_dir}: {e}") from e

    job_stats: list[JobStat] = []
    with ProgressTracker(len(config.jobs)) as progress:
        for job in config.jobs:
            name = Path(job.input).name
            progress.start_job(name)
            job_start = time.perf_counter()
            try:
                result = parse_job(job, config)
                output_path = None
                if write_output:
                    output_path = write_csv(result, unique_path(output_dir / export_filename(name)))
            except DocumentParserError as e:
                elapsed = time.perf_counter() - job_start
                logger.error(f"{job.label} {name}: {e}")
                error_log.append(ErrorRecord.create(name, job.software, job.doc_type, e.error_type, str(e)))
                job_stats.append(
                    JobStat(
                        input_name=name,
                        doc_type=job.doc_type,
                        status=JobStatus.FAILED,
                        rows=0,
                        elapsed_seconds=elapsed,
                        error_type=e.error_type,
                        error=str(e),
                    )
                )
                progress.finish_job(success=False)
                continue

            elapsed = time.perf_counter() - job_start
            logger.info(f"{job.label} {name}: {_describe(result)}" + (f" -> {output_path}" if output_path else ""))
            if on_result is not None:
                on_result(job, result)
            job_stats.append(
                JobStat(
                    input_name=name,
                    doc_type=job.doc_type,
                    status=JobStatus.SUCCESS,
                    rows=result.metadata.total_rows,
                    elapsed_seconds=elapsed,
                    output_path=str(output_path) if output_path else None,
                )
            )
            progress.finish_job(success=True)
            progress.set_postfix(
                ok=sum(1 for s in job_stats if s.status is JobStatus.SUCCESS),
                failed=sum(1 for s in job_stats if s.status is JobStatus.FAILED),
            )

    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log written: {log_path}")

    end_time = datetime.now(UTC)
    success = [s for s in job_stats if s.status is JobStatus.SUCCESS]
    return ProcessingResult(
        success_jobs=len(success),
        failed_jobs=len(job_stats) - len(success),
        total_rows=sum(s.rows for s in success),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        job_stats=job_stats,
    )
