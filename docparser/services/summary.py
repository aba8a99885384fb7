from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering.

Format:
SUMMARY jobs={total} success={success} failed={failed} rows={rows} elapsed_sec={elapsed}
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # 指数表記を避ける
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ProcessingResult) -> str:
    """Render the SUMMARY line for a batch run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 5, 10, 0, 0, tzinfo=timezone.utc)
        >>> r = ProcessingResult(success_jobs=2, failed_jobs=1, total_rows=40,
        ...     start_time=t, end_time=t, elapsed_seconds=1.5)
        >>> render_summary_line(r)
        'SUMMARY jobs=3 success=2 failed=1 rows=40 elapsed_sec=1.5'
    """
    return (
        f"SUMMARY jobs={result.total_jobs} "
        f"success={result.success_jobs} "
        f"failed={result.failed_jobs} "
        f"rows={result.total_rows} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
