"""Domain models for the SQL Accounting document parser.

Row classification, parse results, configuration and batch processing
results.
"""

from .config_models import AppConfig, JobConfig
from .error_record import ErrorRecord
from .parse_result import MatchStats, ParseMetadata, ParseResult
from .processing_result import JobStat, JobStatus, ProcessingResult
from .rows import ClassifiedRow, RowCategory

__all__ = [
    # Configuration models
    "AppConfig",
    "JobConfig",
    # Parse models
    "ClassifiedRow",
    "RowCategory",
    "MatchStats",
    "ParseMetadata",
    "ParseResult",
    # Processing models
    "ErrorRecord",
    "JobStat",
    "JobStatus",
    "ProcessingResult",
]
