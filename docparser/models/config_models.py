from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the document parser.

Built by docparser.config.loader from the validated YAML file. These stay
free of I/O so services and tests can construct them directly.
"""

__all__ = [
    "JobConfig",
    "AppConfig",
]


@dataclass(frozen=True)
class JobConfig:
    """One parse job: a registered (software, doc_type) plus its input file(s)."""
    software: str
    doc_type: str
    input: str  # 一次ファイル
    secondary_input: str | None = None  # dual モードの二次ファイル (Sales / Purchase)

    @property
    def label(self) -> str:
        return f"{self.software}/{self.doc_type}"


@dataclass(frozen=True)
class AppConfig:
    """Root configuration.

    max_file_size_mb and accepted_extensions are upload limits enforced by
    the batch service; the parsers themselves never look at them.
    """
    output_directory: str
    jobs: list[JobConfig] = field(default_factory=list)
    max_file_size_mb: float = 5
    accepted_extensions: tuple[str, ...] = (".xlsx", ".xls", ".csv")
    csv_max_columns: int = 64

    @property
    def max_file_size_bytes(self) -> int:
        return int(self.max_file_size_mb * 1024 * 1024)
