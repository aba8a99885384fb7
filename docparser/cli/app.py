from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ENV_OUTPUT_DIR, ConfigError, load_config, resolve_config_path
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.config_models import AppConfig, JobConfig
from ..models.parse_result import ParseResult
from ..parsers.registry import SOFTWARE_LABELS, SQL_ACCOUNTING, list_document_types
from ..services.export import to_export_frame
from ..services.orchestrator import ProcessingError, run_jobs
from ..services.summary import render_summary_line

"""CLI entrypoint.

Batch mode (default): run every job listed in the YAML config.
Ad-hoc mode: --input (+ --doc-type, --secondary-input) runs one job; the
config file is optional there and only contributes limits / output dir.

Exit codes:
    0  every job succeeded (or there were no jobs)
    2  at least one job failed
    1  fatal: config error, bad arguments, output directory unusable
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

DEFAULT_OUTPUT_DIR = "./output"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env via python-dotenv (.env の値を既存環境変数より優先)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="docparser", description="Reconstruct SQL Accounting document listings into flat CSV"
    )
    p.add_argument("--config", help="YAML config path (default: $DOCPARSER_CONFIG or config/docparser.yml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--preview", type=int, metavar="N", help="Print the first N records instead of writing CSV")
    p.add_argument("--list-doc-types", action="store_true", help="List registered document types and exit")
    p.add_argument("--software", default=SQL_ACCOUNTING, help="Software key for --input (default: sql-accounting)")
    p.add_argument("--doc-type", help="Document type key for --input")
    p.add_argument("--input", help="Primary input file (ad-hoc single job)")
    p.add_argument("--secondary-input", help="Secondary input file for dual document types")
    p.add_argument("--output-dir", help="Override the output directory")
    return p.parse_args(argv)


def _list_doc_types() -> int:
    for software, software_label in SOFTWARE_LABELS.items():
        print(f"# {software}: {software_label}")
        entries = list_document_types(software)
        if not entries:
            print("#   (no parsers registered)")
        for entry in entries:
            files = "dual" if entry.is_dual else "single"
            print(f"{software}\t{entry.doc_type}\t{files}\t{entry.label}")
    return EXIT_SUCCESS_ALL


def _print_preview(limit: int):
    def _printer(job: JobConfig, result: ParseResult) -> None:
        print(f"FILE: {Path(job.input).name} ({result.metadata.doc_type})")
        print(f"  metadata= {json.dumps(result.metadata.to_dict(), ensure_ascii=False)}")
        frame = to_export_frame(result).head(limit)
        print(frame.to_string(index=False))

    return _printer


def _build_config(args: argparse.Namespace, logger) -> AppConfig | None:
    config_path = resolve_config_path(args.config)
    if args.input:
        if not args.doc_type:
            logger.error("--doc-type is required with --input")
            return None
        if config_path.exists():
            cfg = load_config(config_path)
        else:
            cfg = AppConfig(output_directory=os.getenv(ENV_OUTPUT_DIR) or DEFAULT_OUTPUT_DIR)
        job = JobConfig(
            software=args.software,
            doc_type=args.doc_type,
            input=args.input,
            secondary_input=args.secondary_input,
        )
        cfg = replace(cfg, jobs=[job])
    else:
        cfg = load_config(config_path)
    if args.output_dir:
        cfg = replace(cfg, output_directory=args.output_dir)
    return cfg


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # [] を渡された場合に sys.argv が混入しないよう None のときだけ読む
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    if args.list_doc_types:
        return _list_doc_types()

    try:
        cfg = _build_config(args, logger)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    if cfg is None:
        return EXIT_FATAL

    preview = args.preview is not None
    logger.info(f"jobs={len(cfg.jobs)} output={cfg.output_directory}" + (" (preview)" if preview else ""))
    try:
        result = run_jobs(
            cfg,
            write_output=not preview,
            on_result=_print_preview(args.preview) if preview else None,
        )
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    # log_summary が "SUMMARY " を付けるので除去して渡す
    summary_line = render_summary_line(result)
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_jobs > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
