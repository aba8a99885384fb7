from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import AppConfig, JobConfig

"""Config loader.

Responsibilities:
- Load the YAML config (default config/docparser.yml)
- Validate it against the JSON schema shipped next to this module
- Apply defaults (size limit, accepted extensions, CSV width)
- Apply environment overrides (DOCPARSER_OUTPUT_DIR)
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
    "resolve_config_path",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/docparser.yml")
ENV_CONFIG_PATH = "DOCPARSER_CONFIG"
ENV_OUTPUT_DIR = "DOCPARSER_OUTPUT_DIR"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: the schema file is missing / not valid JSON, or the
            config violates the schema (missing keys, wrong types, extra keys)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def resolve_config_path(cli_path: str | None = None) -> Path:
    """CLI 引数 > 環境変数 DOCPARSER_CONFIG > 既定パス の順で決定。"""
    if cli_path:
        return Path(cli_path)
    env_path = os.getenv(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    jobs = [
        JobConfig(
            software=raw["software"],
            doc_type=raw["doc_type"],
            input=raw["input"],
            secondary_input=raw.get("secondary_input"),
        )
        for raw in data["jobs"]
    ]
    output_directory = os.getenv(ENV_OUTPUT_DIR) or data["output_directory"]
    return AppConfig(
        output_directory=output_directory,
        jobs=jobs,
        max_file_size_mb=data.get("max_file_size_mb", 5),
        accepted_extensions=tuple(data.get("accepted_extensions", (".xlsx", ".xls", ".csv"))),
        csv_max_columns=data.get("csv_max_columns", 64),
    )
