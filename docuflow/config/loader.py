from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..exceptions import ConfigError
from ..models.config_models import DocuFlowConfig, ExcelConfig, PdfConfig

"""Config loader.

Responsibilities:
- Load YAML config (config/docuflow.yml unless DOCUFLOW_CONFIG says otherwise)
- Validate against the JSON schema shipped next to this module
- Apply defaults for the optional pdf/excel sections
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
    "resolve_config_path",
]

DEFAULT_CONFIG_PATH = Path("config/docuflow.yml")
CONFIG_ENV_VAR = "DOCUFLOW_CONFIG"
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


def resolve_config_path(explicit: str | Path | None = None) -> Path:
    """CLI argument first, then $DOCUFLOW_CONFIG, then the default path."""
    if explicit:
        return Path(explicit)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails validation (missing required keys, wrong types,
            unknown keys).
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


def load_config(path: Path) -> DocuFlowConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    pdf_raw = data.get("pdf") or {}
    excel_raw = data.get("excel") or {}
    defaults_pdf = PdfConfig()
    defaults_excel = ExcelConfig()
    pdf = PdfConfig(
        line_tolerance=float(pdf_raw.get("line_tolerance", defaults_pdf.line_tolerance)),
        fragment_separator=pdf_raw.get("fragment_separator", defaults_pdf.fragment_separator),
    )
    excel = ExcelConfig(
        header_scan_rows=excel_raw.get("header_scan_rows", defaults_excel.header_scan_rows),
        stats_sample_rows=excel_raw.get("stats_sample_rows", defaults_excel.stats_sample_rows),
        preferred_sheet_keyword=excel_raw.get(
            "preferred_sheet_keyword", defaults_excel.preferred_sheet_keyword
        ),
    )
    return DocuFlowConfig(
        source_directory=data["source_directory"],
        output_directory=data.get("output_directory", "./output"),
        pdf=pdf,
        excel=excel,
    )
