"""Configuration helpers for omrflow runtime files.

Loads the converter settings YAML and validates it with pydantic so a
typo in a deployment override fails loudly instead of producing a workbook
the OMR backend rejects.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from omrflow.core.errors import ConfigError
from omrflow.core.workspace import resolve_config_path


CONFIG_DIR = Path(__file__).resolve().parent
DEFAULT_SETTINGS_PATH = CONFIG_DIR / "converter.yaml"
SETTINGS_ENV_VAR = "OMRFLOW_CONFIG"


class ConverterSettings(BaseModel):
    """Settings consumed by the LMS -> OMR conversion."""

    model_config = ConfigDict(extra="forbid")

    output_filename: str = "OMR_Upload_Format.xlsx"
    sheet_name: str = "OMR Upload"
    allowed_extensions: List[str] = Field(default_factory=lambda: [".csv", ".xlsx", ".xls"])
    write_report: bool = True
    report_filename: str = "omr_conversion_report.md"

    @field_validator("allowed_extensions")
    @classmethod
    def _normalize_extensions(cls, value: List[str]) -> List[str]:
        normalized = []
        for ext in value:
            ext = ext.strip().lower()
            if not ext.startswith("."):
                ext = f".{ext}"
            normalized.append(ext)
        if not normalized:
            raise ValueError("allowed_extensions must not be empty")
        return normalized

    @field_validator("output_filename")
    @classmethod
    def _require_xlsx(cls, value: str) -> str:
        if not value.lower().endswith(".xlsx"):
            raise ValueError("output_filename must end with .xlsx")
        return value

    @field_validator("sheet_name")
    @classmethod
    def _check_sheet_name(cls, value: str) -> str:
        # Excel limits worksheet titles to 31 characters.
        if not value or len(value) > 31:
            raise ValueError("sheet_name must be 1-31 characters")
        return value


def load_settings(path: str | Path | None = None) -> ConverterSettings:
    """Load converter settings.

    Resolution order: explicit ``path``, the ``OMRFLOW_CONFIG`` environment
    variable, then the packaged ``converter.yaml``.
    """

    if path is None:
        env_path = os.getenv(SETTINGS_ENV_VAR)
        cfg_path = resolve_config_path(env_path) if env_path else DEFAULT_SETTINGS_PATH
    else:
        cfg_path = resolve_config_path(path)

    if not cfg_path.exists():
        raise ConfigError(f"settings file not found: {cfg_path}")
    try:
        with cfg_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {cfg_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{cfg_path}: expected a mapping at top level")

    try:
        return ConverterSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"{cfg_path}: {exc}") from exc


__all__ = [
    "ConverterSettings",
    "DEFAULT_SETTINGS_PATH",
    "SETTINGS_ENV_VAR",
    "load_settings",
]
