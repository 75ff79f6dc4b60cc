from __future__ import annotations

from pathlib import Path

import pytest

from omrflow.config import ConverterSettings, load_settings
from omrflow.core.errors import ConfigError


def test_packaged_settings_match_upload_contract() -> None:
    settings = load_settings()

    assert settings.output_filename == "OMR_Upload_Format.xlsx"
    assert settings.sheet_name == "OMR Upload"
    assert settings.allowed_extensions == [".csv", ".xlsx", ".xls"]
    assert settings.write_report is True


def test_env_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    cfg = tmp_path / "alt.yaml"
    cfg.write_text("sheet_name: Alt Sheet\nallowed_extensions: [XLSX]\n", encoding="utf-8")
    monkeypatch.setenv("OMRFLOW_CONFIG", str(cfg))

    settings = load_settings()

    assert settings.sheet_name == "Alt Sheet"
    assert settings.allowed_extensions == [".xlsx"]


@pytest.mark.parametrize(
    "payload",
    [
        "unknown_key: 1\n",
        "sheet_name: ''\n",
        "allowed_extensions: []\n",
        "- just\n- a list\n",
        "sheet_name: [unclosed\n",
    ],
)
def test_invalid_settings_raise_config_error(tmp_path: Path, payload: str) -> None:
    cfg = tmp_path / "bad.yaml"
    cfg.write_text(payload, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_settings(cfg)


def test_missing_settings_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "nope.yaml")


def test_defaults_without_file() -> None:
    assert ConverterSettings().output_filename == "OMR_Upload_Format.xlsx"
