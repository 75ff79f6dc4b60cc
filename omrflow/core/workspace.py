"""Runtime directories and config path resolution."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


load_dotenv(override=False)


def _project_root() -> Path:
    env = os.getenv("OMRFLOW_ROOT")
    if env:
        return Path(env)
    # In source layout, this file is under <root>/omrflow/core
    return Path(__file__).resolve().parents[2]


def _config_dir() -> Path:
    return Path(__file__).resolve().parents[1] / "config"


def work_dir() -> Path:
    """Writable base for logs and default conversion output."""
    return _project_root() / "omrflow" / "work"


def ensure_work_dirs() -> dict[str, Path]:
    base = work_dir()
    out = base / "out"
    logs = base / "logs"
    for p in (out, logs):
        p.mkdir(parents=True, exist_ok=True)
    return {"out": out, "logs": logs}


def resolve_config_path(path: str | Path) -> Path:
    p = Path(path)
    if p.is_absolute():
        return p
    # Support paths with or without leading 'omrflow/config/'
    parts = p.parts
    if parts[:2] == ("omrflow", "config"):
        return _project_root() / p
    return _config_dir() / p
