"""
Load .env from project root; expose DATA_DIR, OUTPUT_DIR, PREVIEW_FONT, LOG_LEVEL.
Call load_env() before using in main or other modules.
"""
from __future__ import annotations

import os
from pathlib import Path


def _project_root() -> Path:
    """Project root (directory containing data/, src/)."""
    p = Path(__file__).resolve()
    # src/config/config.py -> two levels up
    for _ in range(3):
        p = p.parent
        if (p / "data").is_dir() or (p / "src").is_dir():
            return p
    return Path.cwd()


def load_env() -> None:
    """Load env vars from project root .env if present."""
    root = _project_root()
    env_file = root / ".env"
    if not env_file.is_file():
        return
    for line in env_file.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, _, v = line.partition("=")
        k, v = k.strip(), v.strip().strip("'\"")
        if k and v:
            os.environ.setdefault(k, v)


def get_data_dir() -> Path:
    """Directory of article exports (*.json); default <project_root>/data/articles."""
    load_env()
    data_dir = os.environ.get("DATA_DIR")
    if data_dir:
        return Path(data_dir)
    return _project_root() / "data" / "articles"


def get_output_dir() -> Path:
    """Where per-article layout folders are written; default <project_root>/output."""
    load_env()
    output_dir = os.environ.get("OUTPUT_DIR")
    if output_dir:
        return Path(output_dir)
    return _project_root() / "output"


def get_preview_font_path() -> Path | None:
    """TrueType font for PNG previews (PREVIEW_FONT); None means try system fonts."""
    load_env()
    font = os.environ.get("PREVIEW_FONT")
    return Path(font) if font else None


def get_log_level() -> str:
    """Logging level name for main (LOG_LEVEL). Default: INFO."""
    load_env()
    return (os.environ.get("LOG_LEVEL") or "INFO").strip().upper()
