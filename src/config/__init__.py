"""Config: load .env, expose DATA_DIR, OUTPUT_DIR, PREVIEW_FONT, LOG_LEVEL."""
from .config import (
    load_env,
    get_data_dir,
    get_output_dir,
    get_preview_font_path,
    get_log_level,
)

__all__ = [
    "load_env",
    "get_data_dir",
    "get_output_dir",
    "get_preview_font_path",
    "get_log_level",
]
