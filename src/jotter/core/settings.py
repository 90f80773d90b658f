"""Settings loader for Jotter."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from jotter.core import colors
from jotter.core.models import DEFAULT_CATEGORY, DisplayMode, parse_display_mode


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    notes_file: Path
    layout: DisplayMode
    default_category: str
    default_color: str
    log_level: int
    log_file: Path


def load_settings() -> Settings:
    load_dotenv(find_dotenv(usecwd=True))
    data_dir = Path(os.environ.get("JOTTER_DATA_DIR", "~/.jotter")).expanduser()
    notes_file = Path(
        os.environ.get("JOTTER_NOTES_FILE", str(data_dir / "notes.json"))
    ).expanduser()
    layout = parse_display_mode(os.environ.get("JOTTER_LAYOUT", "grid"))
    default_category = (
        os.environ.get("JOTTER_DEFAULT_CATEGORY", DEFAULT_CATEGORY).strip()
        or DEFAULT_CATEGORY
    )
    default_color = _parse_color(os.environ.get("JOTTER_DEFAULT_COLOR", "yellow"))
    log_level = _parse_log_level(os.environ.get("JOTTER_LOG_LEVEL", "WARNING"))
    log_file = Path(
        os.environ.get("JOTTER_LOG_FILE", str(data_dir / "jotter.log"))
    ).expanduser()

    return Settings(
        data_dir=data_dir,
        notes_file=notes_file,
        layout=layout,
        default_category=default_category,
        default_color=default_color,
        log_level=log_level,
        log_file=log_file,
    )


def _parse_color(value: str) -> str:
    try:
        colors.parse(value)
    except ValueError as exc:
        raise ValueError(f"Invalid color for JOTTER_DEFAULT_COLOR: {value}") from exc
    return value.strip().lower()


def _parse_log_level(value: str) -> int:
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level for JOTTER_LOG_LEVEL: {value}")
    return level
