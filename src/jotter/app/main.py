"""Compose settings, logging, the store and the TUI."""

from __future__ import annotations

from jotter.app.tui import run_tui
from jotter.core.logs import configure_logging
from jotter.core.settings import load_settings
from jotter.storage.store import NoteStore


def run_app() -> None:
    settings = load_settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    configure_logging(settings, tui=True)
    store = NoteStore(settings.notes_file, default_mode=settings.layout)
    store.load()
    run_tui(settings, store)
