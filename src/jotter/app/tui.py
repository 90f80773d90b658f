"""Textual-based TUI."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import ClassVar

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import BindingType
from textual.widgets import Footer, Header, Input, Static

from jotter.app.components.editor import NoteEditorScreen
from jotter.app.components.notes import NoteBoard, NoteView
from jotter.core.models import DEFAULT_CATEGORY, Note, NoteDraft
from jotter.core.settings import Settings
from jotter.storage.store import NoteNotFoundError, NoteStore, StorageError

logger = logging.getLogger(__name__)


class NotesApp(App):
    CSS_PATH = "style.tcss"
    TITLE = "Jotter"

    BINDINGS: ClassVar[list[BindingType]] = [
        ("ctrl+n", "new_note", "New Note"),
        ("ctrl+l", "toggle_layout", "Grid/List"),
        ("ctrl+f", "focus_filter", "Filter"),
        ("escape", "clear_filter", "Clear Filter"),
    ]

    def __init__(
        self,
        store: NoteStore,
        default_category: str = DEFAULT_CATEGORY,
        default_color: str = "yellow",
    ) -> None:
        super().__init__()
        self._store = store
        self._default_category = default_category
        self._default_color = default_color
        self.status_line = ""

    @property
    def store(self) -> NoteStore:
        return self._store

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(
            value=self._store.filter_text,
            placeholder="Search title, content or category...",
            id="filter",
        )
        yield Static("", id="status")
        yield NoteBoard(id="board")
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_board()

    def refresh_board(self) -> None:
        notes = self._store.filtered_and_sorted()
        focused = self.focused
        focus_id = focused.note.id if isinstance(focused, NoteView) else None
        self.query_one(NoteBoard).show(notes, self._store.display_mode, focus_id)
        self.status_line = self._status_text(len(notes))
        self.query_one("#status", Static).update(Text(self.status_line))

    def _status_text(self, shown: int) -> str:
        total = len(self._store.notes)
        parts = [f"{shown} of {total} notes", f"layout: {self._store.display_mode}"]
        if self._store.filter_text:
            parts.append(f"filter: {self._store.filter_text!r}")
        return " | ".join(parts)

    @on(Input.Changed, "#filter")
    def filter_changed(self, event: Input.Changed) -> None:
        self._store.filter_text = event.value
        self.refresh_board()

    def action_new_note(self) -> None:
        def on_close(draft: NoteDraft | None) -> None:
            if draft is not None:
                self._mutate(lambda: self._store.add(draft))

        self.push_screen(self._editor(), on_close)

    def action_toggle_layout(self) -> None:
        self._store.toggle_display_mode()
        self.refresh_board()

    def action_focus_filter(self) -> None:
        self.query_one("#filter", Input).focus()

    def action_clear_filter(self) -> None:
        # Input.Changed refreshes the board.
        self.query_one("#filter", Input).value = ""

    @on(NoteView.EditRequested)
    def edit_note(self, event: NoteView.EditRequested) -> None:
        try:
            note = self._store.get(event.note_id)
        except NoteNotFoundError as exc:
            self.notify(str(exc), severity="warning")
            self.refresh_board()
            return

        def on_close(draft: NoteDraft | None) -> None:
            if draft is not None:
                self._mutate(lambda: self._store.edit(note.id, draft))

        self.push_screen(self._editor(note), on_close)

    @on(NoteView.DeleteRequested)
    def delete_note(self, event: NoteView.DeleteRequested) -> None:
        self._mutate(lambda: self._store.delete(event.note_id))

    @on(NoteView.PinToggled)
    def pin_note(self, event: NoteView.PinToggled) -> None:
        self._mutate(lambda: self._store.toggle_pin(event.note_id))

    def _editor(self, note: Note | None = None) -> NoteEditorScreen:
        return NoteEditorScreen(
            note,
            default_category=self._default_category,
            default_color=self._default_color,
        )

    def _mutate(self, change: Callable[[], object]) -> None:
        try:
            change()
        except StorageError as exc:
            logger.error("%s", exc)
            self.notify(str(exc), title="Save failed", severity="error")
        except NoteNotFoundError as exc:
            self.notify(str(exc), severity="warning")
        self.refresh_board()


def run_tui(settings: Settings, store: NoteStore) -> None:
    app = NotesApp(
        store,
        default_category=settings.default_category,
        default_color=settings.default_color,
    )
    app.run()
