"""Note cards, rows and the board that lays them out."""

from __future__ import annotations

from typing import ClassVar

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import BindingType
from textual.containers import Container, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Label, Static

from jotter.core import colors
from jotter.core.models import DisplayMode, Note
from jotter.utils.time import short_format

PIN_ICON = "📌"
ROW_OPACITY = 0.3


class NoteView(Container, can_focus=True):
    """Base class for the two note layouts; forwards user intents as messages."""

    BINDINGS: ClassVar[list[BindingType]] = [
        ("e", "edit", "Edit"),
        ("d", "delete", "Delete"),
        ("delete", "delete", "Delete"),
        ("p", "pin", "Pin/Unpin"),
    ]

    class NoteAction(Message):
        def __init__(self, note_id: str) -> None:
            super().__init__()
            self.note_id = note_id

    class EditRequested(NoteAction):
        pass

    class DeleteRequested(NoteAction):
        pass

    class PinToggled(NoteAction):
        pass

    def __init__(self, note: Note, focus: bool = False, **kwargs) -> None:
        super().__init__(**kwargs)
        self.note = note
        self._focus_on_mount = focus
        self.set_class(note.is_pinned, "pinned")

    def on_mount(self) -> None:
        if self._focus_on_mount:
            self.focus()

    def action_edit(self) -> None:
        self.post_message(self.EditRequested(self.note.id))

    def action_delete(self) -> None:
        self.post_message(self.DeleteRequested(self.note.id))

    def action_pin(self) -> None:
        self.post_message(self.PinToggled(self.note.id))


class NoteCard(NoteView):
    """A note in the grid layout."""

    def on_mount(self) -> None:
        self.styles.background = colors.decode(self.note.color)

    def compose(self) -> ComposeResult:
        if self.note.is_pinned:
            yield Label(PIN_ICON, classes="pin")
        yield Label(Text(self.note.title), classes="title")
        yield Label(Text(f"Category: {self.note.category}"), classes="category")
        yield Static(Text(self.note.content), classes="content")
        yield Label(f"Created: {short_format(self.note.created_date)}", classes="date")
        yield Label(
            f"Modified: {short_format(self.note.last_modified_date)}", classes="date"
        )


class NoteRow(NoteView):
    """A note in the list layout. Clicking the row pins or unpins it."""

    def on_mount(self) -> None:
        color = colors.decode(self.note.color)
        self.styles.background = color.with_alpha(color.a * ROW_OPACITY)

    def compose(self) -> ComposeResult:
        yield Label(PIN_ICON if self.note.is_pinned else " ", classes="pin")
        with Vertical(classes="body"):
            yield Label(Text(self.note.title), classes="title")
            yield Label(Text(f"Category: {self.note.category}"), classes="category")
            yield Static(Text(self.note.content), classes="content")
        with Vertical(classes="dates"):
            yield Label("Created:", classes="date-label")
            yield Label(short_format(self.note.created_date), classes="date")
            yield Label("Modified:", classes="date-label")
            yield Label(short_format(self.note.last_modified_date), classes="date")

    def on_click(self) -> None:
        self.action_pin()


class NoteBoard(VerticalScroll):
    """Shows notes as cards (grid) or rows (list)."""

    EMPTY_TEXT: ClassVar[str] = "No notes. Press ctrl+n to add one."

    def show(
        self, notes: list[Note], mode: DisplayMode, focus_id: str | None = None
    ) -> None:
        """Replace the board contents, focusing the view of ``focus_id`` if shown."""
        self.set_class(mode == "grid", "grid")
        self.set_class(mode == "list", "list")
        self.remove_children()
        if not notes:
            self.mount(Static(self.EMPTY_TEXT, classes="empty"))
            return
        view = NoteCard if mode == "grid" else NoteRow
        self.mount_all([view(note, focus=note.id == focus_id) for note in notes])
