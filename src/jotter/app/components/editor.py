"""Modal form for adding and editing notes."""

from __future__ import annotations

from typing import ClassVar

from textual import on
from textual.app import ComposeResult
from textual.binding import BindingType
from textual.containers import Horizontal, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import (
    Button,
    Input,
    Label,
    RadioButton,
    RadioSet,
    Switch,
    TextArea,
)

from jotter.core import colors
from jotter.core.models import DEFAULT_CATEGORY, Note, NoteDraft, can_save


class NoteEditorScreen(ModalScreen[NoteDraft | None]):
    """Collects a draft; dismisses with ``None`` when cancelled."""

    BINDINGS: ClassVar[list[BindingType]] = [("escape", "cancel", "Cancel")]

    def __init__(
        self,
        note: Note | None = None,
        default_category: str = DEFAULT_CATEGORY,
        default_color: str = "yellow",
    ) -> None:
        super().__init__()
        self.note = note
        self._default_category = default_category
        self._color = note.color if note else colors.parse(default_color)

    @property
    def heading(self) -> str:
        return "Add Note" if self.note is None else "Edit Note"

    def compose(self) -> ComposeResult:
        note = self.note
        selected = colors.palette_name(self._color)
        with VerticalScroll(id="editor-container"):
            yield Label(self.heading, classes="modal-title")
            yield Label("Title", classes="field-label")
            yield Input(
                value=note.title if note else "",
                placeholder="Enter Title",
                id="title",
            )
            yield Label("Content", classes="field-label")
            yield TextArea(note.content if note else "", id="content")
            yield Label("Category", classes="field-label")
            yield Input(
                value=note.category if note else self._default_category,
                placeholder="Category (e.g. Work, Personal)",
                id="category",
            )
            yield Label("Color", classes="field-label")
            with RadioSet(id="color"):
                for name in colors.PALETTE:
                    yield RadioButton(name.title(), value=name == selected, name=name)
            with Horizontal(classes="pin-row"):
                yield Label("Pin this note")
                yield Switch(value=note.is_pinned if note else False, id="pinned")
            with Horizontal(classes="buttons"):
                yield Button("Cancel", variant="error", id="cancel", flat=True)
                yield Button(
                    "Save",
                    variant="success",
                    id="save",
                    flat=True,
                    disabled=not can_save(note.title, note.content) if note else True,
                )

    def on_mount(self) -> None:
        self.query_one("#title", Input).focus()

    @property
    def title_value(self) -> str:
        return self.query_one("#title", Input).value

    @property
    def content_value(self) -> str:
        return self.query_one("#content", TextArea).text

    @on(Input.Changed, "#title")
    @on(TextArea.Changed, "#content")
    def validate_form(self) -> None:
        self.query_one("#save", Button).disabled = not can_save(
            self.title_value, self.content_value
        )

    @on(RadioSet.Changed, "#color")
    def choose_color(self, event: RadioSet.Changed) -> None:
        name = event.pressed.name
        # Keep a custom color until a different swatch is picked.
        if name and name != colors.palette_name(self._color):
            self._color = colors.parse(name)

    def action_cancel(self) -> None:
        self.dismiss(None)

    @on(Button.Pressed, "#cancel")
    def cancel(self) -> None:
        self.dismiss(None)

    @on(Button.Pressed, "#save")
    def save(self) -> None:
        if not can_save(self.title_value, self.content_value):
            return
        category = self.query_one("#category", Input).value.strip()
        self.dismiss(
            NoteDraft(
                title=self.title_value.strip(),
                content=self.content_value,
                color=self._color,
                is_pinned=self.query_one("#pinned", Switch).value,
                category=category or self._default_category,
            )
        )
