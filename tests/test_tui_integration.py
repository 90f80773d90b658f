from __future__ import annotations

from pathlib import Path

import pytest
from conftest import FakeClock
from textual.pilot import Pilot
from textual.widgets import Button, Input, Switch, TextArea

from jotter.app.components.editor import NoteEditorScreen
from jotter.app.components.notes import NoteBoard, NoteCard, NoteRow
from jotter.app.tui import NotesApp
from jotter.core.models import NoteColor, NoteDraft
from jotter.storage.store import NoteStore


def _seeded_store(path: Path, clock: FakeClock) -> NoteStore:
    store = NoteStore(path, clock=clock)
    store.load()
    store.add(NoteDraft(title="Work", content="report", is_pinned=True, category="Office"))
    clock.advance()
    store.add(NoteDraft(title="Shopping", content="milk", category="Home"))
    return store


async def _settle(pilot: Pilot) -> None:
    for _ in range(3):
        await pilot.pause()


def _titles(app: NotesApp, view: type) -> list[str]:
    return [widget.note.title for widget in app.query(view)]


@pytest.mark.asyncio
async def test_board_renders_cards_then_rows(notes_path: Path, clock: FakeClock) -> None:
    app = NotesApp(_seeded_store(notes_path, clock))
    async with app.run_test() as pilot:
        await _settle(pilot)
        assert _titles(app, NoteCard) == ["Work", "Shopping"]

        app.action_toggle_layout()
        await _settle(pilot)
        assert _titles(app, NoteCard) == []
        assert _titles(app, NoteRow) == ["Work", "Shopping"]
        assert app.query_one(NoteBoard).has_class("list")


@pytest.mark.asyncio
async def test_filter_input_narrows_board(notes_path: Path, clock: FakeClock) -> None:
    app = NotesApp(_seeded_store(notes_path, clock))
    async with app.run_test() as pilot:
        app.query_one("#filter", Input).value = "MILK"
        await _settle(pilot)
        assert _titles(app, NoteCard) == ["Shopping"]
        assert app.status_line.startswith("1 of 2 notes")

        app.action_clear_filter()
        await _settle(pilot)
        assert _titles(app, NoteCard) == ["Work", "Shopping"]


@pytest.mark.asyncio
async def test_empty_store_shows_hint(notes_path: Path) -> None:
    store = NoteStore(notes_path)
    app = NotesApp(store)
    async with app.run_test() as pilot:
        await _settle(pilot)
        assert len(app.query(".empty")) == 1


@pytest.mark.asyncio
async def test_new_note_form_validates_and_saves(notes_path: Path, clock: FakeClock) -> None:
    store = NoteStore(notes_path, clock=clock)
    app = NotesApp(store)
    async with app.run_test() as pilot:
        app.action_new_note()
        await _settle(pilot)
        screen = app.screen
        assert isinstance(screen, NoteEditorScreen)
        save = screen.query_one("#save", Button)
        assert save.disabled

        screen.query_one("#content", TextArea).load_text("milk, eggs")
        screen.query_one("#title", Input).value = "   "
        await _settle(pilot)
        assert save.disabled

        screen.query_one("#title", Input).value = "Groceries"
        screen.query_one("#pinned", Switch).value = True
        await _settle(pilot)
        assert not save.disabled

        save.press()
        await _settle(pilot)
        assert not isinstance(app.screen, NoteEditorScreen)
        [note] = store.notes
        assert (note.title, note.content, note.is_pinned, note.category) == (
            "Groceries", "milk, eggs", True, "General",
        )
        assert _titles(app, NoteCard) == ["Groceries"]
        assert NoteStore(notes_path).load() == [note]


@pytest.mark.asyncio
async def test_cancel_discards_edits(notes_path: Path, clock: FakeClock) -> None:
    store = _seeded_store(notes_path, clock)
    before = store.notes
    app = NotesApp(store)
    async with app.run_test() as pilot:
        await _settle(pilot)
        app.query(NoteCard).first().action_edit()
        await _settle(pilot)
        screen = app.screen
        assert isinstance(screen, NoteEditorScreen)
        assert screen.query_one("#title", Input).value == "Work"
        assert not screen.query_one("#save", Button).disabled

        screen.query_one("#title", Input).value = "Changed"
        screen.action_cancel()
        await _settle(pilot)
        assert not isinstance(app.screen, NoteEditorScreen)
        assert store.notes == before


@pytest.mark.asyncio
async def test_edit_keeps_custom_color(notes_path: Path, clock: FakeClock) -> None:
    store = NoteStore(notes_path, clock=clock)
    store.load()
    custom = NoteColor(0.1, 0.2, 0.3, 1.0)
    note = store.add(NoteDraft(title="Work", content="report", color=custom))
    app = NotesApp(store)
    async with app.run_test() as pilot:
        await _settle(pilot)
        app.query(NoteCard).first().action_edit()
        await _settle(pilot)
        screen = app.screen
        assert isinstance(screen, NoteEditorScreen)
        screen.query_one("#content", TextArea).load_text("final report")
        await _settle(pilot)
        screen.query_one("#save", Button).press()
        await _settle(pilot)
        updated = store.get(note.id)
        assert updated.content == "final report"
        assert updated.color == custom
        assert updated.last_modified_date > note.last_modified_date


@pytest.mark.asyncio
async def test_pin_and_delete_from_card(notes_path: Path, clock: FakeClock) -> None:
    store = _seeded_store(notes_path, clock)
    app = NotesApp(store)
    async with app.run_test() as pilot:
        await _settle(pilot)
        shopping = app.query(NoteCard).last()
        shopping.action_pin()
        await _settle(pilot)
        assert _titles(app, NoteCard) == ["Shopping", "Work"]

        app.query(NoteCard).first().action_delete()
        await _settle(pilot)
        assert _titles(app, NoteCard) == ["Work"]
        assert [note.title for note in store.notes] == ["Work"]


@pytest.mark.asyncio
async def test_save_failure_is_reported(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = NoteStore(blocker / "notes.json")
    app = NotesApp(store)
    async with app.run_test() as pilot:
        app.action_new_note()
        await _settle(pilot)
        screen = app.screen
        assert isinstance(screen, NoteEditorScreen)
        screen.query_one("#content", TextArea).load_text("never written")
        screen.query_one("#title", Input).value = "Lost"
        await _settle(pilot)
        screen.query_one("#save", Button).press()
        await _settle(pilot)
        assert store.notes == []
        assert _titles(app, NoteCard) == []


@pytest.mark.asyncio
async def test_pin_key_keeps_focus_on_note(notes_path: Path, clock: FakeClock) -> None:
    store = _seeded_store(notes_path, clock)
    app = NotesApp(store)
    async with app.run_test() as pilot:
        await _settle(pilot)
        app.query(NoteCard).last().focus()
        await _settle(pilot)

        await pilot.press("p")
        await _settle(pilot)
        focused = app.focused
        assert isinstance(focused, NoteCard)
        assert focused.note.title == "Shopping"
        assert focused.note.is_pinned

        await pilot.press("p")
        await _settle(pilot)
        focused = app.focused
        assert isinstance(focused, NoteCard)
        assert focused.note.title == "Shopping"
        assert not focused.note.is_pinned
        assert _titles(app, NoteCard) == ["Work", "Shopping"]
