"""Typer CLI for Jotter."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import NoReturn, TypeVar

import typer
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from jotter.app.main import run_app
from jotter.core import colors
from jotter.core.logs import configure_logging
from jotter.core.models import Note, NoteColor, NoteDraft, can_save
from jotter.core.settings import load_settings
from jotter.storage.store import NoteNotFoundError, NoteStore, StorageError
from jotter.utils.time import short_format

app = typer.Typer(help="Jotter notes CLI")
console = Console()

T = TypeVar("T")

notes_app = typer.Typer(help="Notes operations")
config_app = typer.Typer(help="Configuration")


@app.callback()
def main() -> None:
    configure_logging(load_settings())


@app.command()
def tui() -> None:
    """Run the Textual TUI."""
    run_app()


@notes_app.command("list")
def notes_list(
    filter_text: str = typer.Option("", "--filter", "-f"),
    layout: str | None = None,
) -> None:
    store = _store()
    notes = store.filtered_and_sorted(filter_text)
    mode = layout or store.display_mode
    if mode not in {"grid", "list"}:
        _fail(f"Invalid layout: {mode}")
    if not notes:
        console.print("no notes")
        return
    if mode == "list":
        for note in notes:
            console.print(Text(_summary(note)))
        return
    table = Table("id", "", "", "title", "category", "content", "modified")
    for note in notes:
        swatch = Style(bgcolor=colors.decode(note.color).rich_color)
        table.add_row(
            Text(note.id[:8]),
            Text("  ", style=swatch),
            "*" if note.is_pinned else "",
            Text(note.title),
            Text(note.category),
            Text(note.content.splitlines()[0] if note.content else ""),
            short_format(note.last_modified_date),
        )
    console.print(table)


@notes_app.command("show")
def notes_show(note_id: str) -> None:
    note = _resolve(_store(), note_id)
    console.print(Text(note.title, style="bold"))
    console.print(Text(f"id={note.id}"))
    console.print(Text(f"category={note.category}"))
    console.print(f"color={colors.decode(note.color).hex}")
    console.print(f"pinned={note.is_pinned}")
    console.print(f"created={short_format(note.created_date)}")
    console.print(f"modified={short_format(note.last_modified_date)}")
    console.print(Text(note.content))


@notes_app.command("add")
def notes_add(
    title: str,
    content: str,
    category: str | None = None,
    color: str | None = None,
    pin: bool = False,
) -> None:
    if not can_save(title, content):
        _fail("title and content must not be empty")
    settings = load_settings()
    draft = NoteDraft(
        title=title.strip(),
        content=content,
        color=_color(color or settings.default_color),
        is_pinned=pin,
        category=(category or "").strip() or settings.default_category,
    )
    store = _store()
    note = _apply(lambda: store.add(draft))
    console.print(Text(f"created note {note.id}"))


@notes_app.command("edit")
def notes_edit(
    note_id: str,
    title: str | None = None,
    content: str | None = None,
    category: str | None = None,
    color: str | None = None,
) -> None:
    store = _store()
    note = _resolve(store, note_id)
    changes: dict[str, object] = {}
    if title is not None:
        changes["title"] = title.strip()
    if content is not None:
        changes["content"] = content
    if category is not None:
        changes["category"] = category.strip() or load_settings().default_category
    if color is not None:
        changes["color"] = _color(color)
    draft = dataclasses.replace(note.draft(), **changes)
    if not can_save(draft.title, draft.content):
        _fail("title and content must not be empty")
    updated = _apply(lambda: store.edit(note.id, draft))
    console.print(Text(f"updated note {updated.id}"))


@notes_app.command("delete")
def notes_delete(note_id: str) -> None:
    store = _store()
    note = _resolve(store, note_id)
    _apply(lambda: store.delete(note.id))
    console.print(Text(f"deleted note {note.id}"))


@notes_app.command("pin")
def notes_pin(note_id: str) -> None:
    """Pin or unpin a note."""
    store = _store()
    note = _resolve(store, note_id)
    updated = _apply(lambda: store.toggle_pin(note.id))
    state = "pinned" if updated.is_pinned else "unpinned"
    console.print(Text(f"{state} note {updated.id}"))


@notes_app.command("categories")
def notes_categories() -> None:
    for category in _store().categories():
        console.print(Text(category))


@config_app.command("show")
def config_show() -> None:
    settings = load_settings()
    console.print(Text(f"data_dir={settings.data_dir}"))
    console.print(Text(f"notes_file={settings.notes_file}"))
    console.print(f"layout={settings.layout}")
    console.print(Text(f"default_category={settings.default_category}"))
    console.print(f"default_color={settings.default_color}")
    console.print(f"log_level={settings.log_level}")
    console.print(Text(f"log_file={settings.log_file}"))


app.add_typer(notes_app, name="notes")
app.add_typer(config_app, name="config")


def _store() -> NoteStore:
    settings = load_settings()
    store = NoteStore(settings.notes_file, default_mode=settings.layout)
    store.load()
    return store


def _summary(note: Note) -> str:
    pin = "*" if note.is_pinned else " "
    return (
        f"{note.id[:8]} | {pin} {note.title} | {note.category} "
        f"| modified={short_format(note.last_modified_date)}"
    )


def _resolve(store: NoteStore, note_id: str) -> Note:
    try:
        return store.resolve(note_id)
    except NoteNotFoundError as exc:
        _fail(str(exc))


def _color(value: str) -> NoteColor:
    try:
        return colors.parse(value)
    except ValueError as exc:
        _fail(str(exc))


def _apply(change: Callable[[], T]) -> T:
    try:
        return change()
    except StorageError as exc:
        _fail(str(exc))


def _fail(message: str) -> NoReturn:
    console.print(Text(message, style="red"))
    raise typer.Exit(code=1)
