from __future__ import annotations

import datetime as dt
from pathlib import Path

import pytest

from jotter.core.models import YELLOW, Note, NoteColor
from jotter.storage.store import NoteStore

T0 = dt.datetime(2025, 1, 21, 9, 0, tzinfo=dt.UTC)


class FakeClock:
    """Returns a fixed time until advanced."""

    def __init__(self, start: dt.datetime = T0) -> None:
        self.now = start

    def __call__(self) -> dt.datetime:
        return self.now

    def advance(self, seconds: float = 60) -> dt.datetime:
        self.now += dt.timedelta(seconds=seconds)
        return self.now


def make_note(
    note_id: str,
    title: str = "Title",
    content: str = "Content",
    *,
    pinned: bool = False,
    category: str = "General",
    modified: dt.datetime = T0,
    color: NoteColor = YELLOW,
) -> Note:
    return Note(
        id=note_id,
        title=title,
        content=content,
        color=color,
        is_pinned=pinned,
        category=category,
        created_date=min(T0, modified),
        last_modified_date=modified,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notes_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "notes.json"


@pytest.fixture
def store(notes_path: Path, clock: FakeClock) -> NoteStore:
    note_store = NoteStore(notes_path, clock=clock)
    note_store.load()
    return note_store
