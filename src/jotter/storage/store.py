"""JSON-file backed note store."""

from __future__ import annotations

import contextlib
import dataclasses
import datetime as dt
import json
import logging
import os
import uuid
from collections.abc import Callable, Iterable
from pathlib import Path

from jotter.core.models import DisplayMode, Note, NoteDraft
from jotter.storage import codec
from jotter.utils.time import utc_now

logger = logging.getLogger(__name__)

_TICK = dt.timedelta(microseconds=1)


class StorageError(RuntimeError):
    """Raised when the notes file cannot be written."""


class NoteNotFoundError(LookupError):
    def __init__(self, note_id: str) -> None:
        super().__init__(f"Note not found: {note_id}")
        self.note_id = note_id


def filter_and_sort(notes: Iterable[Note], filter_text: str = "") -> list[Note]:
    """Return notes matching ``filter_text``, pinned first, newest edit first.

    Both sorts are stable, so notes with equal keys keep their relative order.
    """
    matches = [note for note in notes if note.matches(filter_text)]
    matches.sort(key=lambda note: note.last_modified_date, reverse=True)
    matches.sort(key=lambda note: not note.is_pinned)
    return matches


class NoteStore:
    def __init__(
        self,
        path: Path,
        clock: Callable[[], dt.datetime] = utc_now,
        default_mode: DisplayMode = "grid",
    ) -> None:
        self._path = path
        self._clock = clock
        self._notes: list[Note] = []
        self.filter_text = ""
        self.display_mode: DisplayMode = default_mode

    @property
    def path(self) -> Path:
        return self._path

    @property
    def notes(self) -> list[Note]:
        return list(self._notes)

    def load(self) -> list[Note]:
        """Read the notes file; a missing or unreadable file yields no notes."""
        self._notes = []
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.info("No notes file at %s, starting empty", self._path)
            return self.notes
        except (OSError, RecursionError, ValueError) as exc:
            logger.warning("Failed to read notes from %s: %s", self._path, exc)
            return self.notes
        if not isinstance(raw, list):
            logger.warning("Notes file %s does not hold a JSON array", self._path)
            return self.notes

        seen: set[str] = set()
        for index, item in enumerate(raw):
            if not isinstance(item, dict):
                logger.warning("Skipping note #%d: not an object", index)
                continue
            try:
                note = codec.note_from_dict(item)
            except (KeyError, ValueError, TypeError, OverflowError, OSError) as exc:
                logger.warning("Skipping note #%d: %s", index, exc)
                continue
            if note.id in seen:
                logger.warning("Skipping note #%d: duplicate id %s", index, note.id)
                continue
            seen.add(note.id)
            self._notes.append(note)
        logger.debug("Loaded %d notes from %s", len(self._notes), self._path)
        return self.notes

    def save(self) -> None:
        self._write(self._notes)

    def _write(self, notes: list[Note]) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(codec.dumps(notes), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Failed to save notes to {self._path}: {exc}") from exc
        logger.debug("Saved %d notes to %s", len(notes), self._path)

    def get(self, note_id: str) -> Note:
        return self._notes[self._index(note_id)]

    def resolve(self, prefix: str) -> Note:
        """Find a note by its id or a unique id prefix."""
        candidates = [note for note in self._notes if note.id.startswith(prefix)]
        exact = [note for note in candidates if note.id == prefix]
        if exact:
            return exact[0]
        if len(candidates) != 1 or not prefix:
            raise NoteNotFoundError(prefix)
        return candidates[0]

    def add(self, draft: NoteDraft) -> Note:
        now = self._clock()
        note = Note(
            id=str(uuid.uuid4()),
            title=draft.title,
            content=draft.content,
            color=draft.color,
            is_pinned=draft.is_pinned,
            category=draft.category,
            created_date=now,
            last_modified_date=now,
        )
        self._commit([*self._notes, note])
        logger.info("Added note %s", note.id)
        return note

    def update(self, note: Note) -> Note:
        index = self._index(note.id)
        current = self._notes[index]
        updated = dataclasses.replace(
            note,
            created_date=current.created_date,
            last_modified_date=self._next_timestamp(current),
        )
        notes = list(self._notes)
        notes[index] = updated
        self._commit(notes)
        logger.info("Updated note %s", note.id)
        return updated

    def edit(self, note_id: str, draft: NoteDraft) -> Note:
        current = self.get(note_id)
        return self.update(
            dataclasses.replace(
                current,
                title=draft.title,
                content=draft.content,
                color=draft.color,
                is_pinned=draft.is_pinned,
                category=draft.category,
            )
        )

    def delete(self, note_id: str) -> None:
        index = self._index(note_id)
        self._commit(self._notes[:index] + self._notes[index + 1 :])
        logger.info("Deleted note %s", note_id)

    def toggle_pin(self, note_id: str) -> Note:
        current = self.get(note_id)
        return self.update(dataclasses.replace(current, is_pinned=not current.is_pinned))

    def categories(self) -> list[str]:
        unique = {note.category.strip() for note in self._notes}
        return sorted((c for c in unique if c), key=str.casefold)

    def toggle_display_mode(self) -> DisplayMode:
        self.display_mode = "list" if self.display_mode == "grid" else "grid"
        return self.display_mode

    def filtered_and_sorted(self, filter_text: str | None = None) -> list[Note]:
        query = self.filter_text if filter_text is None else filter_text
        return filter_and_sort(self._notes, query)

    def _index(self, note_id: str) -> int:
        for index, note in enumerate(self._notes):
            if note.id == note_id:
                return index
        raise NoteNotFoundError(note_id)

    def _commit(self, notes: list[Note]) -> None:
        """Persist ``notes`` and adopt them only once the write succeeded."""
        self._write(notes)
        self._notes = notes

    def _next_timestamp(self, note: Note) -> dt.datetime:
        return max(self._clock(), note.last_modified_date + _TICK)
