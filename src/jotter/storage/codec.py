"""JSON document format for persisted notes."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from jotter.core import colors
from jotter.core.models import DEFAULT_CATEGORY, YELLOW, Note
from jotter.utils.time import parse_timestamp, to_iso

# Keys written by the first release of the app.
LEGACY_KEYS = {
    "codableColor": "color",
    "lastModifiledDate": "lastModifiedDate",
}


def note_to_dict(note: Note) -> dict[str, Any]:
    return {
        "id": note.id,
        "title": note.title,
        "content": note.content,
        "color": colors.to_dict(note.color),
        "isPinned": note.is_pinned,
        "category": note.category,
        "createdDate": to_iso(note.created_date),
        "lastModifiedDate": to_iso(note.last_modified_date),
    }


def note_from_dict(raw: Mapping[str, Any]) -> Note:
    """Build a note from one persisted record.

    Raises ``ValueError`` when a required field is missing or has the wrong type.
    """
    record = dict(raw)
    for legacy, current in LEGACY_KEYS.items():
        if legacy in record and current not in record:
            record[current] = record.pop(legacy)

    note_id = _text(record, "id")
    if not note_id:
        raise ValueError("Note id must not be empty")
    color_raw = record.get("color")
    if color_raw is None:
        color = YELLOW
    elif isinstance(color_raw, Mapping):
        color = colors.from_dict(color_raw)
    else:
        raise ValueError(f"Invalid color: {color_raw!r}")
    pinned = record.get("isPinned", False)
    if not isinstance(pinned, bool):
        raise ValueError(f"Invalid isPinned: {pinned!r}")
    created = parse_timestamp(_required(record, "createdDate"))
    modified = parse_timestamp(record.get("lastModifiedDate", record["createdDate"]))

    return Note(
        id=note_id,
        title=_text(record, "title"),
        content=_text(record, "content"),
        color=color,
        is_pinned=pinned,
        category=_text(record, "category", DEFAULT_CATEGORY),
        created_date=created,
        last_modified_date=max(created, modified),
    )


def dumps(notes: list[Note]) -> str:
    return json.dumps(
        [note_to_dict(note) for note in notes], indent=2, ensure_ascii=False
    )


def _required(record: Mapping[str, Any], key: str) -> Any:
    if key not in record:
        raise ValueError(f"Missing field: {key}")
    return record[key]


def _text(record: Mapping[str, Any], key: str, default: str | None = None) -> str:
    value = record.get(key, default)
    if value is None:
        raise ValueError(f"Missing field: {key}")
    if not isinstance(value, str):
        raise ValueError(f"Invalid {key}: {value!r}")
    return value
