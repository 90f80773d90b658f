"""Note domain model."""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from typing import Literal, cast

DisplayMode = Literal["grid", "list"]

DEFAULT_CATEGORY = "General"


def clamp_unit(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return min(1.0, max(0.0, value))


@dataclass(frozen=True)
class NoteColor:
    """Stored color channels, each normalized to [0, 1]."""

    red: float
    green: float
    blue: float
    opacity: float = 1.0

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "opacity"):
            object.__setattr__(self, name, clamp_unit(float(getattr(self, name))))


YELLOW = NoteColor(1.0, 0.8, 0.0, 1.0)


@dataclass(frozen=True)
class NoteDraft:
    title: str
    content: str
    color: NoteColor = YELLOW
    is_pinned: bool = False
    category: str = DEFAULT_CATEGORY


@dataclass(frozen=True)
class Note:
    id: str
    title: str
    content: str
    color: NoteColor
    is_pinned: bool
    category: str
    created_date: dt.datetime
    last_modified_date: dt.datetime

    def matches(self, query: str) -> bool:
        if not query:
            return True
        needle = query.lower()
        return (
            needle in self.title.lower()
            or needle in self.content.lower()
            or needle in self.category.lower()
        )

    def draft(self) -> NoteDraft:
        return NoteDraft(
            title=self.title,
            content=self.content,
            color=self.color,
            is_pinned=self.is_pinned,
            category=self.category,
        )


def can_save(title: str, content: str) -> bool:
    return bool(title.strip()) and bool(content.strip())


def parse_display_mode(value: str) -> DisplayMode:
    normalized = value.strip().lower()
    if normalized not in {"grid", "list"}:
        raise ValueError(f"Invalid display mode: {value}")
    return cast(DisplayMode, normalized)
