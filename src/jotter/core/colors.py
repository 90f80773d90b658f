"""Conversion between Textual display colors and stored note channels."""

from __future__ import annotations

from collections.abc import Mapping

from textual.color import Color, ColorParseError

from jotter.core.models import NoteColor, clamp_unit

PALETTE: dict[str, str] = {
    "yellow": "#FFCC00",
    "orange": "#FF9500",
    "pink": "#FF2D55",
    "purple": "#AF52DE",
    "blue": "#007AFF",
    "green": "#34C759",
    "gray": "#8E8E93",
}


def encode(color: Color) -> NoteColor:
    return NoteColor(
        red=color.r / 255,
        green=color.g / 255,
        blue=color.b / 255,
        opacity=color.a,
    )


def decode(channels: NoteColor) -> Color:
    return Color(
        _to_byte(channels.red),
        _to_byte(channels.green),
        _to_byte(channels.blue),
        clamp_unit(channels.opacity),
    )


def to_dict(channels: NoteColor) -> dict[str, float]:
    return {
        "red": channels.red,
        "green": channels.green,
        "blue": channels.blue,
        "opacity": channels.opacity,
    }


def from_dict(raw: Mapping[str, object]) -> NoteColor:
    return NoteColor(
        red=_channel(raw, "red", 0.0),
        green=_channel(raw, "green", 0.0),
        blue=_channel(raw, "blue", 0.0),
        opacity=_channel(raw, "opacity", 1.0),
    )


def parse(text: str) -> NoteColor:
    """Parse a palette name, CSS color name or hex string."""
    name = text.strip().lower()
    try:
        return encode(Color.parse(PALETTE.get(name, name)))
    except ColorParseError as exc:
        raise ValueError(f"Unknown color: {text}") from exc


def palette_name(channels: NoteColor) -> str:
    """Return the palette entry closest to ``channels``."""
    target = decode(channels)

    def distance(item: tuple[str, str]) -> int:
        candidate = Color.parse(item[1])
        return (
            (candidate.r - target.r) ** 2
            + (candidate.g - target.g) ** 2
            + (candidate.b - target.b) ** 2
        )

    return min(PALETTE.items(), key=distance)[0]


def _to_byte(value: float) -> int:
    return round(clamp_unit(value) * 255)


def _channel(raw: Mapping[str, object], key: str, default: float) -> float:
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValueError(f"Invalid color channel {key}: {value!r}")
    return float(value)
