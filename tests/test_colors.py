from __future__ import annotations

import math

import pytest
from textual.color import Color

from jotter.core import colors
from jotter.core.models import NoteColor


def test_encode_normalizes_channels() -> None:
    assert colors.encode(Color(255, 0, 51, 0.5)) == NoteColor(1.0, 0.0, 0.2, 0.5)


def test_decode_scales_channels() -> None:
    assert colors.decode(NoteColor(1.0, 0.5, 0.0, 0.25)) == Color(255, 128, 0, 0.25)


def test_decode_encode_is_lossless_for_display_colors() -> None:
    for color in [Color(0, 0, 0), Color(255, 204, 0), Color(12, 34, 56, 0.3)]:
        assert colors.decode(colors.encode(color)) == color


def test_encode_decode_within_quantization_step() -> None:
    for channels in [
        NoteColor(0.1, 0.2, 0.3, 0.4),
        NoteColor(0.999, 0.001, 0.5, 1.0),
        NoteColor(1 / 3, 2 / 3, 0.75, 0.0),
    ]:
        back = colors.encode(colors.decode(channels))
        assert back.red == pytest.approx(channels.red, abs=1 / 255)
        assert back.green == pytest.approx(channels.green, abs=1 / 255)
        assert back.blue == pytest.approx(channels.blue, abs=1 / 255)
        assert back.opacity == channels.opacity


def test_out_of_range_channels_are_clamped() -> None:
    assert NoteColor(1.5, -0.2, math.nan, 2.0) == NoteColor(1.0, 0.0, 0.0, 1.0)
    assert colors.encode(Color(300, -5, 0, 1.7)) == NoteColor(1.0, 0.0, 0.0, 1.0)


def test_from_dict_defaults_and_validation() -> None:
    assert colors.from_dict({"red": 1}) == NoteColor(1.0, 0.0, 0.0, 1.0)
    with pytest.raises(ValueError):
        colors.from_dict({"red": "high"})
    with pytest.raises(ValueError):
        colors.from_dict({"red": True})


def test_parse_palette_names_hex_and_rgb() -> None:
    assert colors.parse("Yellow") == NoteColor(1.0, 0.8, 0.0)
    assert colors.parse("#0000ff") == NoteColor(0.0, 0.0, 1.0)
    assert colors.parse("rgb(255,0,0)") == NoteColor(1.0, 0.0, 0.0)
    with pytest.raises(ValueError):
        colors.parse("not-a-color")


def test_palette_name_picks_closest_entry() -> None:
    assert colors.palette_name(colors.parse("yellow")) == "yellow"
    assert colors.palette_name(NoteColor(0.0, 0.45, 0.95)) == "blue"
