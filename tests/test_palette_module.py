from __future__ import annotations

import pytest

from conftest import encode_6bit_palette
from dn2_py_sdk.errors import FormatError
from dn2_py_sdk.images import (
    INGAME_PALETTE,
    extend_6bit_channel,
    load_6bit_palette16,
    load_6bit_palette256,
)


def test_6bit_scaling_matches_rounded_formula() -> None:
    for value in range(64):
        assert extend_6bit_channel(value) == round(value * 255 / 63)

    assert extend_6bit_channel(0) == 0
    assert extend_6bit_channel(63) == 255


def test_6bit_scaling_is_monotonic() -> None:
    scaled = [extend_6bit_channel(v) for v in range(64)]
    assert scaled == sorted(scaled)
    assert len(set(scaled)) == 64


def test_load_palette16_reads_48_bytes() -> None:
    colors = [(i, 63 - i, (i * 4) % 64) for i in range(16)]
    data = encode_6bit_palette(colors) + b"\xff" * 10

    palette = load_6bit_palette16(data)

    assert len(palette) == 16
    for (r, g, b), rgba in zip(colors, palette):
        assert rgba == (round(r * 255 / 63), round(g * 255 / 63), round(b * 255 / 63), 255)


def test_load_palette256_reads_768_bytes() -> None:
    data = bytes(range(64)) * 12
    palette = load_6bit_palette256(data)

    assert len(palette) == 256
    assert palette[0] == (0, 4, 8, 255)


def test_load_palette_with_offset() -> None:
    data = b"\x00" * 5 + encode_6bit_palette([(63, 0, 0)] * 16)
    assert load_6bit_palette16(data, offset=5)[0] == (255, 0, 0, 255)


def test_truncated_palette_is_format_error() -> None:
    with pytest.raises(FormatError):
        load_6bit_palette16(b"\x00" * 47)
    with pytest.raises(FormatError):
        load_6bit_palette256(b"\x00" * 767)


def test_ingame_palette_is_16_opaque_colors() -> None:
    assert len(INGAME_PALETTE) == 16
    assert INGAME_PALETTE[0] == (0, 0, 0, 255)
    assert all(c[3] == 255 for c in INGAME_PALETTE)
