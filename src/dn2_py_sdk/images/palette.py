from __future__ import annotations

from ..errors import FormatError
from .image import Rgba


PALETTE16_SIZE = 16
PALETTE256_SIZE = 256
PALETTE16_BYTES = PALETTE16_SIZE * 3
PALETTE256_BYTES = PALETTE256_SIZE * 3


def extend_6bit_channel(value: int) -> int:
    """Scale a 6-bit VGA DAC value (0..63) to 8 bits, rounding to nearest.

    `(v * 255 + 31) // 63` equals `round(v * 255 / 63)`: 63 is odd, so the
    quotient never lands on .5 and no tie-breaking rule is involved.
    """

    return min(255, (int(value) * 255 + 31) // 63)


def load_6bit_palette(data: bytes, color_count: int, *, offset: int = 0) -> list[Rgba]:
    """Read `color_count` RGB triplets of 6-bit values starting at `offset`."""

    needed = color_count * 3
    if offset < 0 or len(data) - offset < needed:
        raise FormatError(
            f"palette truncated: need {needed} bytes, have {max(0, len(data) - offset)}"
        )

    colors: list[Rgba] = []
    for i in range(offset, offset + needed, 3):
        colors.append(
            (
                extend_6bit_channel(data[i]),
                extend_6bit_channel(data[i + 1]),
                extend_6bit_channel(data[i + 2]),
                255,
            )
        )
    return colors


def load_6bit_palette16(data: bytes, *, offset: int = 0) -> list[Rgba]:
    return load_6bit_palette(data, PALETTE16_SIZE, offset=offset)


def load_6bit_palette256(data: bytes, *, offset: int = 0) -> list[Rgba]:
    return load_6bit_palette(data, PALETTE256_SIZE, offset=offset)


# The palette used for all in-game graphics (tiles, actors, backdrops) unless a
# full-screen image brings its own. Stored in the same 6-bit encoding as the
# game files.
_INGAME_PALETTE_6BIT = bytes(
    [
        0, 0, 0,
        16, 16, 16,
        32, 32, 32,
        48, 48, 48,
        63, 0, 0,
        63, 28, 0,
        63, 63, 0,
        0, 36, 0,
        0, 63, 0,
        0, 0, 44,
        0, 32, 63,
        0, 58, 63,
        40, 20, 8,
        52, 36, 24,
        63, 48, 40,
        63, 63, 63,
    ]
)

INGAME_PALETTE: list[Rgba] = load_6bit_palette16(_INGAME_PALETTE_6BIT)
