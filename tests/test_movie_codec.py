from __future__ import annotations

import struct

import pytest

from conftest import encode_6bit_palette, encode_planar
from dn2_py_sdk.errors import FormatError
from dn2_py_sdk.nukem2.movie_codec import decode_movie


def _frame(width: int, start_row: int, rows: int, index: int, color: tuple[int, int, int]) -> bytes:
    palette = encode_6bit_palette([color] * 16)
    bitmap = encode_planar([index] * (width * rows), 4)
    body = struct.pack("<HH", start_row, rows) + palette + bitmap
    return struct.pack("<I", len(body)) + body


def build_movie(width: int, height: int, frames: list[bytes], delay: int = 5) -> bytes:
    payload = b"".join(frames)
    size = 12 + len(payload)
    return struct.pack("<IHHHH", size, len(frames), width, height, delay) + payload


def test_decode_movie_frames() -> None:
    data = build_movie(
        16,
        4,
        [_frame(16, 0, 4, 3, (63, 0, 0)), _frame(16, 2, 1, 1, (0, 63, 0))],
    )

    movie = decode_movie(data)

    assert (movie.width, movie.height, movie.frame_delay) == (16, 4, 5)
    assert len(movie.frames) == 2
    assert movie.frames[0].image.height == 4
    assert movie.frames[0].image.pixel_at(0, 0) == (255, 0, 0, 255)
    assert movie.frames[1].start_row == 2
    assert movie.frames[1].image.height == 1
    assert len(movie.frames[1].palette) == 16


def test_render_frames_composites_bands() -> None:
    movie = decode_movie(
        build_movie(8, 3, [_frame(8, 0, 3, 0, (63, 0, 0)), _frame(8, 1, 1, 0, (0, 0, 63))])
    )

    rendered = movie.render_frames()

    assert len(rendered) == 2
    assert rendered[0].pixel_at(0, 1) == (255, 0, 0, 255)
    assert rendered[1].pixel_at(0, 0) == (255, 0, 0, 255)
    assert rendered[1].pixel_at(0, 1) == (0, 0, 255, 255)
    assert rendered[1].pixel_at(0, 2) == (255, 0, 0, 255)


def test_movie_size_mismatch_is_format_error() -> None:
    data = build_movie(8, 1, [_frame(8, 0, 1, 0, (0, 0, 0))])

    with pytest.raises(FormatError):
        decode_movie(data + b"\x00")


def test_movie_truncated_frame_is_format_error() -> None:
    data = bytearray(build_movie(8, 1, [_frame(8, 0, 1, 0, (0, 0, 0))]))
    truncated = data[:-2]
    struct.pack_into("<I", truncated, 0, len(truncated))

    with pytest.raises(FormatError):
        decode_movie(bytes(truncated))


def test_movie_band_outside_picture_is_format_error() -> None:
    with pytest.raises(FormatError):
        decode_movie(build_movie(8, 2, [_frame(8, 1, 2, 0, (0, 0, 0))]))
