"""Movie (`NUKEM2.F*`) decoding.

Layout (little endian):

- header: u32 file size, u16 frame count, u16 width, u16 height, u16 frame delay
- per frame: u32 chunk size (bytes following this field), u16 start row,
  u16 row count, 48 byte 6-bit palette, 4-plane bitmap of width x row count

Frames after the first usually update only a band of rows; `start_row`
says where the band goes.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from ..errors import FormatError
from ..images.image import Image, Rgba
from ..images.palette import PALETTE16_BYTES, load_6bit_palette16
from .ega_codec import decode_planar, planar_byte_count
from .game_traits import EGA_PLANES


_HEADER_STRUCT = struct.Struct("<IHHHH")
_FRAME_HEADER_STRUCT = struct.Struct("<IHH")


@dataclass(frozen=True, slots=True)
class MovieFrame:
    start_row: int
    palette: list[Rgba]
    image: Image


@dataclass(frozen=True, slots=True)
class Movie:
    width: int
    height: int
    frame_delay: int
    frames: list[MovieFrame]

    def render_frames(self) -> list[Image]:
        """Return full-size pictures, applying each frame's band onto the last."""

        canvas = Image.blank(self.width, self.height)
        rendered: list[Image] = []
        for frame in self.frames:
            canvas.blit(frame.image, 0, frame.start_row)
            rendered.append(Image(self.width, self.height, list(canvas.pixels)))
        return rendered


def decode_movie(data: bytes) -> Movie:
    if len(data) < _HEADER_STRUCT.size:
        raise FormatError("movie header truncated")

    file_size, frame_count, width, height, frame_delay = _HEADER_STRUCT.unpack_from(data, 0)
    if file_size != len(data):
        raise FormatError(f"movie header declares {file_size} bytes, file has {len(data)}")
    if width <= 0 or height <= 0 or width % 8:
        raise FormatError(f"invalid movie dimensions {width}x{height}")

    frames: list[MovieFrame] = []
    pos = _HEADER_STRUCT.size
    for index in range(frame_count):
        if len(data) - pos < _FRAME_HEADER_STRUCT.size:
            raise FormatError(f"movie frame {index} header truncated")
        chunk_size, start_row, row_count = _FRAME_HEADER_STRUCT.unpack_from(data, pos)
        body = pos + 4
        chunk_end = body + chunk_size
        if chunk_end > len(data):
            raise FormatError(f"movie frame {index} claims {chunk_size} bytes, {len(data) - body} remain")
        if start_row + row_count > height:
            raise FormatError(f"movie frame {index} rows {start_row}..{start_row + row_count} exceed height {height}")

        bitmap_size = planar_byte_count(width, row_count, EGA_PLANES)
        expected = 4 + PALETTE16_BYTES + bitmap_size
        if chunk_size != expected:
            raise FormatError(f"movie frame {index} is {chunk_size} bytes, expected {expected}")

        palette_offset = body + 4
        palette = load_6bit_palette16(data, offset=palette_offset)
        image = decode_planar(data[:chunk_end], width, row_count, palette, offset=palette_offset + PALETTE16_BYTES)
        frames.append(MovieFrame(start_row=int(start_row), palette=palette, image=image))
        pos = chunk_end

    if pos != len(data):
        raise FormatError(f"{len(data) - pos} trailing bytes after last movie frame")

    return Movie(width=int(width), height=int(height), frame_delay=int(frame_delay), frames=frames)
