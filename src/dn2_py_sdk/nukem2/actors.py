from __future__ import annotations

import logging
import struct
from dataclasses import dataclass

from ..errors import BoundsError, FormatError
from ..images.image import Image, Rgba
from ..images.palette import INGAME_PALETTE
from .ega_codec import TileImageType, bytes_per_tile, decode_tiled_image
from .replacements import ReplacementResolver


logger = logging.getLogger(__name__)

ACTOR_INFO_FILE = "ACTRINFO.MNI"
IMAGE_DATA_FILE = "ACTORS.MNI"

_FRAME_HEADER_STRUCT = struct.Struct("<HhhHHI2x")  # draw index, x/y offset, h/w in tiles, data offset


@dataclass(frozen=True, slots=True)
class ActorFrameHeader:
    draw_index: int
    draw_offset: tuple[int, int]
    width_tiles: int
    height_tiles: int
    data_offset: int


@dataclass(frozen=True, slots=True)
class ActorFrame:
    draw_offset: tuple[int, int]
    image: Image


@dataclass(frozen=True, slots=True)
class ActorData:
    draw_index: int
    frames: list[ActorFrame]


def parse_actor_info(info: bytes) -> list[list[ActorFrameHeader]]:
    """Parse `ACTRINFO.MNI` into frame headers per actor id.

    The file opens with a table of u16 offsets measured in 16-bit words; the
    first offset therefore also gives the table length. Each actor's block is
    a run of 16 byte frame headers up to the next actor's offset.
    """

    if len(info) < 2:
        raise FormatError("actor info truncated")

    (first,) = struct.unpack_from("<H", info, 0)
    count = first
    if count * 2 > len(info):
        raise FormatError(f"actor info offset table ({count} entries) exceeds file")
    offsets = [int(v) * 2 for v in struct.unpack_from(f"<{count}H", info, 0)]

    actors: list[list[ActorFrameHeader]] = []
    for i, start in enumerate(offsets):
        if start == 0:
            actors.append([])
            continue
        end = next((o for o in offsets[i + 1 :] if o != 0), len(info))
        if start > end or end > len(info):
            raise FormatError(f"actor {i} info spans {start}..{end} outside file")

        frames: list[ActorFrameHeader] = []
        for pos in range(start, end - _FRAME_HEADER_STRUCT.size + 1, _FRAME_HEADER_STRUCT.size):
            draw_index, x, y, height, width, data_offset = _FRAME_HEADER_STRUCT.unpack_from(info, pos)
            frames.append(
                ActorFrameHeader(
                    draw_index=int(draw_index),
                    draw_offset=(int(x), int(y)),
                    width_tiles=int(width),
                    height_tiles=int(height),
                    data_offset=int(data_offset),
                )
            )
        actors.append(frames)
    return actors


class ActorImagePackage:
    """Actor sprites from `ACTRINFO.MNI` + `ACTORS.MNI`.

    Each frame is replaced by `actor<id>_frame<n>.png` when the resolver finds
    one.
    """

    def __init__(
        self,
        image_data: bytes,
        actor_info: bytes,
        resolver: ReplacementResolver | None = None,
        palette: list[Rgba] = INGAME_PALETTE,
    ) -> None:
        self._image_data = image_data
        self._headers = parse_actor_info(actor_info)
        self._resolver = resolver
        self._palette = palette

    def __len__(self) -> int:
        return len(self._headers)

    def frame_headers(self, actor_id: int) -> list[ActorFrameHeader]:
        if actor_id < 0 or actor_id >= len(self._headers):
            raise BoundsError(f"actor id {actor_id} outside 0..{len(self._headers) - 1}")
        return self._headers[actor_id]

    def _decode_frame(self, header: ActorFrameHeader) -> Image:
        size = header.width_tiles * header.height_tiles * bytes_per_tile(self._palette)
        end = header.data_offset + size
        if end > len(self._image_data):
            raise FormatError(f"actor frame data {header.data_offset}..{end} outside image data")
        if header.width_tiles == 0:
            return Image.blank(0, 0)
        return decode_tiled_image(
            self._image_data[header.data_offset : end],
            header.width_tiles,
            self._palette,
            TileImageType.MASKED,
        )

    def load_actor(self, actor_id: int) -> ActorData:
        headers = self.frame_headers(actor_id)
        frames: list[ActorFrame] = []
        for index, header in enumerate(headers):
            image = None
            if self._resolver is not None:
                image = self._resolver.actor_frame_image(actor_id, index)
            if image is None:
                image = self._decode_frame(header)
            frames.append(ActorFrame(draw_offset=header.draw_offset, image=image))

        draw_index = headers[0].draw_index if headers else 0
        logger.debug("Loaded actor %d with %d frames", actor_id, len(frames))
        return ActorData(draw_index=draw_index, frames=frames)
