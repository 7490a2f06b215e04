from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntFlag

from ..errors import BoundsError, FormatError
from ..images.image import Image, Rgba
from ..images.palette import INGAME_PALETTE
from .ega_codec import TileImageType, bytes_per_tile, decode_tiled_image
from .game_traits import CZONE, CZoneLayout, tiles_to_pixels


class TileAttributes(IntFlag):
    """Per-tile flag word stored in a CZone attribute table."""

    NONE = 0
    SOLID_TOP = 0x0001
    SOLID_BOTTOM = 0x0002
    SOLID_RIGHT = 0x0004
    SOLID_LEFT = 0x0008
    ANIMATED = 0x0010
    FOREGROUND = 0x0020
    FLAMMABLE = 0x0040
    CLIMBABLE = 0x0080
    CONVEYOR_LEFT = 0x0100
    CONVEYOR_RIGHT = 0x0200
    SLOW_ANIMATION = 0x0400
    LADDER = 0x4000


@dataclass(frozen=True, slots=True)
class TileSet:
    """A composite tile atlas (solid tiles above masked tiles) and its attributes."""

    image: Image
    attributes: list[int]

    def attributes_of(self, tile_index: int) -> TileAttributes:
        if tile_index < 0 or tile_index >= len(self.attributes):
            raise BoundsError(f"tile index {tile_index} outside 0..{len(self.attributes) - 1}")
        return TileAttributes(self.attributes[tile_index])

    def is_solid_top(self, tile_index: int) -> bool:
        return bool(self.attributes_of(tile_index) & TileAttributes.SOLID_TOP)

    def is_animated(self, tile_index: int) -> bool:
        return bool(self.attributes_of(tile_index) & TileAttributes.ANIMATED)

    def is_foreground(self, tile_index: int) -> bool:
        return bool(self.attributes_of(tile_index) & TileAttributes.FOREGROUND)

    def is_climbable(self, tile_index: int) -> bool:
        return bool(self.attributes_of(tile_index) & TileAttributes.CLIMBABLE)

    def is_ladder(self, tile_index: int) -> bool:
        return bool(self.attributes_of(tile_index) & TileAttributes.LADDER)


def read_tile_attributes(data: bytes, layout: CZoneLayout = CZONE) -> list[int]:
    """Read the attribute table that opens a CZone file.

    Solid tiles have a 2 byte entry. Masked tiles have a 2 byte entry followed
    by 8 bytes that are skipped.
    """

    if len(data) < layout.attribute_bytes_total:
        raise FormatError(
            f"tile attribute table truncated: need {layout.attribute_bytes_total} bytes, have {len(data)}"
        )

    attributes: list[int] = []
    pos = 0
    for index in range(layout.num_tiles_total):
        (value,) = struct.unpack_from("<H", data, pos)
        attributes.append(int(value))
        pos += layout.solid_attribute_bytes if index < layout.num_solid_tiles else layout.masked_attribute_bytes
    return attributes


def assemble_tileset_image(
    data: bytes,
    layout: CZoneLayout = CZONE,
    palette: list[Rgba] = INGAME_PALETTE,
) -> Image:
    """Decode the solid and masked tile regions and stack them into one atlas."""

    tile_bytes = bytes_per_tile(palette)
    tiles_begin = layout.attribute_bytes_total
    masked_begin = tiles_begin + layout.num_solid_tiles * tile_bytes
    if len(data) < masked_begin:
        raise FormatError(f"solid tile region truncated: need {masked_begin} bytes, have {len(data)}")

    solid = decode_tiled_image(data[tiles_begin:masked_begin], layout.image_width_tiles, palette, TileImageType.UNMASKED)
    masked = decode_tiled_image(data[masked_begin:], layout.image_width_tiles, palette, TileImageType.MASKED)

    full = Image.blank(tiles_to_pixels(layout.image_width_tiles), solid.height + masked.height)
    full.blit(solid, 0, 0)
    full.blit(masked, 0, solid.height)
    return full


def decode_tileset(
    data: bytes,
    *,
    replacement_image: Image | None = None,
    layout: CZoneLayout = CZONE,
    palette: list[Rgba] = INGAME_PALETTE,
) -> TileSet:
    """Build a TileSet from CZone bytes.

    With `replacement_image`, pixel decoding is skipped; attributes always come
    from `data`.
    """

    attributes = read_tile_attributes(data, layout)
    if replacement_image is not None:
        return TileSet(image=replacement_image, attributes=attributes)
    return TileSet(image=assemble_tileset_image(data, layout, palette), attributes=attributes)
