from __future__ import annotations

from enum import Enum

from ..errors import FormatError
from ..images.image import TRANSPARENT, Image, Rgba, image_from_indices
from ..images.palette import load_6bit_palette16
from .game_traits import (
    FULL_SCREEN_IMAGE_DATA_SIZE,
    TILE_SIZE_PX,
    VIEWPORT_HEIGHT_PX,
    VIEWPORT_WIDTH_PX,
)


class TileImageType(Enum):
    """How palette index 0 is treated when decoding."""

    UNMASKED = "unmasked"  # index 0 is an ordinary opaque color
    MASKED = "masked"  # index 0 is fully transparent


def plane_count_for(palette: list[Rgba]) -> int:
    size = len(palette)
    if size < 2 or size & (size - 1):
        raise ValueError(f"palette size must be a power of two, got {size}")
    return size.bit_length() - 1


def planar_byte_count(width: int, height: int, planes: int) -> int:
    pixels = width * height
    if pixels % 8:
        raise ValueError(f"{width}x{height} is not a whole number of plane bytes")
    return planes * pixels // 8


def decode_planar_indices(data: bytes, width: int, height: int, planes: int, *, offset: int = 0) -> list[int]:
    """Combine `planes` sequential bit-planes into palette indices.

    Each plane holds one bit per pixel, row-major, 8 pixels per byte with the
    leftmost pixel in the most significant bit. Plane k supplies bit k of
    the index.
    """

    pixel_count = width * height
    plane_size = pixel_count // 8
    needed = planar_byte_count(width, height, planes)
    if offset < 0 or len(data) - offset < needed:
        raise FormatError(
            f"planar bitmap truncated: need {needed} bytes, have {max(0, len(data) - offset)}"
        )

    indices = [0] * pixel_count
    for plane in range(planes):
        bit_value = 1 << plane
        start = offset + plane * plane_size
        for byte_idx in range(plane_size):
            byte_val = data[start + byte_idx]
            if not byte_val:
                continue
            base = byte_idx * 8
            for bit in range(8):
                if byte_val & (0x80 >> bit):
                    indices[base + bit] |= bit_value
    return indices


def _effective_palette(palette: list[Rgba], image_type: TileImageType) -> list[Rgba]:
    if image_type is TileImageType.MASKED:
        return [TRANSPARENT] + list(palette[1:])
    return palette


def decode_planar(
    data: bytes,
    width: int,
    height: int,
    palette: list[Rgba],
    image_type: TileImageType = TileImageType.UNMASKED,
    *,
    offset: int = 0,
) -> Image:
    """Decode a planar bitmap of `width` x `height` pixels.

    The number of planes follows from the palette size (16 colors -> 4 planes).
    """

    planes = plane_count_for(palette)
    indices = decode_planar_indices(data, width, height, planes, offset=offset)
    return image_from_indices(width, height, indices, _effective_palette(palette, image_type))


def bytes_per_tile(palette: list[Rgba], tile_size: int = TILE_SIZE_PX) -> int:
    return planar_byte_count(tile_size, tile_size, plane_count_for(palette))


def decode_tiled_image(
    data: bytes,
    width_in_tiles: int,
    palette: list[Rgba],
    image_type: TileImageType = TileImageType.UNMASKED,
    *,
    tile_size: int = TILE_SIZE_PX,
) -> Image:
    """Decode consecutive planar tiles into one image.

    Tiles are placed left to right, wrapping after `width_in_tiles`. Slots in
    the last row that no tile fills stay transparent.
    """

    if width_in_tiles <= 0:
        raise ValueError("width_in_tiles must be > 0")

    tile_bytes = bytes_per_tile(palette, tile_size)
    if len(data) % tile_bytes:
        raise FormatError(
            f"tiled image data ({len(data)} bytes) is not a multiple of {tile_bytes} bytes per tile"
        )

    tile_count = len(data) // tile_bytes
    height_in_tiles = -(-tile_count // width_in_tiles)
    image = Image.blank(width_in_tiles * tile_size, height_in_tiles * tile_size)

    for i in range(tile_count):
        tile = decode_planar(data, tile_size, tile_size, palette, image_type, offset=i * tile_bytes)
        col = i % width_in_tiles
        row = i // width_in_tiles
        image.blit(tile, col * tile_size, row * tile_size)

    return image


def decode_fullscreen_image(data: bytes) -> Image:
    """Decode a standalone 320x200 image: planar pixels then a 16-color palette."""

    palette = load_6bit_palette16(data, offset=FULL_SCREEN_IMAGE_DATA_SIZE)
    return decode_planar(data[:FULL_SCREEN_IMAGE_DATA_SIZE], VIEWPORT_WIDTH_PX, VIEWPORT_HEIGHT_PX, palette)


def fullscreen_image_palette(data: bytes) -> list[Rgba]:
    return load_6bit_palette16(data, offset=FULL_SCREEN_IMAGE_DATA_SIZE)


def decode_linear_vga_image(data: bytes, palette: list[Rgba], *, width: int, height: int, offset: int = 0) -> Image:
    """Decode one palette index byte per pixel, row-major."""

    needed = width * height
    if len(data) - offset < needed:
        raise FormatError(f"linear image truncated: need {needed} bytes, have {max(0, len(data) - offset)}")
    return image_from_indices(width, height, data[offset : offset + needed], palette)
