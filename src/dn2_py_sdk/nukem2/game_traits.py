"""Fixed layout constants of the Duke Nukem II data files."""

from __future__ import annotations

from dataclasses import dataclass


TILE_SIZE_PX = 8

EGA_PLANES = 4
PIXELS_PER_EGA_BYTE = 8

VIEWPORT_WIDTH_PX = 320
VIEWPORT_HEIGHT_PX = 200
VIEWPORT_WIDTH_TILES = VIEWPORT_WIDTH_PX // TILE_SIZE_PX
VIEWPORT_HEIGHT_TILES = VIEWPORT_HEIGHT_PX // TILE_SIZE_PX

# Full-screen planar images: 4 planes of one bit per pixel.
FULL_SCREEN_IMAGE_DATA_SIZE = (VIEWPORT_WIDTH_PX * VIEWPORT_HEIGHT_PX) // (
    PIXELS_PER_EGA_BYTE // EGA_PLANES
)

ANTI_PIRACY_SCREEN_FILENAME = "LCR.MNI"


def tiles_to_pixels(tiles: int) -> int:
    return tiles * TILE_SIZE_PX


@dataclass(frozen=True, slots=True)
class CZoneLayout:
    """Byte layout of a `CZONE*.MNI` tileset file.

    `[attribute table][solid tile pixels][masked tile pixels]`
    """

    num_solid_tiles: int = 1000
    num_masked_tiles: int = 160
    image_width_tiles: int = 40
    solid_attribute_bytes: int = 2
    # Masked entries carry 8 extra bytes after their attribute word.
    masked_attribute_bytes: int = 2 + 8

    @property
    def num_tiles_total(self) -> int:
        return self.num_solid_tiles + self.num_masked_tiles

    @property
    def attribute_bytes_total(self) -> int:
        return (
            self.num_solid_tiles * self.solid_attribute_bytes
            + self.num_masked_tiles * self.masked_attribute_bytes
        )

    @property
    def solid_image_height_tiles(self) -> int:
        return -(-self.num_solid_tiles // self.image_width_tiles)

    @property
    def masked_image_height_tiles(self) -> int:
        return -(-self.num_masked_tiles // self.image_width_tiles)


CZONE = CZoneLayout()
