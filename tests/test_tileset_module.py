from __future__ import annotations

import struct

import pytest

from conftest import encode_planar
from dn2_py_sdk.errors import BoundsError, FormatError
from dn2_py_sdk.images import INGAME_PALETTE, Image
from dn2_py_sdk.nukem2.game_traits import CZONE, CZoneLayout
from dn2_py_sdk.nukem2.tileset import (
    TileAttributes,
    assemble_tileset_image,
    decode_tileset,
    read_tile_attributes,
)


SMALL = CZoneLayout(num_solid_tiles=3, num_masked_tiles=2, image_width_tiles=2)


def _attribute_table(layout: CZoneLayout, values: list[int]) -> bytes:
    out = bytearray()
    for i, value in enumerate(values):
        out += struct.pack("<H", value)
        if i >= layout.num_solid_tiles:
            out += b"\xee" * 8
    return bytes(out)


def _czone(layout: CZoneLayout, attributes: list[int], solid_index: int = 1, masked_index: int = 0) -> bytes:
    solid = encode_planar([solid_index] * 64, 4) * layout.num_solid_tiles
    masked = encode_planar([masked_index] * 64, 4) * layout.num_masked_tiles
    return _attribute_table(layout, attributes) + solid + masked


def test_default_czone_layout() -> None:
    assert CZONE.num_tiles_total == 1160
    assert CZONE.attribute_bytes_total == 3600
    assert CZONE.solid_image_height_tiles == 25
    assert CZONE.masked_image_height_tiles == 4


def test_attribute_table_skips_masked_extra_bytes() -> None:
    values = [0x0001, 0x0010, 0x0020, 0x4000, 0x0080]
    attributes = read_tile_attributes(_attribute_table(SMALL, values), SMALL)

    assert attributes == values
    assert len(attributes) == SMALL.num_tiles_total


def test_attribute_table_truncated_is_format_error() -> None:
    with pytest.raises(FormatError):
        read_tile_attributes(b"\x00" * (SMALL.attribute_bytes_total - 1), SMALL)


def test_atlas_stacks_masked_tiles_below_solid_tiles() -> None:
    data = _czone(SMALL, [0] * 5, solid_index=1, masked_index=0)

    image = assemble_tileset_image(data, SMALL)

    # 3 solid tiles in a 2-wide grid -> 2 rows; 2 masked tiles -> 1 row.
    assert image.width == 16
    assert image.height == 16 + 8
    assert image.pixel_at(0, 0) == INGAME_PALETTE[1]
    assert image.pixel_at(0, 16) == (0, 0, 0, 0)


def test_full_size_tileset_dimensions() -> None:
    data = _czone(CZONE, [0] * CZONE.num_tiles_total)

    tileset = decode_tileset(data)

    assert len(tileset.attributes) == CZONE.num_tiles_total
    assert tileset.image.width == 320
    assert tileset.image.height == 25 * 8 + 4 * 8


def test_replacement_image_keeps_archive_attributes() -> None:
    values = [7, 6, 5, 4, 3]
    replacement = Image.blank(4, 4, (1, 2, 3, 255))

    tileset = decode_tileset(_attribute_table(SMALL, values), replacement_image=replacement, layout=SMALL)

    assert tileset.image is replacement
    assert tileset.attributes == values


def test_tileset_attribute_lookup() -> None:
    values = [
        int(TileAttributes.SOLID_TOP | TileAttributes.CLIMBABLE),
        int(TileAttributes.ANIMATED),
        0,
        int(TileAttributes.FOREGROUND),
        int(TileAttributes.LADDER),
    ]
    tileset = decode_tileset(_czone(SMALL, values), layout=SMALL)

    assert tileset.is_solid_top(0)
    assert tileset.is_climbable(0)
    assert tileset.is_animated(1)
    assert tileset.is_foreground(3)
    assert tileset.is_ladder(4)
    assert tileset.attributes_of(2) == TileAttributes.NONE

    with pytest.raises(BoundsError):
        tileset.attributes_of(5)
