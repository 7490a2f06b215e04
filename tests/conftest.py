from __future__ import annotations

import struct
from pathlib import Path
from typing import Callable

import pytest


def build_cmp(files: dict[str, bytes]) -> bytes:
    """Pack `files` into a CMP archive with an empty-name terminator entry."""

    table_size = (len(files) + 1) * 20
    table = bytearray()
    data = bytearray()
    for name, payload in files.items():
        offset = table_size + len(data)
        table += struct.pack("<12sII", name.encode("ascii"), offset, len(payload))
        data += payload
    table += b"\x00" * 20
    return bytes(table + data)


def encode_planar(indices: list[int], planes: int) -> bytes:
    """Inverse of the planar decoder: split indices into sequential bit-planes."""

    plane_size = len(indices) // 8
    out = bytearray(planes * plane_size)
    for plane in range(planes):
        for i, index in enumerate(indices):
            if (index >> plane) & 1:
                out[plane * plane_size + i // 8] |= 0x80 >> (i % 8)
    return bytes(out)


def encode_6bit_palette(colors: list[tuple[int, int, int]]) -> bytes:
    return bytes(channel for color in colors for channel in color)


def build_voc(samples: bytes, *, divisor: int = 256 - 100) -> bytes:
    """A minimal VOC file: one 8-bit sound data block and a terminator."""

    header = b"Creative Voice File\x1a" + struct.pack("<HHH", 26, 0x010A, 0x1129)
    length = len(samples) + 2
    block = bytes([1]) + length.to_bytes(3, "little") + bytes([divisor, 0]) + samples
    return header + block + b"\x00"


@pytest.fixture
def make_game_dir(tmp_path: Path) -> Callable[..., Path]:
    """Create a game dir holding NUKEM2.CMP plus optional unpacked/replacement files."""

    def make(
        archive: dict[str, bytes],
        *,
        unpacked: dict[str, bytes] | None = None,
        replacements: dict[str, bytes] | None = None,
    ) -> Path:
        game_dir = tmp_path / "game"
        game_dir.mkdir(exist_ok=True)
        (game_dir / "NUKEM2.CMP").write_bytes(build_cmp(archive))
        for name, payload in (unpacked or {}).items():
            (game_dir / name).write_bytes(payload)
        if replacements:
            repl_dir = game_dir / "asset_replacements"
            repl_dir.mkdir(exist_ok=True)
            for name, payload in replacements.items():
                (repl_dir / name).write_bytes(payload)
        return game_dir

    return make
