from __future__ import annotations

import struct

import pytest

from dn2_py_sdk.errors import FormatError
from dn2_py_sdk.nukem2.song_codec import IMF_RATE, ImfCommand, decode_song


def test_decode_song_commands() -> None:
    data = struct.pack("<BBH", 0x20, 0x01, 0) + struct.pack("<BBH", 0xB0, 0x32, 140) + struct.pack("<BBH", 0xB0, 0x12, 140)

    song = decode_song(data)

    assert song.commands == [ImfCommand(0x20, 0x01, 0), ImfCommand(0xB0, 0x32, 140), ImfCommand(0xB0, 0x12, 140)]
    assert song.duration_ticks == 280
    assert song.duration_seconds == 280 / IMF_RATE


def test_empty_song() -> None:
    assert decode_song(b"").commands == []


def test_song_with_partial_command_is_format_error() -> None:
    with pytest.raises(FormatError):
        decode_song(b"\x00\x00\x00\x00\x01")
