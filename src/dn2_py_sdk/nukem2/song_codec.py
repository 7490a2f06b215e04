from __future__ import annotations

import struct
from dataclasses import dataclass

from ..errors import FormatError


IMF_RATE = 280  # command ticks per second

_COMMAND_STRUCT = struct.Struct("<BBH")  # register, value, delay


@dataclass(frozen=True, slots=True)
class ImfCommand:
    """Write `value` to OPL2 register `reg`, then wait `delay` ticks."""

    reg: int
    value: int
    delay: int


@dataclass(frozen=True, slots=True)
class Song:
    commands: list[ImfCommand]

    @property
    def duration_ticks(self) -> int:
        return sum(c.delay for c in self.commands)

    @property
    def duration_seconds(self) -> float:
        return self.duration_ticks / IMF_RATE


def decode_song(data: bytes) -> Song:
    """Decode an IMF music file (headerless sequence of 4 byte commands)."""

    if len(data) % _COMMAND_STRUCT.size:
        raise FormatError(f"IMF data length {len(data)} is not a multiple of {_COMMAND_STRUCT.size}")
    commands = [ImfCommand(reg, value, delay) for reg, value, delay in _COMMAND_STRUCT.iter_unpack(data)]
    return Song(commands=commands)
