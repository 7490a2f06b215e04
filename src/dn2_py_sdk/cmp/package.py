from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from pathlib import Path

from ..errors import FormatError, NotFoundError


logger = logging.getLogger(__name__)

_ENTRY_STRUCT = struct.Struct("<12sII")  # name, offset, size
_ENTRY_SIZE = _ENTRY_STRUCT.size


@dataclass(frozen=True, slots=True)
class CmpEntry:
    name: str
    offset: int
    size: int

    @property
    def end(self) -> int:
        return self.offset + self.size


def _decode_name(raw: bytes) -> str:
    return raw.split(b"\x00", 1)[0].decode("ascii", errors="replace").strip().upper()


def read_cmp_entries(data: bytes) -> list[CmpEntry]:
    """Parse the directory at the start of a CMP archive.

    Each entry is 20 bytes: 12 byte ASCII name (NUL padded), u32 offset,
    u32 size. The directory ends at the first entry with an empty name, or
    where the first file's data begins.
    """

    entries: list[CmpEntry] = []
    seen: set[str] = set()

    table_end = len(data)
    pos = 0
    while pos < table_end:
        if pos + _ENTRY_SIZE > len(data):
            raise FormatError(f"CMP directory truncated at byte {pos}")

        raw_name, offset, size = _ENTRY_STRUCT.unpack_from(data, pos)
        pos += _ENTRY_SIZE

        name = _decode_name(raw_name)
        if not name:
            break

        if offset + size > len(data):
            raise FormatError(
                f"CMP entry {name!r} spans {offset}..{offset + size}, archive has {len(data)} bytes"
            )
        if offset < pos:
            raise FormatError(f"CMP entry {name!r} overlaps the directory")
        if name in seen:
            raise FormatError(f"CMP entry {name!r} is listed twice")

        seen.add(name)
        entries.append(CmpEntry(name=name, offset=int(offset), size=int(size)))
        table_end = min(table_end, int(offset))

    return entries


class CmpPackage:
    """Read-only view of a packed `.CMP` archive.

    Lookups are case-insensitive. The archive bytes are held in memory and
    never mutated, so one instance may be shared between threads.
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._entries = {e.name: e for e in read_cmp_entries(self._data)}

    @classmethod
    def from_path(cls, path: str | Path) -> "CmpPackage":
        p = Path(path)
        logger.debug("Opening archive %s", p)
        return cls(p.read_bytes())

    @property
    def entries(self) -> list[CmpEntry]:
        return list(self._entries.values())

    def names(self) -> list[str]:
        return list(self._entries)

    def has_file(self, name: str) -> bool:
        return name.strip().upper() in self._entries

    def file(self, name: str) -> bytes:
        entry = self._entries.get(name.strip().upper())
        if entry is None:
            raise NotFoundError(f"{name!r} not found in archive")
        return self._data[entry.offset : entry.end]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_file(name)

    def __len__(self) -> int:
        return len(self._entries)
