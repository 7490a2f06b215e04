from __future__ import annotations

from .package import CmpEntry, CmpPackage, read_cmp_entries

__all__ = [
    "CmpEntry",
    "CmpPackage",
    "read_cmp_entries",
]
