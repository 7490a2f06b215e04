"""dn2-py-sdk: Duke Nukem II asset framework.

Core concept: assets are named entries of the packed `NUKEM2.CMP` archive.
Any entry can be overridden by an unpacked file of the same name next to the
archive, and tilesets/backdrops/actor frames by convention-named PNGs.
"""

from __future__ import annotations

from .settings import Dn2PySdkSettings

__all__ = ["__version__", "Dn2PySdkSettings"]

__version__ = "0.1.0"
