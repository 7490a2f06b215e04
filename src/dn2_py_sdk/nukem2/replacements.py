"""User supplied asset replacements.

Before an asset is taken from `NUKEM2.CMP`, two kinds of overrides are
consulted:

1. An unpacked file with the asset's exact name in the game directory. Its
   bytes are used verbatim, exactly as if they had come from the archive.
2. A PNG in the replacements directory, named by convention:

   - `tileset<N>.png` replaces `CZONE<N>.MNI` (N is one letter or digit)
   - `backdrop<N>.png` replaces `DROP<N>.MNI`
   - `actor<actor_id>_frame<frame>.png` replaces one actor animation frame

   PNGs may hold arbitrary 32-bit RGBA. A PNG that fails to load is treated
   as absent.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..images.image import UNREADABLE_IMAGE_ERRORS, Image
from ..paths import GamePaths


logger = logging.getLogger(__name__)


class ReplacementKind(Enum):
    TILESET = "tileset"
    BACKDROP = "backdrop"
    ACTOR_FRAME = "actor"


_NAME_PATTERNS: tuple[tuple[ReplacementKind, re.Pattern[str]], ...] = (
    (ReplacementKind.TILESET, re.compile(r"CZONE([0-9A-Z])\.MNI", re.IGNORECASE)),
    (ReplacementKind.BACKDROP, re.compile(r"DROP([0-9]+)\.MNI", re.IGNORECASE)),
)


@dataclass(frozen=True, slots=True)
class ReplacementKey:
    """Identifies one replaceable image."""

    kind: ReplacementKind
    number: str
    frame: int | None = None

    @property
    def filename(self) -> str:
        if self.kind is ReplacementKind.ACTOR_FRAME:
            return f"actor{self.number}_frame{self.frame}.png"
        return f"{self.kind.value}{self.number}.png"

    @classmethod
    def for_asset_name(cls, name: str) -> "ReplacementKey | None":
        """Derive the key for a tileset or backdrop asset name, if it has one."""

        for kind, pattern in _NAME_PATTERNS:
            match = pattern.fullmatch(name)
            if match is not None:
                return cls(kind=kind, number=match.group(1))
        return None

    @classmethod
    def for_actor_frame(cls, actor_id: int, frame: int) -> "ReplacementKey":
        return cls(kind=ReplacementKind.ACTOR_FRAME, number=str(int(actor_id)), frame=int(frame))


@dataclass(frozen=True, slots=True)
class RawReplacement:
    """An unpacked file standing in for an archive entry."""

    path: Path
    data: bytes


@dataclass(frozen=True, slots=True)
class ImageReplacement:
    key: ReplacementKey
    path: Path
    image: Image


Replacement = RawReplacement | ImageReplacement


@dataclass(frozen=True, slots=True)
class ReplacementResolver:
    paths: GamePaths

    def raw_replacement(self, name: str) -> RawReplacement | None:
        path = self.paths.unpacked_file(name)
        if path is None:
            return None
        logger.debug("Using unpacked file %s for %s", path, name)
        return RawReplacement(path=path, data=path.read_bytes())

    def image_replacement(self, key: ReplacementKey) -> ImageReplacement | None:
        path = self.paths.replacement_file(key.filename)
        if path is None:
            return None

        try:
            image = Image.open(path)
        except UNREADABLE_IMAGE_ERRORS as e:
            logger.debug("Ignoring unreadable replacement %s: %s", path, e)
            return None

        logger.debug("Using replacement image %s", path)
        return ImageReplacement(key=key, path=path, image=image)

    def resolve(self, name: str) -> Replacement | None:
        """Return the override for asset `name`, if any.

        The unpacked file wins over a convention-named image.
        """

        raw = self.raw_replacement(name)
        if raw is not None:
            return raw

        key = ReplacementKey.for_asset_name(name)
        if key is None:
            return None
        return self.image_replacement(key)

    def actor_frame_image(self, actor_id: int, frame: int) -> Image | None:
        found = self.image_replacement(ReplacementKey.for_actor_frame(actor_id, frame))
        return None if found is None else found.image
