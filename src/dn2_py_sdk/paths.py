from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


ARCHIVE_FILENAME = "NUKEM2.CMP"
REPLACEMENTS_DIR_NAME = "asset_replacements"


def resolve_existing_case_insensitive(base: Path, filename: str) -> Path:
    """Resolve `filename` under `base`, trying a case-insensitive match if needed.

    Game files ship in upper case (`CZONE1.MNI`) but are often unpacked with
    lower case names on case-sensitive file systems.
    """

    direct = base / filename
    if direct.exists():
        return direct

    # Only attempt scanning when the directory exists.
    if not base.is_dir():
        return direct

    target = filename.lower()
    try:
        for child in base.iterdir():
            if child.name.lower() == target:
                return child
    except OSError:
        pass

    return direct


@dataclass(frozen=True, slots=True)
class GamePaths:
    """Resolves the on-disk layout of a game installation.

    - `<game_dir>/NUKEM2.CMP` is the packed archive.
    - `<game_dir>/<NAME>` is an unpacked file overriding the archive entry.
    - `<replacements_dir>/*.png` are convention-named image replacements.
    """

    game_dir: Path
    replacements_dir: Path

    @classmethod
    def from_game_dir(
        cls, game_dir: str | Path, replacements_dir: str | Path | None = None
    ) -> "GamePaths":
        base = Path(game_dir)
        if replacements_dir is None:
            repl = base / REPLACEMENTS_DIR_NAME
        else:
            repl = Path(replacements_dir)
        return cls(game_dir=base, replacements_dir=repl)

    @property
    def archive_path(self) -> Path:
        return resolve_existing_case_insensitive(self.game_dir, ARCHIVE_FILENAME)

    def unpacked_file(self, name: str) -> Path | None:
        """Return the unpacked override for archive entry `name`, if present."""

        p = resolve_existing_case_insensitive(self.game_dir, name)
        return p if p.is_file() else None

    def replacement_file(self, filename: str) -> Path | None:
        p = self.replacements_dir / filename
        return p if p.is_file() else None
