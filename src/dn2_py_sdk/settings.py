from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .paths import REPLACEMENTS_DIR_NAME


@dataclass(frozen=True, slots=True)
class Dn2PySdkSettings:
    """Simple settings for tool authors.

    Recommended env vars:
    - `DN2_DIR`: Duke Nukem II game data folder (holds `NUKEM2.CMP`).
    - `DN2_REPLACEMENTS_DIR`: folder with user supplied replacement PNGs.

    Paths can include placeholders:
    - `{game_dir}` expands to the resolved DN2_DIR.

    When `DN2_REPLACEMENTS_DIR` is unset, replacements are looked up in
    `<DN2_DIR>/asset_replacements`.
    """

    game_dir: Path | None = None
    replacements_dir: Path | None = None

    @staticmethod
    def _expand_placeholders(value: str, *, game_dir: Path | None) -> str:
        if game_dir is not None:
            value = value.replace("{game_dir}", str(game_dir))
        return value

    @classmethod
    def load(cls, *, dotenv_path: str | Path | None = None) -> "Dn2PySdkSettings":
        """Load settings from env vars, after merging a `.env` file if present.

        Values already in the environment win over the `.env` file.
        """

        if dotenv_path is None:
            dotenv_path = ".env"
        if Path(dotenv_path).is_file():
            load_dotenv(dotenv_path=dotenv_path, override=False)

        raw_game_dir = os.getenv("DN2_DIR")
        game_dir = Path(raw_game_dir).expanduser() if raw_game_dir else None

        raw_repl = os.getenv("DN2_REPLACEMENTS_DIR")
        if raw_repl:
            raw_repl = cls._expand_placeholders(raw_repl, game_dir=game_dir)
            replacements_dir: Path | None = Path(raw_repl).expanduser()
        elif game_dir is not None:
            replacements_dir = game_dir / REPLACEMENTS_DIR_NAME
        else:
            replacements_dir = None

        return cls(game_dir=game_dir, replacements_dir=replacements_dir)
