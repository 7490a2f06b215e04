"""Single entry point for loading game assets.

Every asset is resolved in this order:

1. an unpacked file with the asset's name in the game directory,
2. for tilesets and backdrops, a convention-named PNG in the replacements
   directory (see :mod:`dn2_py_sdk.nukem2.replacements`),
3. the entry in `NUKEM2.CMP`.

The loader holds no cache; every call decodes a fresh value.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..cmp.package import CmpPackage
from ..errors import NotFoundError
from ..images.image import Image, Rgba
from ..images.palette import INGAME_PALETTE, PALETTE256_BYTES, load_6bit_palette256
from ..paths import GamePaths
from ..settings import Dn2PySdkSettings
from . import actors
from .actors import ActorImagePackage
from .audio_package import AUDIO_DATA_FILE, AUDIO_DICT_FILE, AudioPackage, Synthesizer
from .ega_codec import (
    TileImageType,
    decode_fullscreen_image,
    decode_linear_vga_image,
    decode_tiled_image,
    fullscreen_image_palette,
)
from .game_traits import ANTI_PIRACY_SCREEN_FILENAME, VIEWPORT_HEIGHT_PX, VIEWPORT_WIDTH_PX, VIEWPORT_WIDTH_TILES
from .movie_codec import Movie, decode_movie
from .replacements import ImageReplacement, RawReplacement, ReplacementResolver
from .script_loader import ScriptBundle, decode_script_text, parse_script_bundle
from .song_codec import Song, decode_song
from .sound_ids import SoundId, digitized_sound_filename, intro_sound_filename
from .tileset import TileSet, decode_tileset
from .voc_codec import AudioBuffer, decode_voc


logger = logging.getLogger(__name__)


class ResourceLoader:
    def __init__(
        self,
        game_dir: str | Path,
        replacements_dir: str | Path | None = None,
        *,
        synthesizer: Synthesizer | None = None,
    ) -> None:
        self.paths = GamePaths.from_game_dir(game_dir, replacements_dir)
        self.resolver = ReplacementResolver(self.paths)
        self.package = CmpPackage.from_path(self.paths.archive_path)
        self.synthesizer = synthesizer

    @classmethod
    def from_settings(
        cls, settings: Dn2PySdkSettings, *, synthesizer: Synthesizer | None = None
    ) -> "ResourceLoader":
        if settings.game_dir is None:
            raise RuntimeError("DN2_DIR is not configured")
        return cls(settings.game_dir, settings.replacements_dir, synthesizer=synthesizer)

    # Raw files

    def file(self, name: str) -> bytes:
        raw = self.resolver.raw_replacement(name)
        if raw is not None:
            return raw.data
        return self._archive_file(name)

    def file_as_text(self, name: str) -> str:
        return decode_script_text(self.file(name))

    def has_file(self, name: str) -> bool:
        return self.paths.unpacked_file(name) is not None or self.package.has_file(name)

    # Images

    def load_tiled_fullscreen_image(self, name: str, palette: list[Rgba] | None = None) -> Image:
        return decode_tiled_image(
            self.file(name),
            VIEWPORT_WIDTH_TILES,
            INGAME_PALETTE if palette is None else palette,
            TileImageType.UNMASKED,
        )

    def load_standalone_fullscreen_image(self, name: str) -> Image:
        return decode_fullscreen_image(self.file(name))

    def load_palette_from_fullscreen_image(self, name: str) -> list[Rgba]:
        return fullscreen_image_palette(self.file(name))

    def load_anti_piracy_image(self) -> Image:
        # Unlike every other full-screen image: a 256 color palette followed by
        # one index byte per pixel, not planar.
        data = self.file(ANTI_PIRACY_SCREEN_FILENAME)
        palette = load_6bit_palette256(data)
        return decode_linear_vga_image(
            data, palette, width=VIEWPORT_WIDTH_PX, height=VIEWPORT_HEIGHT_PX, offset=PALETTE256_BYTES
        )

    def load_backdrop(self, name: str) -> Image:
        found = self.resolver.resolve(name)
        if isinstance(found, ImageReplacement):
            return found.image
        data = found.data if isinstance(found, RawReplacement) else self._archive_file(name)
        return decode_tiled_image(data, VIEWPORT_WIDTH_TILES, INGAME_PALETTE, TileImageType.UNMASKED)

    def load_tileset(self, name: str) -> TileSet:
        found = self.resolver.resolve(name)
        if isinstance(found, RawReplacement):
            return decode_tileset(found.data)

        data = self._archive_file(name)
        if isinstance(found, ImageReplacement):
            return decode_tileset(data, replacement_image=found.image)
        return decode_tileset(data)

    def actor_images(self) -> ActorImagePackage:
        return ActorImagePackage(
            self.file(actors.IMAGE_DATA_FILE),
            self.file(actors.ACTOR_INFO_FILE),
            self.resolver,
        )

    # Audio

    def load_music(self, name: str) -> Song:
        return decode_song(self.file(name))

    def load_sound_by_name(self, name: str) -> AudioBuffer:
        return decode_voc(self.file(name))

    def load_sound(self, sound_id: SoundId) -> AudioBuffer:
        """Intro file, then `SB_<id+1>.MNI`, then the synthesizer.

        Raises RuntimeError when synthesis is needed but no synthesizer was given.
        """

        intro_name = intro_sound_filename(sound_id)
        if intro_name is not None:
            logger.debug("Sound %s: intro file %s", sound_id.name, intro_name)
            return self.load_sound_by_name(intro_name)

        digitized_name = digitized_sound_filename(sound_id)
        if self.has_file(digitized_name):
            logger.debug("Sound %s: digitized file %s", sound_id.name, digitized_name)
            return self.load_sound_by_name(digitized_name)

        if self.synthesizer is None:
            raise RuntimeError(f"no digitized file for {sound_id.name} and no synthesizer configured")
        logger.debug("Sound %s: synthesized", sound_id.name)
        return self.adlib_sounds().load_adlib_sound(sound_id, self.synthesizer)

    def adlib_sounds(self) -> AudioPackage:
        return AudioPackage(self.file(AUDIO_DICT_FILE), self.file(AUDIO_DATA_FILE))

    # Other containers

    def load_movie(self, name: str) -> Movie:
        # Movies ship next to the archive, never inside it.
        path = self.paths.unpacked_file(name)
        if path is None:
            raise NotFoundError(f"movie {name!r} not found in {self.paths.game_dir}")
        return decode_movie(path.read_bytes())

    def load_script_bundle(self, name: str) -> ScriptBundle:
        return parse_script_bundle(self.file_as_text(name))

    def _archive_file(self, name: str) -> bytes:
        try:
            return self.package.file(name)
        except NotFoundError as e:
            raise NotFoundError(f"{name!r} not found as unpacked file or in archive") from e
