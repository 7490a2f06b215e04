"""Duke Nukem II asset decoders and the `ResourceLoader` facade.

The decoders are pure byte -> value functions; `ResourceLoader` adds file
resolution (unpacked overrides, replacement PNGs, `NUKEM2.CMP`).
"""

from __future__ import annotations

from .actors import ActorData, ActorFrame, ActorImagePackage
from .audio_package import AdlibInstrument, AdlibSound, AudioPackage, Synthesizer
from .ega_codec import TileImageType, decode_planar, decode_tiled_image
from .movie_codec import Movie, MovieFrame, decode_movie
from .replacements import ReplacementKey, ReplacementKind, ReplacementResolver
from .resource_loader import ResourceLoader
from .script_loader import ScriptBundle, parse_script_bundle
from .song_codec import ImfCommand, Song, decode_song
from .sound_ids import SoundId
from .tileset import TileAttributes, TileSet, decode_tileset
from .voc_codec import AudioBuffer, decode_voc

__all__ = [
    "ActorData",
    "ActorFrame",
    "ActorImagePackage",
    "AdlibInstrument",
    "AdlibSound",
    "AudioBuffer",
    "AudioPackage",
    "ImfCommand",
    "Movie",
    "MovieFrame",
    "ReplacementKey",
    "ReplacementKind",
    "ReplacementResolver",
    "ResourceLoader",
    "ScriptBundle",
    "Song",
    "SoundId",
    "Synthesizer",
    "TileAttributes",
    "TileImageType",
    "TileSet",
    "decode_movie",
    "decode_planar",
    "decode_song",
    "decode_tiled_image",
    "decode_tileset",
    "decode_voc",
    "parse_script_bundle",
]
