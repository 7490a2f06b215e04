from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Callable

from ..errors import BoundsError, FormatError
from .sound_ids import SoundId
from .voc_codec import AudioBuffer


AUDIO_DICT_FILE = "AUDIOHED.MNI"
AUDIO_DATA_FILE = "AUDIOT.MNI"

# AUDIOT.MNI holds PC speaker sounds first, then the AdLib versions.
NUM_SOUNDS = 34
ADLIB_SOUNDS_START = NUM_SOUNDS

_ADLIB_HEADER_STRUCT = struct.Struct("<IH")  # note count, priority
_INSTRUMENT_STRUCT = struct.Struct("<13B3x")


@dataclass(frozen=True, slots=True)
class AdlibInstrument:
    modulator_char: int
    carrier_char: int
    modulator_scale: int
    carrier_scale: int
    modulator_attack: int
    carrier_attack: int
    modulator_sustain: int
    carrier_sustain: int
    modulator_wave: int
    carrier_wave: int
    connection: int
    voice: int
    mode: int


@dataclass(frozen=True, slots=True)
class AdlibSound:
    """Instrument and note stream for one synthesized sound effect.

    Notes are frequency values played one per tick; 0 silences the channel.
    """

    priority: int
    instrument: AdlibInstrument
    octave: int
    notes: bytes


# Renders an AdlibSound into PCM. Supplied by the audio layer.
Synthesizer = Callable[[AdlibSound], AudioBuffer]


def parse_adlib_sound(raw: bytes) -> AdlibSound:
    header_size = _ADLIB_HEADER_STRUCT.size + _INSTRUMENT_STRUCT.size + 1
    if len(raw) < header_size:
        raise FormatError("AdLib sound record truncated")

    note_count, priority = _ADLIB_HEADER_STRUCT.unpack_from(raw, 0)
    instrument = AdlibInstrument(*_INSTRUMENT_STRUCT.unpack_from(raw, _ADLIB_HEADER_STRUCT.size))
    octave = raw[header_size - 1]

    if len(raw) - header_size < note_count:
        raise FormatError(
            f"AdLib sound claims {note_count} notes, only {len(raw) - header_size} bytes remain"
        )
    notes = bytes(raw[header_size : header_size + note_count])
    return AdlibSound(priority=int(priority), instrument=instrument, octave=int(octave), notes=notes)


def parse_audio_dict(raw: bytes) -> list[int]:
    """Parse `AUDIOHED.MNI`: a list of u32 offsets into `AUDIOT.MNI`."""

    if len(raw) % 4:
        raise FormatError("audio dictionary length is not a multiple of 4")
    return [int(v) for v in struct.unpack(f"<{len(raw) // 4}I", raw)]


class AudioPackage:
    """AdLib sound effects from `AUDIOHED.MNI` + `AUDIOT.MNI`."""

    def __init__(self, dict_data: bytes, audio_data: bytes) -> None:
        offsets = parse_audio_dict(dict_data)
        if len(offsets) < ADLIB_SOUNDS_START + NUM_SOUNDS + 1:
            raise FormatError(f"audio dictionary has only {len(offsets)} entries")

        self._sounds: list[AdlibSound] = []
        for i in range(NUM_SOUNDS):
            start = offsets[ADLIB_SOUNDS_START + i]
            end = offsets[ADLIB_SOUNDS_START + i + 1]
            if start > end or end > len(audio_data):
                raise FormatError(f"AdLib sound {i} spans {start}..{end} outside audio data")
            self._sounds.append(parse_adlib_sound(audio_data[start:end]))

    def __len__(self) -> int:
        return len(self._sounds)

    def adlib_sound(self, sound_id: SoundId | int) -> AdlibSound:
        index = int(sound_id)
        if index < 0 or index >= len(self._sounds):
            raise BoundsError(f"no AdLib sound for id {index}")
        return self._sounds[index]

    def load_adlib_sound(self, sound_id: SoundId | int, synthesizer: Synthesizer) -> AudioBuffer:
        return synthesizer(self.adlib_sound(sound_id))
