"""Creative Voice File (VOC) decoding."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum

from ..errors import FormatError


VOC_SIGNATURE = b"Creative Voice File\x1a"
_HEADER_STRUCT = struct.Struct("<HHH")  # data offset, version, checksum


class VocBlockType(IntEnum):
    TERMINATOR = 0
    SOUND_DATA = 1
    SOUND_CONTINUATION = 2
    SILENCE = 3
    MARKER = 4
    TEXT = 5
    REPEAT_START = 6
    REPEAT_END = 7
    EXTENDED = 8
    NEW_SOUND_DATA = 9


class VocCodec(IntEnum):
    UNSIGNED_8BIT = 0
    ADPCM_4BIT = 1
    ADPCM_2_6BIT = 2
    ADPCM_2BIT = 3
    SIGNED_16BIT = 4


@dataclass(frozen=True, slots=True)
class AudioBuffer:
    """Signed 16-bit PCM, interleaved when `channels > 1`."""

    sample_rate: int
    samples: list[int]
    channels: int = 1

    @property
    def frame_count(self) -> int:
        return len(self.samples) // self.channels if self.channels > 0 else 0

    @property
    def duration_seconds(self) -> float:
        if self.sample_rate <= 0:
            return 0.0
        return float(self.frame_count) / float(self.sample_rate)

    def pcm_s16le(self) -> bytes:
        return struct.pack(f"<{len(self.samples)}h", *self.samples)


def _u8_to_s16(data: bytes) -> list[int]:
    return [(b - 128) << 8 for b in data]


def _s16le_to_s16(data: bytes) -> list[int]:
    if len(data) % 2:
        raise FormatError("16-bit VOC sample data has odd length")
    return list(struct.unpack(f"<{len(data) // 2}h", data))


def _decode_samples(data: bytes, codec: int) -> list[int]:
    if codec == VocCodec.UNSIGNED_8BIT:
        return _u8_to_s16(data)
    if codec == VocCodec.SIGNED_16BIT:
        return _s16le_to_s16(data)
    raise FormatError(f"unsupported VOC codec {codec}")


def _rate_from_divisor(divisor: int) -> int:
    return 1_000_000 // (256 - divisor)


def decode_voc(data: bytes) -> AudioBuffer:
    """Decode a VOC file into an AudioBuffer.

    The sample rate and channel layout of the first sound block apply to the
    whole buffer. Markers, text and repeat blocks are skipped.
    """

    if not data.startswith(VOC_SIGNATURE):
        raise FormatError("not a Creative Voice File")
    if len(data) < len(VOC_SIGNATURE) + _HEADER_STRUCT.size:
        raise FormatError("VOC header truncated")

    data_offset, _version, _checksum = _HEADER_STRUCT.unpack_from(data, len(VOC_SIGNATURE))
    if data_offset > len(data):
        raise FormatError(f"VOC data offset {data_offset} beyond end of file")

    samples: list[int] = []
    sample_rate: int | None = None
    channels = 1
    codec: int = VocCodec.UNSIGNED_8BIT
    # Set by an extended block; overrides the next sound data block's header.
    pending_extended: tuple[int, int, int] | None = None

    pos = data_offset
    while pos < len(data):
        block_type = data[pos]
        pos += 1
        if block_type == VocBlockType.TERMINATOR:
            break

        if pos + 3 > len(data):
            raise FormatError("VOC block header truncated")
        length = data[pos] | (data[pos + 1] << 8) | (data[pos + 2] << 16)
        pos += 3
        if length > len(data) - pos:
            raise FormatError(
                f"VOC block of type {block_type} claims {length} bytes, {len(data) - pos} remain"
            )
        block = data[pos : pos + length]
        pos += length

        if block_type == VocBlockType.SOUND_DATA:
            if length < 2:
                raise FormatError("VOC sound data block too short")
            if pending_extended is not None:
                rate, channels, codec = pending_extended
                pending_extended = None
            else:
                rate = _rate_from_divisor(block[0])
                codec = block[1]
            if sample_rate is None:
                sample_rate = rate
            samples.extend(_decode_samples(block[2:], codec))
        elif block_type == VocBlockType.SOUND_CONTINUATION:
            samples.extend(_decode_samples(block, codec))
        elif block_type == VocBlockType.SILENCE:
            if length < 3:
                raise FormatError("VOC silence block too short")
            (count,) = struct.unpack_from("<H", block, 0)
            if sample_rate is None:
                sample_rate = _rate_from_divisor(block[2])
            samples.extend([0] * ((count + 1) * channels))
        elif block_type == VocBlockType.EXTENDED:
            if length < 4:
                raise FormatError("VOC extended block too short")
            time_constant, pack, mode = struct.unpack_from("<HBB", block, 0)
            ext_channels = 2 if mode else 1
            rate = 256_000_000 // ((65536 - time_constant) * ext_channels)
            pending_extended = (rate, ext_channels, pack)
        elif block_type == VocBlockType.NEW_SOUND_DATA:
            if length < 12:
                raise FormatError("VOC sound data block too short")
            rate, bits, block_channels, codec_word = struct.unpack_from("<IBBH", block, 0)
            codec = codec_word
            if bits not in (8, 16):
                raise FormatError(f"unsupported VOC sample width {bits}")
            if sample_rate is None:
                sample_rate = int(rate)
                channels = int(block_channels) or 1
            samples.extend(_decode_samples(block[12:], codec))
        # Other block types carry no audio.

    if sample_rate is None:
        raise FormatError("VOC file contains no sound data")

    return AudioBuffer(sample_rate=sample_rate, samples=samples, channels=channels)
