from __future__ import annotations

from .image import TRANSPARENT, UNREADABLE_IMAGE_ERRORS, Image, Rgba, image_from_indices
from .palette import (
    INGAME_PALETTE,
    PALETTE16_BYTES,
    PALETTE256_BYTES,
    extend_6bit_channel,
    load_6bit_palette,
    load_6bit_palette16,
    load_6bit_palette256,
)

__all__ = [
    "INGAME_PALETTE",
    "Image",
    "PALETTE16_BYTES",
    "PALETTE256_BYTES",
    "Rgba",
    "TRANSPARENT",
    "UNREADABLE_IMAGE_ERRORS",
    "extend_6bit_channel",
    "image_from_indices",
    "load_6bit_palette",
    "load_6bit_palette16",
    "load_6bit_palette256",
]
