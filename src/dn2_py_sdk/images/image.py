from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from PIL import Image as PILImage

from ..errors import FormatError


Rgba = tuple[int, int, int, int]

TRANSPARENT: Rgba = (0, 0, 0, 0)

# Raised by Pillow for files it cannot or will not decode.
UNREADABLE_IMAGE_ERRORS = (OSError, SyntaxError, ValueError, PILImage.DecompressionBombError)


@dataclass(slots=True)
class Image:
    """RGBA pixel buffer handed to the renderer.

    `pixels` is row-major with `width * height` entries.
    """

    width: int
    height: int
    pixels: list[Rgba]

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("width/height must be >= 0")
        if len(self.pixels) != self.width * self.height:
            raise ValueError(
                f"pixel buffer size mismatch: {len(self.pixels)} != {self.width}*{self.height}"
            )

    @classmethod
    def blank(cls, width: int, height: int, fill: Rgba = TRANSPARENT) -> "Image":
        return cls(width=width, height=height, pixels=[fill] * (width * height))

    def pixel_at(self, x: int, y: int) -> Rgba:
        return self.pixels[y * self.width + x]

    def blit(self, other: "Image", x: int, y: int) -> None:
        """Copy `other` into this image with its top-left corner at (x, y).

        The caller guarantees that `other` fits.
        """

        for row in range(other.height):
            dst = (y + row) * self.width + x
            src = row * other.width
            self.pixels[dst : dst + other.width] = other.pixels[src : src + other.width]

    def rgba_bytes(self) -> bytes:
        return bytes(channel for pixel in self.pixels for channel in pixel)

    # Pillow helpers

    def to_pil(self) -> PILImage.Image:
        return PILImage.frombytes("RGBA", (self.width, self.height), self.rgba_bytes())

    @classmethod
    def from_pil(cls, img: PILImage.Image) -> "Image":
        rgba = img.convert("RGBA")
        width, height = rgba.size
        raw = rgba.tobytes()
        pixels: list[Rgba] = [
            (raw[i], raw[i + 1], raw[i + 2], raw[i + 3]) for i in range(0, len(raw), 4)
        ]
        return cls(width=width, height=height, pixels=pixels)

    @classmethod
    def open(cls, path: str | Path) -> "Image":
        """Load an image file (typically a PNG) as RGBA."""

        with PILImage.open(path) as img:
            img.load()
            return cls.from_pil(img)

    def save(self, path: str | Path) -> None:
        self.to_pil().save(path)


def image_from_indices(
    width: int, height: int, indices: Iterable[int], palette: list[Rgba]
) -> Image:
    """Map palette indices to colors, raising FormatError on out-of-palette values."""

    try:
        pixels = [palette[i] for i in indices]
    except IndexError as e:
        raise FormatError(f"palette index out of range for {len(palette)} color palette") from e
    return Image(width=width, height=height, pixels=pixels)
