""" Image decoding backend. Currently implemented using Pillow (PIL). """
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from PIL import Image


@dataclass(frozen=True)
class ImageHeader:
    width: int
    height: int
    mode: str
    channel_bits: Tuple[int, ...]


# Bits per channel for each Pillow mode, as the colour model reports them.
_MODE_CHANNEL_BITS: Dict[str, Tuple[int, ...]] = {
    "1": (1,),
    "L": (8,),
    "LA": (8, 8),
    "La": (8, 8),
    "P": (8, 8, 8),
    "PA": (8, 8, 8, 8),
    "RGB": (8, 8, 8),
    "YCbCr": (8, 8, 8),
    "LAB": (8, 8, 8),
    "HSV": (8, 8, 8),
    "RGBA": (8, 8, 8, 8),
    "RGBa": (8, 8, 8, 8),
    "RGBX": (8, 8, 8, 8),
    "CMYK": (8, 8, 8, 8),
    "I": (32,),
    "F": (32,),
    "I;16": (16,),
    "I;16L": (16,),
    "I;16B": (16,),
    "I;16N": (16,),
}


def channel_bits_for(mode: str, has_transparency: bool = False) -> Tuple[int, ...]:
    # Palette images expand to RGB, or RGBA when a transparent index is set
    if mode == "P" and has_transparency:
        return (8, 8, 8, 8)
    bits = _MODE_CHANNEL_BITS.get(mode)
    if bits is not None:
        return bits
    return tuple(8 for _ in range(Image.getmodebands(mode)))


def read_header(path: str) -> ImageHeader:
    """
    Decode an image and return its size and channel depths.

    Raises whatever Pillow raises for files it cannot decode; callers treat
    that as "not an image".
    """
    with Image.open(path) as img:
        img.load()
        width, height = img.size
        mode = img.mode
        has_transparency = "transparency" in img.info

    return ImageHeader(
        width=width,
        height=height,
        mode=mode,
        channel_bits=channel_bits_for(mode, has_transparency),
    )
