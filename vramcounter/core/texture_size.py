from __future__ import annotations

import math
from fractions import Fraction
from typing import Sequence

from vramcounter.config import VANILLA_BACKGROUND_TEXTURE_SIZE_IN_BYTES
from vramcounter.models import CATEGORY_BACKGROUND, ImageAsset

MIPMAP_MULTIPLIER = Fraction(4, 3)
BACKGROUND_MULTIPLIER = Fraction(1)


def round_up_to_power_of_two(dim: int) -> int:
    """Smallest power of two >= dim (1 stays 1)."""
    if dim == 1:
        return 1
    # highest set bit of (dim - 1), doubled
    return (1 << ((dim - 1).bit_length() - 1)) * 2


def multiplier_for(category: str) -> Fraction:
    if category == CATEGORY_BACKGROUND:
        return BACKGROUND_MULTIPLIER
    return MIPMAP_MULTIPLIER


def texture_bytes(
    texture_width: int,
    texture_height: int,
    channel_bits: Sequence[int],
    category: str,
) -> int:
    """
    Bytes a texture of already rounded dimensions occupies in VRAM.

    Backgrounds only report their excess over the vanilla background, so the
    result can be negative for backgrounds smaller than vanilla.
    """
    raw = (
        Fraction(texture_height * texture_width)
        * Fraction(sum(channel_bits), 8)
        * multiplier_for(category)
    )
    if category == CATEGORY_BACKGROUND:
        raw -= VANILLA_BACKGROUND_TEXTURE_SIZE_IN_BYTES
    return int(math.ceil(raw))


def bytes_used(width: int, height: int, channel_bits: Sequence[int], category: str) -> int:
    return texture_bytes(
        texture_width=round_up_to_power_of_two(height),
        texture_height=round_up_to_power_of_two(width),
        channel_bits=channel_bits,
        category=category,
    )


def build_image_asset(
    path: str,
    relpath: str,
    name: str,
    width: int,
    height: int,
    channel_bits: Sequence[int],
    category: str,
) -> ImageAsset:
    # The texture height is rounded from the pixel width and vice versa.
    # Kept so totals match what earlier releases printed.
    texture_height = round_up_to_power_of_two(width)
    texture_width = round_up_to_power_of_two(height)
    bits = tuple(int(b) for b in channel_bits)

    return ImageAsset(
        path=path,
        relpath=relpath,
        name=name,
        width=width,
        height=height,
        channel_bits=bits,
        category=category,
        texture_width=texture_width,
        texture_height=texture_height,
        multiplier=multiplier_for(category),
        bytes_used=texture_bytes(texture_width, texture_height, bits, category),
    )
