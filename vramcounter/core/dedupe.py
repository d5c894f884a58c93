from __future__ import annotations

from typing import Iterable, Iterator, Set, Tuple

from vramcounter.models import ImageAsset, ModResult


def dedupe_key(image: ImageAsset) -> str:
    """Path relative to the owning mod folder, plus the file name."""
    return image.relpath.replace("\\", "/") + image.name


def unique_images(mods: Iterable[ModResult]) -> Iterator[Tuple[ModResult, ImageAsset]]:
    """Counted images across mods, first occurrence wins."""
    seen: Set[str] = set()
    for mod in mods:
        for image in mod.counted:
            key = dedupe_key(image)
            if key in seen:
                continue
            seen.add(key)
            yield mod, image


def total_across_mods(mods: Iterable[ModResult]) -> int:
    """
    Bytes used by all mods together.

    Mods that ship the same relative path are loaded once by the game, so
    shared images only count once here, unlike the per-mod totals.
    """
    return sum(image.bytes_used for _, image in unique_images(mods))
