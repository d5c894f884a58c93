from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from vramcounter.config import VANILLA_BACKGROUND_WIDTH
from vramcounter.core.progress import ProgressLog
from vramcounter.models import (
    CATEGORY_BACKGROUND,
    CATEGORY_UNUSED,
    ExclusionDirective,
    ImageAsset,
    ModInfo,
)


def _norm_relpath(relpath: str) -> str:
    return relpath.replace("\\", "/")


def dominant_background(assets: Iterable[ImageAsset]) -> Optional[ImageAsset]:
    """
    The largest background wider than vanilla, if any.

    The game keeps one background resident and vanilla always has one
    loaded, so a mod only adds the excess of its biggest background.
    """
    best: Optional[ImageAsset] = None
    for a in assets:
        if a.category != CATEGORY_BACKGROUND or a.texture_width <= VANILLA_BACKGROUND_WIDTH:
            continue
        if a.bytes_used <= 0:
            continue
        if best is None or a.bytes_used > best.bytes_used:
            best = a
    return best


def format_counted_line(image: ImageAsset) -> str:
    bits = list(image.channel_bits)
    mult = float(image.multiplier)
    return (
        f"{image.relpath} - TexHeight: {image.texture_height}, "
        f"TexWidth: {image.texture_width}, "
        f"Channels: {bits}, "
        f"Mult: {mult:.4g}\n"
        f"   --> {image.texture_height} * {image.texture_width} * {sum(bits)} / 8 * {mult:.4g}"
        f" = {image.bytes_used} bytes added over vanilla"
    )


def aggregate_mod(
    info: ModInfo,
    assets: List[ImageAsset],
    exclusions: Optional[List[ExclusionDirective]],
    log: Optional[ProgressLog] = None,
    show_skipped_files: bool = False,
    show_counted_files: bool = False,
) -> Tuple[int, List[ImageAsset]]:
    """
    Total bytes for one mod and the images that make it up.

    Order: drop unused images, keep at most one background, drop files
    GraphicsLib will not load, then sum.
    """
    remaining = [a for a in assets if a.category != CATEGORY_UNUSED]

    unused = [a for a in assets if a.category == CATEGORY_UNUSED]
    if log and show_skipped_files and unused:
        log.log(f"Skipping unused files in {info.name}")
        for a in unused:
            log.log(f"   {a.relpath}")

    keep_bg = dominant_background(remaining)
    dropped_bg = [a for a in remaining if a.category == CATEGORY_BACKGROUND and a is not keep_bg]
    remaining = [a for a in remaining if a.category != CATEGORY_BACKGROUND or a is keep_bg]
    if log and show_skipped_files and dropped_bg:
        log.log("Skipping backgrounds that are not larger than vanilla and/or not the mod's largest background.")
        for a in dropped_bg:
            log.log(f"   {a.relpath}")

    if exclusions is not None:
        excluded_paths = {_norm_relpath(d.relpath) for d in exclusions}
        remaining = [a for a in remaining if _norm_relpath(a.relpath) not in excluded_paths]

    if log and show_counted_files:
        for a in remaining:
            log.log(format_counted_line(a))

    # bytes_used is already an exact int per image
    total = sum(a.bytes_used for a in remaining)
    return total, remaining
