from __future__ import annotations

from concurrent.futures import Executor
from typing import Iterable, List, Optional, Sequence, Tuple

from vramcounter.config import BACKGROUND_FOLDER_NAME, UNUSED_SUFFIX
from vramcounter.core.image_reader import read_header
from vramcounter.core.scanner import ScanFile
from vramcounter.core.texture_size import build_image_asset
from vramcounter.models import (
    CATEGORY_BACKGROUND,
    CATEGORY_TEXTURE,
    CATEGORY_UNUSED,
    ImageAsset,
    ScanIssue,
)

DEFAULT_UNUSED_INDICATORS: Tuple[str, ...] = (UNUSED_SUFFIX,)


def classify_relpath(
    relpath: str,
    unused_indicators: Sequence[str] = DEFAULT_UNUSED_INDICATORS,
    background_token: str = BACKGROUND_FOLDER_NAME,
) -> str:
    # Background wins when a path carries both markers.
    if background_token in relpath:
        return CATEGORY_BACKGROUND
    if any(ind and ind in relpath for ind in unused_indicators):
        return CATEGORY_UNUSED
    return CATEGORY_TEXTURE


def decode_asset(
    f: ScanFile,
    unused_indicators: Sequence[str] = DEFAULT_UNUSED_INDICATORS,
) -> Tuple[Optional[ImageAsset], Optional[ScanIssue]]:
    """
    Decode one file into an ImageAsset.

    Returns (asset, None) on success or (None, issue) when the file is not a
    readable image.
    """
    try:
        header = read_header(f.path)
    except Exception as e:
        return None, ScanIssue(
            level="INFO",
            code="SKIPPED_NON_IMAGE",
            message=f"Skipped non-image {f.relpath} ({e})",
            relpath=f.relpath,
        )

    asset = build_image_asset(
        path=f.path,
        relpath=f.relpath,
        name=f.name,
        width=header.width,
        height=header.height,
        channel_bits=header.channel_bits,
        category=classify_relpath(f.relpath, unused_indicators),
    )
    return asset, None


def read_image_assets(
    files: Iterable[ScanFile],
    executor: Optional[Executor] = None,
    unused_indicators: Sequence[str] = DEFAULT_UNUSED_INDICATORS,
) -> Tuple[List[ImageAsset], List[ScanIssue]]:
    """
    Decode every file, in parallel when an executor is given.

    Each decode is independent; results are merged in file order once all
    of them are done.
    """
    files = list(files)
    if executor is not None:
        decoded = list(executor.map(lambda f: decode_asset(f, unused_indicators), files))
    else:
        decoded = [decode_asset(f, unused_indicators) for f in files]

    assets: List[ImageAsset] = []
    issues: List[ScanIssue] = []
    for asset, issue in decoded:
        if asset is not None:
            assets.append(asset)
        if issue is not None:
            issues.append(issue)
    return assets, issues
