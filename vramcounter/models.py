from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import List, Optional, Tuple

CATEGORY_TEXTURE = "Texture"
CATEGORY_BACKGROUND = "Background"
CATEGORY_UNUSED = "Unused"

MAP_NORMAL = "Normal"
MAP_MATERIAL = "Material"
MAP_SURFACE = "Surface"


@dataclass(frozen=True)
class ScanIssue:
    level: str  # INFO | WARNING | ERROR
    code: str   # stable short identifier (e.g. SKIPPED_NON_IMAGE)
    message: str
    relpath: Optional[str] = None  # relative to the mod folder when applicable


@dataclass(frozen=True)
class ModInfo:
    id: str
    name: str
    version: str
    folder: str  # absolute path

    @property
    def formatted_name(self) -> str:
        return f"{self.name} {self.version} ({self.id})"


@dataclass(frozen=True)
class ImageAsset:
    path: str           # full path
    relpath: str        # relative to the mod folder, "/" separated
    name: str
    width: int          # source pixels
    height: int
    channel_bits: Tuple[int, ...]
    category: str       # Texture | Background | Unused
    # Derived once by texture_size.build_image_asset
    texture_width: int
    texture_height: int
    multiplier: Fraction
    bytes_used: int


@dataclass(frozen=True)
class ExclusionDirective:
    map_kind: str  # Normal | Material | Surface
    relpath: str


@dataclass(frozen=True)
class ModResult:
    info: ModInfo
    enabled: bool
    image_count: int                # every decoded image, counted or not
    counted: Tuple[ImageAsset, ...]
    total_bytes: int


@dataclass(frozen=True)
class EstimateReport:
    mods_root: str
    mods: List[ModResult]
    enabled_mod_ids: Optional[List[str]]
    total_bytes: int
    enabled_total_bytes: int
    issues: List[ScanIssue]
    normal_maps_enabled: bool
    material_maps_enabled: bool
    surface_maps_enabled: bool
    elapsed_ms: int = 0

    @property
    def enabled_mods(self) -> List[ModResult]:
        return [m for m in self.mods if m.enabled]
