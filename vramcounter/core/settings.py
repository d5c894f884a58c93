from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

# camelCase keys as stored on disk -> RunSettings field
_JSON_KEYS = {
    "showSkippedFiles": "show_skipped_files",
    "showCountedFiles": "show_counted_files",
    "showPerformance": "show_performance",
    "showGfxLibDebugOutput": "show_gfxlib_debug_output",
    "normalMapsEnabled": "normal_maps_enabled",
    "materialMapsEnabled": "material_maps_enabled",
    "surfaceMapsEnabled": "surface_maps_enabled",
}

# config.properties written by 1.x releases
_PROPERTIES_KEYS = {
    "showSkippedFiles": "show_skipped_files",
    "showCountedFiles": "show_counted_files",
    "showPerformance": "show_performance",
    "showGfxLibDebugOutput": "show_gfxlib_debug_output",
    "areGfxLibNormalMapsEnabled": "normal_maps_enabled",
    "areGfxLibMaterialMapsEnabled": "material_maps_enabled",
    "areGfxLibSurfaceMapsEnabled": "surface_maps_enabled",
}

_MAP_FIELDS = ("normal_maps_enabled", "material_maps_enabled", "surface_maps_enabled")


@dataclass(frozen=True)
class RunSettings:
    show_skipped_files: bool = False
    show_counted_files: bool = True
    show_performance: bool = True
    show_gfxlib_debug_output: bool = False
    # None = not chosen yet
    normal_maps_enabled: Optional[bool] = None
    material_maps_enabled: Optional[bool] = None
    surface_maps_enabled: Optional[bool] = None

    @property
    def maps_resolved(self) -> bool:
        return all(getattr(self, name) is not None for name in _MAP_FIELDS)


@dataclass(frozen=True)
class EffectiveConfig:
    normal_maps_enabled: bool = True
    material_maps_enabled: bool = True
    surface_maps_enabled: bool = True
    show_skipped_files: bool = False
    show_counted_files: bool = True
    show_gfxlib_debug_output: bool = False
    show_performance: bool = True


# (normal, material, surface) -> chosen (normal, material, surface)
MapPrompt = Callable[[Optional[bool], Optional[bool], Optional[bool]], Tuple[bool, bool, bool]]


def _as_bool(v: Any) -> Optional[bool]:
    if v is None:
        return None
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        s = v.strip().lower()
        if s == "":
            return None
        return s in ("1", "true", "yes", "on")
    return bool(v)


def _from_flat_dict(d: Dict[str, Any], keys: Dict[str, str]) -> RunSettings:
    defaults = RunSettings()
    values: Dict[str, Any] = {}
    for key, field_name in keys.items():
        parsed = _as_bool(d.get(key))
        values[field_name] = getattr(defaults, field_name) if parsed is None else parsed
    return RunSettings(**values)


def to_json_dict(settings: RunSettings) -> Dict[str, Any]:
    return {key: getattr(settings, field_name) for key, field_name in _JSON_KEYS.items()}


def from_json_dict(d: Dict[str, Any]) -> RunSettings:
    return _from_flat_dict(d or {}, _JSON_KEYS)


def parse_properties(text: str) -> Dict[str, str]:
    props: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith(("#", "!")):
            continue
        for sep in ("=", ":"):
            if sep in line:
                key, value = line.split(sep, 1)
                props[key.strip()] = value.strip()
                break
    return props


def load_settings(path: str) -> RunSettings:
    """
    Load persisted settings. A missing file gives defaults; `.properties`
    files are read in the legacy key=value format.
    """
    p = Path(path)
    if not p.exists():
        return RunSettings()
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() == ".properties":
        return _from_flat_dict(parse_properties(text), _PROPERTIES_KEYS)
    return from_json_dict(json.loads(text))


def save_settings(path: str, settings: RunSettings) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(to_json_dict(settings), indent=2), encoding="utf-8")
    return p


def ensure_default_settings_on_disk(path: str) -> Path:
    p = Path(path)
    if not p.exists():
        save_settings(path, RunSettings())
    return p


def resolve_effective_config(
    settings: RunSettings,
    gfxlib_present: bool,
    prompt: Optional[MapPrompt] = None,
) -> EffectiveConfig:
    """
    Settle the GraphicsLib map toggles for this run.

    Unset toggles are asked for through `prompt` only when GraphicsLib is
    among the enabled mods; everything still unset counts as enabled.
    """
    normal = settings.normal_maps_enabled
    material = settings.material_maps_enabled
    surface = settings.surface_maps_enabled

    if not settings.maps_resolved and gfxlib_present and prompt is not None:
        normal, material, surface = prompt(normal, material, surface)

    return EffectiveConfig(
        normal_maps_enabled=True if normal is None else normal,
        material_maps_enabled=True if material is None else material,
        surface_maps_enabled=True if surface is None else surface,
        show_skipped_files=settings.show_skipped_files,
        show_counted_files=settings.show_counted_files,
        show_gfxlib_debug_output=settings.show_gfxlib_debug_output,
        show_performance=settings.show_performance,
    )


def with_maps(settings: RunSettings, normal: bool, material: bool, surface: bool) -> RunSettings:
    return replace(
        settings,
        normal_maps_enabled=normal,
        material_maps_enabled=material,
        surface_maps_enabled=surface,
    )
