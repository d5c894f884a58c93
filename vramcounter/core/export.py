from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from vramcounter.models import EstimateReport


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def build_estimate_dict(
    tool_name: str,
    tool_version: str,
    report: EstimateReport,
    include_images: bool = True,
) -> Dict[str, Any]:
    mods_out: List[Dict[str, Any]] = []
    for mod in report.mods:
        entry: Dict[str, Any] = {
            "id": mod.info.id,
            "name": mod.info.name,
            "version": mod.info.version,
            "folder": mod.info.folder,
            "enabled": mod.enabled,
            "image_count": mod.image_count,
            "total_bytes": mod.total_bytes,
        }
        if include_images:
            entry["images"] = [
                {
                    "relpath": img.relpath,
                    "category": img.category,
                    "width": img.width,
                    "height": img.height,
                    "texture_width": img.texture_width,
                    "texture_height": img.texture_height,
                    "channel_bits": list(img.channel_bits),
                    "multiplier": float(img.multiplier),
                    "bytes_used": img.bytes_used,
                }
                for img in mod.counted
            ]
        mods_out.append(entry)

    issues_out = [
        {
            "level": i.level,
            "code": i.code,
            "message": i.message,
            "relpath": i.relpath,
        }
        for i in report.issues
    ]

    return {
        "tool": tool_name,
        "version": tool_version,
        "timestamp_utc": _utc_now_iso(),
        "mods_root": report.mods_root,
        "graphicslib": {
            "normal_maps_enabled": report.normal_maps_enabled,
            "material_maps_enabled": report.material_maps_enabled,
            "surface_maps_enabled": report.surface_maps_enabled,
        },
        "enabled_mod_ids": report.enabled_mod_ids,
        "total_bytes": report.total_bytes,
        "enabled_total_bytes": report.enabled_total_bytes,
        "issues": issues_out,
        "mods": mods_out,
    }


def write_estimate_json(estimate: Dict[str, Any], json_path: str) -> str:
    path = Path(json_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as f:
        json.dump(estimate, f, indent=2, ensure_ascii=False)

    return str(path)
