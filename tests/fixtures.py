from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Optional, Tuple

from PIL import Image


def write_png(path: Path, size: Tuple[int, int], mode: str = "RGBA") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new(mode, size).save(path, format="PNG")
    return path


def write_mod(root: Path, folder: str, mod_id: str, name: Optional[str] = None, version="1.0") -> Path:
    mod = root / folder
    mod.mkdir(parents=True, exist_ok=True)
    info = {"id": mod_id, "name": name or folder, "version": version}
    (mod / "mod_info.json").write_text(json.dumps(info), encoding="utf-8")
    return mod


def write_enabled(root: Path, ids: Iterable[str]) -> None:
    (root / "enabled_mods.json").write_text(json.dumps({"enabledMods": list(ids)}), encoding="utf-8")


def write_csv(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
