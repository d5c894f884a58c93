from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List


class ModsFolderNotFoundError(ValueError):
    pass


@dataclass(frozen=True)
class ScanFile:
    path: str           # full path
    relpath: str        # relative to the mod folder, "/" separated
    name: str
    ext: str            # normalized (lower, no dot) or ""


def _normalize_ext(p: Path) -> str:
    return p.suffix.lower().lstrip(".")


def require_mods_folder(root: str) -> Path:
    root_path = Path(root).resolve()
    if not root_path.is_dir():
        raise ModsFolderNotFoundError(f"Mods folder does not exist: {root_path}")
    return root_path


def list_mod_folders(mods_root: str) -> List[Path]:
    """Immediate sub-directories of the mods folder, sorted by name."""
    root_path = require_mods_folder(mods_root)
    return sorted((p for p in root_path.iterdir() if p.is_dir()), key=lambda p: p.name.lower())


def list_mod_files(mod_folder: str, follow_symlinks: bool = False) -> List[ScanFile]:
    """
    Recursively list every file below a mod folder.

    Hidden files are included; mods ship dotfiles rarely and the game
    loads whatever is referenced.
    """
    root_path = Path(mod_folder).resolve()
    files: List[ScanFile] = []

    for dirpath, dirnames, filenames in os.walk(root_path, followlinks=follow_symlinks):
        # Deterministic order so the first matching CSV is stable across runs
        dirnames.sort()
        for fn in sorted(filenames):
            full = Path(dirpath) / fn
            rel = str(full.relative_to(root_path)).replace("\\", "/")
            files.append(
                ScanFile(
                    path=str(full),
                    relpath=rel,
                    name=full.name,
                    ext=_normalize_ext(full),
                )
            )

    return files
