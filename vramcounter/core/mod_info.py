from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from vramcounter.config import ENABLED_MODS_FILE_NAME, MOD_INFO_FILE_NAME
from vramcounter.models import ModInfo, ScanIssue

# Strings are matched first so comment markers inside them survive.
_COMMENT_RE = re.compile(r'("(?:\\.|[^"\\])*")|(/\*.*?\*/)|(//[^\n]*)|(#[^\n]*)', re.DOTALL)
_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")


def _strip_comments(text: str) -> str:
    return _COMMENT_RE.sub(lambda m: m.group(1) or "", text)


def loads_lenient(text: str) -> Any:
    """json.loads that tolerates the comments and trailing commas modders write."""
    cleaned = _TRAILING_COMMA_RE.sub(r"\1", _strip_comments(text))
    return json.loads(cleaned)


def _version_string(raw: Any) -> str:
    # 0.9.5a: {"major": .., "minor": .., "patch": ..}; 0.9.1a: plain string
    if isinstance(raw, dict):
        parts = [raw.get("major"), raw.get("minor"), raw.get("patch")]
        return ".".join(str(p) for p in parts if p is not None and str(p) != "")
    if raw is None:
        return ""
    return str(raw)


def mod_info_from_dict(d: Dict[str, Any], folder: str) -> ModInfo:
    mod_id = d.get("id")
    name = d.get("name")
    if not mod_id or not name:
        raise ValueError("mod_info.json needs both 'id' and 'name'")
    return ModInfo(
        id=str(mod_id),
        name=str(name),
        version=_version_string(d.get("version")),
        folder=folder,
    )


def read_mod_info(mod_folder: str) -> Tuple[Optional[ModInfo], Optional[ScanIssue]]:
    folder = Path(mod_folder).resolve()
    info_path = folder / MOD_INFO_FILE_NAME
    if not info_path.is_file():
        return None, ScanIssue(
            level="WARNING",
            code="MOD_INFO_MISSING",
            message=f"Unable to find '{MOD_INFO_FILE_NAME}' in {folder}.",
            relpath=None,
        )

    try:
        data = loads_lenient(info_path.read_text(encoding="utf-8-sig"))
        if not isinstance(data, dict):
            raise ValueError("top level is not an object")
        return mod_info_from_dict(data, str(folder)), None
    except (OSError, UnicodeDecodeError, ValueError) as e:
        return None, ScanIssue(
            level="WARNING",
            code="MOD_INFO_INVALID",
            message=f"Unable to read '{MOD_INFO_FILE_NAME}' in {folder}: {e}",
            relpath=MOD_INFO_FILE_NAME,
        )


def read_enabled_mod_ids(mods_root: str) -> Tuple[Optional[List[str]], Optional[ScanIssue]]:
    """
    Ids listed in enabled_mods.json, or None when the file is absent or
    unreadable (enabled status unknown).
    """
    path = Path(mods_root) / ENABLED_MODS_FILE_NAME
    if not path.is_file():
        return None, ScanIssue(
            level="WARNING",
            code="ENABLED_MODS_MISSING",
            message=f"Unable to find '{ENABLED_MODS_FILE_NAME}'.",
            relpath=None,
        )

    try:
        data = loads_lenient(path.read_text(encoding="utf-8-sig"))
        enabled = data["enabledMods"]
        if not isinstance(enabled, list):
            raise ValueError("'enabledMods' is not a list")
        return [str(x) for x in enabled], None
    except (OSError, UnicodeDecodeError, ValueError, KeyError, TypeError) as e:
        return None, ScanIssue(
            level="WARNING",
            code="ENABLED_MODS_INVALID",
            message=f"Unable to read '{ENABLED_MODS_FILE_NAME}': {e!r}",
            relpath=None,
        )
