"""
GraphicsLib map-override tables.

GraphicsLib ships normal, material and surface maps for textures and lists
them in a CSV per mod. When a map kind is switched off in GraphicsLib, the
files of that kind are never loaded, so they are excluded from the estimate.
"""
from __future__ import annotations

import csv
from typing import Dict, Iterable, List, Optional, Tuple

from vramcounter.core.scanner import ScanFile
from vramcounter.core.settings import EffectiveConfig
from vramcounter.models import (
    MAP_MATERIAL,
    MAP_NORMAL,
    MAP_SURFACE,
    ExclusionDirective,
    ScanIssue,
)

REQUIRED_COLUMNS = ("id", "type", "map", "path")

MAP_KINDS: Dict[str, str] = {
    "normal": MAP_NORMAL,
    "material": MAP_MATERIAL,
    "surface": MAP_SURFACE,
}


def read_csv_rows(f: ScanFile) -> Tuple[List[List[str]], Optional[ScanIssue]]:
    """
    Read a CSV leniently: ragged rows are kept as-is, empty rows dropped.
    An unreadable file yields no rows and an issue.
    """
    try:
        with open(f.path, "r", encoding="utf-8-sig", newline="") as fh:
            rows = [row for row in csv.reader(fh) if row]
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        return [], ScanIssue(
            level="WARNING",
            code="CSV_UNREADABLE",
            message=f"Unable to read {f.relpath}: {e}",
            relpath=f.relpath,
        )
    return rows, None


def is_directive_header(row: List[str]) -> bool:
    return all(col in row for col in REQUIRED_COLUMNS)


def find_directive_table(
    files: Iterable[ScanFile],
    issues: List[ScanIssue],
) -> Optional[Tuple[ScanFile, List[List[str]]]]:
    """First CSV whose header row names all required columns, or None."""
    for f in files:
        if f.ext != "csv":
            continue
        rows, issue = read_csv_rows(f)
        if issue is not None:
            issues.append(issue)
            continue
        if rows and is_directive_header(rows[0]):
            return f, rows
    return None


def parse_directives(
    rows: List[List[str]],
    issues: List[ScanIssue],
    source_relpath: Optional[str] = None,
) -> List[ExclusionDirective]:
    header = rows[0]
    map_col = header.index("map")
    path_col = header.index("path")

    directives: List[ExclusionDirective] = []
    for line_no, row in enumerate(rows[1:], start=2):
        try:
            map_kind = MAP_KINDS.get(row[map_col])
            if map_kind is None:
                continue
            directives.append(ExclusionDirective(map_kind=map_kind, relpath=row[path_col].strip()))
        except IndexError as e:
            issues.append(
                ScanIssue(
                    level="WARNING",
                    code="CSV_ROW_INVALID",
                    message=f"Row {line_no} {row} - {e}",
                    relpath=source_relpath,
                )
            )
    return directives


def is_map_enabled(map_kind: str, config: EffectiveConfig) -> bool:
    if map_kind == MAP_NORMAL:
        return config.normal_maps_enabled
    if map_kind == MAP_MATERIAL:
        return config.material_maps_enabled
    return config.surface_maps_enabled


def resolve_exclusions(
    files: Iterable[ScanFile],
    config: EffectiveConfig,
) -> Tuple[Optional[List[ExclusionDirective]], List[ScanIssue]]:
    """
    Files of a mod that GraphicsLib will not load under the current settings.

    Returns (None, issues) when the mod has no map-override table, in which
    case every image counts.
    """
    issues: List[ScanIssue] = []
    found = find_directive_table(files, issues)
    if found is None:
        return None, issues

    table_file, rows = found
    directives = parse_directives(rows, issues, source_relpath=table_file.relpath)
    excluded = [d for d in directives if not is_map_enabled(d.map_kind, config)]
    return excluded, issues
