from __future__ import annotations

import os
import time
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import List, Optional, Tuple

from vramcounter.config import GRAPHICSLIB_MOD_ID
from vramcounter.core.aggregator import aggregate_mod
from vramcounter.core.classifier import DEFAULT_UNUSED_INDICATORS, read_image_assets
from vramcounter.core.dedupe import total_across_mods
from vramcounter.core.graphicslib import resolve_exclusions
from vramcounter.core.mod_info import read_enabled_mod_ids, read_mod_info
from vramcounter.core.progress import ProgressLog
from vramcounter.core.reporting import readable_size
from vramcounter.core.scanner import list_mod_files, list_mod_folders, require_mods_folder
from vramcounter.core.settings import EffectiveConfig, MapPrompt, RunSettings, resolve_effective_config
from vramcounter.models import EstimateReport, ModInfo, ModResult, ScanIssue


def _ms_since(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def default_worker_count() -> int:
    return os.cpu_count() or 4


def scan_mod(
    info: ModInfo,
    enabled: bool,
    config: EffectiveConfig,
    image_executor: Optional[Executor] = None,
    log: Optional[ProgressLog] = None,
    unused_indicators=DEFAULT_UNUSED_INDICATORS,
) -> Tuple[ModResult, List[ScanIssue]]:
    """Estimate one mod. Touches nothing shared except the progress log."""
    log = log or ProgressLog()
    issues: List[ScanIssue] = []
    start = time.monotonic()

    log.log(f"\nFolder: {info.name}")
    files = list_mod_files(info.folder)

    exclusions, csv_issues = resolve_exclusions(files, config)
    issues.extend(csv_issues)
    for issue in csv_issues:
        log.log(issue.message)
    if config.show_gfxlib_debug_output and exclusions:
        for d in exclusions:
            log.log(f"GraphicsLib exclusion: {d.map_kind} {d.relpath}")

    t_gfxlib = time.monotonic()
    if config.show_performance:
        log.log(f"Finished getting graphicslib data for {info.name} in {_ms_since(start)} ms")

    assets, decode_issues = read_image_assets(files, image_executor, unused_indicators)
    issues.extend(decode_issues)
    if config.show_skipped_files:
        for issue in decode_issues:
            log.log(issue.message)

    t_files = time.monotonic()
    if config.show_performance:
        log.log(f"Finished getting file data for {info.formatted_name} in {_ms_since(t_gfxlib)} ms")

    total, counted = aggregate_mod(
        info,
        assets,
        exclusions,
        log=log,
        show_skipped_files=config.show_skipped_files,
        show_counted_files=config.show_counted_files,
    )

    if config.show_counted_files:
        log.log(f"Total for {info.formatted_name}: {readable_size(total)}")

    if config.show_performance:
        log.log(f"Finished calculating file sizes for {info.formatted_name} in {_ms_since(t_files)} ms")

    result = ModResult(
        info=info,
        enabled=enabled,
        image_count=len(assets),
        counted=tuple(counted),
        total_bytes=total,
    )
    return result, issues


def load_mods(mods_root: str, log: ProgressLog) -> Tuple[List[ModInfo], List[ScanIssue]]:
    infos: List[ModInfo] = []
    issues: List[ScanIssue] = []
    for folder in list_mod_folders(mods_root):
        info, issue = read_mod_info(str(folder))
        if issue is not None:
            issues.append(issue)
            log.log(issue.message)
        if info is not None:
            infos.append(info)
    return infos, issues


def run_estimate(
    mods_root: str,
    settings: RunSettings,
    prompt: Optional[MapPrompt] = None,
    log: Optional[ProgressLog] = None,
    max_workers: Optional[int] = None,
) -> EstimateReport:
    """
    Scan every mod below `mods_root` and total their VRAM use.

    Raises ModsFolderNotFoundError before any work when the folder is
    missing. Everything else is reported through the returned issues.
    """
    log = log or ProgressLog()
    start = time.monotonic()
    root = require_mods_folder(mods_root)
    issues: List[ScanIssue] = []

    enabled_ids, enabled_issue = read_enabled_mod_ids(str(root))
    if enabled_issue is not None:
        issues.append(enabled_issue)
        log.log(enabled_issue.message)
    else:
        log.log("Enabled Mods:\n" + "\n".join(enabled_ids or []))

    log.log(f"Mods folder: {root}")

    infos, info_issues = load_mods(str(root), log)
    issues.extend(info_issues)

    enabled_set = set(enabled_ids or [])
    config = resolve_effective_config(
        settings,
        gfxlib_present=GRAPHICSLIB_MOD_ID in enabled_set,
        prompt=prompt,
    )

    workers = max_workers or default_worker_count()
    # Separate pools: mod tasks block on image tasks.
    with ThreadPoolExecutor(max_workers=workers) as image_pool, \
            ThreadPoolExecutor(max_workers=min(workers, max(len(infos), 1))) as mod_pool:
        futures = [
            mod_pool.submit(scan_mod, info, info.id in enabled_set, config, image_pool, log)
            for info in infos
        ]
        scanned = [f.result() for f in futures]

    mods: List[ModResult] = []
    for result, mod_issues in scanned:
        mods.append(result)
        issues.extend(mod_issues)

    total = total_across_mods(mods)
    enabled_total = total_across_mods(m for m in mods if m.enabled)

    elapsed = _ms_since(start)
    if config.show_performance:
        log.log(f"Finished run in {elapsed} ms")

    return EstimateReport(
        mods_root=str(root),
        mods=mods,
        enabled_mod_ids=enabled_ids,
        total_bytes=total,
        enabled_total_bytes=enabled_total,
        issues=issues,
        normal_maps_enabled=config.normal_maps_enabled,
        material_maps_enabled=config.material_maps_enabled,
        surface_maps_enabled=config.surface_maps_enabled,
        elapsed_ms=elapsed,
    )
