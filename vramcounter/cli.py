from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from vramcounter.config import (
    APP_NAME,
    APP_VERSION,
    LEGACY_SETTINGS_FILE_NAME,
    OUTPUT_FILE_NAME,
    SETTINGS_FILE_NAME,
)
from vramcounter.core.engine import run_estimate
from vramcounter.core.export import build_estimate_dict, write_estimate_json
from vramcounter.core.progress import ProgressLog
from vramcounter.core.reporting import (
    build_mod_totals_text,
    build_output_text,
    build_report_html,
    build_summary_text,
    write_report_html,
    write_text_output,
)
from vramcounter.core.scanner import ModsFolderNotFoundError
from vramcounter.core.settings import load_settings


def default_settings_path(cwd: Path) -> Path:
    json_path = cwd / SETTINGS_FILE_NAME
    legacy = cwd / LEGACY_SETTINGS_FILE_NAME
    if not json_path.exists() and legacy.exists():
        return legacy
    return json_path


def ask_yes_no(question: str, default: bool = True) -> bool:
    hint = "Y/n" if default else "y/N"
    answer = input(f"{question} [{hint}] ").strip().lower()
    if not answer:
        return default
    return answer in ("y", "yes")


def prompt_for_maps(
    normal: Optional[bool],
    material: Optional[bool],
    surface: Optional[bool],
) -> Tuple[bool, bool, bool]:
    print("GraphicsLib is enabled. Choose which of its maps are turned on.")
    if normal is None:
        normal = ask_yes_no("Are GraphicsLib normal maps enabled?")
    if material is None:
        material = ask_yes_no("Are GraphicsLib material maps enabled?")
    if surface is None:
        surface = ask_yes_no("Are GraphicsLib surface maps enabled?")
    return normal, material, surface


def build_parser() -> argparse.ArgumentParser:
    cwd = Path.cwd()
    parser = argparse.ArgumentParser(
        prog="vram-counter",
        description="Estimate the VRAM used by the images of every mod in a mods folder.",
    )
    parser.add_argument("--mods-folder", default=str(cwd.parent),
                        help="Folder holding one sub-folder per mod (default: parent of the working directory).")
    parser.add_argument("--settings", default=str(default_settings_path(cwd)),
                        help="Settings file (.json, or the legacy config.properties).")
    parser.add_argument("--output", default=str(cwd / OUTPUT_FILE_NAME),
                        help="Text file receiving the progress log and summary.")
    parser.add_argument("--html", default=None, help="Also write an HTML report here.")
    parser.add_argument("--json", default=None, help="Also write the estimate as JSON here.")
    parser.add_argument("--copy-summary", action="store_true", help="Copy the summary to the clipboard.")
    parser.add_argument("--no-prompt", action="store_true",
                        help="Never ask for GraphicsLib settings; unset maps count as enabled.")
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_settings(args.settings)
    log = ProgressLog(echo=print)

    try:
        report = run_estimate(
            args.mods_folder,
            settings,
            prompt=None if args.no_prompt else prompt_for_maps,
            log=log,
        )
    except ModsFolderNotFoundError as e:
        print(f"This doesn't exist! {e}", file=sys.stderr)
        return 1

    log.log("\n")
    totals = build_mod_totals_text(report)
    summary = build_summary_text(report)
    print(totals)
    print(summary)

    written = write_text_output(build_output_text(log.text(), report), args.output)
    print(f"\nFile written to {written}.")

    if args.html:
        html_path = write_report_html(build_report_html(APP_NAME, APP_VERSION, report), args.html)
        print(f"Report written to {html_path}.")

    if args.json:
        json_path = write_estimate_json(build_estimate_dict(APP_NAME, APP_VERSION, report), args.json)
        print(f"Estimate written to {json_path}.")

    if args.copy_summary:
        from vramcounter.ui.clipboard import copy_to_clipboard

        copy_to_clipboard(summary)
        print("Summary copied to clipboard, ready to paste.")

    return 0
