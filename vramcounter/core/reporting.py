# -*- coding: utf-8 -*-
from __future__ import annotations

import html
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from vramcounter.config import (
    OUTPUT_LABEL_WIDTH,
    UNUSED_SUFFIX,
    VANILLA_GAME_VRAM_USAGE_IN_BYTES,
)
from vramcounter.models import EstimateReport, ModResult, ScanIssue

BYTES_PER_MIB = 1048576


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _esc(s: Any) -> str:
    return html.escape("" if s is None else str(s))


def readable_size(num_bytes: int) -> str:
    return "%.3f MiB" % (num_bytes / BYTES_PER_MIB)


def mods_by_impact(report: EstimateReport) -> List[ModResult]:
    return sorted(report.mods, key=lambda m: (-m.total_bytes, m.info.name.lower()))


def _group_issues(issues: List[ScanIssue]) -> Dict[str, List[ScanIssue]]:
    groups = {"ERROR": [], "WARNING": [], "INFO": []}
    for i in issues:
        lvl = (i.level or "INFO").upper()
        if lvl not in groups:
            groups[lvl] = []
        groups[lvl].append(i)
    return groups


def build_mod_totals_text(report: EstimateReport) -> str:
    lines: List[str] = []
    for mod in mods_by_impact(report):
        lines.append("")
        lines.append(f"{mod.info.formatted_name} ({mod.image_count} images)")
        lines.append(readable_size(mod.total_bytes))
    return "\n".join(lines) + "\n"


def build_summary_text(report: EstimateReport) -> str:
    w = OUTPUT_LABEL_WIDTH
    enabled = "\n    ".join(m.info.formatted_name for m in report.enabled_mods)
    lines = [
        "",
        "-------------",
        "VRAM Use Estimates",
        "",
        "Configuration",
        "  Enabled Mods",
        f"    {enabled}",
        "  GraphicsLib",
        f"    Normal Maps Enabled: {str(report.normal_maps_enabled).lower()}",
        f"    Material Maps Enabled: {str(report.material_maps_enabled).lower()}",
        f"    Surface Maps Enabled: {str(report.surface_maps_enabled).lower()}",
        "    Edit the settings file to choose your GraphicsLib settings.",
        "",
        "Enabled + Disabled Mods w/o Vanilla".ljust(w) + readable_size(report.total_bytes),
        "Enabled + Disabled Mods w/ Vanilla".ljust(w)
        + readable_size(report.total_bytes + VANILLA_GAME_VRAM_USAGE_IN_BYTES),
        "",
        "Enabled Mods w/o Vanilla".ljust(w) + readable_size(report.enabled_total_bytes),
        "Enabled Mods w/ Vanilla".ljust(w)
        + readable_size(report.enabled_total_bytes + VANILLA_GAME_VRAM_USAGE_IN_BYTES),
        "",
        "*This is only an estimate of VRAM use and actual use may be higher or lower*",
        f'*Unused images in mods are counted unless they end with "{UNUSED_SUFFIX}"*',
    ]
    return "\n".join(lines) + "\n"


def build_output_text(progress_text: str, report: EstimateReport) -> str:
    return progress_text + build_mod_totals_text(report) + build_summary_text(report)


def write_text_output(text: str, output_path: str) -> str:
    p = Path(output_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return str(p)


def build_report_html(
    tool_name: str,
    tool_version: str,
    report: EstimateReport,
) -> str:
    groups = _group_issues(report.issues)

    css = """
    body { font-family: -apple-system, Segoe UI, Roboto, Arial, sans-serif; margin: 24px; }
    h1 { margin: 0 0 6px 0; }
    .sub { color: #444; margin: 0 0 18px 0; }
    .card { border: 1px solid #ddd; border-radius: 10px; padding: 14px; margin: 12px 0; }
    .row { display: flex; gap: 18px; flex-wrap: wrap; }
    .kv { min-width: 260px; }
    .k { color: #666; font-size: 12px; }
    .v { font-weight: 600; }
    table { width: 100%; border-collapse: collapse; margin-top: 8px; }
    th, td { border-bottom: 1px solid #eee; padding: 8px; text-align: left; vertical-align: top; font-size: 13px; }
    th { background: #fafafa; position: sticky; top: 0; }
    .pill { display: inline-block; padding: 2px 8px; border-radius: 999px; font-size: 12px; font-weight: 700; }
    .err { background: #ffe9e9; color: #8a0000; }
    .warn { background: #fff4d6; color: #7a5200; }
    .info { background: #e9f3ff; color: #003a7a; }
    .on { background: #e6f7e6; color: #1d5e1d; }
    code { background: #f6f6f6; padding: 1px 4px; border-radius: 6px; }
    .small { font-size: 12px; color: #555; }
    """

    def pill(level: str) -> str:
        lvl = level.upper()
        if lvl == "ERROR":
            return '<span class="pill err">ERROR</span>'
        if lvl == "WARNING":
            return '<span class="pill warn">WARNING</span>'
        return '<span class="pill info">INFO</span>'

    def render_issues(level: str, items: List[ScanIssue]) -> str:
        if not items:
            return f"<p class='small'>No {level.lower()}s.</p>"
        rows = []
        for i in items:
            rel = f"<code>{_esc(i.relpath)}</code>" if i.relpath else ""
            rows.append(
                f"<tr>"
                f"<td>{pill(i.level)}</td>"
                f"<td><code>{_esc(i.code)}</code></td>"
                f"<td>{_esc(i.message)} {rel}</td>"
                f"</tr>"
            )
        return (
            "<table>"
            "<thead><tr><th>Level</th><th>Code</th><th>Message</th></tr></thead>"
            "<tbody>"
            + "".join(rows) +
            "</tbody></table>"
        )

    mod_rows = []
    for m in mods_by_impact(report):
        status = '<span class="pill on">enabled</span>' if m.enabled else ""
        mod_rows.append(
            f"<tr>"
            f"<td>{_esc(m.info.name)}</td>"
            f"<td><code>{_esc(m.info.id)}</code></td>"
            f"<td class='small'>{_esc(m.info.version)}</td>"
            f"<td>{status}</td>"
            f"<td class='small'>{m.image_count}</td>"
            f"<td class='small'>{len(m.counted)}</td>"
            f"<td>{_esc(readable_size(m.total_bytes))}</td>"
            f"</tr>"
        )

    def kv(label: str, value: Any) -> str:
        return f'<div class="kv"><div class="k">{_esc(label)}</div><div class="v">{_esc(value)}</div></div>'

    all_total = report.total_bytes
    enabled_total = report.enabled_total_bytes

    html_out = f"""
<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <title>{_esc(tool_name)} Report</title>
  <style>{css}</style>
</head>
<body>
  <h1>{_esc(tool_name)} - VRAM Use Estimates</h1>
  <p class="sub">Generated {_esc(_utc_now())} (UTC) - Tool version {_esc(tool_version)}</p>

  <div class="card">
    <div class="row">
      {kv("Enabled + Disabled Mods w/o Vanilla", readable_size(all_total))}
      {kv("Enabled + Disabled Mods w/ Vanilla", readable_size(all_total + VANILLA_GAME_VRAM_USAGE_IN_BYTES))}
    </div>
    <div class="row" style="margin-top:10px;">
      {kv("Enabled Mods w/o Vanilla", readable_size(enabled_total))}
      {kv("Enabled Mods w/ Vanilla", readable_size(enabled_total + VANILLA_GAME_VRAM_USAGE_IN_BYTES))}
    </div>
    <div class="row" style="margin-top:10px;">
      {kv("Normal Maps Enabled", report.normal_maps_enabled)}
      {kv("Material Maps Enabled", report.material_maps_enabled)}
      {kv("Surface Maps Enabled", report.surface_maps_enabled)}
    </div>
    <div class="row" style="margin-top:10px;">
      <div class="kv" style="min-width:420px;"><div class="k">Mods Folder</div><div class="v"><code>{_esc(report.mods_root)}</code></div></div>
    </div>
  </div>

  <div class="card">
    <h2>Mods</h2>
    <p class="small">Per-mod totals count shared images in every mod that ships them; the totals above count them once.</p>
    <table>
      <thead>
        <tr>
          <th>Name</th>
          <th>Id</th>
          <th>Version</th>
          <th>Status</th>
          <th>Images</th>
          <th>Counted</th>
          <th>Estimate</th>
        </tr>
      </thead>
      <tbody>
        {''.join(mod_rows) if mod_rows else '<tr><td colspan="7" class="small">No mods found.</td></tr>'}
      </tbody>
    </table>
  </div>

  <div class="card">
    <h2>Scan Issues</h2>
    <p class="small">
      {len(groups.get("ERROR", []))} error(s),
      {len(groups.get("WARNING", []))} warning(s),
      {len(groups.get("INFO", []))} info
    </p>

    <h3>Errors</h3>
    {render_issues("ERROR", groups.get("ERROR", []))}

    <h3>Warnings</h3>
    {render_issues("WARNING", groups.get("WARNING", []))}

    <h3>Info</h3>
    {render_issues("INFO", groups.get("INFO", []))}
  </div>

  <p class="small">This is only an estimate of VRAM use and actual use may be higher or lower.</p>
</body>
</html>
"""
    return html_out


def write_report_html(html_text: str, report_path: str) -> str:
    p = Path(report_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(html_text, encoding="utf-8")
    return str(p)
