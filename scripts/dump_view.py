#!/usr/bin/env python3
"""Dump what the map would show for a telemetry export.

Loads the summary and readings documents (from URLs or local files),
applies the filters, and prints the selection, sampled markers and paths,
so you can check resolution and sampling against real data.

Usage
-----
From URLs configured in the environment::

    export FLEETMAP_SUMMARY_URL="https://.../summary.json"
    export FLEETMAP_READINGS_URL="https://.../sensor-readings.json"
    python scripts/dump_view.py

From local files::

    python scripts/dump_view.py --summary summary.json --readings sensor-readings.json

Options::

    --sensor ID          Only this sensor (repeatable; default: all)
    --start YYYY-MM-DD   First calendar day (default: summary minimum)
    --end YYYY-MM-DD     Last calendar day (default: summary maximum)
    --paths              Include sampled paths
    --reading ID         Print the details of one selected reading
    --sensors-file FILE  Sensor directory JSON
    --json               Output as machine-readable JSON
    --output FILE        Write JSON output to FILE instead of stdout
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyfleetmap import (  # noqa: E402
    FilterCriteria,
    FleetMapClient,
    FleetMapConfig,
    FleetMapError,
    FleetView,
    SensorDirectory,
)
from pyfleetmap.ingestion.documents import load_readings_file, load_summary_file  # noqa: E402
from pyfleetmap.ingestion.resolver import FIELD_CHAINS, winning_candidate  # noqa: E402
from pyfleetmap.view.details import reading_details  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


async def _load(config: FleetMapConfig, args: argparse.Namespace) -> FleetView:
    directory = SensorDirectory.from_config(config)
    if args.summary and args.readings:
        summary = load_summary_file(args.summary)
        readings = load_readings_file(args.readings)
        return FleetView(readings, summary, directory, tz=config.zone())

    async with FleetMapClient(config) as client:
        dataset = await client.load()
    return client.view(dataset, directory)


def _resolution_stats(readings: Any) -> dict[str, dict[str, int]]:
    """Count which candidate supplied each field across *readings*."""
    stats: dict[str, dict[str, int]] = {}
    for field in FIELD_CHAINS:
        counts: dict[str, int] = {}
        for reading in readings:
            name = winning_candidate(field, reading) or "<none>"
            counts[name] = counts.get(name, 0) + 1
        stats[field] = counts
    return stats


def _details(view: FleetView, criteria: FilterCriteria, reading_id: str) -> dict[str, dict[str, str]] | None:
    """Details of one selected reading, timestamps shown in the view's zone."""
    selected = view.find(criteria, reading_id)
    if selected is None:
        return None
    return reading_details(selected, view.directory, tz=view.tz)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Dump filtered readings, markers and paths for a telemetry export.",
    )
    parser.add_argument("--summary", help="Local summary document (instead of FLEETMAP_SUMMARY_URL)")
    parser.add_argument("--readings", help="Local readings document (instead of FLEETMAP_READINGS_URL)")
    parser.add_argument("--sensor", action="append", default=[], help="Only this sensor id (repeatable)")
    parser.add_argument("--start", type=date.fromisoformat, help="First calendar day (YYYY-MM-DD)")
    parser.add_argument("--end", type=date.fromisoformat, help="Last calendar day (YYYY-MM-DD)")
    parser.add_argument("--paths", action="store_true", help="Include sampled paths")
    parser.add_argument("--reading", help="Print the details of one selected reading")
    parser.add_argument("--sensors-file", help="Sensor directory JSON")
    parser.add_argument("--stats", action="store_true", help="Show which payload keys supplied each field")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write JSON output to FILE instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    if bool(args.summary) != bool(args.readings):
        parser.error("--summary and --readings must be given together")
    return args


# ── main ─────────────────────────────────────────────────────


async def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.sensors_file:
        overrides["sensors_file"] = args.sensors_file
    config = FleetMapConfig.from_env(**overrides)

    try:
        view = await _load(config, args)
    except FleetMapError as exc:
        print(f"!! load failed: {exc}", file=sys.stderr)
        return 1

    criteria = view.default_criteria()
    if args.sensor:
        criteria = criteria.with_sensors(args.sensor)
    if args.start or args.end:
        criteria = criteria.with_dates(args.start or criteria.start_date, args.end or criteria.end_date)

    filtered = view.filtered(criteria)
    markers = view.markers(criteria)
    paths = view.paths(criteria, args.paths)
    bounds = view.bounds(criteria)

    result: dict[str, Any] = {
        "criteria": criteria.model_dump(mode="json"),
        "total_readings": len(view.readings),
        "filtered": len(filtered),
        "markers": [m.model_dump(mode="json") for m in markers],
        "paths": [p.model_dump(mode="json") for p in paths],
        "bounds": bounds.model_dump(mode="json") if bounds is not None else None,
    }
    if args.stats:
        result["resolution"] = _resolution_stats(filtered)
    if args.reading:
        result["reading"] = _details(view, criteria, args.reading)

    if args.json_mode or args.output:
        payload = json.dumps(result, indent=2, default=str, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(payload, encoding="utf-8")
            print(f"JSON written to {args.output}", file=sys.stderr)
        else:
            print(payload)
        return 0

    out: list[str] = [_section("pyfleetmap dump_view")]
    out.append(f"  readings  : {len(view.readings)} loaded, {len(filtered)} selected")
    out.append(f"  markers   : {len(markers)}")
    out.append(f"  bounds    : {result['bounds']}")
    for sensor_id in sorted({r.sensor_id for r in filtered}):
        count = sum(1 for r in filtered if r.sensor_id == sensor_id)
        out.append(f"  - {view.directory.name_of(sensor_id)}: {count}")

    if paths:
        out.append(_section("PATHS"))
        for path in paths:
            out.append(f"  {view.directory.name_of(path.sensor_id)} {path.color}: {len(path.positions)} vertices")

    if args.stats:
        out.append(_section("FIELD RESOLUTION"))
        for field, counts in result["resolution"].items():
            out.append(f"  {field}:")
            for name, count in sorted(counts.items(), key=lambda item: -item[1]):
                out.append(f"    {name}: {count}")

    if args.reading:
        out.append(_section(f"READING {args.reading}"))
        details = result["reading"]
        if details is None:
            out.append("  !! not in the current selection")
        else:
            for title, fields in details.items():
                out.append(f"  ── {title} ──")
                for label, value in fields.items():
                    out.append(f"    {label}: {value}")

    print("\n".join(out))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
