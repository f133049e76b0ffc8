"""
Command-line entry point for generating a locked synthetic mortality universe.

Usage (from project root):

    python -m mortality_gen.cli [--out data/raw] [--year 2023]

This script:
1) Generates the deterministic country-year mortality dataset
2) Writes CSV snapshots to disk
3) Produces a cryptographic dataset manifest to lock the snapshot
4) Prints a short digest: metric summaries, top gaps, a simulator scenario
"""

from __future__ import annotations

import argparse
import datetime
import hashlib
import json
import logging
import platform
from pathlib import Path
from typing import Dict, List, Optional

from . import analytics, config
from .generators import age_groups_frame, causes_frame, generate_mortality_data, records_frame
from .schemas import Metric
from .simulator import simulate

logger = logging.getLogger(__name__)

SUMMARY_METRICS = [
    Metric.LIFE_EXPECTANCY,
    Metric.MORTALITY_RATE,
    Metric.PREVENTABLE_PERCENTAGE,
    Metric.HEALTHCARE_SPENDING,
]


# -------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------

def file_hash(path: Path) -> str:
    """Compute SHA-256 hash of a file (streaming-safe)."""
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="mortality_gen",
        description="Generate and snapshot the synthetic mortality dataset.",
    )
    ap.add_argument("--out", type=Path, default=config.OUTPUT_DIR, help="output directory")
    ap.add_argument("--year", type=int, default=config.END_YEAR, help="year for gap analysis")
    ap.add_argument("--top", type=int, default=5, help="number of gaps to print")
    ap.add_argument("--investment", type=float, default=config.DEFAULT_INVESTMENT)
    ap.add_argument("--coverage", type=float, default=config.DEFAULT_COVERAGE)
    ap.add_argument("--detection", type=float, default=config.DEFAULT_DETECTION)
    ap.add_argument(
        "--log-level",
        type=str.upper,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return ap


def write_snapshot(records, out_dir: Path) -> Dict[str, Path]:
    """Write the CSV tables and the manifest; return the written paths."""
    out_dir.mkdir(parents=True, exist_ok=True)

    tables = {
        "mortality.csv": records_frame(records),
        "causes.csv": causes_frame(records),
        "age_groups.csv": age_groups_frame(records),
    }
    paths = {name: out_dir / name for name in tables}
    for name, frame in tables.items():
        frame.to_csv(paths[name], index=False)
        logger.debug("Wrote %d rows to %s", len(frame), paths[name])

    manifest = {
        "dataset_version": config.DATASET_VERSION,
        "generated_at_utc": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "generator_entrypoint": "mortality_gen.cli",
        "generator_function": "generate_mortality_data",
        "python_version": platform.python_version(),
        "platform": platform.platform(),
        "year_range": [config.START_YEAR, config.END_YEAR],
        "row_counts": {name.removesuffix(".csv"): len(frame) for name, frame in tables.items()},
        "file_hashes_sha256": {
            name: file_hash(path) for name, path in paths.items()
        },
    }

    manifest_path = out_dir / "dataset_manifest.json"
    with open(manifest_path, "w") as f:
        json.dump(manifest, f, indent=2)

    paths["dataset_manifest.json"] = manifest_path
    return paths


# -------------------------------------------------------------------
# Main entrypoint
# -------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level)

    print("▶ Generating synthetic mortality universe...")
    records = generate_mortality_data()

    paths = write_snapshot(records, args.out)
    print(f"✔ Data written to {args.out}")
    print(f"✔ Manifest path: {paths['dataset_manifest.json']}")

    # ---------------- Metric digest ---------------- #

    for metric in SUMMARY_METRICS:
        s = analytics.summarize(records, metric)
        print(
            f"ℹ {metric.label}: {s.current:,.2f} "
            f"({s.change:+.2f}, {s.change_percentage:+.2f}% vs previous year)"
        )

    # ---------------- Gap digest ---------------- #

    gaps = analytics.analyze_gaps(records, args.year)
    print(
        f"ℹ {len(gaps)} material gaps in {args.year}, "
        f"~{analytics.total_opportunity(gaps):,} lives if closed"
    )
    for g in gaps[: args.top]:
        print(
            f"  [{g.priority}] {g.country} {g.metric}: "
            f"{g.current:.1f} vs {g.benchmark:.1f} -> {g.potential_lives_saved:,} lives"
        )

    # ---------------- Simulator scenario ---------------- #

    out = simulate(args.investment, args.coverage, args.detection)
    roi = "n/a" if out.roi is None else f"{out.roi:+.0f}%"
    print(
        f"ℹ Simulated levers {args.investment:g}/{args.coverage:g}/{args.detection:g}: "
        f"{out.deaths_avoided:,} deaths avoided ({out.total_reduction:.1f}%), ROI {roi}"
    )

    print("✅ Dataset generation complete and LOCKED")


# -------------------------------------------------------------------
# CLI hook
# -------------------------------------------------------------------

if __name__ == "__main__":
    main()
