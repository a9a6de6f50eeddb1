#!/usr/bin/env python3
"""Generate synthetic LDIF snapshots and time a full comparison run."""

from __future__ import annotations

import argparse
import io
import json
import sys
import time
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

from ldif_diff.compare import compare_files
from ldif_diff.config import CliOverrides, load_effective_config

DEFAULT_SCENARIOS = ("small", "medium", "large")


@dataclass(frozen=True, slots=True)
class FixtureProfile:
    """Size profile for a generated pair of LDIF snapshots."""

    records: int
    attributes_per_record: int
    values_per_attribute: int
    rename_every: int
    change_every: int


@dataclass(slots=True)
class BenchmarkRun:
    """One benchmark run result."""

    scenario: str
    orig_bytes: int
    new_bytes: int
    diff_records: int
    elapsed_seconds: float


FIXTURE_PROFILES: dict[str, FixtureProfile] = {
    "small": FixtureProfile(
        records=1_000,
        attributes_per_record=6,
        values_per_attribute=2,
        rename_every=50,
        change_every=10,
    ),
    "medium": FixtureProfile(
        records=25_000,
        attributes_per_record=8,
        values_per_attribute=2,
        rename_every=200,
        change_every=25,
    ),
    "large": FixtureProfile(
        records=200_000,
        attributes_per_record=10,
        values_per_attribute=3,
        rename_every=1_000,
        change_every=100,
    ),
}


def parse_scenarios(raw: str) -> list[str]:
    """Parse a comma separated scenario list, deduplicated in order."""
    output: list[str] = []
    for item in raw.split(","):
        name = item.strip()
        if not name:
            continue
        if name not in FIXTURE_PROFILES:
            raise ValueError(f"Unknown scenario: {name}")
        if name not in output:
            output.append(name)
    return output


def render_record(index: int, profile: FixtureProfile, variant: str) -> str:
    ou = "People"
    if variant == "new" and profile.rename_every and index % profile.rename_every == 0:
        ou = "Staff"
    lines = [f"dn: uid=user{index:07d},ou={ou},dc=example,dc=org"]
    lines.append("objectClass: inetOrgPerson")
    for attr in range(profile.attributes_per_record):
        for value in range(profile.values_per_attribute):
            text = f"value-{index}-{attr}-{value}"
            changed = (
                variant == "new"
                and profile.change_every
                and index % profile.change_every == 0
                and attr == 0
                and value == 0
            )
            if changed:
                text = f"{text}-changed"
            lines.append(f"attr{attr}: {text}")
    return "\n".join(lines) + "\n\n"


def write_fixture_ldif(path: Path, profile: FixtureProfile, variant: str) -> int:
    """Write one snapshot and return its size in bytes."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="\n") as handle:
        for index in range(profile.records):
            handle.write(render_record(index, profile, variant))
    return path.stat().st_size


def run_scenario(name: str, work_dir: Path) -> BenchmarkRun:
    profile = FIXTURE_PROFILES[name]
    orig_path = work_dir / name / "orig.ldif"
    new_path = work_dir / name / "new.ldif"
    orig_bytes = write_fixture_ldif(orig_path, profile, "orig")
    new_bytes = write_fixture_ldif(new_path, profile, "new")
    config = load_effective_config(work_dir, CliOverrides(progress_interval=0))
    started = time.perf_counter()
    summary = compare_files(orig_path, new_path, config=config, out_stream=io.StringIO())
    return BenchmarkRun(
        scenario=name,
        orig_bytes=orig_bytes,
        new_bytes=new_bytes,
        diff_records=summary.diff_records,
        elapsed_seconds=time.perf_counter() - started,
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--scenarios",
        default="small",
        help=f"Comma separated scenarios from {', '.join(DEFAULT_SCENARIOS)}. Default: small.",
    )
    parser.add_argument(
        "--work-dir",
        default=".ldif_diff/bench",
        help="Directory for generated fixtures. Default: .ldif_diff/bench.",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    scenarios = parse_scenarios(args.scenarios)
    work_dir = Path(args.work_dir).resolve()
    runs = [asdict(run_scenario(name, work_dir)) for name in scenarios]
    payload = {
        "timestamp": datetime.now(tz=UTC).isoformat(timespec="seconds"),
        "runs": runs,
    }
    sys.stdout.write(json.dumps(payload, indent=2, sort_keys=True))
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
