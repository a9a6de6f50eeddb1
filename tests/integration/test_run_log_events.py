from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from ldif_diff.compare import compare_files
from ldif_diff.config import CliOverrides, load_effective_config
from ldif_diff.errors import MalformedInputError


def _events(path: Path) -> list[dict[str, object]]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_completed_run_logs_lifecycle_events(tmp_path: Path) -> None:
    orig = tmp_path / "orig.ldif"
    new = tmp_path / "new.ldif"
    orig.write_bytes(b"dn: cn=a,dc=x\ncn: a\n\ndn: cn=b,dc=x\ncn: b\n\n")
    new.write_bytes(b"dn: cn=a,dc=x\ncn: a\n\n")
    run_log = tmp_path / "logs" / "run.jsonl"
    config = load_effective_config(
        tmp_path, CliOverrides(run_log=run_log, progress_interval=1)
    )

    compare_files(orig, new, config=config, out_stream=io.StringIO())

    events = _events(run_log)
    assert [event["event"] for event in events] == [
        "run_started",
        "index_built",
        "progress",
        "progress",
        "run_finished",
    ]
    assert len({event["run_id"] for event in events}) == 1
    assert events[1]["metadata"]["orig_records"] == 2
    assert events[1]["metadata"]["new_records"] == 1
    assert events[-1]["metadata"]["removed"] == 1
    assert all(event["ok"] is True for event in events)


def test_aborted_run_logs_error_code(tmp_path: Path) -> None:
    orig = tmp_path / "orig.ldif"
    new = tmp_path / "new.ldif"
    orig.write_bytes(b"\ndn: cn=a,dc=x\ncn: a\n\n")
    new.write_bytes(b"dn: cn=a,dc=x\ncn: a\n\n")
    run_log = tmp_path / "run.jsonl"
    config = load_effective_config(tmp_path, CliOverrides(run_log=run_log))

    with pytest.raises(MalformedInputError):
        compare_files(orig, new, config=config, out_stream=io.StringIO())

    events = _events(run_log)
    assert [event["event"] for event in events] == ["run_started", "run_aborted"]
    assert events[-1]["ok"] is False
    assert events[-1]["error_code"] == "MALFORMED_INPUT"
