"""Structured JSONL run log utilities."""

from __future__ import annotations

import json
import uuid
from collections import deque
from collections.abc import Iterator
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

RUN_STARTED = "run_started"
INDEX_BUILT = "index_built"
PROGRESS = "progress"
RUN_FINISHED = "run_finished"
RUN_ABORTED = "run_aborted"


@dataclass(slots=True, frozen=True)
class RunEvent:
    """Single lifecycle event of one comparison run."""

    timestamp: str
    run_id: str
    event: str
    ok: bool
    error_code: str | None
    metadata: dict[str, object]


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_run_id() -> str:
    return f"run-{uuid.uuid4().hex[:12]}"


class JsonlRunLogger:
    """Append-only JSONL run logger and bounded reader."""

    def __init__(self, path: Path, run_id: str | None = None) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._run_id = run_id or new_run_id()

    @property
    def path(self) -> Path:
        """Return on-disk JSONL path."""
        return self._path

    @property
    def run_id(self) -> str:
        return self._run_id

    def emit(
        self,
        event: str,
        metadata: dict[str, object] | None = None,
        *,
        ok: bool = True,
        error_code: str | None = None,
    ) -> RunEvent:
        """Build, append, and return an event for the current run."""
        run_event = RunEvent(
            timestamp=utc_timestamp(),
            run_id=self._run_id,
            event=event,
            ok=ok,
            error_code=error_code,
            metadata=dict(metadata or {}),
        )
        self.append(run_event)
        return run_event

    def append(self, event: RunEvent) -> None:
        """Append ``event`` as one sorted-key JSON line."""
        line = json.dumps(asdict(event), sort_keys=True)
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(f"{line}\n")

    def read(
        self, since: str | None = None, limit: int = 50, *, all_runs: bool = False
    ) -> list[dict[str, object]]:
        """Return up to ``limit`` of the latest events at or after ``since``.

        Only events of this logger's run are returned unless ``all_runs`` is
        set. Lines that are not JSON objects are skipped.
        """
        if limit < 1 or not self._path.exists():
            return []
        latest: deque[dict[str, object]] = deque(maxlen=limit)
        for event in self._iter_events():
            if not all_runs and event.get("run_id") != self._run_id:
                continue
            if since is not None and str(event.get("timestamp", "")) < since:
                continue
            latest.append(event)
        return list(latest)

    def _iter_events(self) -> Iterator[dict[str, object]]:
        with self._path.open("r", encoding="utf-8") as handle:
            for line in handle:
                try:
                    event = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if isinstance(event, dict):
                    yield event
