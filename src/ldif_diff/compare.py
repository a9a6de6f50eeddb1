"""Comparison run orchestration: index, align, read, diff, report."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import BinaryIO, TextIO

from ldif_diff.align import AlignedPair, align
from ldif_diff.config import DEFAULT_LINE_SEPARATOR_BYTES, DiffConfig
from ldif_diff.diff import ADDED, REMOVED, RENAMED, DiffRecord, diff_pair, write_diff_records
from ldif_diff.errors import LdifDiffError, SourceNotFoundError
from ldif_diff.identifiers import UniqueIdentifierExtractor, select_extractor
from ldif_diff.index import ByteRange, Index, build_index
from ldif_diff.logging import (
    INDEX_BUILT,
    PROGRESS,
    RUN_ABORTED,
    RUN_FINISHED,
    RUN_STARTED,
    JsonlRunLogger,
)
from ldif_diff.records import LdifRecordParser, Record, RecordParser, read_entry

PairHook = Callable[[int, AlignedPair], None]


@dataclass(slots=True, frozen=True)
class ComparisonSummary:
    """Counters for one completed comparison run."""

    orig_records: int
    new_records: int
    pairs: int
    diff_records: int
    changed: int
    renamed: int
    added: int
    removed: int
    duration_ms: int


def build_indices(
    orig_source: BinaryIO,
    new_source: BinaryIO,
    line_separator_bytes: int = DEFAULT_LINE_SEPARATOR_BYTES,
) -> tuple[Index, Index]:
    """Index both sources completely, original first."""
    orig_index = build_index(orig_source, line_separator_bytes=line_separator_bytes)
    new_index = build_index(new_source, line_separator_bytes=line_separator_bytes)
    return orig_index, new_index


def iter_diff_records(
    orig_source: BinaryIO,
    new_source: BinaryIO,
    pairs: list[AlignedPair],
    parser: RecordParser,
    on_pair: PairHook | None = None,
) -> Iterator[DiffRecord]:
    """Read and diff each pair in order, yielding only non-empty diffs.

    ``on_pair`` is called with the running pair count after each pair has
    been fully handled, including consumption of its diff record.
    """
    for count, pair in enumerate(pairs, start=1):
        orig_record = _read_side(orig_source, pair.orig_key, pair.orig_range, parser)
        new_record = _read_side(new_source, pair.new_key, pair.new_range, parser)
        diff_record = diff_pair(pair, orig_record, new_record)
        if diff_record is not None:
            yield diff_record
        if on_pair is not None:
            on_pair(count, pair)


def compare_sources(
    orig_source: BinaryIO,
    new_source: BinaryIO,
    extractor: UniqueIdentifierExtractor,
    parser: RecordParser,
    line_separator_bytes: int = DEFAULT_LINE_SEPARATOR_BYTES,
    on_pair: PairHook | None = None,
) -> Iterator[DiffRecord]:
    """Yield diff records for two seekable LDIF sources."""
    orig_index, new_index = build_indices(orig_source, new_source, line_separator_bytes)
    pairs = align(orig_index, new_index, extractor)
    yield from iter_diff_records(orig_source, new_source, pairs, parser, on_pair=on_pair)


def compare_files(
    orig_path: str | Path,
    new_path: str | Path,
    config: DiffConfig,
    out_stream: TextIO,
    progress_stream: TextIO | None = None,
    parser: RecordParser | None = None,
) -> ComparisonSummary:
    """Compare two LDIF files and write the diff to ``out_stream``.

    The first error aborts the run; output already written is kept.
    """
    orig_file = _existing_path(orig_path)
    new_file = _existing_path(new_path)
    extractor = select_extractor(config)
    record_parser = parser or LdifRecordParser(line_separator=config.line_separator)
    run_logger = (
        JsonlRunLogger(config.logging.run_log) if config.logging.run_log is not None else None
    )
    started = time.perf_counter()
    if run_logger is not None:
        run_logger.emit(
            RUN_STARTED,
            {
                "orig_path": str(orig_file),
                "new_path": str(new_file),
                "config": config.to_public_dict(),
            },
        )

    interval = config.report.progress_interval

    def report_progress(count: int, pair: AlignedPair) -> None:
        _ = pair
        if interval < 1 or count % interval != 0:
            return
        if progress_stream is not None:
            progress_stream.write(f"Processed {count} entries\n")
            progress_stream.flush()
        if run_logger is not None:
            run_logger.emit(PROGRESS, {"pairs": count})

    counts = {RENAMED: 0, ADDED: 0, REMOVED: 0, "changed": 0}
    try:
        with orig_file.open("rb") as orig_source, new_file.open("rb") as new_source:
            index_started = time.perf_counter()
            orig_index, new_index = build_indices(
                orig_source, new_source, config.index.line_separator_bytes
            )
            if run_logger is not None:
                run_logger.emit(
                    INDEX_BUILT,
                    {
                        "orig_records": len(orig_index),
                        "new_records": len(new_index),
                        "index_seconds": time.perf_counter() - index_started,
                    },
                )
            pairs = align(orig_index, new_index, extractor)
            diff_records = 0
            for diff_record in iter_diff_records(
                orig_source, new_source, pairs, record_parser, on_pair=report_progress
            ):
                diff_records += write_diff_records((diff_record,), out_stream)
                kind = diff_record.identity if diff_record.identity in counts else "changed"
                counts[kind] += 1
    except LdifDiffError as exc:
        if run_logger is not None:
            run_logger.emit(RUN_ABORTED, {"message": str(exc)}, ok=False, error_code=exc.code)
        raise

    summary = ComparisonSummary(
        orig_records=len(orig_index),
        new_records=len(new_index),
        pairs=len(pairs),
        diff_records=diff_records,
        changed=counts["changed"],
        renamed=counts[RENAMED],
        added=counts[ADDED],
        removed=counts[REMOVED],
        duration_ms=int((time.perf_counter() - started) * 1000),
    )
    if run_logger is not None:
        run_logger.emit(RUN_FINISHED, asdict(summary))
    return summary


def _existing_path(path: str | Path) -> Path:
    candidate = Path(path)
    if not candidate.exists():
        raise SourceNotFoundError(str(path))
    return candidate


def _read_side(
    source: BinaryIO,
    key: str | None,
    byte_range: ByteRange | None,
    parser: RecordParser,
) -> Record | None:
    if key is None or byte_range is None:
        return None
    return read_entry(source, byte_range, key, parser)
