"""Command line entrypoint for comparing two LDIF files."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ldif_diff.compare import compare_files
from ldif_diff.config import ALLOWED_LINE_SEPARATOR_BYTES, CliOverrides, load_effective_config
from ldif_diff.errors import LdifDiffError


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for a comparison run."""
    parser = argparse.ArgumentParser(
        prog="ldif-diff",
        description="Compare two LDIF files and print per-attribute differences.",
    )
    parser.add_argument("orig", nargs="?", default=None, help="Original LDIF file.")
    parser.add_argument("new", nargs="?", default=None, help="New LDIF file.")
    parser.add_argument("--config-dir", required=False, default=".")
    parser.add_argument(
        "--line-separator-bytes",
        type=int,
        choices=ALLOWED_LINE_SEPARATOR_BYTES,
        required=False,
        default=None,
    )
    parser.add_argument("--unique-identifier", required=False, default=None)
    parser.add_argument("--progress-interval", type=int, required=False, default=None)
    parser.add_argument("--run-log", required=False, default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the ldif-diff process."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.orig is None or args.new is None:
        parser.print_usage(sys.stdout)
        return 1
    overrides = CliOverrides(
        line_separator_bytes=args.line_separator_bytes,
        unique_identifier=args.unique_identifier,
        progress_interval=args.progress_interval,
        run_log=Path(args.run_log) if args.run_log is not None else None,
    )
    try:
        config = load_effective_config(Path(args.config_dir), overrides=overrides)
    except ValueError as exc:
        print(f"ldif-diff: error: {exc}", file=sys.stderr)
        return 1
    try:
        compare_files(
            args.orig,
            args.new,
            config=config,
            out_stream=sys.stdout,
            progress_stream=sys.stderr,
        )
    except (LdifDiffError, LookupError) as exc:
        print(f"ldif-diff: error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
