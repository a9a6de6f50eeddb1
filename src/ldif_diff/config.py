"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_FILENAME = "ldif_diff.toml"

DEFAULT_LINE_SEPARATOR_BYTES = 1
ALLOWED_LINE_SEPARATOR_BYTES = (1, 2)
DEFAULT_UNIQUE_IDENTIFIER = "uid"
DEFAULT_PROGRESS_INTERVAL = 1000


@dataclass(slots=True, frozen=True)
class IndexConfig:
    """Indexer settings."""

    line_separator_bytes: int


@dataclass(slots=True, frozen=True)
class AlignConfig:
    """Alignment settings."""

    unique_identifier: str


@dataclass(slots=True, frozen=True)
class ReportConfig:
    """Reporting settings. A progress interval of 0 disables progress lines."""

    progress_interval: int


@dataclass(slots=True, frozen=True)
class LoggingConfig:
    """Run log settings."""

    run_log: Path | None


@dataclass(slots=True, frozen=True)
class DiffConfig:
    """Fully merged comparison configuration."""

    config_dir: Path
    index: IndexConfig
    align: AlignConfig
    report: ReportConfig
    logging: LoggingConfig

    @property
    def line_separator(self) -> bytes:
        """Return the terminator implied by ``index.line_separator_bytes``."""
        return b"\r\n" if self.index.line_separator_bytes == 2 else b"\n"

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot for run logs."""
        return {
            "config_dir": str(self.config_dir),
            "index": {
                "line_separator_bytes": self.index.line_separator_bytes,
            },
            "align": {
                "unique_identifier": self.align.unique_identifier,
            },
            "report": {
                "progress_interval": self.report.progress_interval,
            },
            "logging": {
                "run_log": str(self.logging.run_log) if self.logging.run_log else None,
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    line_separator_bytes: int | None = None
    unique_identifier: str | None = None
    progress_interval: int | None = None
    run_log: Path | None = None


def default_config(config_dir: Path) -> DiffConfig:
    """Build default config for a given config directory."""
    return DiffConfig(
        config_dir=config_dir.resolve(),
        index=IndexConfig(line_separator_bytes=DEFAULT_LINE_SEPARATOR_BYTES),
        align=AlignConfig(unique_identifier=DEFAULT_UNIQUE_IDENTIFIER),
        report=ReportConfig(progress_interval=DEFAULT_PROGRESS_INTERVAL),
        logging=LoggingConfig(run_log=None),
    )


def load_config_file(config_dir: Path) -> dict[str, object]:
    """Load optional ldif_diff.toml from the config directory."""
    config_path = config_dir / CONFIG_FILENAME
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILENAME} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def merge_config(
    base: DiffConfig, file_payload: dict[str, object], overrides: CliOverrides
) -> DiffConfig:
    """Merge defaults, config file, then CLI overrides."""
    index_payload = _get_table(file_payload, "index")
    align_payload = _get_table(file_payload, "align")
    report_payload = _get_table(file_payload, "report")
    logging_payload = _get_table(file_payload, "logging")

    line_separator_bytes = _optional_line_separator_bytes(
        index_payload.get("line_separator_bytes"),
        "index.line_separator_bytes",
        base.index.line_separator_bytes,
    )
    unique_identifier = _optional_name(
        align_payload.get("unique_identifier"),
        "align.unique_identifier",
        base.align.unique_identifier,
    )
    progress_interval = _optional_non_negative_int(
        report_payload.get("progress_interval"),
        "report.progress_interval",
        base.report.progress_interval,
    )

    run_log = base.logging.run_log
    if "run_log" in logging_payload:
        raw_run_log = logging_payload["run_log"]
        if not isinstance(raw_run_log, str) or not raw_run_log.strip():
            raise ValueError("Config field 'logging.run_log' must be a non-empty string.")
        run_log = (base.config_dir / raw_run_log).resolve()

    merged = DiffConfig(
        config_dir=base.config_dir,
        index=IndexConfig(line_separator_bytes=line_separator_bytes),
        align=AlignConfig(unique_identifier=unique_identifier),
        report=ReportConfig(progress_interval=progress_interval),
        logging=LoggingConfig(run_log=run_log),
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: DiffConfig, overrides: CliOverrides) -> DiffConfig:
    """Apply startup overrides at highest precedence."""
    line_separator_bytes = _optional_line_separator_bytes(
        overrides.line_separator_bytes,
        "overrides.line_separator_bytes",
        config.index.line_separator_bytes,
    )
    unique_identifier = _optional_name(
        overrides.unique_identifier,
        "overrides.unique_identifier",
        config.align.unique_identifier,
    )
    progress_interval = _optional_non_negative_int(
        overrides.progress_interval,
        "overrides.progress_interval",
        config.report.progress_interval,
    )
    run_log = overrides.run_log.resolve() if overrides.run_log else config.logging.run_log
    return DiffConfig(
        config_dir=config.config_dir,
        index=IndexConfig(line_separator_bytes=line_separator_bytes),
        align=AlignConfig(unique_identifier=unique_identifier),
        report=ReportConfig(progress_interval=progress_interval),
        logging=LoggingConfig(run_log=run_log),
    )


def load_effective_config(
    config_dir: Path, overrides: CliOverrides | None = None
) -> DiffConfig:
    """Load effective config using merge order defaults -> config file -> overrides."""
    resolved_dir = config_dir.resolve()
    base = default_config(resolved_dir)
    payload = load_config_file(resolved_dir)
    return merge_config(base, payload, overrides or CliOverrides())


def _optional_line_separator_bytes(value: object, name: str, default: int) -> int:
    if value is None:
        return default
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Config field '{name}' must be an integer.")
    if value not in ALLOWED_LINE_SEPARATOR_BYTES:
        raise ValueError(f"Config field '{name}' must be one of {ALLOWED_LINE_SEPARATOR_BYTES}.")
    return value


def _optional_non_negative_int(value: object, name: str, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"Config field '{name}' must be a non-negative integer.")
    return value


def _optional_name(value: object, name: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Config field '{name}' must be a non-empty string.")
    return value.strip()
