"""
Configuration loading.

The packaged config.yaml holds the defaults. A user file is merged over it
section by section, and command line overrides are applied last.
"""

import codecs
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional, Tuple

import yaml

from sales_reports.errors import ConfigurationError

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

ON_ERROR_POLICIES = ("skip", "abort")
OUTPUT_FORMATS = ("csv", "jsonl", "table")


@dataclass(frozen=True)
class Precision:
    currency: int = 2
    percentage: int = 2
    discount_percentage: int = 1


@dataclass(frozen=True)
class ReportConfig:
    input_path: Path
    on_error: str = "skip"
    encoding: str = "utf-8"
    reports: Tuple[str, ...] = ()
    output_format: str = "csv"
    output_dir: Path = Path("reports-output")
    precision: Precision = field(default_factory=Precision)
    log_level: str = "INFO"

    def __post_init__(self):
        if self.on_error not in ON_ERROR_POLICIES:
            raise ConfigurationError(
                f"on_error must be one of {', '.join(ON_ERROR_POLICIES)}, got '{self.on_error}'"
            )
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"output format must be one of {', '.join(OUTPUT_FORMATS)}, got '{self.output_format}'"
            )
        try:
            codecs.lookup(self.encoding)
        except (LookupError, TypeError) as e:
            raise ConfigurationError(f"unknown input encoding '{self.encoding}'") from e
        if str(self.log_level).upper() not in logging.getLevelNamesMapping():
            raise ConfigurationError(f"unknown log level '{self.log_level}'")
        for name in ("currency", "percentage", "discount_percentage"):
            value = getattr(self.precision, name)
            if not isinstance(value, int) or value < 0:
                raise ConfigurationError(f"precision.{name} must be a non-negative integer, got {value!r}")

    def with_overrides(self, **overrides: Any) -> "ReportConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _read_yaml(path: Path) -> dict:
    try:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise ConfigurationError(f"Config file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Config file {path} is not valid YAML: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping at the top level")
    return raw


def _merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[Path] = None) -> ReportConfig:
    """
    Load the packaged defaults, merge the optional user file over them
    and build a ReportConfig.
    """
    raw = _read_yaml(DEFAULT_CONFIG_PATH)
    if path is not None:
        raw = _merge(raw, _read_yaml(Path(path)))

    input_cfg = raw.get("input") or {}
    output_cfg = raw.get("output") or {}
    precision_cfg = raw.get("precision") or {}
    logging_cfg = raw.get("logging") or {}

    reports = raw.get("reports") or []
    if isinstance(reports, str):
        reports = [reports]

    try:
        precision = Precision(**precision_cfg)
    except TypeError as e:
        raise ConfigurationError(f"Invalid precision section: {e}") from e

    return ReportConfig(
        input_path=Path(input_cfg.get("path", "data/superstore.csv")),
        on_error=input_cfg.get("on_error", "skip"),
        encoding=input_cfg.get("encoding", "utf-8"),
        reports=tuple(reports),
        output_format=output_cfg.get("format", "csv"),
        output_dir=Path(output_cfg.get("directory", "reports-output")),
        precision=precision,
        log_level=logging_cfg.get("level", "INFO"),
    )
