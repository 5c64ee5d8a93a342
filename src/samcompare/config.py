"""Configuration management for samcompare."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from samcompare.constants import (
    DEFAULT_DISTANCE_FRACTION,
    DEFAULT_MODE,
    DEFAULT_QUALITY_THRESHOLDS,
)
from samcompare.core.modes import ComparisonMode
from samcompare.core.quality import parse_thresholds, validate_thresholds
from samcompare.exceptions import ConfigurationError


@dataclass
class RuntimeConfig:
    """Runtime configuration."""

    log_level: str = "WARNING"
    log_file: Optional[Path] = None


@dataclass
class CompareConfig:
    """Parameters consumed by the classification engine and reporter."""

    # Prefix for <prefix>_gain.txt / _loss.txt / _diff.txt; None disables them
    output_prefix: Optional[str] = None
    distance_fraction: float = DEFAULT_DISTANCE_FRACTION
    thresholds: List[int] = field(default_factory=lambda: list(DEFAULT_QUALITY_THRESHOLDS))
    mode: str = DEFAULT_MODE
    # Write full record descriptions instead of bare read names
    detailed_output: bool = False
    # Append per-file mapped-at-quality blocks to the report
    report_mapped: bool = False
    summary_file: Optional[Path] = None


@dataclass
class Config:
    """Main configuration class."""

    target: Optional[Path] = None
    test: Optional[Path] = None
    compare: CompareConfig = field(default_factory=CompareConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)

    @property
    def comparison_mode(self) -> ComparisonMode:
        return ComparisonMode.parse(self.compare.mode)

    def validate(self) -> None:
        """Validate configuration."""
        if not self.target:
            raise ConfigurationError("Target SAM file is required")
        if not self.test:
            raise ConfigurationError("Test SAM file is required")

        distance = self.compare.distance_fraction
        if isinstance(distance, bool) or not isinstance(distance, (int, float)):
            raise ConfigurationError(f"Invalid distance: {distance!r}")
        if not math.isfinite(distance) or distance < 0:
            raise ConfigurationError(f"Distance must be a finite value >= 0: {distance}")

        self.compare.thresholds = validate_thresholds(self.compare.thresholds)
        ComparisonMode.parse(self.compare.mode)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""

        def path_to_str(obj):
            if isinstance(obj, Path):
                return str(obj)
            elif isinstance(obj, dict):
                return {k: path_to_str(v) for k, v in obj.items()}
            elif isinstance(obj, (list, tuple)):
                return [path_to_str(item) for item in obj]
            return obj

        return path_to_str(asdict(self))


def _coerce_distance(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid distance: {value!r}") from None


def coerce_thresholds(value: Any) -> List[int]:
    if isinstance(value, str):
        return parse_thresholds(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return validate_thresholds([value])
    if isinstance(value, (list, tuple)):
        return validate_thresholds(value)
    raise ConfigurationError(f"Invalid quality threshold list: {value!r}")


def _section(data: dict, name: str, path: Path) -> dict:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"Section '{name}' must be a mapping in {path}")
    bad_keys = [k for k in section if not isinstance(k, str)]
    if bad_keys:
        raise ConfigurationError(
            f"Section '{name}' keys must be strings in {path}: {bad_keys!r}"
        )
    return section


def load_config(path: Path) -> Config:
    """Load configuration from YAML file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration root must be a mapping: {path}")

    cfg = Config()

    if data.get("target") is not None:
        cfg.target = Path(data["target"])
    if data.get("test") is not None:
        cfg.test = Path(data["test"])

    compare = _section(data, "compare", path)
    unknown = sorted(k for k in compare if not hasattr(cfg.compare, k))
    if unknown:
        raise ConfigurationError("Unsupported compare option(s): " + ", ".join(unknown))
    for key, value in compare.items():
        if key == "distance_fraction":
            value = _coerce_distance(value)
        elif key == "thresholds":
            value = coerce_thresholds(value)
        elif key == "mode":
            value = ComparisonMode.parse(value).value
        elif key == "summary_file" and value:
            value = Path(value)
        setattr(cfg.compare, key, value)

    # Runtime config
    for key, value in _section(data, "runtime", path).items():
        if hasattr(cfg.runtime, key):
            if key == "log_file" and value:
                value = Path(value)
            setattr(cfg.runtime, key, value)

    return cfg


def save_config(cfg: Config, path: Path) -> None:
    """Save configuration to YAML file."""
    data = cfg.to_dict()
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
