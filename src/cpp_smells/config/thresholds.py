"""Threshold configuration for code smell severities.

Every severity a detector assigns is looked up here; detectors never carry
their own magic numbers.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from ..analysis.models import Severity
from ..core.exceptions import ConfigError


@dataclass(frozen=True)
class SeverityBands:
    """Three-level band for a numeric smell measure.

    A value must exceed ``low`` to be reported at all. Above ``high`` it is
    high severity, above ``medium`` medium, otherwise low. Setting
    ``medium == low`` means every reported value is at least medium.
    """

    low: int
    medium: int
    high: int

    def __post_init__(self) -> None:
        if not self.low <= self.medium <= self.high:
            raise ConfigError(
                f"Severity bands must satisfy low <= medium <= high, got "
                f"{self.low}/{self.medium}/{self.high}"
            )

    def severity_for(self, value: int) -> Severity | None:
        """Map a measure to a severity, or None when it is below the band."""
        if value <= self.low:
            return None
        if value > self.high:
            return Severity.HIGH
        if value > self.medium:
            return Severity.MEDIUM
        return Severity.LOW

    def to_dict(self) -> dict[str, int]:
        return {"low": self.low, "medium": self.medium, "high": self.high}


_BAND_FIELDS = (
    "long_function",
    "large_class_lines",
    "large_class_methods",
    "long_parameter_list",
    "inappropriate_intimacy",
    "complex_condition",
    "deep_nesting",
)

_SEVERITY_FIELDS = (
    "global_variable_severity",
    "duplicate_code_severity",
    "primitive_obsession_severity",
)


@dataclass(frozen=True)
class ThresholdConfig:
    """Complete threshold configuration."""

    # Body line count of a function definition
    long_function: SeverityBands = SeverityBands(low=20, medium=30, high=40)

    # Large class: the more severe of the two bands wins
    large_class_lines: SeverityBands = SeverityBands(low=200, medium=200, high=500)
    large_class_methods: SeverityBands = SeverityBands(low=10, medium=10, high=20)

    # Non-empty comma-separated parameters
    long_parameter_list: SeverityBands = SeverityBands(low=4, medium=5, high=7)

    # Member accesses on a single foreign object inside one class
    inappropriate_intimacy: SeverityBands = SeverityBands(low=5, medium=5, high=10)

    # Logical / relational operators in one if-condition
    complex_condition: SeverityBands = SeverityBands(low=3, medium=3, high=5)

    # Brace nesting depth
    deep_nesting: SeverityBands = SeverityBands(low=3, medium=3, high=4)

    # Normalized body must be longer than this to be compared
    duplicate_code_min_chars: int = 100

    # Suspicious primitive parameters needed in one signature
    primitive_obsession_min_params: int = 2

    global_variable_severity: Severity = Severity.MEDIUM
    duplicate_code_severity: Severity = Severity.HIGH
    primitive_obsession_severity: Severity = Severity.MEDIUM

    # Longest code excerpt attached to a finding
    snippet_max_chars: int = 500

    # Files listed in AnalysisStats.worst_files
    worst_files_limit: int = 5

    @classmethod
    def load(cls, path: Path) -> ThresholdConfig:
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            ThresholdConfig instance (defaults when the file does not exist)

        Raises:
            ConfigError: If the file cannot be parsed or holds invalid values
        """
        if not path.exists():
            return cls()

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}", {"path": str(path)}) from e

        if not isinstance(data, dict):
            raise ConfigError(
                f"Threshold file {path} must contain a mapping", {"path": str(path)}
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ThresholdConfig:
        """Create config from dictionary, starting from the defaults.

        Args:
            data: Configuration dictionary (partial dictionaries are fine)

        Returns:
            ThresholdConfig instance
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown threshold keys: {', '.join(unknown)}")

        defaults = cls()
        kwargs: dict[str, Any] = {}
        for name, value in data.items():
            if name in _BAND_FIELDS:
                kwargs[name] = _parse_bands(name, value, getattr(defaults, name))
            elif name in _SEVERITY_FIELDS:
                try:
                    kwargs[name] = Severity(str(value).lower())
                except ValueError as e:
                    raise ConfigError(f"Invalid severity for {name}: {value!r}") from e
            else:
                if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                    raise ConfigError(
                        f"{name} must be a non-negative integer, got {value!r}"
                    )
                kwargs[name] = value

        return cls(**{**_as_kwargs(defaults), **kwargs})

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization.

        Returns:
            Dictionary representation
        """
        result: dict[str, Any] = {}
        for name, value in _as_kwargs(self).items():
            if isinstance(value, SeverityBands):
                result[name] = value.to_dict()
            elif isinstance(value, Severity):
                result[name] = value.value
            else:
                result[name] = value
        return result

    def save(self, path: Path) -> None:
        """Save configuration to YAML file.

        Args:
            path: Path to save configuration
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


def _as_kwargs(config: ThresholdConfig) -> dict[str, Any]:
    return {f.name: getattr(config, f.name) for f in fields(config)}


def _parse_bands(name: str, value: Any, default: SeverityBands) -> SeverityBands:
    if not isinstance(value, dict):
        raise ConfigError(f"{name} must be a mapping with low/medium/high keys")

    extra = sorted(set(value) - {"low", "medium", "high"})
    if extra:
        raise ConfigError(f"Unknown keys for {name}: {', '.join(extra)}")

    merged = {**default.to_dict(), **value}
    for key, bound in merged.items():
        if not isinstance(bound, int) or isinstance(bound, bool):
            raise ConfigError(f"{name}.{key} must be an integer, got {bound!r}")
    return SeverityBands(**merged)
