from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, List, Mapping, MutableMapping

import yaml


@dataclass(slots=True)
class StatisticsConfig:
    """Constants shared by the analyzer, the session tracker and the coordinator."""

    average_reading_wpm: int = 200
    words_per_page: int = 450
    debounce_interval_ms: int = 300
    wpm_window_minutes: float = 5.0
    wpm_min_span_minutes: float = 1.0
    tick_interval_ms: int = 1000
    max_full_analysis_chars: int = 250_000
    lix_thresholds: List[float] = field(default_factory=lambda: [25.0, 35.0, 45.0, 55.0])

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))

    def validate(self) -> "StatisticsConfig":
        """Raise ValueError when a constant cannot drive the engine."""
        for name in (
            "average_reading_wpm",
            "words_per_page",
            "wpm_window_minutes",
            "tick_interval_ms",
            "max_full_analysis_chars",
        ):
            if _number(name, getattr(self, name)) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}.")
        for name in ("debounce_interval_ms", "wpm_min_span_minutes"):
            if _number(name, getattr(self, name)) < 0:
                raise ValueError(f"{name} must not be negative.")
        thresholds = self.lix_thresholds
        if not isinstance(thresholds, (list, tuple)) or len(thresholds) != 4:
            raise ValueError("lix_thresholds must list exactly four ascending values.")
        values = [_number("lix_thresholds", value) for value in thresholds]
        if values != sorted(values):
            raise ValueError("lix_thresholds must be ascending.")
        return self


def _number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}.")
    return value


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(StatisticsConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    thresholds = kwargs.get("lix_thresholds")
    if isinstance(thresholds, (list, tuple)):
        kwargs["lix_thresholds"] = [
            float(_number("lix_thresholds", value)) for value in thresholds
        ]
    return kwargs


def config_from_dict(data: Mapping[str, Any] | None) -> StatisticsConfig:
    """Build a StatisticsConfig from a dictionary-like input."""
    if data is None:
        return StatisticsConfig()
    return StatisticsConfig(**_build_kwargs(data)).validate()


def config_from_yaml(path: str | Path) -> StatisticsConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> StatisticsConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return StatisticsConfig()
    return config_from_yaml(path)
