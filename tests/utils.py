from __future__ import annotations

from pathlib import Path

import yaml


class FakeClock:
    """Millisecond clock advanced explicitly by tests."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self.now = start_ms

    def __call__(self) -> float:
        return self.now

    def advance(self, delta_ms: float) -> None:
        self.now += delta_ms


def make_words(count: int, word: str = "word") -> str:
    """Return a single paragraph made of count words and one final period."""
    if count <= 0:
        return ""
    return " ".join([word] * count) + "."


def write_event_log(path: Path, events: list[dict]) -> None:
    """Write an editor event log in the YAML format accepted by replay."""
    path.write_text(yaml.safe_dump(events, sort_keys=False), encoding="utf-8")
