from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Tuple


class LixBand(Enum):
    """Ordered difficulty bands for the LIX readability score."""

    VERY_EASY = "Very Easy"
    EASY = "Easy"
    MEDIUM = "Medium"
    DIFFICULT = "Difficult"
    VERY_DIFFICULT = "Very Difficult"

    @property
    def label(self) -> str:
        return self.value


class ActivityState(Enum):
    """Writing activity as reported by the editor."""

    IDLE = "idle"
    TYPING = "typing"


class DisplayScope(Enum):
    """Which range the published document metrics currently describe."""

    DOCUMENT = "document"
    SELECTION = "selection"


@dataclass(frozen=True, slots=True)
class DocumentSnapshot:
    """Read-only view of the document text plus an optional selected range."""

    text: str
    selection: Tuple[int, int] | None = None

    @classmethod
    def from_raw(
        cls, value: str | bytes, selection: Tuple[int, int] | None = None
    ) -> "DocumentSnapshot":
        """Wrap editor input, decoding bytes so invalid sequences become U+FFFD."""
        if isinstance(value, (bytes, bytearray)):
            value = bytes(value).decode("utf-8", errors="replace")
        return cls(text=value, selection=selection)

    @property
    def bounds(self) -> Tuple[int, int]:
        """Clamped (start, end) of the analysed range."""
        length = len(self.text)
        if self.selection is None:
            return 0, length
        start, end = self.selection
        if start > end:
            start, end = end, start
        return max(0, min(start, length)), max(0, min(end, length))

    @property
    def analyzed_text(self) -> str:
        start, end = self.bounds
        if (start, end) == (0, len(self.text)):
            return self.text
        return self.text[start:end]

    @property
    def is_selection(self) -> bool:
        return self.selection is not None


@dataclass(frozen=True, slots=True)
class Metrics:
    """
    Document metrics computed over one snapshot.

    Score fields are None when the analyzer ran in its approximate mode for an
    oversized range; they are 0 whenever word_count is 0.
    """

    word_count: int = 0
    character_count: int = 0
    sentence_count: int | None = 0
    paragraph_count: int | None = 0
    page_count: int = 0
    complex_word_count: int | None = 0
    reading_time_minutes: int = 0
    lix_score: float | None = 0.0
    lix_band: LixBand | None = LixBand.VERY_EASY
    readability_index: float | None = 0.0
    approximate: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly dictionary of the metric values."""
        payload = asdict(self)
        payload["lix_band"] = self.lix_band.label if self.lix_band else None
        return payload


@dataclass(frozen=True, slots=True)
class SessionStats:
    """Published view of the session tracker state after a tick."""

    activity_state: ActivityState
    words_written: int
    page_count: int
    words_per_minute: int
    writing_millis: float
    idle_millis: float
    idle_percentage: int

    @property
    def writing_minutes(self) -> int:
        return int(self.writing_millis // 60_000)
