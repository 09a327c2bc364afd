from __future__ import annotations

import logging
import math
import time
from collections import deque
from typing import Callable, Deque, Tuple

from .models import ActivityState, SessionStats

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class SessionTracker:
    """
    Writing-session state machine with two states, idle and typing.

    Only explicit typing paused/resumed signals change the state. Time is
    attributed on each tick to whichever state is current, so writing plus
    idle time always equals the wall-clock time since the session started.
    Words written are the positive word-count deltas; deletions never count
    negatively and never shorten the writing time.
    """

    def __init__(
        self,
        wpm_window_minutes: float = 5.0,
        words_per_page: int = 450,
        clock: Clock | None = None,
        min_span_minutes: float = 1.0,
    ) -> None:
        self._clock = clock or monotonic_ms
        self._window_ms = wpm_window_minutes * 60_000.0
        self._min_span_minutes = min(min_span_minutes, wpm_window_minutes)
        self._words_per_page = words_per_page
        self._word_samples: Deque[Tuple[float, int]] = deque()
        self._writing_samples: Deque[Tuple[float, float]] = deque()
        self._clear(0)

    def _clear(self, word_count: int) -> None:
        now = self._clock()
        self._state = ActivityState.IDLE
        self._baseline_word_count = word_count
        self._previous_word_count = word_count
        self._words_written = 0
        self._writing_ms = 0.0
        self._idle_ms = 0.0
        self._started_at = now
        self._last_tick_at = now
        self._last_activity_at = now
        self._wpm = 0
        self._word_samples.clear()
        self._writing_samples.clear()

    def start(self, word_count: int) -> None:
        """Begin a session for a document that already holds word_count words."""
        self._clear(word_count)
        logger.debug("Session started at %d words.", word_count)

    def reset(self, word_count: int = 0) -> None:
        """Zero all accumulators and rebase on the new document's word count."""
        self._clear(word_count)
        logger.info("Session reset; baseline is %d words.", word_count)

    @property
    def state(self) -> ActivityState:
        return self._state

    @property
    def baseline_word_count(self) -> int:
        return self._baseline_word_count

    @property
    def previous_word_count(self) -> int:
        return self._previous_word_count

    @property
    def last_activity_at(self) -> float:
        return self._last_activity_at

    @property
    def writing_millis(self) -> float:
        return self._writing_ms

    @property
    def idle_millis(self) -> float:
        return self._idle_ms

    @property
    def elapsed_millis(self) -> float:
        """Wall-clock time accounted for so far (up to the last tick)."""
        return self._last_tick_at - self._started_at

    def on_typing_resumed(self) -> None:
        self._state = ActivityState.TYPING
        self._last_activity_at = self._clock()

    def on_typing_paused(self) -> None:
        self._state = ActivityState.IDLE
        self._last_activity_at = self._clock()

    def on_word_count_changed(self, word_count: int) -> int:
        """Record a new whole-document word count and return the words written."""
        delta = max(0, word_count - self._previous_word_count)
        self._previous_word_count = word_count
        if delta:
            self._words_written += delta
            self._word_samples.append((self._clock(), delta))
        return delta

    def tick(self) -> SessionStats:
        """Account the time since the previous tick and refresh the rates."""
        now = self._clock()
        elapsed = max(0.0, now - self._last_tick_at)
        self._last_tick_at = max(now, self._last_tick_at)
        if self._state is ActivityState.TYPING:
            self._writing_ms += elapsed
            if elapsed:
                self._writing_samples.append((now, elapsed))
        else:
            self._idle_ms += elapsed

        cutoff = now - self._window_ms
        while self._word_samples and self._word_samples[0][0] <= cutoff:
            self._word_samples.popleft()
        while self._writing_samples and self._writing_samples[0][0] <= cutoff:
            self._writing_samples.popleft()

        window_minutes = sum(ms for _, ms in self._writing_samples) / 60_000.0
        if window_minutes > 0:
            words = sum(delta for _, delta in self._word_samples)
            # A burst early in the window is spread over at least the minimum span.
            self._wpm = round(words / max(window_minutes, self._min_span_minutes))
        else:
            self._wpm = 0
        return self.stats

    @property
    def words_per_minute(self) -> int:
        return self._wpm

    @property
    def idle_percentage(self) -> int:
        total = self._idle_ms + self._writing_ms
        if total <= 0:
            return 0
        return round(100.0 * self._idle_ms / total)

    @property
    def words_written(self) -> int:
        return self._words_written

    @property
    def page_count(self) -> int:
        if self._words_written <= 0:
            return 0
        return math.ceil(self._words_written / self._words_per_page)

    @property
    def stats(self) -> SessionStats:
        return SessionStats(
            activity_state=self._state,
            words_written=self._words_written,
            page_count=self.page_count,
            words_per_minute=self._wpm,
            writing_millis=self._writing_ms,
            idle_millis=self._idle_ms,
            idle_percentage=self.idle_percentage,
        )
