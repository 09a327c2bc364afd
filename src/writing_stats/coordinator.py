from __future__ import annotations

import logging
from typing import Callable

from . import notifications as n
from .analyzer import analyze
from .config import StatisticsConfig
from .models import DisplayScope, DocumentSnapshot, Metrics, SessionStats
from .notifications import NotificationBus
from .scheduling import Debouncer, PeriodicTimer, Scheduler
from .session import SessionTracker

logger = logging.getLogger(__name__)

Analyzer = Callable[[DocumentSnapshot, StatisticsConfig], Metrics]


def _rounded(value: float | None) -> int | None:
    return None if value is None else round(value)


class StatisticsCoordinator:
    """
    Routes editor events to the analyzer and the session tracker and
    republishes their results on the notification bus.

    Whole-document recomputes are debounced; selection recomputes run
    immediately. The published document metrics follow an explicit display
    scope so clearing a selection restores the last whole-document values.
    """

    def __init__(
        self,
        config: StatisticsConfig | None = None,
        *,
        scheduler: Scheduler,
        bus: NotificationBus | None = None,
        analyzer: Analyzer = analyze,
    ) -> None:
        self.config = (config or StatisticsConfig()).validate()
        self.scheduler = scheduler
        self.bus = bus or NotificationBus()
        self._analyze = analyzer
        self.tracker = SessionTracker(
            wpm_window_minutes=self.config.wpm_window_minutes,
            words_per_page=self.config.words_per_page,
            clock=scheduler.now_ms,
            min_span_minutes=self.config.wpm_min_span_minutes,
        )
        self._debouncer = Debouncer(
            scheduler, self.config.debounce_interval_ms, self._recompute_document
        )
        self._ticker = PeriodicTimer(
            scheduler, self.config.tick_interval_ms, self._on_tick
        )
        self._text = ""
        self._generation = 0
        self._scope = DisplayScope.DOCUMENT
        self._document_metrics = Metrics()
        self._selection_metrics: Metrics | None = None

    @property
    def text(self) -> str:
        return self._text

    @property
    def scope(self) -> DisplayScope:
        return self._scope

    @property
    def document_metrics(self) -> Metrics:
        return self._document_metrics

    @property
    def selection_metrics(self) -> Metrics | None:
        return self._selection_metrics

    @property
    def current_metrics(self) -> Metrics:
        """Metrics for whatever the display scope currently shows."""
        selection = self._selection_metrics
        if self._scope is DisplayScope.SELECTION and selection is not None:
            return selection
        return self._document_metrics

    @property
    def session_stats(self) -> SessionStats:
        return self.tracker.stats

    @property
    def recompute_pending(self) -> bool:
        return self._debouncer.pending

    def attach(self, text: str = "") -> None:
        """Start tracking a document and begin the periodic session tick."""
        self._text = text
        self._generation += 1
        self._debouncer.cancel()
        metrics = self._analyze(DocumentSnapshot(text), self.config)
        self.tracker.start(metrics.word_count)
        self._show_document(metrics)
        self._publish_session_totals()
        self._ticker.start()

    def detach(self) -> None:
        self._debouncer.cancel()
        self._ticker.stop()

    def on_text_changed(self, text: str) -> None:
        self._text = text
        self._generation += 1
        self._debouncer.trigger()

    def on_selection_changed(self, text: str, start: int, end: int) -> None:
        if not text or start == end:
            self.on_text_deselected()
            return
        lo, hi = min(start, end), max(start, end)
        if self._text[lo:hi] == text:
            snapshot = DocumentSnapshot(self._text, selection=(lo, hi))
        else:
            snapshot = DocumentSnapshot(text)
        metrics = self._analyze(snapshot, self.config)
        self._selection_metrics = metrics
        self._scope = DisplayScope.SELECTION
        self._publish_metrics(metrics)

    def on_text_deselected(self) -> None:
        self._selection_metrics = None
        if self._scope is DisplayScope.SELECTION:
            self._show_document(self._document_metrics)

    def on_typing_paused(self) -> None:
        self.tracker.on_typing_paused()

    def on_typing_resumed(self) -> None:
        self.tracker.on_typing_resumed()

    def on_document_changed(self, text: str | None = None) -> None:
        """Rebase the session on a new, opened or closed document."""
        if text is not None:
            self._text = text
        self._generation += 1
        self._debouncer.cancel()
        metrics = self._analyze(DocumentSnapshot(self._text), self.config)
        self.tracker.reset(metrics.word_count)
        self._selection_metrics = None
        self._show_document(metrics)
        self._publish_session_totals()
        self._publish_session_rates(self.tracker.stats)

    def _recompute_document(self) -> None:
        generation = self._generation
        metrics = self._analyze(DocumentSnapshot(self._text), self.config)
        logger.debug(
            "Recomputed document metrics: %d words, %d characters.",
            metrics.word_count,
            metrics.character_count,
        )
        self.tracker.on_word_count_changed(metrics.word_count)
        self._publish_session_totals()
        if generation != self._generation:
            logger.debug("Discarding stale document metrics.")
            return
        self._document_metrics = metrics
        if self._scope is DisplayScope.DOCUMENT:
            self._publish_metrics(metrics)

    def _show_document(self, metrics: Metrics) -> None:
        self._document_metrics = metrics
        self._scope = DisplayScope.DOCUMENT
        self._publish_metrics(metrics)

    def _publish_metrics(self, metrics: Metrics) -> None:
        scope = self._scope
        publish = self.bus.publish
        publish(n.WORD_COUNT_CHANGED, metrics.word_count, scope=scope)
        publish(n.CHARACTER_COUNT_CHANGED, metrics.character_count, scope=scope)
        publish(n.SENTENCE_COUNT_CHANGED, metrics.sentence_count, scope=scope)
        publish(n.PARAGRAPH_COUNT_CHANGED, metrics.paragraph_count, scope=scope)
        publish(n.PAGE_COUNT_CHANGED, metrics.page_count, scope=scope)
        publish(n.COMPLEX_WORDS_CHANGED, metrics.complex_word_count, scope=scope)
        publish(n.READING_TIME_CHANGED, metrics.reading_time_minutes, scope=scope)
        publish(
            n.LIX_READING_EASE_CHANGED,
            _rounded(metrics.lix_score),
            metrics.lix_band,
            scope=scope,
        )
        publish(
            n.READABILITY_INDEX_CHANGED,
            _rounded(metrics.readability_index),
            scope=scope,
        )

    def _publish_session_totals(self) -> None:
        self.bus.publish(n.TOTAL_WORD_COUNT_CHANGED, self.tracker.words_written)
        self.bus.publish(n.SESSION_PAGE_COUNT_CHANGED, self.tracker.page_count)

    def _publish_session_rates(self, stats: SessionStats) -> None:
        self.bus.publish(n.WORDS_PER_MINUTE_CHANGED, stats.words_per_minute)
        self.bus.publish(n.WRITING_TIME_CHANGED, stats.writing_minutes)
        self.bus.publish(n.IDLE_TIME_PERCENTAGE_CHANGED, stats.idle_percentage)

    def _on_tick(self) -> None:
        stats = self.tracker.tick()
        self._publish_session_rates(stats)
