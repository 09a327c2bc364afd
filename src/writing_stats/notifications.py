from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

from .models import DisplayScope

logger = logging.getLogger(__name__)

WORD_COUNT_CHANGED = "wordCountChanged"
CHARACTER_COUNT_CHANGED = "characterCountChanged"
SENTENCE_COUNT_CHANGED = "sentenceCountChanged"
PARAGRAPH_COUNT_CHANGED = "paragraphCountChanged"
PAGE_COUNT_CHANGED = "pageCountChanged"
COMPLEX_WORDS_CHANGED = "complexWordsChanged"
READING_TIME_CHANGED = "readingTimeChanged"
LIX_READING_EASE_CHANGED = "lixReadingEaseChanged"
READABILITY_INDEX_CHANGED = "readabilityIndexChanged"
TOTAL_WORD_COUNT_CHANGED = "totalWordCountChanged"
SESSION_PAGE_COUNT_CHANGED = "sessionPageCountChanged"
WORDS_PER_MINUTE_CHANGED = "wordsPerMinuteChanged"
WRITING_TIME_CHANGED = "writingTimeChanged"
IDLE_TIME_PERCENTAGE_CHANGED = "idleTimePercentageChanged"

DOCUMENT_NOTIFICATIONS = (
    WORD_COUNT_CHANGED,
    CHARACTER_COUNT_CHANGED,
    SENTENCE_COUNT_CHANGED,
    PARAGRAPH_COUNT_CHANGED,
    PAGE_COUNT_CHANGED,
    COMPLEX_WORDS_CHANGED,
    READING_TIME_CHANGED,
    LIX_READING_EASE_CHANGED,
    READABILITY_INDEX_CHANGED,
)

SESSION_NOTIFICATIONS = (
    TOTAL_WORD_COUNT_CHANGED,
    SESSION_PAGE_COUNT_CHANGED,
    WORDS_PER_MINUTE_CHANGED,
    WRITING_TIME_CHANGED,
    IDLE_TIME_PERCENTAGE_CHANGED,
)

ALL_NOTIFICATIONS = DOCUMENT_NOTIFICATIONS + SESSION_NOTIFICATIONS


@dataclass(frozen=True, slots=True)
class Notification:
    """A published metric change as seen by catch-all listeners."""

    name: str
    args: Tuple[Any, ...]
    scope: DisplayScope | None = None


class NotificationBus:
    """Publish/subscribe hub with one channel per metric field."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Callable[..., Any]]] = defaultdict(list)
        self._listeners: List[Callable[[Notification], Any]] = []

    def subscribe(self, name: str, callback: Callable[..., Any]) -> None:
        if name not in ALL_NOTIFICATIONS:
            raise ValueError(f"Unknown notification '{name}'.")
        self._subscribers[name].append(callback)

    def unsubscribe(self, name: str, callback: Callable[..., Any]) -> None:
        callbacks = self._subscribers.get(name, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def subscribe_all(self, callback: Callable[[Notification], Any]) -> None:
        self._listeners.append(callback)

    def publish(self, name: str, *args: Any, scope: DisplayScope | None = None) -> None:
        for callback in list(self._subscribers.get(name, ())):
            self._deliver(name, callback, *args)
        if self._listeners:
            notification = Notification(name=name, args=tuple(args), scope=scope)
            for listener in list(self._listeners):
                self._deliver(name, listener, notification)

    @staticmethod
    def _deliver(name: str, callback: Callable[..., Any], *args: Any) -> None:
        try:
            callback(*args)
        except Exception:
            logger.exception("Subscriber for %s failed.", name)
