"""Replay recorded editor events through a coordinator on a virtual clock."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

import yaml

from .config import StatisticsConfig
from .coordinator import StatisticsCoordinator
from .models import LixBand
from .notifications import Notification, NotificationBus
from .scheduling import ManualScheduler

EVENT_NAMES = frozenset(
    {
        "textChanged",
        "selectionChanged",
        "textDeselected",
        "typingPaused",
        "typingResumed",
        "documentChanged",
        "end",
    }
)


class EventLogError(ValueError):
    """Raised when an event log cannot be parsed."""


@dataclass(slots=True)
class ReplayEvent:
    at: float
    event: str
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class RecordedNotification:
    at: float
    name: str
    args: List[Any]
    scope: str | None

    def to_dict(self) -> dict[str, Any]:
        return {"at": self.at, "name": self.name, "args": self.args, "scope": self.scope}


def parse_events(data: Any) -> List[ReplayEvent]:
    """Validate raw event mappings and return them as ReplayEvent objects."""
    if not isinstance(data, Sequence) or isinstance(data, (str, bytes)):
        raise EventLogError("Event log must be a list of events.")
    events: List[ReplayEvent] = []
    last_at = 0.0
    for index, raw in enumerate(data):
        if not isinstance(raw, Mapping):
            raise EventLogError(f"Event #{index} is not a mapping.")
        name = raw.get("event")
        if name not in EVENT_NAMES:
            raise EventLogError(f"Event #{index} has unknown type {name!r}.")
        try:
            at = float(raw.get("at", last_at))
        except (TypeError, ValueError) as exc:
            raise EventLogError(f"Event #{index} has an invalid 'at' value.") from exc
        if at < last_at:
            raise EventLogError(f"Event #{index} at {at} is earlier than {last_at}.")
        payload = {key: value for key, value in raw.items() if key not in {"at", "event"}}
        if name == "textChanged" and not isinstance(payload.get("text"), str):
            raise EventLogError(f"Event #{index} (textChanged) needs a 'text' string.")
        if name == "selectionChanged":
            if not isinstance(payload.get("text"), str):
                raise EventLogError(f"Event #{index} (selectionChanged) needs 'text'.")
            if not all(isinstance(payload.get(key), int) for key in ("start", "end")):
                raise EventLogError(
                    f"Event #{index} (selectionChanged) needs integer 'start' and 'end'."
                )
        events.append(ReplayEvent(at=at, event=name, payload=payload))
        last_at = at
    return events


def load_events(path: str | Path) -> List[ReplayEvent]:
    """Load a YAML (or JSON) event log from disk."""
    try:
        parsed = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise EventLogError(f"Could not parse event log {path}: {exc}") from exc
    return parse_events(parsed or [])


def _plain(value: Any) -> Any:
    if isinstance(value, LixBand):
        return value.label
    return value


def replay(
    events: Sequence[ReplayEvent],
    config: StatisticsConfig | None = None,
    initial_text: str = "",
) -> List[RecordedNotification]:
    """Drive a fresh coordinator with events and return every notification."""
    scheduler = ManualScheduler()
    bus = NotificationBus()
    recorded: List[RecordedNotification] = []

    def record(notification: Notification) -> None:
        recorded.append(
            RecordedNotification(
                at=scheduler.now_ms(),
                name=notification.name,
                args=[_plain(arg) for arg in notification.args],
                scope=notification.scope.value if notification.scope else None,
            )
        )

    bus.subscribe_all(record)
    coordinator = StatisticsCoordinator(config, scheduler=scheduler, bus=bus)
    coordinator.attach(initial_text)
    for event in events:
        scheduler.advance_to(event.at)
        _dispatch(coordinator, event)
    coordinator.detach()
    return recorded


def _dispatch(coordinator: StatisticsCoordinator, event: ReplayEvent) -> None:
    payload = event.payload
    if event.event == "textChanged":
        coordinator.on_text_changed(payload["text"])
    elif event.event == "selectionChanged":
        coordinator.on_selection_changed(payload["text"], payload["start"], payload["end"])
    elif event.event == "textDeselected":
        coordinator.on_text_deselected()
    elif event.event == "typingPaused":
        coordinator.on_typing_paused()
    elif event.event == "typingResumed":
        coordinator.on_typing_resumed()
    elif event.event == "documentChanged":
        coordinator.on_document_changed(payload.get("text"))
