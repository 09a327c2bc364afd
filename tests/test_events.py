from pathlib import Path

import pytest

from tests.utils import write_event_log
from writing_stats.events import EventLogError, load_events, parse_events, replay


def _names(recorded, name):
    return [item for item in recorded if item.name == name]


def test_replay_records_debounced_and_tick_notifications():
    events = parse_events(
        [
            {"at": 0, "event": "typingResumed"},
            {"at": 0, "event": "textChanged", "text": "a b c"},
            {"at": 100, "event": "textChanged", "text": "a b c d e"},
            {"at": 2000, "event": "typingPaused"},
            {"at": 4000, "event": "end"},
        ]
    )
    recorded = replay(events)

    word_counts = _names(recorded, "wordCountChanged")
    assert [item.args for item in word_counts] == [[0], [5]]
    assert word_counts[-1].at == 400
    assert word_counts[-1].scope == "document"
    wpm = _names(recorded, "wordsPerMinuteChanged")
    assert [item.at for item in wpm] == [1000, 2000, 3000, 4000]
    assert wpm[1].args == [5]
    idle = _names(recorded, "idleTimePercentageChanged")
    assert idle[-1].args == [50]


def test_replay_serializes_bands_and_selection_scope():
    events = parse_events(
        [
            {"at": 0, "event": "selectionChanged", "text": "Hello", "start": 0, "end": 5},
            {"at": 10, "event": "textDeselected"},
        ]
    )
    recorded = replay(events, initial_text="Hello world.")
    lix = _names(recorded, "lixReadingEaseChanged")
    assert lix[1].args == [1, "Very Easy"]
    assert lix[1].scope == "selection"
    assert lix[2].scope == "document"
    assert recorded[-1].to_dict()["name"]


def test_document_changed_event_resets_session():
    events = parse_events(
        [
            {"at": 0, "event": "textChanged", "text": "one two three"},
            {"at": 500, "event": "documentChanged", "text": "fresh"},
        ]
    )
    recorded = replay(events)
    totals = _names(recorded, "totalWordCountChanged")
    assert [item.args for item in totals] == [[0], [3], [0]]


def test_load_events_from_yaml(tmp_path: Path):
    path = tmp_path / "events.yaml"
    write_event_log(path, [{"at": 5, "event": "textChanged", "text": "hi"}])
    events = load_events(path)
    assert events[0].at == 5
    assert events[0].payload == {"text": "hi"}


@pytest.mark.parametrize(
    "data",
    [
        {"event": "textChanged"},
        ["not a mapping"],
        [{"at": 0, "event": "keyPressed"}],
        [{"at": 10, "event": "typingPaused"}, {"at": 5, "event": "typingResumed"}],
        [{"at": 0, "event": "textChanged"}],
        [{"at": 0, "event": "selectionChanged", "text": "x", "start": "0", "end": 1}],
        [{"at": "soon", "event": "typingPaused"}],
    ],
)
def test_parse_events_rejects_malformed_logs(data):
    with pytest.raises(EventLogError):
        parse_events(data)
