from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from sentiment_ui.services.normalize import (
    RecordNormalizationError,
    normalize_history,
    normalize_result,
)


def _wire(**overrides):
    item = {
        "id": "42",
        "input_text": "Service was fine",
        "sentiment": "Neutral",
        "compound_score": 0.05,
        "created_at": "2025-06-01T08:45:00Z",
    }
    item.update(overrides)
    return item


def test_result_maps_fields_and_uses_observed_time():
    observed = datetime(2025, 2, 2, 9, 0, tzinfo=timezone.utc)
    record = normalize_result(
        {"input_text": "I love this product!", "sentiment": "Positive", "compound_score": 0.8},
        observed_at=observed,
    )
    assert record.id is None
    assert record.text == "I love this product!"
    assert record.sentiment == "Positive"
    assert record.score == 0.8
    assert record.timestamp == observed


def test_result_defaults_to_now():
    before = datetime.now(timezone.utc)
    record = normalize_result({"input_text": "ok", "sentiment": "Neutral", "compound_score": 0})
    assert before <= record.timestamp <= datetime.now(timezone.utc)


def test_result_ignores_server_timestamp():
    observed = datetime(2025, 2, 2, 9, 0, tzinfo=timezone.utc)
    record = normalize_result(
        {
            "input_text": "ok",
            "sentiment": "Neutral",
            "compound_score": 0,
            "created_at": "1999-01-01T00:00:00Z",
        },
        observed_at=observed,
    )
    assert record.timestamp == observed


@pytest.mark.parametrize(
    "payload",
    [
        None,
        [],
        {"sentiment": "Positive", "compound_score": 0.1},
        {"input_text": "x", "sentiment": "Positive", "compound_score": "high"},
        {"input_text": "x", "sentiment": "Positive", "compound_score": -1.01},
        {"input_text": "x", "sentiment": "Positive", "compound_score": True},
        {"input_text": "x", "sentiment": "Positive", "compound_score": "0.8"},
        {"input_text": "   ", "sentiment": "Positive", "compound_score": 0.1},
    ],
)
def test_result_rejects_malformed_payloads(payload):
    with pytest.raises(RecordNormalizationError):
        normalize_result(payload)


def test_result_score_bounds_are_inclusive():
    for score in (-1.0, 1.0):
        record = normalize_result({"input_text": "edge", "sentiment": "Neutral", "compound_score": score})
        assert record.score == score


def test_history_keeps_order_and_length():
    payload = [_wire(id="3", input_text="c"), _wire(id="1", input_text="a"), _wire(id="2", input_text="b")]
    records = normalize_history(payload)
    assert isinstance(records, tuple)
    assert [record.id for record in records] == ["3", "1", "2"]
    assert [record.text for record in records] == ["c", "a", "b"]


def test_history_parses_offsets():
    records = normalize_history([_wire(created_at="2025-06-01T10:45:00+02:00")])
    assert records[0].timestamp == datetime(2025, 6, 1, 8, 45, tzinfo=timezone.utc)
    assert records[0].timestamp.utcoffset() == timedelta(hours=2)


def test_history_accepts_numeric_ids():
    records = normalize_history([_wire(id=7)])
    assert records[0].id == "7"


def test_history_empty_list():
    assert normalize_history([]) == ()


@pytest.mark.parametrize(
    "payload",
    [
        {"items": []},
        [_wire(created_at="yesterday-ish")],
        [_wire(), {"id": "2"}],
        [_wire(compound_score=2)],
        [_wire(compound_score=True)],
        [_wire(compound_score="0.8")],
        [_wire(created_at="1700000000")],
        [_wire(created_at=1700000000)],
    ],
)
def test_history_rejects_malformed_payloads(payload):
    with pytest.raises(RecordNormalizationError) as excinfo:
        normalize_history(payload)
    assert str(excinfo.value).startswith("Malformed history record")


def test_records_are_immutable():
    record = normalize_history([_wire()])[0]
    with pytest.raises(ValidationError):
        record.text = "changed"


def test_integer_scores_are_accepted():
    record = normalize_history([_wire(compound_score=1)])[0]
    assert record.score == 1.0
    assert normalize_result({"input_text": "x", "sentiment": "Neutral", "compound_score": 0}).score == 0.0
