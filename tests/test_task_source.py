from __future__ import annotations

import json
from datetime import date, datetime, timezone

import pytest

from taskrank.domain.entities import DEFAULT_WEIGHTS
from taskrank.infra.task_source import (
    JsonTaskSource,
    TaskSourceError,
    load_weights,
    task_from_dict,
    weights_from_dict,
)


def test_task_from_dict_accepts_camel_case_records() -> None:
    task = task_from_dict({
        "id": 7,
        "title": "Renew passport",
        "dueDate": "2026-04-01",
        "importance": 4,
        "impact": 3,
        "effortHours": 1.5,
        "blocked": False,
        "favorite": True,
        "tags": ["admin", " travel "],
        "createdAt": 1767225600000,
    })

    assert task.id == "7"
    assert task.due_date == date(2026, 4, 1)
    assert task.effort_hours == 1.5
    assert task.favorite is True
    assert task.tags == frozenset({"admin", "travel"})
    assert task.created_at == datetime(2026, 1, 1, tzinfo=timezone.utc)


def test_task_from_dict_accepts_snake_case_records() -> None:
    task = task_from_dict({
        "id": "x",
        "title": "Book dentist",
        "due_date": "2026-04-01T15:00:00",
        "effort_hours": 0.5,
        "tags": "health, errands,",
        "created_at": "2026-01-01T08:00:00Z",
        "blocked": "false",
    })

    assert task.due_date == date(2026, 4, 1)
    assert task.effort_hours == 0.5
    assert task.tags == frozenset({"health", "errands"})
    assert task.created_at == datetime(2026, 1, 1, 8, 0, tzinfo=timezone.utc)
    assert task.blocked is False


def test_task_from_dict_tolerates_garbage() -> None:
    task = task_from_dict({"dueDate": "someday", "createdAt": "yesterday", "importance": "high"})

    assert task.id == ""
    assert task.due_date is None
    assert task.created_at is None
    assert task.importance == "high"
    assert task.tags == frozenset()


def test_weights_from_dict_overlays_defaults() -> None:
    weights = weights_from_dict({"urgency": 0.5, "blockedPenalty": 0.2, "effort": -1, "impact": "x", "bogus": 1})

    assert weights.urgency == 0.5
    assert weights.blocked_penalty == 0.2
    assert weights.effort == DEFAULT_WEIGHTS.effort
    assert weights.impact == DEFAULT_WEIGHTS.impact


def test_json_source_reads_list_and_wrapped_forms(tmp_path) -> None:
    records = [{"id": "a", "title": "A"}, "junk", {"id": "b", "title": "B"}]
    plain = tmp_path / "plain.json"
    plain.write_text(json.dumps(records), encoding="utf-8")
    wrapped = tmp_path / "wrapped.json"
    wrapped.write_text(json.dumps({"tasks": records}), encoding="utf-8")

    assert [t.id for t in JsonTaskSource(plain).list_tasks()] == ["a", "b"]
    assert [t.id for t in JsonTaskSource(wrapped).list_tasks()] == ["a", "b"]


def test_json_source_reports_missing_and_invalid_files(tmp_path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    scalar = tmp_path / "scalar.json"
    scalar.write_text("42", encoding="utf-8")

    with pytest.raises(TaskSourceError):
        JsonTaskSource(tmp_path / "missing.json").list_tasks()
    with pytest.raises(TaskSourceError):
        JsonTaskSource(broken).list_tasks()
    with pytest.raises(TaskSourceError):
        JsonTaskSource(scalar).list_tasks()


def test_load_weights_requires_an_object(tmp_path) -> None:
    good = tmp_path / "weights.json"
    good.write_text(json.dumps({"preferenceBoost": 0.05}), encoding="utf-8")
    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2]", encoding="utf-8")

    assert load_weights(good).preference_boost == 0.05
    with pytest.raises(TaskSourceError):
        load_weights(bad)


def test_unreadable_inputs_raise_task_source_error(tmp_path) -> None:
    binary = tmp_path / "tasks.json"
    binary.write_bytes(b"\xff\xfe[]")

    with pytest.raises(TaskSourceError, match="not UTF-8"):
        JsonTaskSource(binary).list_tasks()
    with pytest.raises(TaskSourceError, match="Cannot read"):
        JsonTaskSource(tmp_path).list_tasks()
    with pytest.raises(TaskSourceError):
        load_weights(tmp_path)


def test_weights_from_dict_rejects_infinite_values() -> None:
    weights = weights_from_dict({"urgency": float("inf")})

    assert weights.urgency == DEFAULT_WEIGHTS.urgency
