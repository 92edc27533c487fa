from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable

from .entities import ScoredTask
from .enums import SortKey
from .normalizer import as_number


def _created_ts(item: ScoredTask) -> float:
    created = item.task.created_at
    return created.timestamp() if isinstance(created, datetime) else 0.0


def _number_or_zero(value: object) -> float:
    number = as_number(value)
    return 0.0 if number is None else number


def _by_score(item: ScoredTask) -> tuple:
    return (-item.score, -item.tie_breaker)


def _by_due_date(item: ScoredTask) -> tuple:
    due = item.task.due_date
    if due is None:
        # Undated tasks go last, newest first among themselves.
        return (1, 0, -_created_ts(item))
    return (0, due.toordinal(), 0)


def _by_effort(item: ScoredTask) -> tuple:
    return (_number_or_zero(item.task.effort_hours),)


def _by_importance(item: ScoredTask) -> tuple:
    return (-_number_or_zero(item.task.importance),)


SORT_KEYS: dict[SortKey, Callable[[ScoredTask], tuple]] = {
    SortKey.SCORE: _by_score,
    SortKey.DUE_DATE: _by_due_date,
    SortKey.EFFORT: _by_effort,
    SortKey.IMPORTANCE: _by_importance,
}


def sort_scored(
    scored: Iterable[ScoredTask],
    sort_key: SortKey | str = SortKey.SCORE,
) -> list[ScoredTask]:
    return sorted(scored, key=SORT_KEYS[SortKey(sort_key)])
