from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Optional

from .entities import Task

EFFORT_CAP_HOURS = 40.0

# Used when no task in the set has a due date.
DEFAULT_MIN_DAYS = -30
DEFAULT_MAX_DAYS = 365

_SECONDS_PER_DAY = 86_400


@dataclass(frozen=True)
class ScoringRanges:
    min_effort: float
    max_effort: float
    min_days: float
    max_days: float


def as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value):
        return None
    return float(value)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    if math.isnan(value):
        return low
    return max(low, min(high, value))


def normalize(value: Any, min_value: float, max_value: float) -> float:
    """Rescale ``value`` into [0, 1] against ``(min_value, max_value)``.

    Missing or non-numeric values and degenerate ranges map to 0; values
    outside the range are clamped to its edges.
    """
    number = as_number(value)
    if number is None or min_value == max_value:
        return 0.0
    return clamp((number - min_value) / (max_value - min_value))


def capped_effort(task: Task) -> float:
    hours = as_number(task.effort_hours)
    if hours is None or hours < 0:
        return 0.0
    return min(hours, EFFORT_CAP_HOURS)


def days_until_due(due: date, now: datetime) -> int:
    """Signed whole days from ``now`` until midnight of ``due``, rounded up."""
    due_start = datetime.combine(due, time.min, tzinfo=now.tzinfo)
    delta: timedelta = due_start - now
    return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)


def compute_ranges(tasks: Iterable[Task], now: datetime) -> ScoringRanges:
    efforts: list[float] = []
    days: list[int] = []
    for task in tasks:
        efforts.append(capped_effort(task))
        if task.due_date is not None:
            days.append(days_until_due(task.due_date, now))

    if days:
        min_days, max_days = min(days), max(days)
    else:
        min_days, max_days = DEFAULT_MIN_DAYS, DEFAULT_MAX_DAYS

    return ScoringRanges(
        min_effort=min([*efforts, 0.0]),
        max_effort=max([*efforts, EFFORT_CAP_HOURS]),
        min_days=min_days,
        max_days=max_days,
    )
