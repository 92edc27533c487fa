from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from .entities import ScoreComponents, ScoredTask, Task, WeightConfig
from .normalizer import (
    ScoringRanges,
    capped_effort,
    clamp,
    compute_ranges,
    days_until_due,
    normalize,
)

IMPORTANCE_SCALE = (1, 5)
IMPACT_SCALE = (1, 5)
MIN_URGENCY_HORIZON_DAYS = 30


def _epoch_ms(moment: Optional[datetime]) -> Optional[float]:
    if not isinstance(moment, datetime):
        return None
    return moment.timestamp() * 1000


def urgency_score(task: Task, ranges: ScoringRanges, now: datetime) -> float:
    if task.due_date is None:
        return 0.0
    days = days_until_due(task.due_date, now)
    if days <= 0:
        return 1.0
    horizon = max(ranges.max_days, MIN_URGENCY_HORIZON_DAYS)
    return 1.0 - normalize(days, ranges.min_days, horizon)


def effort_score(task: Task, ranges: ScoringRanges) -> float:
    return 1.0 - normalize(capped_effort(task), ranges.min_effort, ranges.max_effort)


def tie_breaker(task: Task, now: datetime) -> float:
    # Older tasks get the larger value and win exact score ties.
    now_ms = _epoch_ms(now) or 0.0
    return 1.0 - normalize(_epoch_ms(task.created_at), 0, now_ms)


def score_task(
    task: Task,
    weights: WeightConfig,
    ranges: ScoringRanges,
    now: datetime,
) -> ScoredTask:
    urgency = urgency_score(task, ranges, now)
    importance = normalize(task.importance, *IMPORTANCE_SCALE)
    impact = normalize(task.impact, *IMPACT_SCALE)
    effort = effort_score(task, ranges)

    base = (
        urgency * weights.urgency
        + importance * weights.importance
        + impact * weights.impact
        + effort * weights.effort
    )
    penalty = weights.blocked_penalty if task.blocked else 0.0
    bonus = weights.preference_boost if task.favorite else 0.0

    return ScoredTask(
        task=task,
        score=clamp(base - penalty + bonus),
        tie_breaker=tie_breaker(task, now),
        components=ScoreComponents(
            urgency=urgency,
            importance=importance,
            impact=impact,
            effort_score=effort,
            base_score=base,
            blocked_penalty=penalty,
            preference_bonus=bonus,
        ),
    )


def score_tasks(
    tasks: Sequence[Task],
    weights: WeightConfig,
    now: datetime,
) -> list[ScoredTask]:
    """Score every task against ranges derived from the whole set.

    The result has the same length and order as ``tasks``; ordering for
    display is a separate step (see ``taskrank.domain.sorting``).
    """
    ranges = compute_ranges(tasks, now)
    return [score_task(task, weights, ranges, now) for task in tasks]
