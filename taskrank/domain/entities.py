from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    due_date: Optional[date] = None
    importance: Any = None
    impact: Any = None
    effort_hours: Any = None
    blocked: bool = False
    favorite: bool = False
    tags: frozenset[str] = field(default_factory=frozenset)
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class WeightConfig:
    urgency: float = 0.30
    importance: float = 0.25
    impact: float = 0.20
    effort: float = 0.15
    blocked_penalty: float = 0.10
    preference_boost: float = 0.0


DEFAULT_WEIGHTS = WeightConfig()


@dataclass(frozen=True)
class ScoreComponents:
    urgency: float
    importance: float
    impact: float
    effort_score: float
    base_score: float
    blocked_penalty: float
    preference_bonus: float


@dataclass(frozen=True)
class ScoredTask:
    """A task paired with the output of one scoring pass.

    Recomputed on every pass and never persisted. The task's own fields stay
    reachable through ``task``; ``to_dict`` flattens both for display.
    """

    task: Task
    score: float
    tie_breaker: float
    components: ScoreComponents

    @property
    def id(self) -> str:
        return self.task.id

    @property
    def title(self) -> str:
        return self.task.title

    def to_dict(self) -> dict[str, Any]:
        task = self.task
        return {
            "id": task.id,
            "title": task.title,
            "due_date": task.due_date.isoformat() if task.due_date else None,
            "importance": task.importance,
            "impact": task.impact,
            "effort_hours": task.effort_hours,
            "blocked": task.blocked,
            "favorite": task.favorite,
            "tags": sorted(task.tags),
            "created_at": task.created_at.isoformat() if task.created_at else None,
            "score": self.score,
            "tie_breaker": self.tie_breaker,
            "components": {
                "urgency": self.components.urgency,
                "importance": self.components.importance,
                "impact": self.components.impact,
                "effort_score": self.components.effort_score,
                "base_score": self.components.base_score,
                "blocked_penalty": self.components.blocked_penalty,
                "preference_bonus": self.components.preference_bonus,
            },
        }
