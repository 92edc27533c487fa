from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol

from taskrank.domain.entities import DEFAULT_WEIGHTS, ScoredTask, Task, WeightConfig
from taskrank.domain.enums import SortKey
from taskrank.domain.scoring import score_tasks
from taskrank.domain.sorting import sort_scored

logger = logging.getLogger(__name__)


class TaskSource(Protocol):
    def list_tasks(self) -> list[Task]: ...


class RankingService:
    def __init__(self, source: TaskSource, weights: WeightConfig = DEFAULT_WEIGHTS) -> None:
        self._source = source
        self._weights = weights

    @property
    def weights(self) -> WeightConfig:
        return self._weights

    def score(self, now: datetime) -> list[ScoredTask]:
        tasks = self._source.list_tasks()
        scored = score_tasks(tasks, self._weights, now)
        logger.debug("Scored %d tasks at %s", len(scored), now.isoformat())
        return scored

    def rank(self, now: datetime, sort_key: SortKey | str = SortKey.SCORE) -> list[ScoredTask]:
        return sort_scored(self.score(now), sort_key)

    def top(self, now: datetime, count: int = 3) -> list[ScoredTask]:
        return self.rank(now)[:max(count, 0)]
