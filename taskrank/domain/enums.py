from __future__ import annotations

from enum import StrEnum


class SortKey(StrEnum):
    SCORE = "score"
    DUE_DATE = "due_date"
    EFFORT = "effort"
    IMPORTANCE = "importance"
