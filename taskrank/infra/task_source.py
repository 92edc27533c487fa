from __future__ import annotations

import json
import logging
import math
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional

from taskrank.domain.entities import DEFAULT_WEIGHTS, Task, WeightConfig
from taskrank.domain.normalizer import as_number

logger = logging.getLogger(__name__)

WEIGHT_KEYS = {
    "urgency": "urgency",
    "importance": "importance",
    "impact": "impact",
    "effort": "effort",
    "blocked_penalty": "blocked_penalty",
    "blockedPenalty": "blocked_penalty",
    "preference_boost": "preference_boost",
    "preferenceBoost": "preference_boost",
}


class TaskSourceError(RuntimeError):
    pass


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            logger.warning("Ignoring unparseable due date %r", value)
    return None


def _parse_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    number = as_number(value)
    if number is not None:
        try:
            return datetime.fromtimestamp(number / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.warning("Ignoring out-of-range creation time %r", value)
            return None
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            logger.warning("Ignoring unparseable creation time %r", value)
    return None


def _parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes", "y"}
    return bool(value)


def _parse_tags(value: Any) -> frozenset[str]:
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = [str(item) for item in value]
    else:
        return frozenset()
    return frozenset(item.strip() for item in items if item.strip())


def task_from_dict(data: Mapping[str, Any]) -> Task:
    """Build a ``Task`` from a loosely-typed record.

    Accepts camelCase and snake_case keys. Numeric fields are passed through
    untouched: the scoring engine maps anything non-numeric to 0.
    """
    task_id = _pick(data, "id")
    title = _pick(data, "title")
    return Task(
        id="" if task_id is None else str(task_id),
        title="" if title is None else str(title),
        due_date=_parse_date(_pick(data, "dueDate", "due_date")),
        importance=_pick(data, "importance"),
        impact=_pick(data, "impact"),
        effort_hours=_pick(data, "effortHours", "effort_hours"),
        blocked=_parse_bool(_pick(data, "blocked")),
        favorite=_parse_bool(_pick(data, "favorite")),
        tags=_parse_tags(_pick(data, "tags")),
        created_at=_parse_datetime(_pick(data, "createdAt", "created_at")),
    )


def weights_from_dict(data: Mapping[str, Any], base: WeightConfig = DEFAULT_WEIGHTS) -> WeightConfig:
    values = {name: getattr(base, name) for name in set(WEIGHT_KEYS.values())}
    for key, value in data.items():
        name = WEIGHT_KEYS.get(key)
        if name is None:
            logger.warning("Ignoring unknown weight %r", key)
            continue
        number = as_number(value)
        if number is None or number < 0 or math.isinf(number):
            logger.warning("Invalid weight %s=%r, keeping %s", key, value, values[name])
            continue
        values[name] = number
    return WeightConfig(**values)


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise TaskSourceError(f"File not found: {path}") from None
    except OSError as exc:
        raise TaskSourceError(f"Cannot read {path}: {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise TaskSourceError(f"{path} is not UTF-8 text: {exc.reason}") from exc
    except json.JSONDecodeError as exc:
        raise TaskSourceError(f"Invalid JSON in {path}: {exc}") from exc


def load_weights(path: str | Path, base: WeightConfig = DEFAULT_WEIGHTS) -> WeightConfig:
    data = _read_json(Path(path))
    if not isinstance(data, dict):
        raise TaskSourceError(f"Expected a JSON object of weights in {path}")
    return weights_from_dict(data, base)


class JsonTaskSource:
    """Read-only task source backed by a JSON file.

    The file holds either a list of task records or ``{"tasks": [...]}``.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def list_tasks(self) -> list[Task]:
        data = _read_json(self._path)
        if isinstance(data, dict):
            data = data.get("tasks")
        if not isinstance(data, list):
            raise TaskSourceError(f"Expected a list of tasks in {self._path}")

        tasks = []
        for index, record in enumerate(data):
            if not isinstance(record, dict):
                logger.warning("Skipping task #%d in %s: not an object", index, self._path)
                continue
            tasks.append(task_from_dict(record))
        logger.debug("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks
