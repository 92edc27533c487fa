from __future__ import annotations

import math
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from taskrank.domain.entities import DEFAULT_WEIGHTS, WeightConfig
from taskrank.domain.enums import SortKey


def _resolve_project_root() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


PROJECT_ROOT = _resolve_project_root()

WEIGHT_ENV_VARS = {
    "urgency": "WEIGHT_URGENCY",
    "importance": "WEIGHT_IMPORTANCE",
    "impact": "WEIGHT_IMPACT",
    "effort": "WEIGHT_EFFORT",
    "blocked_penalty": "WEIGHT_BLOCKED_PENALTY",
    "preference_boost": "WEIGHT_PREFERENCE_BOOST",
}


def load_env() -> None:
    env_name = os.getenv("APP_ENV", "development")
    candidates = [Path.cwd(), PROJECT_ROOT]
    for base in candidates:
        env_path = base / ".env"
        if env_path.exists():
            load_dotenv(env_path)
            break

    for base in candidates:
        env_specific = base / f".env.{env_name}"
        if env_specific.exists():
            load_dotenv(env_specific, override=True)
            break


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_dir: str = "logs"
    default_sort: SortKey = SortKey.SCORE
    weights: WeightConfig = field(default_factory=WeightConfig)


def _env_weight(name: str, default: float) -> float:
    var = WEIGHT_ENV_VARS[name]
    raw = os.getenv(var, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise RuntimeError(f"{var} must be a number, got {raw!r}.") from None
    if not math.isfinite(value) or value < 0:
        raise RuntimeError(f"{var} must be a finite, non-negative number, got {raw!r}.")
    return value


def _env_sort() -> SortKey:
    raw = os.getenv("DEFAULT_SORT", SortKey.SCORE.value).strip()
    try:
        return SortKey(raw)
    except ValueError:
        options = ", ".join(key.value for key in SortKey)
        raise RuntimeError(f"DEFAULT_SORT must be one of: {options}.") from None


def load_settings() -> Settings:
    weights = WeightConfig(**{
        name: _env_weight(name, getattr(DEFAULT_WEIGHTS, name))
        for name in WEIGHT_ENV_VARS
    })
    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_dir=os.getenv("LOG_DIR", "logs"),
        default_sort=_env_sort(),
        weights=weights,
    )


load_env()

SETTINGS = load_settings()
