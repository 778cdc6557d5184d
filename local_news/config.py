from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_USER_AGENT = "local-news/1.0 (RSS reader)"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class AggregatorConfig:
    """Runtime configuration for an aggregation run."""

    request_timeout_sec: float = 10.0
    deadline_sec: Optional[float] = None
    max_items_per_source: int = 15
    max_age_hours: float = 48.0
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AggregatorConfig":
        return cls(
            request_timeout_sec=_parse_float("LOCAL_NEWS_TIMEOUT", default=10.0),
            deadline_sec=_parse_float("LOCAL_NEWS_DEADLINE", default=None),
            max_items_per_source=_parse_int("LOCAL_NEWS_MAX_ITEMS", default=15),
            max_age_hours=_parse_float("LOCAL_NEWS_MAX_AGE_HOURS", default=48.0),
            user_agent=os.getenv("LOCAL_NEWS_USER_AGENT") or DEFAULT_USER_AGENT,
            log_level=_parse_log_level("LOCAL_NEWS_LOG_LEVEL", default="INFO"),
        )


def _raw(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return value.strip()


def _parse_float(name: str, default: Optional[float]) -> Optional[float]:
    value = _raw(name)
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number if set") from None
    if parsed <= 0:
        raise ValueError(f"{name} must be positive")
    return parsed


def _parse_int(name: str, default: int) -> int:
    value = _raw(name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer if set") from None
    if parsed <= 0:
        raise ValueError(f"{name} must be positive")
    return parsed


def _parse_log_level(name: str, default: str) -> str:
    value = _raw(name)
    if value is None:
        return default
    level = value.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"{name} must be one of {', '.join(LOG_LEVELS)}")
    return level
