"""Runtime settings read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from .exceptions import ValidationError

DEFAULT_MAX_CATEGORIES = 50
DEFAULT_LOG_LEVEL = "WARNING"

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
    max_categories: int = DEFAULT_MAX_CATEGORIES
    log_level: str = DEFAULT_LOG_LEVEL
    env_name: str = "prod"
    allowed_origins: List[str] = field(default_factory=list)

    @property
    def is_development(self) -> bool:
        return self.env_name in {"dev", "development"}

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        raw_max = env.get("EXPENSE_TRACKER_MAX_CATEGORIES")
        max_categories = (
            parse_max_categories(raw_max) if raw_max not in (None, "") else DEFAULT_MAX_CATEGORIES
        )
        log_level = parse_log_level(env.get("EXPENSE_TRACKER_LOG_LEVEL") or DEFAULT_LOG_LEVEL)
        origins = env.get("EXPENSE_TRACKER_ALLOWED_ORIGINS") or ""

        return cls(
            max_categories=max_categories,
            log_level=log_level,
            env_name=(env.get("EXPENSE_TRACKER_ENV") or "prod").strip().lower(),
            allowed_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
        )


def parse_max_categories(raw: object) -> int:
    try:
        value = int(str(raw).strip())
    except ValueError as exc:
        raise ValidationError("max_categories must be an integer") from exc
    if value < 1:
        raise ValidationError("max_categories must be at least 1")
    return value


def parse_log_level(raw: str) -> str:
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        raise ValidationError(f"log level must be one of: {', '.join(sorted(LOG_LEVELS))}")
    return level


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
