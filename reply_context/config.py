"""Application configuration — env vars, YAML files, defaults."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


def _repo_root() -> Path:
    """Find the repository root (directory containing pyproject.toml)."""
    current = Path(__file__).resolve().parent.parent
    if (current / "pyproject.toml").exists():
        return current
    return Path.cwd()


REPO_ROOT = _repo_root()


class ContextConfig(BaseSettings):
    """Caller-tunable limits for a single context build."""

    max_thread_emails: int = 10
    max_sender_emails: int = 5
    sender_lookback_days: int = 30
    total_token_budget: int = 8000

    model_config = {"env_prefix": "RCX_CONTEXT_", "extra": "ignore"}

    @classmethod
    def resolve(cls, overrides: ContextConfig | Mapping[str, Any] | None = None) -> ContextConfig:
        """Merge partial overrides onto the defaults.

        Unknown keys are ignored and fields with invalid values keep their
        defaults; both are logged, never raised.
        """
        if isinstance(overrides, ContextConfig):
            return overrides

        values = dict(overrides or {})
        unknown = sorted(set(values) - set(cls.model_fields))
        if unknown:
            logger.warning("Ignoring unknown context config keys: %s", ", ".join(unknown))
        try:
            return cls(**values)
        except ValidationError as e:
            invalid = {err["loc"][0] for err in e.errors() if err["loc"]}
            logger.warning(
                "Invalid context config overrides for %s, using defaults: %s",
                ", ".join(sorted(map(str, invalid))),
                e,
            )
            return cls(**{k: v for k, v in values.items() if k not in invalid})


class DatabaseConfig(BaseSettings):
    sqlite_path: Path = REPO_ROOT / "data" / "emails.db"

    model_config = {"env_prefix": "RCX_DB_"}


class AppConfig(BaseSettings):
    """Top-level application configuration."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    context: ContextConfig = Field(default_factory=ContextConfig)

    log_level: str = "info"
    config_dir: Path = REPO_ROOT / "config"

    model_config = {"env_prefix": "RCX_"}

    @classmethod
    def from_yaml(cls, path: Path | None = None) -> AppConfig:
        """Load config from YAML file; fields it omits fall back to env vars."""
        if path is None:
            path = REPO_ROOT / "config" / "app.yml"

        values: dict[str, Any] = {}
        if path.exists():
            with open(path) as f:
                values = yaml.safe_load(f) or {}

        return cls(**values)
