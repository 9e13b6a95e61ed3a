"""Configuration management for intentforge.

Loads settings from environment variables with sensible defaults.
Supports .env files via python-dotenv.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Config:
    """Compiler configuration loaded from environment variables."""

    log_level: str
    entity_mapping_path: Path | None
    max_workers: int
    skip_invalid: bool

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """Load configuration from environment variables.

        Args:
            env_file: Optional path to .env file. If None, searches for .env
                     in current directory and parent directories.

        Returns:
            Config instance with values from environment.

        Raises:
            ValueError: If an environment variable has an invalid value.
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        if log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid LOG_LEVEL: {log_level}. Must be one of {VALID_LOG_LEVELS}"
            )

        raw_mapping = os.getenv("INTENTFORGE_ENTITY_MAPPING")
        entity_mapping_path = Path(raw_mapping) if raw_mapping else None

        raw_workers = os.getenv("INTENTFORGE_MAX_WORKERS", "1")
        try:
            max_workers = int(raw_workers)
        except ValueError as e:
            raise ValueError(
                "INTENTFORGE_MAX_WORKERS must be an integer " f"(got {raw_workers!r})"
            ) from e
        if max_workers < 1:
            raise ValueError(
                "INTENTFORGE_MAX_WORKERS must be >= 1 " f"(got {max_workers})"
            )

        raw_skip = os.getenv("INTENTFORGE_SKIP_INVALID", "false").strip().lower()
        if raw_skip in _TRUE_VALUES:
            skip_invalid = True
        elif raw_skip in _FALSE_VALUES:
            skip_invalid = False
        else:
            raise ValueError(
                "INTENTFORGE_SKIP_INVALID must be a boolean " f"(got {raw_skip!r})"
            )

        return cls(
            log_level=log_level,
            entity_mapping_path=entity_mapping_path,
            max_workers=max_workers,
            skip_invalid=skip_invalid,
        )
