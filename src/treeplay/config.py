"""Configuration for treeplay runs.

Run settings are pydantic models so that bad values are rejected when the
configuration is built, not halfway through a run. Defaults can be
overridden via environment variables:

- TREEPLAY_ITERATIONS: iterations per run (default 1)
- TREEPLAY_SEED: random seed (default: unseeded)
- TREEPLAY_LOG_LEVEL: log level used by the CLI (default WARNING)
"""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_ITERATIONS = 1
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ExecutionConfig(BaseModel):
    """Settings for a single run of repeated play.

    Attributes:
        iterations: Number of games to play
        random_seed: Seed for chance nodes and random strategies
        log_transcripts: Log every finished transcript at DEBUG level
    """

    model_config = ConfigDict(frozen=True)

    iterations: int = Field(default=DEFAULT_ITERATIONS, ge=0)
    random_seed: int | None = None
    log_transcripts: bool = False


class TournamentConfig(BaseModel):
    """Settings for a round-robin tournament.

    Attributes:
        iterations: Games played per pairing
        random_seed: Seed shared by all pairings
        include_self_play: Also pair every player with itself
    """

    model_config = ConfigDict(frozen=True)

    iterations: int = Field(default=100, ge=1)
    random_seed: int | None = None
    include_self_play: bool = False


class LoggingConfig(BaseModel):
    """Logging settings used by the command line."""

    model_config = ConfigDict(frozen=True)

    level: str = DEFAULT_LOG_LEVEL

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = str(v).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return level


def get_default_iterations() -> int:
    """Get configured iteration count from environment."""
    return int(os.environ.get("TREEPLAY_ITERATIONS", DEFAULT_ITERATIONS))


def get_default_seed() -> int | None:
    """Get configured random seed from environment."""
    seed = os.environ.get("TREEPLAY_SEED")
    return int(seed) if seed else None


def get_log_level() -> str:
    """Get configured log level from environment."""
    return os.environ.get("TREEPLAY_LOG_LEVEL", DEFAULT_LOG_LEVEL)


def get_default_config() -> ExecutionConfig:
    """Execution settings built from the environment.

    Raises:
        ValidationError: If the environment holds invalid values
    """
    return ExecutionConfig(
        iterations=get_default_iterations(),
        random_seed=get_default_seed(),
    )
