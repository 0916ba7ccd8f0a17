"""Configuration for the comparison engine and its surfaces.

Every section is a pydantic model validated on construction; ``load_config``
reads a YAML file (see ``jobrank.dirs.find_config`` for the resolution
order) and fills anything the file leaves out with defaults.
"""
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .. import dirs

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class _Section(BaseModel):
    """Config section: unknown keys are dropped with a warning."""
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def warn_unknown_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            unknown = set(data) - set(cls.model_fields)
            if unknown:
                logger.warning(
                    "Ignoring unknown keys in %s: %s", cls.__name__, ", ".join(sorted(unknown))
                )
        return data


class SelectionConfig(_Section):
    """Exploration/exploitation knobs of the pair selection policy."""
    top_group_fraction: float = Field(default=0.3, gt=0.0, le=1.0)
    top_group_probability: float = Field(default=0.6, ge=0.0, le=1.0)
    early_exploration_threshold: int = Field(default=20, ge=0)
    discriminative_shortlist: int = Field(default=10, ge=1)


class RatingConfig(_Section):
    elo_k: float = Field(default=32.0, gt=0.0)
    default_score: float = 1000.0


class PreferenceConfig(_Section):
    # A loss to another sector costs half of this.
    win_increment: float = Field(default=1.0, gt=0.0)


class SessionConfig(_Section):
    daily_target: int = Field(default=25, ge=1)
    seed: Optional[int] = None


class PathsConfig(_Section):
    catalog: Optional[Path] = None
    state_file: Path = Field(default_factory=dirs.get_state_path)


class LoggingConfig(_Section):
    level: str = "WARNING"

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"level must be one of {', '.join(_LOG_LEVELS)}")
        return level


class Config(_Section):
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    rating: RatingConfig = Field(default_factory=RatingConfig)
    preferences: PreferenceConfig = Field(default_factory=PreferenceConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("selection", "rating", "preferences", "session", "paths", "logging", mode="before")
    @classmethod
    def empty_section_is_default(cls, v: Any) -> Any:
        # "rating:" with nothing under it loads as None
        return {} if v is None else v


def _apply_env_overrides(config: Config) -> Config:
    catalog = os.environ.get("JOBRANK_CATALOG")
    if catalog:
        config.paths.catalog = Path(catalog)
    state = os.environ.get("JOBRANK_STATE")
    if state:
        config.paths.state_file = Path(state)
    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML.

    Args:
        config_path: Explicit config file. When omitted, ``JOBRANK_CONFIG``
            is consulted, then ``./config.yaml``, then the user config dir.

    Returns:
        A fully populated Config.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ValueError: If a value fails validation.
    """
    if config_path is None and os.environ.get("JOBRANK_CONFIG"):
        config_path = Path(os.environ["JOBRANK_CONFIG"])

    resolved = dirs.find_config(config_path)
    if resolved is None:
        logger.debug("No config file found; using defaults")
        return _apply_env_overrides(Config())

    with open(resolved, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {resolved} must contain a mapping")

    logger.debug("Loaded config from %s", resolved)
    return _apply_env_overrides(Config.model_validate(data))


def default_config_yaml() -> str:
    """Render the default configuration as YAML, for ``jobrank init``."""
    data = Config().model_dump(
        mode="json", exclude={"session": {"seed"}, "paths": {"catalog"}}
    )
    return yaml.safe_dump(data, sort_keys=False)
