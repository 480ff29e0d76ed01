"""Engine configuration management."""

import os
from functools import lru_cache
from pathlib import Path

from .schemas import ScoringConfig
from .utils import load_json

CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'scoring_config.json'


@lru_cache(maxsize=1)
def get_config() -> ScoringConfig:
    """
    Load engine configuration from data/scoring_config.json.

    Configuration is cached after first load.

    Raises:
        FileNotFoundError: If scoring_config.json doesn't exist
        ValueError: If the config file has an invalid structure
    """
    return load_json(CONFIG_PATH, schema=ScoringConfig)


def get_database_url() -> str:
    """
    Database URL, with the DATABASE_URL environment variable taking precedence.

    Heroku-style ``postgres://`` URLs are rewritten for SQLAlchemy.
    """
    url = os.getenv('DATABASE_URL') or get_config().database_url
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


def get_rules_version() -> str:
    """Version of the ruleset used when none is requested explicitly."""
    return get_config().rules_version


def get_finished_match_status() -> str:
    """Match status value that marks a match as complete."""
    return get_config().finished_match_status


def get_log_dir() -> Path:
    """Directory for log files."""
    return Path(get_config().log_dir)


def clear_config_cache() -> None:
    """Drop the cached configuration so the next access reloads the file."""
    get_config.cache_clear()
