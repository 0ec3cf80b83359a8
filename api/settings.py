"""Runtime configuration for the charades API, read from the environment."""

import logging
import os

logger = logging.getLogger(__name__)

# Env var names
ENV_GAME_SECONDS = "CHARADES_GAME_SECONDS"
ENV_PHRASES_PER_GAME = "CHARADES_PHRASES_PER_GAME"
ENV_LOG_LEVEL = "CHARADES_LOG_LEVEL"

DEFAULT_GAME_SECONDS = 60
DEFAULT_PHRASES_PER_GAME = 10
DEFAULT_LOG_LEVEL = "INFO"


def _positive_int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive, using %d", name, raw, default)
        return default
    return value


def get_game_seconds() -> int:
    """Length of a normal game in seconds."""
    return _positive_int_from_env(ENV_GAME_SECONDS, DEFAULT_GAME_SECONDS)


def get_phrases_per_game() -> int:
    """How many phrases are sampled from the bank for a normal game."""
    return _positive_int_from_env(ENV_PHRASES_PER_GAME, DEFAULT_PHRASES_PER_GAME)


def get_log_level() -> str:
    level = (os.environ.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Ignoring %s=%r: unknown level, using %s", ENV_LOG_LEVEL, level, DEFAULT_LOG_LEVEL)
        return DEFAULT_LOG_LEVEL
    return level
