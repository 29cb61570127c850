"""
Configuration management for Hero Tracker.

Loads settings from environment variables (optionally seeded from a .env file)
with defaults that match the canonical progression curve.
"""

import os
from pathlib import Path
from typing import Optional
import logging

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_TRUTHY = ('true', '1', 'yes')


class Config:
    """
    Centralized configuration for Hero Tracker.

    Example:
        config = Config()
        print(config.curve)       # standard
        print(config.max_level)   # 500
    """

    def __init__(self, env_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            env_file: Optional path to .env file. If None, a .env file in the
                     current working directory is used when present.
        """
        if env_file:
            load_dotenv(env_file)
            logger.info(f"Loaded configuration from {env_file}")
        else:
            env_path = Path.cwd() / '.env'
            if env_path.exists():
                load_dotenv(env_path)
                logger.info(f"Loaded configuration from {env_path}")
            else:
                logger.debug("No .env file found, using environment variables and defaults")

        # === Progression ===
        # Built-in curve name or path to a JSON curve document
        self.curve = os.getenv('HEROTRACKER_CURVE', 'standard')
        self.max_level = self._int_env('HEROTRACKER_MAX_LEVEL', 500)
        self.minutes_per_time_level = self._int_env('HEROTRACKER_MINUTES_PER_TIME_LEVEL', 20)

        # === Data ===
        self.roster_path = os.getenv('HEROTRACKER_ROSTER') or None

        # === Logging ===
        self.log_level = os.getenv('LOG_LEVEL', 'INFO').upper()
        self.log_file = os.getenv('LOG_FILE') or None
        self.log_colors = os.getenv('LOG_COLORS', 'True').lower() in _TRUTHY

    @staticmethod
    def _int_env(name: str, default: int) -> int:
        raw = os.getenv(name)
        if raw is None or raw.strip() == '':
            return default
        try:
            return int(raw)
        except ValueError:
            logger.warning(f"{name}={raw!r} is not an integer, using {default}")
            return default

    def validate(self) -> bool:
        """
        Validate configuration and log problems.

        Returns:
            True if config is valid, False if a value is unusable
        """
        valid = True

        if self.max_level < 1:
            logger.error(f"Invalid HEROTRACKER_MAX_LEVEL: {self.max_level}. Must be at least 1")
            valid = False

        if self.minutes_per_time_level < 1:
            logger.error(
                f"Invalid HEROTRACKER_MINUTES_PER_TIME_LEVEL: {self.minutes_per_time_level}. "
                "Must be at least 1"
            )
            valid = False

        if self.log_level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            logger.warning(f"Unknown LOG_LEVEL {self.log_level}, INFO will be used")

        if self.roster_path and not Path(self.roster_path).exists():
            logger.warning(f"HEROTRACKER_ROSTER points to a missing file: {self.roster_path}")

        return valid

    def __repr__(self) -> str:
        return (
            f"Config("
            f"curve={self.curve}, "
            f"max_level={self.max_level}, "
            f"minutes_per_time_level={self.minutes_per_time_level}, "
            f"log_level={self.log_level})"
        )


# Global config instance (lazy-loaded)
_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global config instance (singleton pattern).

    Returns:
        Global Config instance
    """
    global _config
    if _config is None:
        _config = Config()
        _config.validate()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() re-reads the environment."""
    global _config
    _config = None


__all__ = ['Config', 'get_config', 'reset_config']
