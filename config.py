"""
LECTIO - Configuration

Centralized configuration for the reader.
Uses environment variables (optionally from a .env file) with sensible defaults.
"""
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from core.errors import LectioConfigError
from observability.logging import LoggingConfig

# Load environment variables from .env file
load_dotenv()


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    """Read an integer setting, rejecting malformed or too-small values."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise LectioConfigError(
            f"{name} must be an integer, got {raw!r}",
            config_key=name,
            expected_type=int,
            actual_value=raw,
            cause=e,
        ) from e
    if value < minimum:
        raise LectioConfigError(
            f"{name} must be >= {minimum}, got {value}",
            config_key=name,
            expected_type=int,
            actual_value=value,
        )
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise LectioConfigError(
            f"{name} must be a number, got {raw!r}",
            config_key=name,
            expected_type=float,
            actual_value=raw,
            cause=e,
        ) from e


class Environment(Enum):
    """Deployment environments."""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


@dataclass
class ReaderConfig:
    """Limits of the navigation core."""
    history_limit: int = field(default_factory=lambda: _env_int("LECTIO_HISTORY_LIMIT", 10, minimum=1))
    max_translations: int = field(default_factory=lambda: _env_int("LECTIO_MAX_TRANSLATIONS", 3, minimum=1))

    # Search
    search_min_term_length: int = field(default_factory=lambda: _env_int("LECTIO_SEARCH_MIN_TERM", 2, minimum=1))
    search_max_results: int = field(default_factory=lambda: _env_int("LECTIO_SEARCH_MAX_RESULTS", 50, minimum=1))

    # Cascading menu
    menu_verse_limit: int = field(default_factory=lambda: _env_int("LECTIO_MENU_VERSE_LIMIT", 60, minimum=1))
    menu_label_length: int = field(default_factory=lambda: _env_int("LECTIO_MENU_LABEL_LENGTH", 90, minimum=1))


@dataclass
class CorpusConfig:
    """Where translations are read from and cached."""
    data_dir: Path = field(default_factory=lambda: Path(os.getenv("LECTIO_DATA_DIR", "./data/corpora")))
    cache_dir: Path = field(default_factory=lambda: Path(os.getenv("LECTIO_CACHE_DIR", "./cache")))
    http_timeout: float = field(default_factory=lambda: _env_float("LECTIO_HTTP_TIMEOUT", 30.0))


@dataclass
class Config:
    """Main configuration class combining all sub-configs."""
    env: Environment = field(default_factory=lambda: Environment(os.getenv("ENVIRONMENT", "development")))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")

    reader: ReaderConfig = field(default_factory=ReaderConfig)
    corpus: CorpusConfig = field(default_factory=CorpusConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.env == Environment.PRODUCTION

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "env": self.env.value,
            "debug": self.debug,
            "reader": {
                "history_limit": self.reader.history_limit,
                "max_translations": self.reader.max_translations,
                "search_min_term_length": self.reader.search_min_term_length,
                "search_max_results": self.reader.search_max_results,
                "menu_verse_limit": self.reader.menu_verse_limit,
                "menu_label_length": self.reader.menu_label_length,
            },
            "corpus": {
                "data_dir": str(self.corpus.data_dir),
                "cache_dir": str(self.corpus.cache_dir),
                "http_timeout": self.corpus.http_timeout,
            },
            "logging": {
                "level": self.logging.level,
                "json_format": self.logging.json_format,
            },
        }


# Singleton configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create configuration singleton."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config() -> Config:
    """Reload configuration from environment."""
    global _config
    load_dotenv(override=True)
    _config = Config()
    return _config
