"""Environment-driven configuration."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_SEARCH_LIMIT = 20
DEFAULT_LOG_LEVEL = "WARNING"


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass
class ClaMLConfig:
    """Configuration for the claml CLI."""

    source: Path | None = None
    search_limit: int = DEFAULT_SEARCH_LIMIT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "ClaMLConfig":
        """Create config from environment variables.

        Optional environment variables:
            CLAML_SOURCE: Default ClaML XML or exported JSON file
            CLAML_SEARCH_LIMIT: Default number of search hits (default: 20)
            CLAML_LOG_LEVEL: Logging level name (default: WARNING)

        Raises:
            ValueError: If a variable has an invalid value.
        """
        source = os.getenv("CLAML_SOURCE")
        log_level = os.getenv("CLAML_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"CLAML_LOG_LEVEL is not a logging level: {log_level!r}")

        return cls(
            source=Path(source) if source else None,
            search_limit=_int_from_env("CLAML_SEARCH_LIMIT", DEFAULT_SEARCH_LIMIT),
            log_level=log_level,
        )
