"""
Runtime settings, read from the environment. CLI flags override them.
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Optional


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    try:
        return int(raw) if raw is not None else default
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    poll_ms: int = 200
    log_file: Optional[str] = None
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            poll_ms=_env_int("BANDWIDTH_TUI_POLL_MS", cls.poll_ms),
            log_file=os.getenv("BANDWIDTH_TUI_LOG_FILE") or None,
            log_level=os.getenv("BANDWIDTH_TUI_LOG_LEVEL", cls.log_level).upper(),
            host=os.getenv("BANDWIDTH_TUI_HOST", cls.host),
            port=_env_int("BANDWIDTH_TUI_PORT", cls.port),
        )

    def with_overrides(self, **kwargs) -> "Settings":
        """Return a copy with the given (non-None) fields overridden."""
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})


def configure_logging(settings: Settings, to_stderr: bool) -> None:
    """
    The terminal view owns the screen, so it only logs to a file.
    The API server logs to stderr as usual.
    """
    level = getattr(logging, settings.log_level, logging.INFO)
    fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    if settings.log_file:
        logging.basicConfig(filename=settings.log_file, level=level, format=fmt)
    elif to_stderr:
        logging.basicConfig(level=level, format=fmt)
    else:
        logging.getLogger().addHandler(logging.NullHandler())
