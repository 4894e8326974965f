"""Configuration for the clockwatch application."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields

LOG_LEVELS = ("debug", "info", "warning", "error")

_ENV_PREFIX = "CLOCKWATCH_"


@dataclass
class Config:
    """Application configuration.

    ``max_fps`` of ``None`` (or anything not positive) leaves the frame loop
    uncapped.  ``write_log`` names a file that receives a copy of every
    byte written to the terminal.
    """

    max_fps: float | None = None
    log_file: str | None = None
    log_level: str = "warning"
    write_log: str | None = None

    @property
    def frame_interval(self) -> float | None:
        """Minimum seconds per frame, or ``None`` when uncapped."""
        if self.max_fps is None or self.max_fps <= 0:
            return None
        return 1.0 / self.max_fps


def _parse_max_fps(raw: str) -> float | None:
    if not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{_ENV_PREFIX}MAX_FPS must be a number, got {raw!r}") from None


def load_config(**overrides: object) -> Config:
    """Build a :class:`Config` from ``CLOCKWATCH_*`` environment variables.

    Keyword arguments that are not ``None`` take precedence over the
    environment.
    """
    config = Config()

    raw_fps = os.environ.get(f"{_ENV_PREFIX}MAX_FPS")
    if raw_fps is not None:
        config.max_fps = _parse_max_fps(raw_fps)

    config.log_file = os.environ.get(f"{_ENV_PREFIX}LOG_FILE") or None
    config.write_log = os.environ.get(f"{_ENV_PREFIX}WRITE_LOG") or None

    level = os.environ.get(f"{_ENV_PREFIX}LOG_LEVEL")
    if level:
        config.log_level = level.lower()

    known = {f.name for f in fields(Config)}
    for name, value in overrides.items():
        if name not in known:
            raise TypeError(f"Unknown config option: {name}")
        if value is not None:
            setattr(config, name, value)

    if config.log_level not in LOG_LEVELS:
        raise ValueError(
            f"log level must be one of {', '.join(LOG_LEVELS)}, got {config.log_level!r}"
        )

    return config
