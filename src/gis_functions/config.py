"""Runtime configuration for geometry functions."""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name}={raw!r} is not a boolean")


def _env_log_level(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().upper()
    if value not in _LOG_LEVELS:
        raise ValueError(f"{name}={raw!r} is not one of {', '.join(_LOG_LEVELS)}")
    return value


@dataclass
class FunctionConfig:
    """Settings handed to every function factory."""

    validate_row_coordinates: bool = True   # range-check non-constant st_makepoint input
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> FunctionConfig:
        return cls(
            validate_row_coordinates=_env_flag("GIS_VALIDATE_ROW_COORDINATES", True),
            log_level=_env_log_level("GIS_LOG_LEVEL", "WARNING"),
        )


DEFAULT_CONFIG = FunctionConfig()
