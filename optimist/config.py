"""
Engine configuration.

Environment Variables:
    OPTIMIST_MAX_HISTORY: Pending-history size above which a possible leak
        is reported - default: 100
"""

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .core.errors import ConfigError

DEFAULT_MAX_HISTORY = 100


def _parse_max_history(value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"max_history must be an integer, got {value!r}")
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"max_history must be an integer, got {value!r}") from None
    if isinstance(value, float) and value != parsed:
        raise ConfigError(f"max_history must be an integer, got {value!r}")
    if parsed < 0:
        raise ConfigError(f"max_history must be >= 0, got {parsed}")
    return parsed


@dataclass(frozen=True)
class OptimistConfig:
    """
    Optimistic reducer configuration.

    Fields:
        max_history: Pending-history size above which a PossibleLeakWarning
            is emitted. Advisory only.
    """
    max_history: int = DEFAULT_MAX_HISTORY

    def __post_init__(self) -> None:
        value = self.max_history
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(f"max_history must be a non-negative integer, got {value!r}")

    @staticmethod
    def from_mapping(data: Optional[Mapping[str, Any]]) -> "OptimistConfig":
        """
        Build config from a mapping.

        Accepts "max_history" or "maxHistory"; unknown keys are ignored.
        """
        data = data or {}
        raw = data.get("max_history", data.get("maxHistory", DEFAULT_MAX_HISTORY))
        return OptimistConfig(max_history=_parse_max_history(raw))

    @staticmethod
    def from_env() -> "OptimistConfig":
        raw = os.getenv("OPTIMIST_MAX_HISTORY")
        if raw is None or not raw.strip():
            return OptimistConfig()
        return OptimistConfig(max_history=_parse_max_history(raw.strip()))
