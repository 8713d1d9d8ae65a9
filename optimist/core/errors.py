"""
Exception types for the optimistic transition engine.
"""

from dataclasses import dataclass
from typing import Any


class OptimistError(Exception):
    """Base class for engine errors."""
    pass


class UnknownTransactionError(OptimistError):
    """Raised when a COMMIT or REVERT names no outstanding transaction."""

    def __init__(self, transaction_id: Any, resolution: str):
        self.transaction_id = transaction_id
        self.resolution = resolution
        verb = "commit" if resolution.endswith("COMMIT") else "revert"
        super().__init__(f"Failed to {verb}. Transaction #{transaction_id} does not exist!")


class ConfigError(OptimistError, ValueError):
    """Raised when engine configuration is invalid."""
    pass


@dataclass(frozen=True)
class PossibleLeakWarning:
    """
    Diagnostic emitted when pending history outgrows max_history.

    Never raised. The dispatcher logs it and hands it to the
    on_diagnostic callback, then keeps processing.

    Fields:
        pending: Number of records in pending history
        max_history: Configured threshold
    """
    pending: int
    max_history: int

    @property
    def message(self) -> str:
        return (
            f"Possible memory leak detected: {self.pending} pending actions "
            f"(max_history={self.max_history}). Verify all actions result in a "
            "commit or revert and don't use optimistic updates for long-running requests."
        )
