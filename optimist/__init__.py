"""
Optimistic Transition Engine

Wraps a pure, deterministic reducer with optimistic BEGIN/COMMIT/REVERT
transitions that can be resolved in any order.
"""

from .core import (
    BEGIN,
    COMMIT,
    REVERT,
    Action,
    Optimistic,
    Envelope,
    OptimisticReducer,
    make_optimistic_reducer,
    is_envelope,
    unwrap,
    find_index,
    UnknownTransactionError,
    PossibleLeakWarning,
)
from .config import OptimistConfig

__version__ = "0.1.0"

__all__ = [
    "BEGIN",
    "COMMIT",
    "REVERT",
    "Action",
    "Optimistic",
    "Envelope",
    "OptimisticReducer",
    "make_optimistic_reducer",
    "is_envelope",
    "unwrap",
    "find_index",
    "UnknownTransactionError",
    "PossibleLeakWarning",
    "OptimistConfig",
]
