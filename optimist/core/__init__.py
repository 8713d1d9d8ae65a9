"""
Core optimistic transition primitives.

This module provides the building blocks of the engine:
- Action / Optimistic: action records and their transition metadata
- Envelope: caller state wrapped with baseline and pending history
- ActionReducer: registry producing a total reduce function
- OptimisticReducer: the BEGIN/COMMIT/REVERT dispatcher
- apply_commit / apply_revert: history resolution algorithms
- Canonical: deterministic rendering for inspection and comparison
"""

from .actions import (
    BEGIN,
    COMMIT,
    REVERT,
    INIT,
    Action,
    Optimistic,
    optimistic_meta,
    with_optimistic,
    begin,
    commit,
    revert,
)
from .envelope import Envelope, is_envelope, unwrap
from .search import find_index
from .handlers import ActionReducer
from .resolve import apply_commit, apply_revert
from .reducer import OptimisticReducer, make_optimistic_reducer
from .canonical import canonicalize, canonical_json_str
from .errors import OptimistError, UnknownTransactionError, ConfigError, PossibleLeakWarning

__all__ = [
    "BEGIN",
    "COMMIT",
    "REVERT",
    "INIT",
    "Action",
    "Optimistic",
    "optimistic_meta",
    "with_optimistic",
    "begin",
    "commit",
    "revert",
    "Envelope",
    "is_envelope",
    "unwrap",
    "find_index",
    "ActionReducer",
    "apply_commit",
    "apply_revert",
    "OptimisticReducer",
    "make_optimistic_reducer",
    "canonicalize",
    "canonical_json_str",
    "OptimistError",
    "UnknownTransactionError",
    "ConfigError",
    "PossibleLeakWarning",
]
