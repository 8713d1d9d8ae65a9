"""
OptimisticReducer: the BEGIN/COMMIT/REVERT dispatcher.

Wraps a pure reduce(state, action) -> state so that callers can apply a
transition before its outcome is known and later commit or revert it by
transaction id, in any order.

Calls must be serialized by the host: each call reads one envelope and
returns the next, with no locking of its own.
"""

import logging
from typing import Any, Callable, Mapping, Optional, Union

from .actions import BEGIN, COMMIT, INIT, Action, Optimistic, optimistic_meta, with_optimistic
from .envelope import Envelope, unwrap
from .errors import PossibleLeakWarning, UnknownTransactionError
from .resolve import apply_commit, apply_revert
from .search import find_index
from ..config import OptimistConfig
from ..logging_config import get_logger

logger = logging.getLogger(__name__)

Reduce = Callable[[Any, Any], Any]
DiagnosticHandler = Callable[[PossibleLeakWarning], None]


class OptimisticReducer:
    """
    Reducer over envelopes.

    Usage:
        reducer = make_optimistic_reducer(counter)
        env = reducer(0, begin(Action("ADD", {"amount": 5}), "save-1"))
        env = reducer(env, revert(Action("SAVE_FAILED"), "save-1"))
        unwrap(env)  # -> 0
    """

    def __init__(
        self,
        reduce: Reduce,
        config: Optional[OptimistConfig] = None,
        on_diagnostic: Optional[DiagnosticHandler] = None,
    ) -> None:
        self.reduce = reduce
        self.config = config or OptimistConfig()
        self.on_diagnostic = on_diagnostic

    def ensure_envelope(self, state: Any) -> Envelope:
        """Envelope as given, or a bare state wrapped and seeded with INIT."""
        if isinstance(state, Envelope):
            return state
        return Envelope.wrap(self.reduce(unwrap(state), Action(INIT)))

    def apply(self, state: Any, action: Any) -> Envelope:
        """
        Apply action to an envelope or bare state.

        Args:
            state: Previous envelope, or a bare caller state
            action: Incoming action

        Returns:
            New envelope; the input is never modified

        Raises:
            UnknownTransactionError: If a COMMIT/REVERT names no outstanding
                transaction
        """
        env = self.ensure_envelope(state)
        opt = optimistic_meta(action)

        if env.pending:
            if opt is None or opt.type == BEGIN:
                self._check_history(env)
                return Envelope(
                    baseline=env.baseline,
                    pending=env.pending + (action,),
                    current=self.reduce(env.current, action),
                )
            return self._resolve(env, action, opt)

        if opt is not None and opt.type == BEGIN:
            get_logger(__name__, txn_id=opt.id).debug("Transaction started")
            return Envelope(
                baseline=env.current,
                pending=(action,),
                current=self.reduce(env.current, action),
            )

        if opt is not None:
            get_logger(__name__, txn_id=opt.id).debug(
                "Resolution with no outstanding transactions applied as ordinary action"
            )
        return Envelope.wrap(self.reduce(env.current, action))

    __call__ = apply

    def _resolve(self, env: Envelope, action: Any, opt: Optimistic) -> Envelope:
        kind, txn_id = opt.type, opt.id

        def is_target(record: Any) -> bool:
            meta = optimistic_meta(record)
            return meta is not None and meta.type == BEGIN and not meta.resolved and meta.id == txn_id

        target_index = find_index(env.pending, is_target)
        if target_index == -1:
            raise UnknownTransactionError(txn_id, kind)

        resolution = with_optimistic(action, opt.mark_resolved())
        staged = Envelope(
            baseline=env.baseline,
            pending=env.pending + (resolution,),
            current=self.reduce(env.current, resolution),
        )

        if kind == COMMIT:
            result = apply_commit(staged, target_index, self.reduce)
        else:
            result = apply_revert(staged, target_index, self.reduce)

        get_logger(__name__, txn_id=txn_id).debug(
            "Transaction %s at index %d, %d pending",
            "committed" if kind == COMMIT else "reverted",
            target_index,
            len(result.pending),
        )
        return result

    def _check_history(self, env: Envelope) -> None:
        max_history = self.config.max_history
        if len(env.pending) <= max_history:
            return
        warning = PossibleLeakWarning(pending=len(env.pending), max_history=max_history)
        logger.warning(warning.message)
        if self.on_diagnostic is not None:
            self.on_diagnostic(warning)


def make_optimistic_reducer(
    reduce: Reduce,
    config: Union[OptimistConfig, Mapping[str, Any], None] = None,
    on_diagnostic: Optional[DiagnosticHandler] = None,
) -> OptimisticReducer:
    """
    Wrap reduce with optimistic transition handling.

    Args:
        reduce: Pure, total, deterministic reduce(state, action) -> state
        config: OptimistConfig, a mapping such as {"max_history": 50}, or None
        on_diagnostic: Called with each PossibleLeakWarning

    Returns:
        OptimisticReducer, callable as (envelope_or_state, action) -> envelope
    """
    if config is not None and not isinstance(config, OptimistConfig):
        config = OptimistConfig.from_mapping(config)
    return OptimisticReducer(reduce, config=config, on_diagnostic=on_diagnostic)
