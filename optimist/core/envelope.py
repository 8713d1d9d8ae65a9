"""
Envelope model: caller state plus optimistic bookkeeping.

Recognition is by type. Only Envelope instances are envelopes; any other
value, even a dict with baseline/pending/current keys, is a bare state.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Envelope:
    """
    Immutable envelope.

    Fields:
        baseline: State captured when the oldest outstanding transition
            began (None when nothing is pending)
        pending: Actions applied since baseline, in arrival order
        current: Visible state; always equal to folding pending over baseline

    Envelope is immutable. Every dispatch returns a new instance.
    """
    baseline: Any = None
    pending: Tuple[Any, ...] = field(default_factory=tuple)
    current: Any = None

    def __post_init__(self) -> None:
        # Lists (e.g. from to_dict()) are accepted and frozen into a tuple.
        if not isinstance(self.pending, tuple):
            object.__setattr__(self, "pending", tuple(self.pending))

    @staticmethod
    def wrap(state: Any) -> "Envelope":
        """Wrap a bare state with no outstanding transitions."""
        return Envelope(baseline=None, pending=(), current=state)

    @property
    def is_settled(self) -> bool:
        """True when no transition is outstanding."""
        return not self.pending

    def to_dict(self) -> Dict[str, Any]:
        return {
            "baseline": self.baseline,
            "pending": list(self.pending),
            "current": self.current,
        }


def is_envelope(value: Any) -> bool:
    return isinstance(value, Envelope)


def unwrap(value: Any) -> Any:
    """
    Domain state of an envelope, or value itself if it is a bare state.
    """
    return value.current if isinstance(value, Envelope) else value
