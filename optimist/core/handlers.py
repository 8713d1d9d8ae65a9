"""
ActionReducer: registry of pure per-type handlers.

Produces the total reduce(state, action) function the optimistic engine
wraps. Unknown action types, including the engine's own INIT seed,
leave the state unchanged.
"""

from typing import Any, Callable, Dict, Mapping

# Handler signature: (current_state, action) -> new_state
Handler = Callable[[Any, Any], Any]


def action_type(action: Any) -> Any:
    """Type of an Action or mapping-shaped action (None if absent)."""
    if isinstance(action, Mapping):
        return action.get("type")
    return getattr(action, "type", None)


class ActionReducer:
    """
    Registry of action handlers.

    Usage:
        reducer = ActionReducer()
        reducer.register("ADD", lambda n, a: n + a.payload["amount"])
        new_state = reducer(state, action)
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, Handler] = {}

    def register(self, type_: str, handler: Handler) -> None:
        """
        Register action handler.

        Args:
            type_: Action type string
            handler: Pure function (state, action) -> new_state
        """
        self._handlers[type_] = handler

    def handles(self, type_: str) -> bool:
        return type_ in self._handlers

    def apply(self, state: Any, action: Any) -> Any:
        """
        Apply action to state using its registered handler.

        Returns:
            New state, or state unchanged when no handler is registered
        """
        handler = self._handlers.get(action_type(action))
        if handler is None:
            return state
        return handler(state, action)

    __call__ = apply
