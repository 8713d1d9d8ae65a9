"""
Canonical rendering of states, actions and envelopes.

Gives one stable JSON form for any value the engine handles, so envelopes
can be printed, diffed and compared across runs.
"""

import dataclasses
import json
from typing import Any


def canonicalize(obj: Any) -> Any:
    """
    Convert nested engine values to canonical plain form.

    Rules:
    - dataclasses (Action, Optimistic, Envelope) become dicts of their fields
    - dict keys sorted, non-string keys stringified; keys that collide
      once stringified (1 and "1") raise ValueError
    - tuples converted to lists
    - recursive normalization
    """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        obj = {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    if isinstance(obj, dict):
        items = {}
        for k, v in obj.items():
            key = str(k)
            if key in items:
                raise ValueError(f"Keys collide when stringified: {key!r}")
            items[key] = canonicalize(v)
        return {k: items[k] for k in sorted(items)}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    return obj


def canonical_json_str(obj: Any, indent: Any = None) -> str:
    """
    Deterministic JSON string.

    Values JSON cannot encode natively are rendered with str().
    """
    separators = (",", ":") if indent is None else (",", ": ")
    return json.dumps(
        canonicalize(obj),
        sort_keys=True,
        separators=separators,
        ensure_ascii=False,
        indent=indent,
        default=str,
    )
