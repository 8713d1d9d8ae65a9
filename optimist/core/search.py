"""
Linear search over action history.
"""

from typing import Any, Callable, Sequence


def find_index(seq: Sequence[Any], predicate: Callable[[Any], bool]) -> int:
    """
    Index of the first element satisfying predicate, or -1.
    """
    for i, item in enumerate(seq):
        if predicate(item):
            return i
    return -1
