"""Operator library over lazy sequences.

- Sources: range, from_iterable, from_awaitable, from_event, empty
- Transforms: map, filter, flat_map, take, skip, take_while, take_until,
  skip_while, skip_until, tap, delay, merge
- Terminals: reduce, for_each, to_list

Several names shadow builtins (map, filter, range); import the module rather
than the names when mixing with builtins:

    >>> from lazyflow import operators as ops
    >>> await ops.to_list(ops.take(3, ops.range(1)))
    [1, 2, 3]
"""

from .sources import EventSource, empty, from_awaitable, from_event, from_iterable, range
from .terminals import for_each, reduce, to_list
from .transforms import (
    delay,
    filter,
    flat_map,
    map,
    merge,
    skip,
    skip_until,
    skip_while,
    take,
    take_until,
    take_while,
    tap,
)

__all__ = [
    # Sources
    "EventSource", "range", "from_iterable", "from_awaitable", "from_event", "empty",
    # Transforms
    "map", "filter", "flat_map", "take", "skip", "take_while", "take_until",
    "skip_while", "skip_until", "tap", "delay", "merge",
    # Terminals
    "reduce", "for_each", "to_list",
]
