"""
List helpers shared by consumers of the tracker.
"""

from typing import Any, List


def remove_from(items: List[Any], item: Any, remove_all: bool = False) -> int:
    """Remove entries matched by ``item`` from ``items`` in place.

    ``item`` may be a value to remove, a callable returning True for entries
    to remove, or a list/tuple of either (each applied in turn). Only the
    first match is removed unless ``remove_all`` is set.

    Returns the number of entries removed.
    """
    if isinstance(item, (list, tuple)):
        return sum(remove_from(items, entry, remove_all) for entry in item)

    if callable(item):
        matches = item
    else:
        matches = lambda entry: entry == item

    removed = 0
    index = 0
    while index < len(items):
        if matches(items[index]):
            del items[index]
            removed += 1
            if not remove_all:
                break
        else:
            index += 1

    return removed
