"""Next/previous lookup over the ordered message index (wraps around at both ends)."""
from __future__ import annotations

from enum import Enum
from typing import Sequence

from gutter_client.errors import NoMessagesError
from gutter_client.messages import Location, MergedEntry


class Direction(Enum):
    NEXT = 1
    PREV = -1


def next_index(index: Sequence[MergedEntry], from_location: Location) -> int:
    """Smallest position whose location is after ``from_location``; 0 when none is."""
    if not index:
        raise NoMessagesError()
    for position, entry in enumerate(index):
        if entry.location > from_location:
            return position
    return 0


def prev_index(index: Sequence[MergedEntry], from_location: Location) -> int:
    """Largest position whose location is before ``from_location``; the last one when none is."""
    if not index:
        raise NoMessagesError()
    for position in range(len(index) - 1, -1, -1):
        if index[position].location < from_location:
            return position
    return len(index) - 1


def step(index: Sequence[MergedEntry], from_location: Location, direction: Direction) -> int:
    if direction is Direction.NEXT:
        return next_index(index, from_location)
    return prev_index(index, from_location)
