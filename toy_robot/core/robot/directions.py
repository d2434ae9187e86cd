"""
Directions
Facing directions with explicit clockwise/counter-clockwise tables and
one-step deltas (north is +y, east is +x).
"""

from enum import Enum
from typing import Dict, Optional, Tuple


class Direction(Enum):
    """
    Robot facing direction on the tabletop.
    Value is the name used in PLACE commands and REPORT output.
    """
    NORTH = "NORTH"
    EAST = "EAST"
    SOUTH = "SOUTH"
    WEST = "WEST"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> Optional['Direction']:
        """Case-insensitive lookup, None for unknown names."""
        return _BY_NAME.get(name.strip().upper())

    def clockwise(self) -> 'Direction':
        return CLOCKWISE[self]

    def counter_clockwise(self) -> 'Direction':
        return COUNTER_CLOCKWISE[self]

    @property
    def delta(self) -> Tuple[int, int]:
        """(dx, dy) of one step forward."""
        return STEP_DELTAS[self]


_BY_NAME: Dict[str, Direction] = {d.value: d for d in Direction}

# Clockwise: NORTH -> EAST -> SOUTH -> WEST -> NORTH
CLOCKWISE: Dict[Direction, Direction] = {
    Direction.NORTH: Direction.EAST,
    Direction.EAST: Direction.SOUTH,
    Direction.SOUTH: Direction.WEST,
    Direction.WEST: Direction.NORTH,
}

COUNTER_CLOCKWISE: Dict[Direction, Direction] = {
    after: before for before, after in CLOCKWISE.items()
}

# North is +y, east is +x
STEP_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.NORTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, -1),
    Direction.WEST: (-1, 0),
}
