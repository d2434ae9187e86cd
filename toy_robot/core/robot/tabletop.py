"""
Tabletop
Square board bounds. Size comes from $TABLETOP_SIZE (default 5).
"""

import os
from typing import Optional

DEFAULT_TABLETOP_SIZE = 5


def configured_size() -> int:
    """
    Tabletop size from $TABLETOP_SIZE, falling back to 5.

    Raises:
        ValueError: If the value is not a positive integer
    """
    raw = os.getenv("TABLETOP_SIZE", str(DEFAULT_TABLETOP_SIZE))
    try:
        size = int(raw)
    except ValueError:
        raise ValueError(f"TABLETOP_SIZE must be an integer, got {raw!r}") from None
    if size <= 0:
        raise ValueError(f"TABLETOP_SIZE must be positive, got {size}")
    return size


class Tabletop:
    """
    Square board the robot stands on.
    Valid cells are 0..size-1 on both axes; (0, 0) is the south-west corner.
    """

    def __init__(self, size: Optional[int] = None):
        if size is None:
            size = configured_size()
        if size <= 0:
            raise ValueError(f"Tabletop size must be positive, got {size}")
        self.size = size

    def is_within_bounds(self, x: int, y: int) -> bool:
        """Check if (x, y) is a cell of the tabletop."""
        return 0 <= x < self.size and 0 <= y < self.size

    def __repr__(self) -> str:
        return f"Tabletop(size={self.size})"
