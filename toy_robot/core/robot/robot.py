"""
Toy Robot
Position/facing state machine (UNPLACED -> PLACED) on a tabletop.
REPORT output goes to stdout, diagnostics to stderr.
"""

import sys
from typing import NamedTuple, Optional, TextIO

from toy_robot.core.observability.logging import get_logger
from toy_robot.core.robot.directions import Direction
from toy_robot.core.robot.tabletop import Tabletop

logger = get_logger("robot")

NOT_PLACED_MESSAGE = "PLACE me on the table, first."
FALL_OFF_MESSAGE = "Oops! Can't do it or I'd fall off the tabletop!"


class Position(NamedTuple):
    x: int
    y: int

    def step(self, direction: Direction) -> 'Position':
        dx, dy = direction.delta
        return Position(self.x + dx, self.y + dy)


class ToyRobot:
    """
    Tracks the robot's position and facing on a tabletop.

    The robot starts UNPLACED at (0, 0) facing NORTH. A successful place()
    moves it to PLACED; move/rotate/report are rejected with a diagnostic
    until then. Rejected operations never change state.

    place/move/rotate return True when applied and False when rejected;
    report returns the printed line, or None when rejected.
    """

    def __init__(
        self,
        tabletop: Optional[Tabletop] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        correlation_id: Optional[str] = None,
    ):
        """
        Args:
            tabletop: Board to stay on (default: size from $TABLETOP_SIZE)
            out: Stream for REPORT output (default: sys.stdout at write time)
            err: Stream for diagnostics (default: sys.stderr at write time)
            correlation_id: Session id attached to log entries
        """
        self.tabletop = tabletop or Tabletop()
        self._out = out
        self._err = err
        self.correlation_id = correlation_id

        self._position = Position(0, 0)
        self._facing = Direction.NORTH
        self._placed = False
        self.diagnostics = 0

    @property
    def position(self) -> Position:
        return self._position

    @property
    def facing(self) -> Direction:
        return self._facing

    @property
    def is_placed(self) -> bool:
        return self._placed

    def place(self, x: int, y: int, direction: Direction) -> bool:
        """
        Put the robot on the tabletop at (x, y) facing direction.

        Off-table coordinates are rejected and leave the robot where it was
        (or unplaced), the same way move() rejects a step off the edge.
        """
        if not self.tabletop.is_within_bounds(x, y):
            self.diagnose(FALL_OFF_MESSAGE, command="PLACE", x=x, y=y)
            return False

        self._position = Position(x, y)
        self._facing = direction
        self._placed = True
        logger.info("Robot placed", correlation_id=self.correlation_id,
                    x=x, y=y, facing=direction.value)
        return True

    def move(self) -> bool:
        """Step one cell forward, unless that would leave the tabletop."""
        if not self._require_placed("MOVE"):
            return False

        candidate = self._position.step(self._facing)
        if not self.tabletop.is_within_bounds(candidate.x, candidate.y):
            self.diagnose(FALL_OFF_MESSAGE, command="MOVE",
                          x=candidate.x, y=candidate.y)
            return False

        self._position = candidate
        logger.debug("Robot moved", correlation_id=self.correlation_id,
                     x=candidate.x, y=candidate.y)
        return True

    def rotate_left(self) -> bool:
        if not self._require_placed("LEFT"):
            return False
        self._facing = self._facing.counter_clockwise()
        logger.debug("Robot turned left", correlation_id=self.correlation_id,
                     facing=self._facing.value)
        return True

    def rotate_right(self) -> bool:
        if not self._require_placed("RIGHT"):
            return False
        self._facing = self._facing.clockwise()
        logger.debug("Robot turned right", correlation_id=self.correlation_id,
                     facing=self._facing.value)
        return True

    def report(self) -> Optional[str]:
        """Print `x,y,FACING` to the output stream and return it."""
        if not self._require_placed("REPORT"):
            return None
        line = self.state_line()
        print(line, file=self._out or sys.stdout)
        logger.info("Robot reported", correlation_id=self.correlation_id, state=line)
        return line

    def state_line(self) -> str:
        return f"{self._position.x},{self._position.y},{self._facing.value}"

    def _require_placed(self, command: str) -> bool:
        if self._placed:
            return True
        self.diagnose(NOT_PLACED_MESSAGE, command=command)
        return False

    def diagnose(self, message: str, **fields) -> None:
        self.diagnostics += 1
        print(message, file=self._err or sys.stderr)
        logger.warning(message, correlation_id=self.correlation_id, **fields)

    def __repr__(self) -> str:
        state = self.state_line() if self._placed else "UNPLACED"
        return f"ToyRobot({state}, {self.tabletop!r})"
