"""
Robot Command Executor

Applies parsed commands to a ToyRobot.
PLACE is always dispatched; MOVE/LEFT/RIGHT/REPORT need a placed robot.
"""

from typing import Optional

from toy_robot.core.observability.logging import get_logger
from toy_robot.core.robot.robot import NOT_PLACED_MESSAGE, ToyRobot
from toy_robot.core.translation.commands import Command, CommandType

logger = get_logger("executor")


class RobotExecutor:
    """
    Dispatches commands to the robot state machine.

    Keeps per-session counters for the session summary.
    """

    def __init__(self, robot: ToyRobot, correlation_id: Optional[str] = None):
        self.robot = robot
        self.correlation_id = correlation_id
        self.applied = 0
        self.rejected = 0

        self._handlers = {
            CommandType.MOVE: robot.move,
            CommandType.LEFT: robot.rotate_left,
            CommandType.RIGHT: robot.rotate_right,
            CommandType.REPORT: lambda: robot.report() is not None,
        }

    def execute(self, command: Command) -> bool:
        """
        Apply one command.

        Args:
            command: Parsed command

        Returns:
            True if the robot accepted it, False if it was rejected
        """
        if command.kind is CommandType.PLACE:
            accepted = self.robot.place(command.x, command.y, command.direction)
        elif not self.robot.is_placed:
            self.robot.diagnose(NOT_PLACED_MESSAGE, command=command.kind.value)
            accepted = False
        else:
            accepted = self._handlers[command.kind]()

        if accepted:
            self.applied += 1
        else:
            self.rejected += 1

        logger.debug("Command executed" if accepted else "Command rejected",
                     correlation_id=self.correlation_id,
                     accepted=accepted,
                     **command.to_dict())
        return accepted
