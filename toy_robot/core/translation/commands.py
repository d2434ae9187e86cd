"""
Command Types
Parsed form of one operator line, handed from the parser to the executor.
"""

from enum import Enum
from typing import Any, Dict, Optional

from toy_robot.core.robot.directions import Direction


class CommandType(Enum):
    PLACE = "PLACE"
    MOVE = "MOVE"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    REPORT = "REPORT"


class ParseStatus(Enum):
    COMMAND = "command"
    INVALID = "invalid"
    TERMINATE = "terminate"


class Command:
    """
    A single robot command.

    Attributes:
        kind: Which command this is
        x, y, direction: PLACE arguments (None for bare commands)
    """

    def __init__(
        self,
        kind: CommandType,
        x: Optional[int] = None,
        y: Optional[int] = None,
        direction: Optional[Direction] = None,
    ):
        self.kind = kind
        self.x = x
        self.y = y
        self.direction = direction

    @property
    def requires_placement(self) -> bool:
        return self.kind is not CommandType.PLACE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Command):
            return False
        return (self.kind, self.x, self.y, self.direction) == \
            (other.kind, other.x, other.y, other.direction)

    def __hash__(self) -> int:
        return hash((self.kind, self.x, self.y, self.direction))

    def __repr__(self) -> str:
        if self.kind is CommandType.PLACE:
            return f"Command(PLACE {self.x},{self.y},{self.direction.value})"
        return f"Command({self.kind.value})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        data: Dict[str, Any] = {"command": self.kind.value}
        if self.kind is CommandType.PLACE:
            data.update({"x": self.x, "y": self.y, "direction": self.direction.value})
        return data


class ParseResult:
    """
    Classification of one input line.

    Attributes:
        status: COMMAND, INVALID or TERMINATE
        command: Parsed command when status is COMMAND
        error: Reason when status is INVALID
    """

    def __init__(
        self,
        status: ParseStatus,
        command: Optional[Command] = None,
        error: Optional[str] = None,
    ):
        self.status = status
        self.command = command
        self.error = error

    @classmethod
    def ok(cls, command: Command) -> 'ParseResult':
        return cls(ParseStatus.COMMAND, command=command)

    @classmethod
    def invalid(cls, error: str) -> 'ParseResult':
        return cls(ParseStatus.INVALID, error=error)

    @classmethod
    def terminate(cls) -> 'ParseResult':
        return cls(ParseStatus.TERMINATE)

    @property
    def is_command(self) -> bool:
        return self.status is ParseStatus.COMMAND

    @property
    def is_invalid(self) -> bool:
        return self.status is ParseStatus.INVALID

    @property
    def is_terminator(self) -> bool:
        return self.status is ParseStatus.TERMINATE

    def __repr__(self) -> str:
        return f"ParseResult({self.status.value}, command={self.command!r}, error={self.error!r})"
