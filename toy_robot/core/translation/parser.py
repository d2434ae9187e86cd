"""
Line Parser
Turns one line of operator input into a Command, an error, or end-of-input.

Grammar (keywords and directions are case-insensitive):
    bare-command   := "MOVE" | "LEFT" | "RIGHT" | "REPORT"
    place-command  := "PLACE" SP INT "," INT "," direction
    direction      := "NORTH" | "EAST" | "SOUTH" | "WEST"
    terminator     := "" | "EXIT"
"""

from typing import Dict, FrozenSet, Optional

from toy_robot.core.robot.directions import Direction
from toy_robot.core.translation.commands import Command, CommandType, ParseResult

UNRECOGNIZED_COMMAND = "unrecognized command"
MALFORMED_PLACE = "malformed PLACE arguments"
UNKNOWN_DIRECTION = "unknown direction"

PLACE_KEYWORD = "PLACE"
EXIT_KEYWORD = "EXIT"
DIGITS: FrozenSet[str] = frozenset("0123456789")

# Longer coordinates are clamped; no tabletop is that large
MAX_COORDINATE_DIGITS = 18
OFF_TABLE_COORDINATE = 10 ** MAX_COORDINATE_DIGITS

BARE_COMMANDS: Dict[str, CommandType] = {
    kind.value: kind for kind in CommandType if kind is not CommandType.PLACE
}


def _parse_int(token: str) -> Optional[int]:
    """One or more ASCII digits, no sign."""
    if not token or not set(token) <= DIGITS:
        return None
    significant = token.lstrip("0")
    if len(significant) > MAX_COORDINATE_DIGITS:
        return OFF_TABLE_COORDINATE
    return int(significant or "0")


def parse_place_arguments(arguments: str) -> ParseResult:
    """
    Parse the `INT,INT,DIRECTION` part of a PLACE command.

    Args:
        arguments: Text after "PLACE " (no surrounding whitespace allowed)

    Returns:
        ParseResult with a PLACE command, or INVALID with the reason
    """
    parts = arguments.split(",")
    if len(parts) != 3:
        return ParseResult.invalid(MALFORMED_PLACE)

    x, y = _parse_int(parts[0]), _parse_int(parts[1])
    if x is None or y is None:
        return ParseResult.invalid(MALFORMED_PLACE)

    # Direction.from_name strips; the grammar does not allow spaces here
    if parts[2] != parts[2].strip():
        return ParseResult.invalid(MALFORMED_PLACE)
    direction = Direction.from_name(parts[2])
    if direction is None:
        return ParseResult.invalid(UNKNOWN_DIRECTION)

    return ParseResult.ok(Command(CommandType.PLACE, x, y, direction))


def parse_line(line: Optional[str]) -> ParseResult:
    """
    Classify a raw input line.

    Never touches robot state.

    Args:
        line: Raw line (trailing newline allowed); None means end-of-stream

    Returns:
        TERMINATE for end-of-stream, blank lines and EXIT;
        COMMAND for MOVE/LEFT/RIGHT/REPORT/PLACE;
        INVALID with an error detail otherwise
    """
    if line is None:
        return ParseResult.terminate()

    text = line.strip()
    keyword = text.upper()

    if not text or keyword == EXIT_KEYWORD:
        return ParseResult.terminate()

    if keyword in BARE_COMMANDS:
        return ParseResult.ok(Command(BARE_COMMANDS[keyword]))

    head, separator, arguments = text.partition(" ")
    if head.upper() == PLACE_KEYWORD:
        if not separator or not arguments:
            return ParseResult.invalid(MALFORMED_PLACE)
        return parse_place_arguments(arguments)

    return ParseResult.invalid(UNRECOGNIZED_COMMAND)
