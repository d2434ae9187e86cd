"""
CLI Interface
Reads command lines from a file (batch) or stdin (interactive) and drives
the toy robot until a blank line, EXIT, end-of-stream or a read failure.
"""

import os
import sys
import uuid
from typing import IO, Any, Dict, Optional, TextIO

from toy_robot.core.observability.logging import StructuredLogger, get_logger
from toy_robot.core.robot.executor import RobotExecutor
from toy_robot.core.robot.robot import ToyRobot
from toy_robot.core.robot.tabletop import Tabletop
from toy_robot.core.translation.parser import parse_line

logger = get_logger("cli")

BANNER = "ToyRobot is reporting for duty. Waiting for the PLACE command:"
FAREWELL = "Bye."
STDIN_NAMES = ("-", "stdin")


class SessionSummary:
    """
    Outcome of one session, logged when the loop ends.

    Attributes:
        lines_read: Lines consumed, terminator included
        applied: Commands the robot accepted
        rejected: Commands the robot refused (not placed, off the table)
        invalid: Lines that did not parse
        stop_reason: "eof", "terminator" or "read_error"
    """

    def __init__(self):
        self.lines_read = 0
        self.applied = 0
        self.rejected = 0
        self.invalid = 0
        self.stop_reason = "eof"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "lines_read": self.lines_read,
            "applied": self.applied,
            "rejected": self.rejected,
            "invalid": self.invalid,
            "stop_reason": self.stop_reason,
        }


def read_line(stream: IO) -> Optional[str]:
    """
    Next line without its newline, or None at end-of-stream.

    Binary streams are decoded one line at a time as UTF-8, so a bad byte
    only fails the line that holds it.
    """
    line = stream.readline()
    if not line:
        return None
    if isinstance(line, bytes):
        line = line.decode("utf-8")
    return line.rstrip("\r\n")


def run_session(
    stream: IO,
    robot: ToyRobot,
    err: Optional[TextIO] = None,
    correlation_id: Optional[str] = None,
) -> SessionSummary:
    """
    Read-parse-apply loop.

    Process:
    1. Read one line (a read failure ends the loop)
    2. Stop on end-of-stream, blank line or EXIT
    3. Report invalid lines and carry on
    4. Hand commands to the executor

    Args:
        stream: Source of command lines
        robot: Robot to drive
        err: Stream for diagnostics (default: sys.stderr)
        correlation_id: Session id for log grouping

    Returns:
        SessionSummary for the finished loop
    """
    err = err or sys.stderr
    executor = RobotExecutor(robot, correlation_id=correlation_id)
    summary = SessionSummary()

    while True:
        try:
            line = read_line(stream)
        except (OSError, ValueError) as e:
            print(f"Can't read line: {e}", file=err)
            logger.error("Read failed", correlation_id=correlation_id, error=str(e))
            summary.stop_reason = "read_error"
            break

        if line is None:
            summary.stop_reason = "eof"
            break

        summary.lines_read += 1
        result = parse_line(line)

        if result.is_terminator:
            summary.stop_reason = "terminator"
            break

        if result.is_invalid:
            summary.invalid += 1
            print(f"Invalid command or command format: {line} ({result.error})", file=err)
            logger.warning("Invalid command", correlation_id=correlation_id,
                           line=line, error=result.error)
            continue

        executor.execute(result.command)

    summary.applied = executor.applied
    summary.rejected = executor.rejected
    return summary


def check_input_path(input_path: Optional[str]) -> Optional[str]:
    """
    Validate the command file argument.

    Returns:
        None for interactive stdin, else the path

    Raises:
        ValueError: Empty path or missing file
    """
    if input_path is None or input_path in STDIN_NAMES:
        return None
    if not input_path.strip():
        raise ValueError("No input file specified.")
    if not os.path.isfile(input_path):
        raise ValueError(f"The file {input_path} does not exist.")
    return input_path


def run_cli_session(
    input_path: Optional[str] = None,
    size: Optional[int] = None,
    stdin: Optional[TextIO] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """
    Run one interactive or batch session.

    Args:
        input_path: Command file; None, "-" or "stdin" reads stdin interactively
        size: Tabletop size (default: $TABLETOP_SIZE or 5)
        stdin, out, err: Stream overrides (default: sys streams)

    Returns:
        Process exit status: 0 after a session, 1 on a configuration error
    """
    stdin = stdin or sys.stdin
    out = out or sys.stdout
    err = err or sys.stderr

    try:
        path = check_input_path(input_path)
        tabletop = Tabletop(size)
    except ValueError as e:
        print(str(e), file=err)
        logger.error("Configuration error", error=str(e))
        return 1

    correlation_id = str(uuid.uuid4())
    robot = ToyRobot(tabletop, out=out, err=err, correlation_id=correlation_id)
    interactive = path is None

    logger.info("Session started", correlation_id=correlation_id,
                mode="interactive" if interactive else "batch",
                input_file=path, tabletop_size=tabletop.size)

    if interactive:
        print(BANNER, file=out)
        summary = run_session(stdin, robot, err=err, correlation_id=correlation_id)
        print(FAREWELL, file=out)
    else:
        try:
            stream = open(path, "rb")
        except OSError as e:
            print(f"Can't read line: {e}", file=err)
            logger.error("Could not open command file", correlation_id=correlation_id,
                         input_file=path, error=str(e))
            summary = SessionSummary()
            summary.stop_reason = "read_error"
        else:
            with stream:
                summary = run_session(stream, robot, err=err, correlation_id=correlation_id)

    logger.info("Session ended", correlation_id=correlation_id, **summary.to_dict())
    StructuredLogger.close_run(correlation_id)
    return 0
