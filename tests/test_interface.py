import io
import json

import pytest

from toy_robot.cli.interface import (
    BANNER,
    FAREWELL,
    check_input_path,
    run_cli_session,
    run_session,
)
from toy_robot.core.robot.directions import Direction
from toy_robot.core.robot.robot import FALL_OFF_MESSAGE, NOT_PLACED_MESSAGE


def lines(*commands):
    return io.StringIO("".join(f"{c}\n" for c in commands))


def test_example_scenario(robot, out, err):
    summary = run_session(
        lines("PLACE 1,2,EAST", "MOVE", "MOVE", "LEFT", "MOVE", "REPORT"),
        robot, err=err,
    )
    assert out.getvalue() == "3,3,NORTH\n"
    assert err.getvalue() == ""
    assert summary.applied == 6
    assert summary.stop_reason == "eof"


def test_move_before_place_is_ignored(robot, out, err):
    summary = run_session(lines("MOVE", "PLACE 0,0,NORTH", "REPORT"), robot, err=err)
    assert out.getvalue() == "0,0,NORTH\n"
    assert err.getvalue() == NOT_PLACED_MESSAGE + "\n"
    assert summary.rejected == 1


def test_invalid_line_is_reported_and_skipped(robot, out, err):
    summary = run_session(lines("JUMP", "PLACE 4,4,EAST", "REPORT"), robot, err=err)
    assert err.getvalue() == "Invalid command or command format: JUMP (unrecognized command)\n"
    assert out.getvalue() == "4,4,EAST\n"
    assert summary.invalid == 1


def test_invalid_line_leaves_state(placed_robot, err):
    run_session(lines("PLACE 1,1,UP"), placed_robot, err=err)
    assert placed_robot.position == (2, 2)
    assert placed_robot.facing is Direction.NORTH
    assert "(unknown direction)" in err.getvalue()


@pytest.mark.parametrize("terminator", ["", "EXIT", "exit", "   "])
def test_terminator_stops_reading(robot, out, err, terminator):
    stream = lines("PLACE 1,1,NORTH", terminator, "REPORT")
    summary = run_session(stream, robot, err=err)
    assert out.getvalue() == ""
    assert summary.stop_reason == "terminator"
    assert summary.lines_read == 2
    assert stream.read() == "REPORT\n"


def test_falling_off_is_not_fatal(robot, out, err):
    run_session(lines("PLACE 0,0,SOUTH", "MOVE", "LEFT", "MOVE", "REPORT"), robot, err=err)
    assert err.getvalue() == FALL_OFF_MESSAGE + "\n"
    assert out.getvalue() == "1,0,EAST\n"


def test_windows_line_endings(robot, out, err):
    run_session(io.StringIO("PLACE 2,2,WEST\r\nREPORT\r\n"), robot, err=err)
    assert out.getvalue() == "2,2,WEST\n"


class BrokenStream:
    def __init__(self, good_lines):
        self._lines = list(good_lines)

    def readline(self):
        if self._lines:
            return self._lines.pop(0)
        raise OSError("device not ready")


def test_read_error_stops_loop(robot, out, err):
    stream = BrokenStream(["PLACE 1,1,NORTH\n", "REPORT\n"])
    summary = run_session(stream, robot, err=err)
    assert out.getvalue() == "1,1,NORTH\n"
    assert err.getvalue() == "Can't read line: device not ready\n"
    assert summary.stop_reason == "read_error"


def test_check_input_path(tmp_path):
    assert check_input_path(None) is None
    assert check_input_path("-") is None
    assert check_input_path("stdin") is None

    commands = tmp_path / "commands.txt"
    commands.write_text("REPORT\n")
    assert check_input_path(str(commands)) == str(commands)

    with pytest.raises(ValueError, match="does not exist"):
        check_input_path(str(tmp_path / "missing.txt"))
    with pytest.raises(ValueError, match="No input file specified"):
        check_input_path("")


def test_interactive_session(out, err):
    status = run_cli_session(
        stdin=lines("PLACE 0,0,NORTH", "MOVE", "REPORT", "EXIT"), out=out, err=err
    )
    assert status == 0
    assert out.getvalue() == f"{BANNER}\n0,1,NORTH\n{FAREWELL}\n"
    assert err.getvalue() == ""


def test_batch_session(tmp_path, out, err):
    commands = tmp_path / "commands.txt"
    commands.write_text("PLACE 1,2,EAST\nMOVE\nMOVE\nLEFT\nMOVE\nREPORT\n")
    status = run_cli_session(str(commands), out=out, err=err)
    assert status == 0
    assert out.getvalue() == "3,3,NORTH\n"


def test_batch_session_stops_at_blank_line(tmp_path, out, err):
    commands = tmp_path / "commands.txt"
    commands.write_text("PLACE 1,2,EAST\nREPORT\n\nMOVE\nREPORT\n")
    run_cli_session(str(commands), out=out, err=err)
    assert out.getvalue() == "1,2,EAST\n"


def test_missing_file_is_a_configuration_error(tmp_path, out, err):
    missing = tmp_path / "nope.txt"
    status = run_cli_session(str(missing), out=out, err=err)
    assert status == 1
    assert err.getvalue() == f"The file {missing} does not exist.\n"
    assert out.getvalue() == ""


def test_custom_size(out, err):
    run_cli_session(size=7, stdin=lines("PLACE 6,6,NORTH", "REPORT"), out=out, err=err)
    assert "6,6,NORTH\n" in out.getvalue()


def test_bad_size(out, err):
    assert run_cli_session(size=0, stdin=lines("REPORT"), out=out, err=err) == 1
    assert "must be positive" in err.getvalue()


def test_huge_coordinate_is_rejected_and_session_continues(robot, out, err):
    summary = run_session(
        lines(f"PLACE {'1' * 5000},0,NORTH", "PLACE 1,1,NORTH", "REPORT"),
        robot, err=err,
    )
    assert err.getvalue() == FALL_OFF_MESSAGE + "\n"
    assert out.getvalue() == "1,1,NORTH\n"
    assert summary.rejected == 1
    assert summary.stop_reason == "eof"


def test_invalid_utf8_stops_at_the_bad_line(tmp_path, out, err):
    commands = tmp_path / "commands.txt"
    commands.write_bytes(b"PLACE 1,1,NORTH\nREPORT\n\xff\xfe\nMOVE\nREPORT\n")
    assert run_cli_session(str(commands), out=out, err=err) == 0
    assert out.getvalue() == "1,1,NORTH\n"
    assert err.getvalue().startswith("Can't read line: ")
    assert "utf-8" in err.getvalue()


def test_invalid_utf8_summary(tmp_path, robot, err):
    commands = tmp_path / "commands.txt"
    commands.write_bytes(b"PLACE 1,1,NORTH\nREPORT\n\xff\xfe\n")
    with open(commands, "rb") as stream:
        summary = run_session(stream, robot, err=err)
    assert summary.stop_reason == "read_error"
    assert summary.lines_read == 2
    assert summary.applied == 2


def test_unwritable_log_dir_does_not_stop_the_robot(tmp_path, monkeypatch, out, err):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    monkeypatch.setenv("LOG_DIR", str(blocker))
    commands = tmp_path / "commands.txt"
    commands.write_text("PLACE 1,1,NORTH\nMOVE\nREPORT\n")

    assert run_cli_session(str(commands), out=out, err=err) == 0
    assert out.getvalue() == "1,2,NORTH\n"
    assert err.getvalue() == ""


def test_session_writes_one_run_file(isolated_logs, tmp_path, out, err):
    commands = tmp_path / "commands.txt"
    commands.write_text("PLACE 0,0,NORTH\n" + "LEFT\n" * 50 + "REPORT\n")
    run_cli_session(str(commands), out=out, err=err)

    run_files = list((isolated_logs / "runs").glob("*/*.json"))
    assert len(run_files) == 1
    run = json.loads(run_files[0].read_text())
    assert run["logs"][0]["message"] == "Session started"
    assert run["logs"][-1]["message"] == "Session ended"
    assert run["logs"][-1]["lines_read"] == 52
