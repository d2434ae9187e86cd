"""Shared fixtures for toy robot tests."""

import io

import pytest

from toy_robot.core.robot.directions import Direction
from toy_robot.core.robot.robot import ToyRobot
from toy_robot.core.robot.tabletop import Tabletop


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path, monkeypatch):
    """Keep structured logs out of the working tree."""
    log_dir = tmp_path / "logs"
    monkeypatch.setenv("LOG_DIR", str(log_dir))
    monkeypatch.delenv("TABLETOP_SIZE", raising=False)
    return log_dir


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def err():
    return io.StringIO()


@pytest.fixture
def robot(out, err):
    return ToyRobot(Tabletop(5), out=out, err=err)


@pytest.fixture
def placed_robot(robot):
    robot.place(2, 2, Direction.NORTH)
    return robot
