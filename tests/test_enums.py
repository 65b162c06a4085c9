from __future__ import annotations

import pytest

from mars_rover.enums import DEFAULT_DIRECTION, DEFAULT_INSTRUCTION, Direction, Instruction
from mars_rover.errors import UnknownTokenError


def test_turning_right_four_times_is_identity() -> None:
    for start in Direction:
        facing = start
        for _ in range(4):
            facing = facing.turn_right()
        assert facing is start


def test_turning_left_four_times_is_identity() -> None:
    for start in Direction:
        facing = start
        for _ in range(4):
            facing = facing.turn_left()
        assert facing is start


def test_opposite_turns_cancel() -> None:
    for start in Direction:
        assert start.turn_right().turn_left() is start
        assert start.turn_left().turn_right() is start


def test_turns_wrap_around_cycle() -> None:
    assert Direction.WEST.turn_right() is Direction.NORTH
    assert Direction.NORTH.turn_left() is Direction.WEST
    assert Direction.NORTH.turn_right() is Direction.EAST


def test_from_token_strict_rejects_unknown() -> None:
    with pytest.raises(UnknownTokenError):
        Direction.from_token("x")
    with pytest.raises(UnknownTokenError):
        Instruction.from_token("x")


def test_from_token_lenient_falls_back_to_defaults() -> None:
    assert Direction.from_token("x", strict=False) is DEFAULT_DIRECTION is Direction.NORTH
    assert Instruction.from_token("x", strict=False) is DEFAULT_INSTRUCTION is Instruction.MOVE
    assert Direction.from_token("s", strict=False) is Direction.SOUTH


def test_str_renders_single_letter() -> None:
    assert [str(d) for d in Direction] == ["N", "E", "S", "W"]
    assert str(Instruction.LEFT) == "L"


def test_from_token_rejects_non_ascii_letters() -> None:
    with pytest.raises(UnknownTokenError):
        Direction.from_token("ſ")
    with pytest.raises(UnknownTokenError):
        Instruction.from_token("ı")
    with pytest.raises(UnknownTokenError):
        Direction.from_token("NE")
    assert Direction.from_token("ſ", strict=False) is Direction.NORTH
