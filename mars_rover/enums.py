from __future__ import annotations

from enum import Enum
from typing import Any, Tuple

from .errors import UnknownTokenError

Coordinate = Tuple[int, int]


def _ascii_member(enum_cls: Any, token: str) -> Any:
    # Single ASCII letters only
    if len(token) != 1 or not token.isascii():
        return None
    try:
        return enum_cls(token.upper())
    except ValueError:
        return None


class Direction(Enum):
    """Compass heading of a rover.

    Members are declared in clockwise order; turning is index arithmetic
    modulo 4 over that order, so the cycle always wraps.
    """

    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"

    @classmethod
    def from_token(cls, token: str, strict: bool = True) -> "Direction":
        """Convert a single letter (any case) to a direction.

        With ``strict=False`` an unrecognized token becomes ``DEFAULT_DIRECTION``.
        """
        member = _ascii_member(cls, token)
        if member is None:
            if strict:
                raise UnknownTokenError("direction", token)
            return DEFAULT_DIRECTION
        return member

    def turn_right(self) -> "Direction":
        return _DIRECTION_CYCLE[(_DIRECTION_CYCLE.index(self) + 1) % 4]

    def turn_left(self) -> "Direction":
        return _DIRECTION_CYCLE[(_DIRECTION_CYCLE.index(self) - 1) % 4]

    def __str__(self) -> str:
        return self.value


class Instruction(Enum):
    """Single movement command for a rover."""

    MOVE = "M"
    LEFT = "L"
    RIGHT = "R"

    @classmethod
    def from_token(cls, token: str, strict: bool = True) -> "Instruction":
        """Convert a single letter (any case) to an instruction.

        With ``strict=False`` an unrecognized token becomes ``DEFAULT_INSTRUCTION``.
        """
        member = _ascii_member(cls, token)
        if member is None:
            if strict:
                raise UnknownTokenError("instruction", token)
            return DEFAULT_INSTRUCTION
        return member

    def __str__(self) -> str:
        return self.value


_DIRECTION_CYCLE: Tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.EAST,
    Direction.SOUTH,
    Direction.WEST,
)

# Construction-time defaults only
DEFAULT_DIRECTION = Direction.NORTH
DEFAULT_INSTRUCTION = Instruction.MOVE
