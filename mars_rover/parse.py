"""
Grammar for the rover instructions message.

Every parser takes a slice of text and returns ``(remainder, value)``, raising
``GrammarError`` when the text does not begin with the expected token. Parsers
never skip leading whitespace; composite parsers consume the separators
between tokens themselves.
"""

from __future__ import annotations

from typing import Callable, List, Tuple, TypeVar

import parsy
from parsy import char_from, fail, regex, seq, success

from .enums import Coordinate, Direction, Instruction
from .errors import GrammarError, UnexpectedToken

T = TypeVar("T")
ParseResult = Tuple[str, T]

# Largest value a co-ordinate may hold (signed 64-bit)
MAX_DECIMAL = 2**63 - 1

# ASCII "multispace": space, tab, carriage return, line feed
multispace1 = regex(r"[ \t\r\n]+")
multispace0 = regex(r"[ \t\r\n]*")


def _bounded(value: int) -> parsy.Parser:
    return success(value) if value <= MAX_DECIMAL else fail("decimal within 64-bit range")


decimal_parser = (
    regex(r"(?:[0-9]_*)+").map(lambda s: int(s.replace("_", ""))).bind(_bounded).desc("decimal")
)
coordinate_parser = seq(decimal_parser << multispace1, decimal_parser).map(tuple)
direction_parser = char_from("NESWnesw").map(Direction.from_token).desc("direction")
instruction_parser = char_from("MLRmlr").map(Instruction.from_token).desc("instruction")
starting_position_parser = seq(coordinate_parser << multispace1, direction_parser).map(tuple)
instruction_stream_parser = (instruction_parser << multispace0).at_least(1)


def _partial(parser: parsy.Parser, context: str, text: str) -> ParseResult:
    try:
        value, rest = parser.parse_partial(text)
    except parsy.ParseError as exc:
        raise GrammarError(context, text) from exc
    return rest, value


def decimal(text: str) -> ParseResult[int]:
    """Parse a non-negative integer; underscores may group digits (``1_000``)."""
    return _partial(decimal_parser, "decimal", text)


def coordinate(text: str) -> ParseResult[Coordinate]:
    """Parse a co-ordinate from a pair of numbers separated by whitespace."""
    return _partial(coordinate_parser, "coordinate", text)


def direction(text: str) -> ParseResult[Direction]:
    """Parse a direction (North, East, South or West)."""
    return _partial(direction_parser, "direction", text)


def instruction(text: str) -> ParseResult[Instruction]:
    """Parse an instruction (move, turn left or turn right)."""
    return _partial(instruction_parser, "instruction", text)


def starting_position(text: str) -> ParseResult[Tuple[Coordinate, Direction]]:
    """Parse a rover starting position (co-ordinate + direction)."""
    return _partial(starting_position_parser, "starting position", text)


def instruction_stream(text: str) -> ParseResult[List[Instruction]]:
    """Parse one or more instructions, each optionally followed by whitespace."""
    return _partial(instruction_stream_parser, "instruction stream", text)


def parse_complete(parser: Callable[[str], ParseResult[T]], text: str, line_index: int) -> T:
    """Run ``parser`` over a whole line; anything left over is an unexpected token."""
    try:
        rest, value = parser(text)
    except GrammarError as exc:
        raise UnexpectedToken(line_index) from exc
    if rest:
        raise UnexpectedToken(line_index)
    return value
