from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .rover import Rover


class GrammarError(ValueError):
    """Raised by a grammar primitive when the text does not start with its token."""

    def __init__(self, context: str, text: str) -> None:
        super().__init__(f"expected {context} at {text[:16]!r}")
        self.context = context
        self.text = text


class UnknownTokenError(ValueError):
    """Raised by a strict token-to-enum conversion on an unrecognized letter."""

    def __init__(self, kind: str, token: str) -> None:
        super().__init__(f"unknown {kind} token {token!r}")
        self.kind = kind
        self.token = token


class RoverError(Exception):
    """Base class for every failure surfaced to the caller of a mission run."""

    def message(self) -> str:
        return str(self)


class ParseError(RoverError):
    """A line of the instructions message could not be parsed.

    ``line_index`` is 0-based; ``line_number`` is what users see.
    """

    reason = "Malformed line"

    def __init__(self, line_index: int) -> None:
        self.line_index = line_index
        super().__init__(self.message())

    @property
    def line_number(self) -> int:
        return self.line_index + 1

    def message(self) -> str:
        return (
            f"Issue whilst parsing instructions file: {self.reason}, "
            f"at line {self.line_number}"
        )


class MissingPlateauBoundary(ParseError):
    reason = "Missing plateau boundary"

    def __init__(self, line_index: int = 0) -> None:
        super().__init__(line_index)


class MissingInstructions(ParseError):
    reason = "Missing instructions for rover"


class UnexpectedToken(ParseError):
    reason = "Unexpected token encountered"


class BoundaryViolation(RoverError):
    """A rover left the plateau while boundary checking was enabled.

    ``rover`` is a snapshot taken at the moment of the violation and
    ``instruction_index`` is 0-based within that rover's own instructions.
    """

    def __init__(self, rover: "Rover", instruction_index: int) -> None:
        self.rover = rover
        self.instruction_index = instruction_index
        super().__init__(self.message())

    @property
    def line_number(self) -> int:
        # Rover n's instructions sit on line 2n + 1
        return self.rover.id * 2 + 1

    def message(self) -> str:
        return (
            f"Rover {self.rover.id} crossed the plateau's boundary at position "
            f"({self.rover.x}, {self.rover.y}): instruction {self.instruction_index + 1}, "
            f"at line {self.line_number}"
        )


class MissionIOError(RoverError):
    """Opening, reading or saving a mission file failed."""

    _SUBJECTS = {
        "opening": "opening the instructions file",
        "reading": "reading in the instructions file",
        "saving": "saving the output file",
    }

    def __init__(self, stage: str, cause: Optional[BaseException] = None) -> None:
        if stage not in self._SUBJECTS:
            raise ValueError(f"unknown IO stage {stage!r}")
        self.stage = stage
        self.cause = cause
        super().__init__(self.message())

    def message(self) -> str:
        return f"Issue whilst {self._SUBJECTS[self.stage]}: {self.cause}"
