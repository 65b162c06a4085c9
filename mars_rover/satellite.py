from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .enums import Coordinate, Direction, Instruction
from .errors import MissingInstructions, MissingPlateauBoundary
from .parse import coordinate, instruction_stream, parse_complete, starting_position
from .rover import Rover, StepCallback

Line = Tuple[int, str]


@dataclass
class RoverPlan:
    """Parsed starting position and instructions for one rover."""

    coordinates: Coordinate
    facing: Direction
    instructions: List[Instruction]
    position_line: int
    instructions_line: int


@dataclass
class MissionPlan:
    """Fully parsed instructions message."""

    boundary: Coordinate
    rovers: List[RoverPlan] = field(default_factory=list)


class RoverControlSatellite:
    """Parses an instructions message and drives the rovers it describes.

    The whole message is parsed before any rover moves, so a parse error
    anywhere wins over a boundary violation by an earlier rover.
    """

    @staticmethod
    def split_lines(message: str) -> List[Line]:
        """Split on ``\\n`` only; a trailing newline does not start another line."""
        lines = message.split("\n")
        if lines[-1] == "":
            lines.pop()
        return [(i, line.strip()) for i, line in enumerate(lines)]

    @staticmethod
    def parse_boundary(entry: Optional[Line]) -> Coordinate:
        """Get the upper-right corner of the plateau."""
        if entry is None:
            raise MissingPlateauBoundary(0)
        _, line = entry
        return parse_complete(coordinate, line, 0)

    @staticmethod
    def parse_rover_entry(
        position_entry: Optional[Line],
        instructions_entry: Optional[Line],
    ) -> Optional[RoverPlan]:
        """Get the starting position and instructions for a rover.

        Returns ``None`` once both lines are exhausted.
        """
        if position_entry is None:
            return None
        position_index, position_line = position_entry
        if instructions_entry is None:
            raise MissingInstructions(position_index)
        instructions_index, instructions_line = instructions_entry

        coords, facing = parse_complete(starting_position, position_line, position_index)
        instructions = parse_complete(instruction_stream, instructions_line, instructions_index)
        return RoverPlan(
            coordinates=coords,
            facing=facing,
            instructions=instructions,
            position_line=position_index,
            instructions_line=instructions_index,
        )

    @classmethod
    def parse_message(cls, message: str) -> MissionPlan:
        lines = iter(cls.split_lines(message))
        plan = MissionPlan(boundary=cls.parse_boundary(next(lines, None)))
        while True:
            entry = cls.parse_rover_entry(next(lines, None), next(lines, None))
            if entry is None:
                break
            plan.rovers.append(entry)
        return plan

    @staticmethod
    def execute_plan(
        plan: MissionPlan,
        unbounded: bool = False,
        on_step: Optional[StepCallback] = None,
    ) -> List[Rover]:
        boundary = None if unbounded else plan.boundary
        rovers: List[Rover] = []
        for rover_id, entry in enumerate(plan.rovers, start=1):
            rover = Rover.new(rover_id, entry.coordinates, entry.facing)
            rovers.append(rover.execute_commands(entry.instructions, boundary, on_step))
        return rovers

    @classmethod
    def parse_and_execute_incoming_message(
        cls,
        message: str,
        unbounded: bool = False,
        on_step: Optional[StepCallback] = None,
    ) -> List[Rover]:
        return cls.execute_plan(cls.parse_message(message), unbounded, on_step)


def run(message: str, unbounded: bool = False, on_step: Optional[StepCallback] = None) -> List[Rover]:
    """Parse ``message`` and return every rover's final state, in input order.

    Raises a ``RoverError`` subclass on the first parse or boundary failure;
    there is no partial output.
    """
    return RoverControlSatellite.parse_and_execute_incoming_message(message, unbounded, on_step)


def format_rovers(rovers: List[Rover]) -> str:
    return "\n".join(str(rover) for rover in rovers)
