from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterable, Optional

from .enums import Coordinate, Direction, Instruction
from .errors import BoundaryViolation

StepCallback = Callable[["Rover", int, Instruction], None]


@dataclass
class Rover:
    """Rover on the plateau grid.

    Attributes
    ----------
    id : int
        1-based position of the rover in the instructions message.
    x : int
        Column; grows to the East.
    y : int
        Row; grows to the North.
    facing : Direction
        Current heading.
    """

    id: int
    x: int
    y: int
    facing: Direction

    @classmethod
    def new(cls, id: int, coordinates: Coordinate, facing: Direction) -> "Rover":
        x, y = coordinates
        return cls(id=id, x=x, y=y, facing=facing)

    @property
    def position(self) -> Coordinate:
        return (self.x, self.y)

    def snapshot(self) -> "Rover":
        """Return an independent copy of the current state."""
        return replace(self)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def apply(self, instruction: Instruction) -> None:
        """Apply a single instruction in place."""
        if instruction is Instruction.LEFT:
            self.facing = self.facing.turn_left()
        elif instruction is Instruction.RIGHT:
            self.facing = self.facing.turn_right()
        elif self.facing is Direction.NORTH:
            self.y += 1
        elif self.facing is Direction.EAST:
            self.x += 1
        elif self.facing is Direction.SOUTH:
            self.y -= 1
        else:
            self.x -= 1

    def execute_commands(
        self,
        instructions: Iterable[Instruction],
        boundary: Optional[Coordinate] = None,
        on_step: Optional[StepCallback] = None,
    ) -> "Rover":
        """Apply instructions in order, checking the plateau after every step.

        Raises ``BoundaryViolation`` on the first instruction that leaves the
        plateau; the remaining instructions are not applied. With no
        ``boundary`` every instruction is applied unconditionally.
        """
        for i, instruction in enumerate(instructions):
            self.apply(instruction)
            if on_step is not None:
                on_step(self, i, instruction)
            if self.has_crossed_boundary(boundary):
                raise BoundaryViolation(self.snapshot(), i)
        return self

    def has_crossed_boundary(self, boundary: Optional[Coordinate]) -> bool:
        if boundary is None:
            return False
        max_x, max_y = boundary
        return self.x < 0 or self.y < 0 or self.x > max_x or self.y > max_y

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        """Serialize current rover state to a dict for logging/telemetry."""
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "facing": str(self.facing),
        }

    def __str__(self) -> str:
        return f"{self.x} {self.y} {self.facing}"
