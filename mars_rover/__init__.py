"""
Top-level package for the plateau rover mission engine.

Components:
- enums: compass directions, rover instructions, coordinates
- parse: grammar for the instructions message
- rover: rover state and its instruction transition function
- satellite: message orchestration (parse everything, then drive each rover)
- errors: parse / boundary / IO failures
- config: YAML-backed run settings
- cli: command line front end
"""

from .enums import Coordinate, Direction, Instruction
from .errors import (
    BoundaryViolation,
    MissingInstructions,
    MissingPlateauBoundary,
    ParseError,
    RoverError,
    UnexpectedToken,
)
from .rover import Rover
from .satellite import MissionPlan, RoverControlSatellite, RoverPlan, format_rovers, run

__all__ = [
    "Coordinate",
    "Direction",
    "Instruction",
    "BoundaryViolation",
    "MissingInstructions",
    "MissingPlateauBoundary",
    "ParseError",
    "RoverError",
    "UnexpectedToken",
    "Rover",
    "MissionPlan",
    "RoverControlSatellite",
    "RoverPlan",
    "format_rovers",
    "run",
]
