from __future__ import annotations

import json
import os
import threading
from typing import Any, Dict, Optional, TextIO

from mars_rover.enums import Instruction
from mars_rover.rover import Rover, StepCallback


class TelemetryLogger:
    """Structured JSONL logger for rover missions.

    Append-only logging of dict records, one JSON object per line. Every
    record is stamped with the ``run_id`` the logger was opened with.
    """

    def __init__(self, path: str, run_id: str = "mission") -> None:
        self.path = path
        self.run_id = run_id
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        self._lock = threading.Lock()
        self._fp: Optional[TextIO] = open(self.path, "a", encoding="utf-8")

    def log_step(self, record: Dict[str, Any]) -> None:
        """Append a single telemetry record to the JSONL file."""
        if self._fp is None:
            return
        line = json.dumps({"run_id": self.run_id, **record}, separators=(",", ":"))
        with self._lock:
            self._fp.write(line + "\n")
            self._fp.flush()

    def rover_step_callback(self) -> StepCallback:
        """Observer for ``Rover.execute_commands`` recording each applied step."""

        def on_step(rover: Rover, index: int, instruction: Instruction) -> None:
            self.log_step(
                {
                    "event": "step",
                    "rover_id": rover.id,
                    "step": index,
                    "instruction": str(instruction),
                    "pose": {"x": rover.x, "y": rover.y, "facing": str(rover.facing)},
                }
            )

        return on_step

    def log_rover_done(self, rover: Rover) -> None:
        self.log_step({"event": "rover_done", "rover_id": rover.id, "pose": rover.to_dict()})

    def log_failure(self, error: Exception) -> None:
        self.log_step({"event": "mission_failed", "error": type(error).__name__, "message": str(error)})

    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
            self._fp = None

    def __enter__(self) -> "TelemetryLogger":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
