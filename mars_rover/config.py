from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

import yaml


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _optional_str(section: Dict[str, Any], key: str) -> Optional[str]:
    value = section.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string path, got {value!r}")
    return value


@dataclass(frozen=True)
class MissionConfig:
    """Run settings for a mission, usually loaded from ``configs/mission.yaml``."""

    unbounded: bool = False
    output_path: Optional[str] = None
    telemetry_path: Optional[str] = None
    plot_path: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MissionConfig":
        mission_cfg = data.get("mission") or {}
        telemetry_cfg = data.get("telemetry") or {}

        unbounded = mission_cfg.get("unbounded", False)
        if not isinstance(unbounded, bool):
            raise ValueError(f"unbounded must be true or false, got {unbounded!r}")

        return cls(
            unbounded=unbounded,
            output_path=_optional_str(mission_cfg, "output"),
            telemetry_path=_optional_str(telemetry_cfg, "log_path"),
            plot_path=_optional_str(telemetry_cfg, "plot_path"),
        )

    @classmethod
    def from_yaml(cls, path: str) -> "MissionConfig":
        return cls.from_dict(load_yaml(path))

    def with_overrides(self, **overrides: Any) -> "MissionConfig":
        """Return a copy with every override that is not ``None`` applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)
