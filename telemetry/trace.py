from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional, Tuple

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pandas as pd


def load_trace(path: str, max_rows: Optional[int] = None) -> pd.DataFrame:
    """Load a JSONL telemetry file into a flat DataFrame.

    Blank and malformed lines are skipped; a missing file gives an empty frame.
    """
    if not os.path.exists(path):
        return pd.DataFrame()
    records: List[Dict[str, Any]] = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                rec = json.loads(line)
                records.append(rec)
            except json.JSONDecodeError:
                continue
    if not records:
        return pd.DataFrame()
    df = pd.json_normalize(records)
    return df if max_rows is None else df.tail(max_rows)


def _steps(df: pd.DataFrame) -> pd.DataFrame:
    if df.empty or "event" not in df.columns:
        return pd.DataFrame()
    return df[df["event"] == "step"]


def summarize_trace(df: pd.DataFrame) -> pd.DataFrame:
    """One row per rover: step counts and the last recorded pose."""
    columns = ["rover_id", "steps", "moves", "turns", "x", "y", "facing"]
    steps = _steps(df)
    if steps.empty:
        return pd.DataFrame(columns=columns)

    rows = []
    for rover_id, group in steps.groupby("rover_id", sort=True):
        last = group.iloc[-1]
        moves = int((group["instruction"] == "M").sum())
        rows.append(
            {
                "rover_id": int(rover_id),
                "steps": len(group),
                "moves": moves,
                "turns": len(group) - moves,
                "x": int(last["pose.x"]),
                "y": int(last["pose.y"]),
                "facing": last["pose.facing"],
            }
        )
    return pd.DataFrame(rows, columns=columns)


def plot_trails(
    df: pd.DataFrame,
    path: str,
    boundary: Optional[Tuple[int, int]] = None,
) -> None:
    """Render every rover's path from a step trace to an image file."""
    fig, ax = plt.subplots()
    if boundary is not None:
        max_x, max_y = boundary
        ax.add_patch(plt.Rectangle((0, 0), max_x, max_y, fill=False, linestyle="--", color="gray", label="Plateau"))

    steps = _steps(df)
    if not steps.empty:
        for rover_id, group in steps.groupby("rover_id", sort=True):
            ax.plot(group["pose.x"], group["pose.y"], "-o", markersize=3, label=f"Rover {rover_id}")
            last = group.iloc[-1]
            ax.scatter([last["pose.x"]], [last["pose.y"]], marker="*", s=80)

    ax.set_aspect("equal", adjustable="box")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title("Rover Trails")
    if ax.get_legend_handles_labels()[0]:
        ax.legend(loc="upper right")
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    fig.savefig(path)
    plt.close(fig)
