from __future__ import annotations

from pathlib import Path

import pytest

from mars_rover.cli import main
from telemetry.trace import load_trace

SAMPLE = "5 5\n1 2 N\nLMLMLMLMM\n3 3 E\nMMRMMRMRRM\n"


def write_input(tmp_path: Path, text: str) -> str:
    path = tmp_path / "instructions.txt"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_prints_final_positions(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([write_input(tmp_path, SAMPLE)]) == 0
    assert capsys.readouterr().out == "1 3 N\n5 1 E\n"


def test_writes_output_file(tmp_path: Path) -> None:
    out = tmp_path / "out.txt"
    assert main([write_input(tmp_path, SAMPLE), "-o", str(out)]) == 0
    assert out.read_text(encoding="utf-8") == "1 3 N\n5 1 E"


def test_boundary_violation_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = write_input(tmp_path, "2 2\n0 0 N\nLM")
    assert main([path]) == 1
    err = capsys.readouterr().err
    assert "Rover 1 crossed the plateau's boundary at position (-1, 0)" in err

    assert main([path, "--unbounded"]) == 0
    assert capsys.readouterr().out == "-1 0 W\n"


def test_parse_error_reports_line_number(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([write_input(tmp_path, "5 5\n1 2 N\nLMQ")]) == 1
    err = capsys.readouterr().err
    assert "Unexpected token encountered, at line 3" in err


def test_missing_input_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(tmp_path / "nope.txt")]) == 1
    assert "Issue whilst opening the instructions file" in capsys.readouterr().err


def test_undecodable_input_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "binary.txt"
    path.write_bytes(b"\xff\xfe\xfa")
    assert main([str(path)]) == 1
    assert "Issue whilst reading in the instructions file" in capsys.readouterr().err


def test_unwritable_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "missing_dir" / "out.txt"
    assert main([write_input(tmp_path, SAMPLE), "-o", str(out)]) == 1
    assert "Issue whilst saving the output file" in capsys.readouterr().err


def test_config_file_sets_unbounded(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg = tmp_path / "mission.yaml"
    cfg.write_text("mission:\n  unbounded: true\n", encoding="utf-8")
    assert main([write_input(tmp_path, "2 2\n0 0 N\nLM"), "--config", str(cfg)]) == 0
    assert capsys.readouterr().out == "-1 0 W\n"


def test_plot_requires_telemetry(tmp_path: Path) -> None:
    assert main([write_input(tmp_path, SAMPLE), "--plot", str(tmp_path / "t.png")]) == 1


def test_telemetry_and_plot(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "mission.jsonl"
    plot_path = tmp_path / "trails.png"
    args = [write_input(tmp_path, SAMPLE), "--telemetry", str(log_path), "--plot", str(plot_path)]
    assert main(args) == 0

    df = load_trace(str(log_path))
    steps = df[df["event"] == "step"]
    assert len(steps) == len("LMLMLMLMM") + len("MMRMMRMRRM")
    done = df[df["event"] == "rover_done"]
    assert list(done["rover_id"]) == [1, 2]
    assert plot_path.exists()


def test_telemetry_records_failure(tmp_path: Path) -> None:
    log_path = tmp_path / "mission.jsonl"
    assert main([write_input(tmp_path, "2 2\n0 0 N\nLM"), "--telemetry", str(log_path)]) == 1
    df = load_trace(str(log_path))
    assert df["event"].iloc[-1] == "mission_failed"
    assert df["error"].iloc[-1] == "BoundaryViolation"
