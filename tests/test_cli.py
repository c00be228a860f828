from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from repcoach.cli.main import build_parser, run_generate, run_play
from repcoach.generation.client import GenerationRequest


def _write_workout(tmp_path: Path, main_workout: list[dict[str, object]]) -> Path:
    workout_file = tmp_path / "session.json"
    payload = {
        "title": "Short Session",
        "warmup": ["Arm circles"],
        "main_workout": main_workout,
        "cooldown": ["Stretch"],
    }
    workout_file.write_text(json.dumps(payload), encoding="utf-8")
    return workout_file


def test_parser_defaults() -> None:
    args = build_parser().parse_args(["--play", "legs.json", "--mute"])

    assert args.play == "legs.json"
    assert args.mute is True
    assert args.lang == "en"
    assert args.target_minutes is None
    assert args.ui_web is False


def test_run_play_completes_session(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    workout_file = _write_workout(
        tmp_path, [{"exercise": "Squat", "sets": 1, "rest_time": "1 sec"}]
    )

    code = asyncio.run(
        run_play(str(workout_file), None, True, "en", tick_interval_sec=0.001)
    )

    out = capsys.readouterr().out
    assert code == 0
    assert "Short Session" in out
    assert "Rest   Squat | Set 1 of 1 |   1s" in out


def test_run_play_empty_session_exits_nonzero(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    workout_file = _write_workout(tmp_path, [{"exercise": "Optional finisher", "sets": 0}])

    code = asyncio.run(run_play(str(workout_file), None, False, "en"))

    assert code == 1
    assert "This workout has no timed sets to play" in capsys.readouterr().out


def test_run_play_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = asyncio.run(run_play(str(tmp_path / "missing.json"), None, False, "en"))

    assert code == 1
    assert "Cannot load workout" in capsys.readouterr().out


def test_run_generate_without_api_key(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    request = GenerationRequest(
        goal="Build endurance", equipment="Bodyweight Only", time_minutes=30
    )

    code = run_generate(request, None)

    assert code == 1
    assert "(missing_config)" in capsys.readouterr().out
