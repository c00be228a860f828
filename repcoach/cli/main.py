"""Terminal CLI entrypoint for RepCoach."""

from __future__ import annotations

import argparse
import asyncio
import json

from repcoach.core.adapters import terminal_tone, terminal_voice
from repcoach.core.driver import PlayerDriver
from repcoach.core.player import EmptySessionError, PlayerPhase, PlayerState
from repcoach.generation.client import GenerationRequest, WorkoutGenerator
from repcoach.generation.errors import GenerationError
from repcoach.ui.translations import announcement, translate
from repcoach.workout.intervals import build_intervals, estimated_duration_minutes
from repcoach.workout.model import IntervalKind
from repcoach.workout.parser import WorkoutParseError, load_workout, workout_to_payload


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="RepCoach workout generator and interval player")
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch web UI (NiceGUI)",
    )
    parser.add_argument(
        "--web-host",
        default="127.0.0.1",
        help="Host bind for --ui-web",
    )
    parser.add_argument(
        "--web-port",
        type=int,
        default=8088,
        help="Port for --ui-web",
    )
    parser.add_argument(
        "--generate",
        metavar="GOAL",
        default=None,
        help="Generate a workout for the described goal and print it as JSON",
    )
    parser.add_argument(
        "--equipment",
        default="Bodyweight Only",
        help="Equipment available for --generate",
    )
    parser.add_argument(
        "--time",
        type=int,
        default=45,
        help="Time limit in minutes for --generate",
    )
    parser.add_argument(
        "--lang",
        choices=["en", "zh"],
        default="en",
        help="Language of generated text and player announcements",
    )
    parser.add_argument(
        "--model",
        default=None,
        help="OpenAI model name (default: $REPCOACH_MODEL or gpt-4o-mini)",
    )
    parser.add_argument(
        "--play",
        metavar="FILE",
        default=None,
        help="Play the main workout of a workout JSON file in the terminal",
    )
    parser.add_argument(
        "--target-minutes",
        type=int,
        default=None,
        help="Fit work intervals to this session length when playing",
    )
    parser.add_argument(
        "--mute",
        action="store_true",
        help="Disable terminal bell and spoken cues for --play",
    )
    return parser


def run_generate(request: GenerationRequest, model: str | None) -> int:
    generator = WorkoutGenerator(model=model)
    try:
        workout = generator.generate(request)
    except GenerationError as exc:
        print(f"{translate(exc.message_key, lang=request.language)} ({exc.kind}): {exc}")
        return 1
    print(json.dumps(workout_to_payload(workout), ensure_ascii=False, indent=2))
    return 0


def _print_state(state: PlayerState, lang: str) -> None:
    if state.phase is PlayerPhase.CLOSED:
        return
    current = state.current
    kind = translate(
        "player_work" if current.kind is IntervalKind.WORK else "player_rest", lang=lang
    )
    set_text = translate(
        "set_of", {"n": current.set_index, "total": current.total_sets}, lang=lang
    )
    print(f"{kind:<6} {current.exercise_name} | {set_text} | {state.seconds_left:>3}s")


async def run_play(
    path: str,
    target_minutes: int | None,
    muted: bool,
    lang: str,
    *,
    tick_interval_sec: float = 1.0,
) -> int:
    try:
        workout = load_workout(path)
    except (OSError, WorkoutParseError) as exc:
        print(f"Cannot load workout: {exc}")
        return 1

    intervals = build_intervals(workout.exercises, target_minutes)
    print(workout.title)
    if target_minutes:
        estimate = estimated_duration_minutes(workout.exercises, target_minutes)
        print(
            f"{translate('estimated_duration', lang=lang)}: ~{estimate} "
            f"{translate('min', lang=lang)}"
        )

    driver = PlayerDriver(
        tone=terminal_tone,
        voice=terminal_voice,
        announce_text=lambda name: announcement(name, lang),
        on_change=lambda state: _print_state(state, lang),
        tick_interval_sec=tick_interval_sec,
    )
    try:
        driver.open(intervals, autoplay=True, muted=muted)
    except EmptySessionError:
        print(translate("player_empty", lang=lang))
        return 1

    try:
        await driver.wait_stopped()
    finally:
        driver.close()
    return 0


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    if args.ui_web:
        from repcoach.ui.web_app import run_web_ui

        return run_web_ui(host=args.web_host, port=args.web_port, model=args.model)

    if args.generate is not None:
        return run_generate(
            GenerationRequest(
                goal=args.generate,
                equipment=args.equipment,
                time_minutes=args.time,
                language=args.lang,
            ),
            args.model,
        )

    if args.play is not None:
        try:
            return asyncio.run(run_play(args.play, args.target_minutes, args.mute, args.lang))
        except KeyboardInterrupt:
            return 130

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
