"""NiceGUI web UI for RepCoach."""

from __future__ import annotations

import json
from typing import cast
from urllib.parse import quote_plus

from nicegui import ui

from repcoach.core.player import EmptySessionError, PlayerPhase, PlayerState
from repcoach.generation.client import (
    MAX_TIME_MINUTES,
    MIN_TIME_MINUTES,
    GenerationRequest,
    WorkoutGenerator,
)
from repcoach.generation.errors import GenerationError
from repcoach.ui.controller import UIController
from repcoach.ui.translations import Lang, speech_locale, translate
from repcoach.workout.checklist import Section
from repcoach.workout.model import IntervalKind

EQUIPMENT_KEYS = ("equipment_bodyweight", "equipment_dumbbells", "equipment_full_gym")
DEFAULT_TIME_MINUTES = 45
WORK_BG = "#059669"
REST_BG = "#dc2626"

_TONE_JS = """
(() => {
  try {
    const ctx = new (window.AudioContext || window.webkitAudioContext)();
    const osc = ctx.createOscillator();
    const gain = ctx.createGain();
    osc.connect(gain);
    gain.connect(ctx.destination);
    osc.frequency.value = 880;
    osc.type = 'sine';
    gain.gain.setValueAtTime(0.2, ctx.currentTime);
    gain.gain.exponentialRampToValueAtTime(0.01, ctx.currentTime + 0.1);
    osc.start(ctx.currentTime);
    osc.stop(ctx.currentTime + 0.1);
    setTimeout(() => ctx.close(), 300);
  } catch (e) {}
})();
"""


def _speech_js(text: str, locale: str) -> str:
    return f"""
(() => {{
  if (!window.speechSynthesis) return;
  const u = new SpeechSynthesisUtterance({json.dumps(text)});
  u.lang = {json.dumps(locale)};
  u.rate = 0.95;
  u.pitch = 1;
  window.speechSynthesis.cancel();
  window.speechSynthesis.speak(u);
}})();
"""


def _exercise_lookup_url(name: str) -> str:
    return "https://www.youtube.com/results?search_query=" + quote_plus(
        f"{name} exercise how to"
    )


def build_page(controller: UIController) -> None:
    lang: Lang = "en"
    # Player adapters run outside any UI slot, so they target the client directly.
    client = ui.context.client
    client.on_disconnect(controller.close_player)

    def t(key: str, **params: object) -> str:
        return translate(key, params or None, lang=lang)

    ui.add_head_html(
        """
        <style>
          body { background: #f8fafc; font-family: Arial, "Segoe UI", sans-serif; }
          .rc-card {
            background: #ffffff;
            border: 1px solid rgba(148, 163, 184, 0.35);
            border-radius: 14px;
            box-shadow: 0 6px 16px rgba(15, 23, 42, 0.06);
          }
          .rc-done { color: #94a3b8; text-decoration: line-through; }
          .rc-countdown {
            font-size: min(28vw, 180px);
            font-weight: 900;
            line-height: 1;
            font-variant-numeric: tabular-nums;
            color: #ffffff;
          }
          .rc-player-text { color: #ffffff; }
          .rc-player-muted { color: rgba(255, 255, 255, 0.75); }
        </style>
        """
    )

    with ui.column().classes("w-full max-w-2xl mx-auto gap-4 p-4"):
        with ui.row().classes("w-full items-center justify-between"):
            title_label = ui.label().classes("text-2xl font-bold")
            lang_toggle = ui.toggle({"en": "EN", "zh": "中文"}, value=lang)
        tagline_label = ui.label().classes("text-slate-500")

        with ui.card().classes("w-full rc-card") as form_card:
            goal_input = ui.textarea().classes("w-full")
            goal_hint = ui.label().classes("text-xs text-slate-500")
            equipment_select = ui.select({}, value=EQUIPMENT_KEYS[0]).classes("w-full")
            time_label = ui.label().classes("text-sm font-medium")
            time_slider = ui.slider(
                min=MIN_TIME_MINUTES,
                max=MAX_TIME_MINUTES,
                step=5,
                value=DEFAULT_TIME_MINUTES,
            )
            generate_btn = ui.button().classes("w-full")
            footer_label = ui.label().classes("text-xs text-slate-400")

        with ui.row().classes("w-full items-center gap-2") as busy_row:
            ui.spinner(size="lg")
            busy_label = ui.label()
        busy_row.set_visibility(False)

        workout_view = ui.column().classes("w-full gap-4")

    with ui.dialog().props("maximized persistent") as player_dialog, ui.card().classes(
        "w-full h-full items-center justify-center"
    ) as player_card:
        with ui.row().classes("absolute top-4 right-4 gap-2"):
            mute_btn = ui.button(icon="volume_up").props("round flat color=white")
            close_btn = ui.button(icon="close").props("round flat color=white")
        kind_label = ui.label().classes("text-lg uppercase tracking-wider rc-player-muted")
        exercise_label = ui.label().classes("text-3xl font-bold text-center rc-player-text")
        set_label = ui.label().classes("text-lg rc-player-muted")
        countdown_label = ui.label().classes("rc-countdown")
        next_label = ui.label().classes("text-base rc-player-muted")
        with ui.row().classes("gap-4"):
            play_btn = ui.button().props("color=white text-color=black size=lg")
            skip_btn = ui.button().props("outline color=white size=lg")
        progress_bar = ui.linear_progress(value=0, show_value=False).classes("w-2/3")

    def refresh_texts() -> None:
        title_label.text = t("app_title")
        tagline_label.text = t("app_tagline")
        goal_input.props(f'label="{t("goal_label")}" placeholder="{t("goal_placeholder")}"')
        goal_hint.text = t("goal_hint")
        equipment_select.options = {key: t(key) for key in EQUIPMENT_KEYS}
        equipment_select.props(f'label="{t("equipment")}"')
        equipment_select.update()
        time_label.text = f"{t('time_available')}: {int(time_slider.value)} {t('min')}"
        generate_btn.text = t("generate_button")
        footer_label.text = t("footer_tailored")
        busy_label.text = t("building_workout")

    def toggle_item(section: Section, index: int) -> None:
        controller.checklist.toggle(section, index)
        render_workout()

    def render_checklist(section: Section, items: tuple[str, ...]) -> None:
        for i, item in enumerate(items):
            done = controller.checklist.is_checked(section, i)
            ui.checkbox(
                item,
                value=done,
                on_change=lambda _e, s=section, idx=i: toggle_item(s, idx),
            ).classes("rc-done" if done else "")

    def render_workout() -> None:
        workout_view.clear()
        workout = controller.workout
        if workout is None:
            form_card.set_visibility(True)
            return
        form_card.set_visibility(False)
        with workout_view:
            ui.label(workout.title).classes("text-2xl font-bold")

            with ui.card().classes("w-full rc-card"):
                ui.label(t("warmup")).classes("text-lg font-semibold")
                render_checklist("warmup", workout.warmup)

            ui.label(t("main_workout")).classes("text-lg font-semibold")
            for i, ex in enumerate(workout.exercises):
                done = controller.checklist.is_checked("exercises", i)
                with ui.card().classes("w-full rc-card"):
                    with ui.row().classes("w-full items-center justify-between"):
                        ui.checkbox(
                            ex.name,
                            value=done,
                            on_change=lambda _e, idx=i: toggle_item("exercises", idx),
                        ).classes("font-semibold " + ("rc-done" if done else ""))
                        ui.link(
                            t("how_to_exercise"),
                            _exercise_lookup_url(ex.name),
                            new_tab=True,
                        ).classes("text-xs")
                    bits = [f"{ex.sets} {t('sets')}", f"{ex.reps_description} {t('reps')}"]
                    if ex.rest_time_text:
                        bits.append(f"{t('rest')}: {ex.rest_time_text}")
                    ui.label(" | ".join(bits)).classes("text-sm text-slate-500")
                    if ex.focus_note:
                        ui.label(ex.focus_note).classes("text-sm")

            with ui.card().classes("w-full rc-card"):
                ui.label(t("cooldown")).classes("text-lg font-semibold")
                render_checklist("cooldown", workout.cooldown)

            estimate = controller.estimated_minutes()
            if estimate is not None:
                ui.label(
                    f"{t('estimated_duration')}: ~{estimate} {t('min')} "
                    f"({t('matched_to_target', min=controller.target_minutes)})"
                ).classes("text-sm text-slate-500")
            ui.button(t("start_workout"), on_click=on_start_player).classes("w-full")
            ui.button(t("generate_another"), on_click=on_generate_another).props(
                "outline"
            ).classes("w-full")

    def render_player(state: PlayerState) -> None:
        if state.phase is PlayerPhase.CLOSED:
            return
        current = state.current
        is_work = current.kind is IntervalKind.WORK
        player_card.style(f"background: {WORK_BG if is_work else REST_BG};")
        kind_label.text = t("player_work") if is_work else t("player_rest")
        exercise_label.text = current.exercise_name
        set_label.text = t("set_of", n=current.set_index, total=current.total_sets)
        countdown_label.text = str(state.seconds_left)
        upcoming = state.next_interval
        if upcoming is None:
            next_label.text = ""
        else:
            kind_key = "player_work" if upcoming.kind is IntervalKind.WORK else "player_rest"
            next_label.text = f"{t('player_next')}: {upcoming.exercise_name} ({t(kind_key)})"
        play_btn.text = t("player_pause") if state.is_playing else t("player_play")
        skip_btn.text = t("player_skip")
        mute_btn.props(f"icon={'volume_off' if state.is_muted else 'volume_up'}")
        progress_bar.value = (state.current_index + 1) / len(state.intervals)

    def browser_tone() -> None:
        client.run_javascript(_TONE_JS)

    def browser_voice(text: str) -> None:
        client.run_javascript(_speech_js(text, speech_locale(lang)))

    def on_player_closed() -> None:
        player_dialog.close()

    def on_start_player() -> None:
        try:
            state = controller.open_player(
                tone=browser_tone,
                voice=browser_voice,
                on_change=render_player,
                on_close=on_player_closed,
            )
        except EmptySessionError:
            ui.notify(t("player_empty"), color="negative")
            return
        render_player(state)
        player_dialog.open()

    def on_toggle_play() -> None:
        if controller.player is not None:
            controller.player.toggle_play()

    def on_skip() -> None:
        if controller.player is not None:
            controller.player.skip()

    def on_toggle_mute() -> None:
        if controller.player is not None:
            controller.player.toggle_mute()

    def on_close_player() -> None:
        controller.close_player()
        player_dialog.close()

    async def on_generate() -> None:
        goal = (goal_input.value or "").strip() or t("general_fitness")
        equipment_key = cast(str, equipment_select.value or EQUIPMENT_KEYS[0])
        request = GenerationRequest(
            goal=goal,
            equipment=translate(equipment_key, lang="en"),
            time_minutes=int(time_slider.value),
            language=lang,
        )
        form_card.set_visibility(False)
        busy_row.set_visibility(True)
        try:
            await controller.generate(request)
        except GenerationError as exc:
            form_card.set_visibility(True)
            ui.notify(t(exc.message_key), color="negative")
            return
        finally:
            busy_row.set_visibility(False)
        render_workout()

    def on_generate_another() -> None:
        controller.clear_workout()
        render_workout()

    def on_lang_change() -> None:
        nonlocal lang
        lang = cast(Lang, lang_toggle.value or "en")
        controller.lang = lang
        refresh_texts()
        render_workout()

    time_slider.on_value_change(lambda _: refresh_texts())
    lang_toggle.on_value_change(lambda _: on_lang_change())
    generate_btn.on_click(on_generate)
    play_btn.on_click(on_toggle_play)
    skip_btn.on_click(on_skip)
    mute_btn.on_click(on_toggle_mute)
    close_btn.on_click(on_close_player)

    refresh_texts()
    render_workout()


def run_web_ui(
    *,
    host: str = "127.0.0.1",
    port: int = 8088,
    model: str | None = None,
) -> int:
    generator = WorkoutGenerator(model=model)
    if not generator.is_configured:
        print("[GEN] OPENAI_API_KEY is not set; generation requests will fail")

    @ui.page("/")
    def index() -> None:
        build_page(UIController(generator=generator))

    ui.run(host=host, port=port, reload=False, title="RepCoach")
    return 0
