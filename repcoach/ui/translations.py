"""English / Traditional Chinese display strings."""

from __future__ import annotations

import re
from typing import Literal, Mapping

Lang = Literal["en", "zh"]

DEFAULT_LANG: Lang = "en"

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "app_title": "Workout Generator",
        "app_tagline": "Personalized routines for your goals and schedule",
        "goal_label": "Describe your goal or problem",
        "goal_placeholder": (
            "e.g. I have lower back pain from sitting all day, I want to run my "
            "first 5K, weak knees need to be careful"
        ),
        "goal_hint": "The AI will figure out what to train based on your description.",
        "equipment": "Equipment Available",
        "equipment_bodyweight": "Bodyweight Only",
        "equipment_dumbbells": "Dumbbells / Bands",
        "equipment_full_gym": "Full Gym",
        "time_available": "Time Available",
        "min": "min",
        "time_range": "15 min - 120 min",
        "generate_button": "Generate My Workout",
        "building_workout": "Building your workout...",
        "warmup": "Warmup",
        "main_workout": "Main Workout",
        "cooldown": "Cooldown",
        "sets": "sets",
        "reps": "reps",
        "rest": "Rest",
        "start_workout": "Start Workout",
        "generate_another": "Generate Another Workout",
        "estimated_duration": "Estimated duration",
        "matched_to_target": "matched to your {min} min target",
        "player_work": "Work",
        "player_rest": "Rest",
        "player_next": "Next",
        "player_play": "Play",
        "player_pause": "Pause",
        "player_skip": "Skip",
        "player_mute": "Mute",
        "player_unmute": "Unmute",
        "player_close": "Close",
        "player_get_ready": "Get ready for",
        "player_empty": "This workout has no timed sets to play",
        "set_of": "Set {n} of {total}",
        "error_failed": "Failed to generate workout",
        "error_generic": "Something went wrong",
        "error_missing_config": "OpenAI API key is not configured. Set OPENAI_API_KEY.",
        "error_invalid_input": "Missing required fields: goal, equipment, time",
        "error_rate_limited": "Rate limit exceeded. Try again in a moment.",
        "error_auth_failed": "The OpenAI API key was rejected or lacks API access.",
        "error_malformed_response": "The AI returned a workout we could not read.",
        "footer_tailored": "Your workout will be tailored to your selected preferences",
        "how_to_exercise": "Look up how to do this exercise",
        "general_fitness": "General fitness",
        "language": "Language",
    },
    "zh": {
        "app_title": "我的健身 AI",
        "app_tagline": "依目標與時間為你規劃專屬課表",
        "goal_label": "描述你的目標或狀況",
        "goal_placeholder": "例如：久坐腰痠想改善、想跑第一次 5K、膝蓋不好要避開跳躍",
        "goal_hint": "AI 會依你的描述決定要練哪些部位與類型。",
        "equipment": "可用器材",
        "equipment_bodyweight": "徒手",
        "equipment_dumbbells": "啞鈴 / 彈力帶",
        "equipment_full_gym": "完整健身房",
        "time_available": "可用時間",
        "min": "分鐘",
        "time_range": "15 - 120 分鐘",
        "generate_button": "生成我的課表",
        "building_workout": "正在生成課表...",
        "warmup": "熱身",
        "main_workout": "主課表",
        "cooldown": "收操",
        "sets": "組",
        "reps": "次",
        "rest": "休息",
        "start_workout": "開始訓練",
        "generate_another": "重新生成課表",
        "estimated_duration": "預估時長",
        "matched_to_target": "已對齊你的 {min} 分鐘目標",
        "player_work": "訓練",
        "player_rest": "休息",
        "player_next": "下一項",
        "player_play": "開始",
        "player_pause": "暫停",
        "player_skip": "跳過",
        "player_mute": "靜音",
        "player_unmute": "取消靜音",
        "player_close": "關閉",
        "player_get_ready": "準備：",
        "player_empty": "此課表沒有可計時的組數",
        "set_of": "第 {n} / {total} 組",
        "error_failed": "生成課表失敗",
        "error_generic": "發生錯誤",
        "error_missing_config": "尚未設定 OpenAI API 金鑰，請設定 OPENAI_API_KEY。",
        "error_invalid_input": "缺少必要欄位：目標、器材、時間",
        "error_rate_limited": "請求過於頻繁，請稍後再試。",
        "error_auth_failed": "OpenAI API 金鑰無效或沒有 API 權限。",
        "error_malformed_response": "AI 回傳的課表格式無法解析。",
        "footer_tailored": "課表將依你的選擇客製化",
        "how_to_exercise": "查詢此動作做法",
        "general_fitness": "一般體能",
        "language": "語言",
    },
}

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def translate(
    key: str,
    params: Mapping[str, object] | None = None,
    lang: str = DEFAULT_LANG,
) -> str:
    table = TRANSLATIONS.get(lang, TRANSLATIONS[DEFAULT_LANG])
    text = table.get(key) or TRANSLATIONS[DEFAULT_LANG].get(key) or key
    if not params:
        return text

    def _sub(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in params:
            return str(params[name])
        return match.group(0)

    return _PLACEHOLDER.sub(_sub, text)


def announcement(exercise_name: str, lang: str = DEFAULT_LANG) -> str:
    prefix = translate("player_get_ready", lang=lang)
    if lang == "zh":
        return f"{prefix}{exercise_name}"
    return f"{prefix} {exercise_name}"


def speech_locale(lang: str) -> str:
    return "zh-TW" if lang == "zh" else "en-US"
