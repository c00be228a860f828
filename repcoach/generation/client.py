"""LLM-backed workout generation via the OpenAI chat API."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Any, Optional

import openai
from openai import OpenAI

from repcoach.generation.errors import (
    AuthFailedError,
    InvalidInputError,
    MalformedResponseError,
    MissingConfigError,
    RateLimitedError,
    UpstreamError,
)
from repcoach.generation.prompts import SYSTEM_PROMPT, build_user_message
from repcoach.workout.model import Workout
from repcoach.workout.parser import WorkoutParseError, parse_workout_text

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.7
MIN_TIME_MINUTES = 15
MAX_TIME_MINUTES = 120

_FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


@dataclass(frozen=True)
class GenerationRequest:
    goal: str
    equipment: str
    time_minutes: int
    language: str = "en"


class WorkoutGenerator:
    """Ask the model for a workout and validate what comes back."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Any = None,
    ) -> None:
        self._api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self.model = model or os.environ.get("REPCOACH_MODEL") or DEFAULT_MODEL
        self._client = client

    @property
    def is_configured(self) -> bool:
        return self._client is not None or bool(self._api_key)

    def generate(self, request: GenerationRequest) -> Workout:
        _validate_request(request)
        client = self._get_client()

        try:
            completion = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": build_user_message(
                            goal=request.goal.strip(),
                            equipment=request.equipment.strip(),
                            time_minutes=request.time_minutes,
                            language=request.language,
                        ),
                    },
                ],
                temperature=DEFAULT_TEMPERATURE,
            )
        except openai.RateLimitError as exc:
            print(f"[GEN] rate limited: {exc}")
            raise RateLimitedError("Rate limit exceeded") from exc
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            print(f"[GEN] credentials rejected: {exc}")
            raise AuthFailedError("OpenAI rejected the API key") from exc
        except openai.APIError as exc:
            print(f"[GEN] request failed: {exc}")
            raise UpstreamError(str(exc) or "Workout generation failed") from exc

        content = _first_message_content(completion)
        if not content:
            raise MalformedResponseError("No response from AI")
        return parse_completion_text(content)

    def _get_client(self) -> Any:
        if self._client is not None:
            return self._client
        if not self._api_key:
            raise MissingConfigError("OPENAI_API_KEY is not configured")
        self._client = OpenAI(api_key=self._api_key)
        return self._client


def parse_completion_text(content: str) -> Workout:
    """Parse model output, which may wrap the JSON in a markdown fence."""
    text = content.strip()
    match = _FENCED_JSON.search(text)
    if match:
        text = match.group(1).strip()
    try:
        return parse_workout_text(text)
    except WorkoutParseError as exc:
        raise MalformedResponseError(f"Invalid workout structure from AI: {exc}") from exc


def _validate_request(request: GenerationRequest) -> None:
    if not request.goal.strip() or not request.equipment.strip():
        raise InvalidInputError("Missing required fields: goal, equipment, time")
    if not MIN_TIME_MINUTES <= request.time_minutes <= MAX_TIME_MINUTES:
        raise InvalidInputError(
            f"time_minutes must be between {MIN_TIME_MINUTES} and {MAX_TIME_MINUTES}"
        )


def _first_message_content(completion: Any) -> str:
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return (content or "").strip()
