"""Typed failures of the workout generation call."""

from __future__ import annotations


class GenerationError(RuntimeError):
    """Base class; ``kind`` is stable and ``message_key`` is translatable."""

    kind = "upstream"
    message_key = "error_failed"


class MissingConfigError(GenerationError):
    kind = "missing_config"
    message_key = "error_missing_config"


class InvalidInputError(GenerationError):
    kind = "invalid_input"
    message_key = "error_invalid_input"


class RateLimitedError(GenerationError):
    kind = "rate_limited"
    message_key = "error_rate_limited"


class AuthFailedError(GenerationError):
    kind = "auth_failed"
    message_key = "error_auth_failed"


class MalformedResponseError(GenerationError):
    kind = "malformed_response"
    message_key = "error_malformed_response"


class UpstreamError(GenerationError):
    kind = "upstream"
    message_key = "error_failed"
