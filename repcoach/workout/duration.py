"""Free-text rest duration parsing ("30 seconds", "1 minute", "30秒")."""

from __future__ import annotations

import re

DEFAULT_REST_SECONDS = 30

_NON_DIGITS = re.compile(r"\D")
# Latin "min" plus the CJK minute character used by 分鐘 / 分钟.
_MINUTE_TOKENS = ("min", "分")


def parse_duration(text: object) -> int:
    """Return the number of seconds described by ``text``.

    All digits in the text are joined into one integer, so "1-2 min" reads
    as 12 minutes. Anything without a digit falls back to
    ``DEFAULT_REST_SECONDS``. Never raises.
    """
    if not isinstance(text, str) or not text:
        return DEFAULT_REST_SECONDS

    normalized = text.strip().lower()
    digits = _NON_DIGITS.sub("", normalized)
    if not digits:
        return DEFAULT_REST_SECONDS
    value = int(digits)
    if value < 0:
        return DEFAULT_REST_SECONDS

    if any(token in normalized for token in _MINUTE_TOKENS):
        return value * 60
    return value
