from __future__ import annotations

import re

_AGE_PATTERN = re.compile(
    r"([0-9]+)\s+(minutes?|hours?|days?)\s+ago",
    re.IGNORECASE,
)

UNIT_SECONDS = {
    "minute": 60,
    "hour": 3_600,
    "day": 86_400,
}


def parse_age_seconds(age_text: str | None) -> int | None:
    """Convert a relative age label such as ``"3 hours ago"`` into seconds.

    Returns ``None`` for anything outside ``<count> <minute|hour|day>[s] ago``.
    """
    if not age_text:
        return None

    match = _AGE_PATTERN.fullmatch(age_text.strip())
    if match is None:
        return None

    count = int(match.group(1))
    unit = match.group(2).casefold().removesuffix("s")
    return count * UNIT_SECONDS[unit]
