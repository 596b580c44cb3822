"""Human-readable durations for the `--older-than` filter.

Go-style durations (`90m`, `1h30m`) extended with days, weeks and years so
users can write `60d`, `2w` or `1y`. Years are 365 days; there is no calendar
arithmetic.
"""

from __future__ import annotations

import re
from datetime import timedelta

from core.domain.errors import InputError

ONE_DAY = timedelta(days=1)

_UNIT_SECONDS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
    "d": 86400.0,
    "w": 7 * 86400.0,
    "y": 365 * 86400.0,
}

# Longer unit names first so `ms` is not read as `m` followed by garbage.
_COMPONENT = re.compile(
    r"(?P<number>\d+(?:\.\d*)?|\.\d+)(?P<unit>"
    + "|".join(sorted((re.escape(u) for u in _UNIT_SECONDS), key=len, reverse=True))
    + r")"
)

# Any of these must appear in an --older-than value; `12h` alone is a typo.
DAY_MARKERS = "dwy"

# Durations travel as Go int64 nanoseconds; anything longer is unparseable server-side.
MAX_SECONDS = (2**63 - 1) / 1e9


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as `60d`, `1w2d`, `1.5d` or `-3h`.

    Raises `ValueError` for anything that is not a sequence of
    number+unit components (a bare `0` is accepted) or that exceeds
    what a Go duration can hold (about 292 years).
    """

    value = text
    sign = 1
    if value[:1] in ("+", "-"):
        sign = -1 if value[0] == "-" else 1
        value = value[1:]

    if value == "0":
        return timedelta(0)
    if not value:
        raise ValueError(f"invalid duration {text!r}")

    seconds = 0.0
    pos = 0
    while pos < len(value):
        match = _COMPONENT.match(value, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        seconds += float(match.group("number")) * _UNIT_SECONDS[match.group("unit")]
        pos = match.end()
    if seconds > MAX_SECONDS:
        raise ValueError(f"duration {text!r} out of range")
    try:
        return timedelta(seconds=sign * seconds)
    except OverflowError as exc:
        raise ValueError(f"duration {text!r} out of range") from exc


def parse_older_than(text: str) -> int:
    """Turn an `--older-than` value into a whole number of days.

    The result is always >= 1; "no filter" is expressed by not calling this.
    """

    try:
        duration = parse_duration(text)
    except ValueError as exc:
        raise InputError(f"Unable to parse older-than=`{text}`.", cause=exc) from exc
    if not any(marker in text for marker in DAY_MARKERS):
        raise InputError(
            f"Unable to parse older-than=`{text}`.",
            cause="expected a unit of d (days), w (weeks) or y (years)",
        )

    if duration == timedelta(0):
        raise InputError("older-than cannot be set to zero")
    if duration < timedelta(0):
        raise InputError(f"older-than cannot be negative, got `{text}`")

    days = int(duration / ONE_DAY)
    if days == 0:
        raise InputError(f"older-than must be at least one day, got `{text}`")
    return days
