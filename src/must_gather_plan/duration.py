"""Duration parsing for timeout and since parameters.

Durations follow the grammar accepted by ``oc adm must-gather``: an optional
sign followed by one or more decimal numbers, each with a unit suffix, such as
``30s``, ``6m20s`` or ``2h10m30s``. The bare string ``0`` is also accepted.
"""

import re
from datetime import timedelta

# Nanoseconds per unit
_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

# Largest duration representable in int64 nanoseconds, about 2562047h
MAX_DURATION_NS = 2**63 - 1

_COMPONENT_PATTERN = re.compile(r"([0-9]+\.?[0-9]*|\.[0-9]+)([^0-9.]+)")


def parse_duration(value: str) -> timedelta:
    """Parse a duration string such as ``2h10m30s``.

    Args:
        value: The duration string.

    Returns:
        The parsed duration.

    Raises:
        ValueError: If the string is not a valid duration.

    """
    text = value
    negative = False
    if text[:1] in ("-", "+"):
        negative = text[0] == "-"
        text = text[1:]

    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration {value!r}")

    total_ns = 0
    pos = 0
    while pos < len(text):
        match = _COMPONENT_PATTERN.match(text, pos)
        if match is None:
            raise ValueError(f"invalid duration {value!r}")
        number, unit = match.groups()
        if unit not in _UNITS:
            raise ValueError(f"unknown unit {unit!r} in duration {value!r}")
        whole, _, fraction = number.partition(".")
        total_ns += int(whole or "0") * _UNITS[unit]
        if fraction:
            total_ns += int(fraction) * _UNITS[unit] // 10 ** len(fraction)
        if total_ns > MAX_DURATION_NS:
            raise ValueError(f"duration {value!r} is out of range")
        pos = match.end()

    duration = timedelta(microseconds=total_ns // 1_000)
    return -duration if negative else duration


def format_seconds(duration: timedelta) -> str:
    """Format a duration as a seconds value for coreutils ``timeout``.

    Args:
        duration: The duration to format.

    Returns:
        The duration in seconds with an ``s`` suffix, e.g. ``600s``.

    """
    seconds = duration.total_seconds()
    if seconds.is_integer():
        return f"{int(seconds)}s"
    return f"{seconds:g}s"
