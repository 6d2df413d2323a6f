"""Parse and format short human durations such as ``"2h"``, ``"30m"`` or ``"1d"``."""

from __future__ import annotations

import math
import re

from .config import WORKDAY_HOURS
from .errors import EmptyInput, InvalidFormat

UNIT_SECONDS: dict[str, int] = {
    "h": 3600,
    "m": 60,
    "d": WORKDAY_HOURS * 3600,
}

# Plain decimal only: no whitespace, underscores or hex
NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_duration(text: str | None) -> int:
    """Convert a duration string to a whole number of seconds.

    Parameters
    ----------
    text : str or None
        A decimal number followed by exactly one unit character: ``h`` for
        hours, ``m`` for minutes or ``d`` for working days (``WORKDAY_HOURS``
        hours each).

    Returns
    -------
    int
        Seconds, truncated toward zero.

    Raises
    ------
    EmptyInput
        The string is empty after stripping whitespace.
    InvalidFormat
        Unknown unit, unparsable number, or a negative/non-finite magnitude.

    Examples
    --------
    >>> parse_duration("1.5h")
    5400
    >>> parse_duration("1d")
    28800
    """
    cleaned = (text or "").strip()
    if not cleaned:
        raise EmptyInput()

    unit = cleaned[-1]
    if unit not in UNIT_SECONDS:
        raise InvalidFormat()

    number_part = cleaned[:-1]
    if not NUMBER_RE.fullmatch(number_part):
        raise InvalidFormat(f"Invalid number {number_part!r} in time string")
    try:
        number = float(number_part)
    except ValueError as exc:
        raise InvalidFormat(f"Invalid number {number_part!r} in time string") from exc

    if not math.isfinite(number):
        raise InvalidFormat(f"Invalid number {number_part!r} in time string")
    if number < 0:
        raise InvalidFormat("Time spent cannot be negative")

    return int(number * UNIT_SECONDS[unit])


def format_duration(seconds: int) -> str:
    """Render seconds as ``"1d 2h 30m"`` using working days; sub-minute remainders are dropped."""
    if seconds <= 0:
        return "0m"
    parts: list[str] = []
    remaining = int(seconds)
    for unit in ("d", "h", "m"):
        size = UNIT_SECONDS[unit]
        count, remaining = divmod(remaining, size)
        if count:
            parts.append(f"{count}{unit}")
    return " ".join(parts) or "0m"
