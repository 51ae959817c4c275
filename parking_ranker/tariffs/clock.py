from __future__ import annotations

import re
from datetime import datetime, time
from typing import Callable
from zoneinfo import ZoneInfo

ETA_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")

_TWELVE_HOUR_RE = re.compile(r"^\s*(\d{1,2})[.:](\d{2})\s*([AaPp][Mm])\s*$")

SATURDAY = 5
SUNDAY = 6

# Returns the current weekday, Monday == 0
Clock = Callable[[], int]


def is_valid_eta(eta: object) -> bool:
    return isinstance(eta, str) and ETA_PATTERN.fullmatch(eta) is not None


def parse_eta(eta: str) -> time:
    """Parse a 24-hour ``HH:MM`` arrival time (leading zero optional)."""
    if not is_valid_eta(eta):
        raise ValueError(f"ETA must be 24-hour HH:MM, got {eta!r}")
    hours, minutes = eta.split(":")
    return time(int(hours), int(minutes))


def parse_twelve_hour(value: str) -> time:
    """Parse rate-table times such as ``"07.00 AM"`` or ``"12.00 PM"``."""
    match = _TWELVE_HOUR_RE.match(str(value))
    if not match:
        raise ValueError(f"Unrecognised 12-hour time: {value!r}")
    hours, minutes, period = int(match.group(1)), int(match.group(2)), match.group(3).lower()
    if not (1 <= hours <= 12 and minutes <= 59):
        raise ValueError(f"Unrecognised 12-hour time: {value!r}")
    if period == "pm" and hours != 12:
        hours += 12
    elif period == "am" and hours == 12:
        hours = 0
    return time(hours, minutes)


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def current_weekday(timezone: str) -> int:
    return datetime.now(ZoneInfo(timezone)).weekday()


def make_clock(timezone: str) -> Clock:
    return lambda: current_weekday(timezone)


def fixed_clock(weekday: int) -> Clock:
    if not 0 <= weekday <= 6:
        raise ValueError(f"weekday must be in 0..6, got {weekday}")
    return lambda: weekday
