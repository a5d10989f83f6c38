"""
Shared helpers for FleetSim records: clock-time parsing and rounding.
"""
import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

# H:MM or HH:MM, 00:00 - 23:59
TIME_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"

_TIME_RE = re.compile(TIME_PATTERN)

Number = Union[int, float, Decimal]


def is_valid_time_str(value: str) -> bool:
    """Check that a string is a clock time in HH:MM format."""
    return isinstance(value, str) and _TIME_RE.match(value) is not None


def time_str_to_minutes(time_str: str) -> int:
    """Convert 'HH:MM' string to minutes from midnight."""
    if not is_valid_time_str(time_str):
        raise ValueError(f"Time must be in HH:MM format, got {time_str!r}")
    hours, minutes = time_str.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time_str(minutes: int) -> str:
    """Convert minutes to an 'HH:MM' string (hours are not wrapped at 24)."""
    hrs = minutes // 60
    mins = minutes % 60
    return f"{hrs:02d}:{mins:02d}"


def round_half_up(value: Number) -> int:
    """Round to the nearest integer, halves towards +infinity."""
    half = Decimal("0.5") if isinstance(value, Decimal) else 0.5
    return int(math.floor(value + half))


def round_money(value: Number) -> float:
    """Round a currency amount to 2 decimal places (half up)."""
    quantized = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return float(quantized)


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without picking up binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
