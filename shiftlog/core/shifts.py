"""
Shift schedule and clock-time arithmetic.

Times are local ``HH:MM`` strings exactly as entered on the shop floor;
there is no timezone handling and no validation of the input format.
"""

from __future__ import annotations

from typing import Any, Callable, NamedTuple


class ShiftWindow(NamedTuple):
    start_hour: int
    end_hour: int


SHIFT_WINDOWS: dict[str, ShiftWindow] = {
    "Morning": ShiftWindow(6, 14),
    "Afternoon": ShiftWindow(14, 22),
    "Night": ShiftWindow(22, 6),
}

# Minutes past the shift start hour before a check-in counts as late.
LATE_GRACE_MINUTES = 30


def _split_clock(value: str) -> tuple[int, int]:
    hour, minute = value.split(":")[:2]
    return int(hour), int(minute)


def working_hours(check_in: str, check_out: str) -> float:
    """Elapsed hours between two ``HH:MM`` clock readings.

    A negative hour difference is treated as one overnight crossing
    (``+24``); longer spans are not representable.

    >>> working_hours("22:00", "06:00")
    8.0
    >>> working_hours("06:15", "14:00")
    7.75
    """
    in_hour, in_min = _split_clock(check_in)
    out_hour, out_min = _split_clock(check_out)

    hours = out_hour - in_hour
    minutes = out_min - in_min
    if hours < 0:
        hours += 24
    return hours + minutes / 60


def is_late_arrival(shift: str, check_in: str) -> bool:
    window = SHIFT_WINDOWS.get(shift, SHIFT_WINDOWS["Night"])
    hour, minute = _split_clock(check_in)
    if hour > window.start_hour:
        return True
    return hour == window.start_hour and minute > LATE_GRACE_MINUTES


def is_early_departure(shift: str, check_out: str) -> bool:
    window = SHIFT_WINDOWS.get(shift, SHIFT_WINDOWS["Night"])
    hour, _ = _split_clock(check_out)
    return hour < window.end_hour - 1


def _flagged(check: Callable[[str, str], bool], shift: str, value: str) -> bool:
    try:
        return check(shift, value)
    except ValueError:
        return False


def find_irregularities(records: list[Any]) -> list[dict[str, str]]:
    """Late arrivals and early departures among Present records.

    *records* are objects exposing ``employee_name``, ``employee_code``,
    ``shift``, ``status``, ``check_in`` and ``check_out``. A stored time
    that is not ``HH:MM`` is never flagged.
    """
    issues: list[dict[str, str]] = []
    for rec in records:
        if rec.status != "Present" or not rec.check_in:
            continue
        if _flagged(is_late_arrival, rec.shift, rec.check_in):
            issues.append(
                {
                    "employee_name": rec.employee_name,
                    "employee_code": rec.employee_code,
                    "issue": "Late Arrival",
                    "time": rec.check_in,
                    "shift": rec.shift,
                }
            )
        if rec.check_out and _flagged(is_early_departure, rec.shift, rec.check_out):
            issues.append(
                {
                    "employee_name": rec.employee_name,
                    "employee_code": rec.employee_code,
                    "issue": "Early Departure",
                    "time": rec.check_out,
                    "shift": rec.shift,
                }
            )
    return issues
