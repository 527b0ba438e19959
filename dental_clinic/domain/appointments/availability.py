"""
Doctor availability

Pure helpers: a doctor's working window for a date is cut into a fixed
slot grid, and the free slots are the grid minus the booked times.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Tuple
import re

from dental_clinic.domain.users.models import WEEKDAYS

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def is_valid_time(value: str) -> bool:
    return bool(value) and bool(TIME_PATTERN.match(value))


def weekday_name(target_date: date) -> str:
    return WEEKDAYS[target_date.weekday()]


def resolve_working_window(
    target_date: date,
    working_days: Optional[List[str]],
    working_hours: Optional[dict],
    daily_schedules: Optional[dict],
    default_start: str,
    default_end: str,
) -> Optional[Tuple[str, str]]:
    """Return (start, end) for the date, or None when the doctor is off that day"""
    day = weekday_name(target_date)

    if working_days and day not in [d.lower() for d in working_days]:
        return None

    day_schedule = (daily_schedules or {}).get(day)
    if day_schedule and day_schedule.get("is_active", True):
        return day_schedule["start"], day_schedule["end"]

    if working_hours and working_hours.get("start") and working_hours.get("end"):
        return working_hours["start"], working_hours["end"]

    return default_start, default_end


def generate_slot_grid(start: str, end: str, slot_minutes: int = 30) -> List[str]:
    """Every slot_minutes from start while the slot begins before end"""
    current = datetime.strptime(start, "%H:%M")
    finish = datetime.strptime(end, "%H:%M")
    step = timedelta(minutes=slot_minutes)

    slots = []
    while current < finish:
        slots.append(current.strftime("%H:%M"))
        current += step
    return slots


def subtract_booked(grid: List[str], booked: Iterable[str]) -> List[str]:
    """Grid order is preserved"""
    taken = set(booked)
    return [slot for slot in grid if slot not in taken]
