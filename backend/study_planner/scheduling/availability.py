"""Resolve a calendar day's availability into bookable free slots."""
from __future__ import annotations

from datetime import date
from typing import Iterable, List, Sequence, Tuple

from study_planner.scheduling.models import AvailabilityInterval, FreeSlot, Weekday

MIN_BLOCK_MINUTES = 60

WEEKDAY_DEFAULT_WINDOW = (9 * 60, 17 * 60)
WEEKEND_DEFAULT_WINDOW = (10 * 60, 16 * 60)


def default_availability() -> List[AvailabilityInterval]:
    """Mon-Fri 09:00-17:00 and Sat-Sun 10:00-16:00, all open."""
    intervals: List[AvailabilityInterval] = []
    for weekday in Weekday:
        start, end = WEEKEND_DEFAULT_WINDOW if weekday.is_weekend else WEEKDAY_DEFAULT_WINDOW
        intervals.append(AvailabilityInterval(day=weekday, start_minute=start, end_minute=end))
    return intervals


_DEFAULTS_BY_DAY = {interval.day: interval for interval in default_availability()}


def intervals_for_day(day: date, availability: Iterable[AvailabilityInterval]) -> List[AvailabilityInterval]:
    """Intervals tagged with ``day``'s weekday, or the built-in default when there are none."""
    weekday = Weekday.of(day)
    matched = [interval for interval in availability if interval.day == weekday]
    return matched or [_DEFAULTS_BY_DAY[weekday]]


def free_slots(
    day: date,
    availability: Sequence[AvailabilityInterval],
    max_hours_per_day: float,
) -> List[FreeSlot]:
    """Return the day's free slots in chronological order.

    Busy intervals are cut out of the open ones, pieces shorter than an hour are
    dropped, and the total never exceeds ``max_hours_per_day``.
    """
    cap_minutes = int(round(max_hours_per_day * 60))
    if cap_minutes <= 0:
        return []

    matched = intervals_for_day(day, availability)
    open_ranges = _merge_overlapping(
        sorted(
            ((interval.start_minute, interval.end_minute) for interval in matched if interval.available),
        )
    )
    busy_ranges = sorted(
        ((interval.start_minute, interval.end_minute) for interval in matched if not interval.available),
    )

    slots: List[FreeSlot] = []
    used_minutes = 0
    for open_start, open_end in open_ranges:
        for piece_start, piece_end in _subtract_busy(open_start, open_end, busy_ranges):
            if used_minutes >= cap_minutes:
                return slots
            usable = min(piece_end - piece_start, cap_minutes - used_minutes)
            if usable < MIN_BLOCK_MINUTES:
                continue
            slots.append(FreeSlot(start_minute=piece_start, end_minute=piece_start + usable))
            used_minutes += usable
    return slots


def _subtract_busy(
    start: int,
    end: int,
    busy_ranges: Sequence[Tuple[int, int]],
) -> List[Tuple[int, int]]:
    """Split ``[start, end)`` around every busy range overlapping it (busy sorted by start)."""
    pieces: List[Tuple[int, int]] = []
    cursor = start
    for busy_start, busy_end in busy_ranges:
        if not (busy_start < end and busy_end > start):
            continue
        if cursor < busy_start:
            pieces.append((cursor, min(busy_start, end)))
        cursor = max(cursor, busy_end)
    if cursor < end:
        pieces.append((cursor, end))
    return pieces


def _merge_overlapping(ranges: Sequence[Tuple[int, int]]) -> List[Tuple[int, int]]:
    # Only strictly overlapping open ranges are merged; touching ranges stay separate slots.
    merged: List[Tuple[int, int]] = []
    for start, end in ranges:
        if merged and start < merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged
