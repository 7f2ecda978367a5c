"""Tick cadences supported by the alert scheduler."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo
from enum import Enum

from groona.utils import ensure_app_timezone, start_of_day


class ScheduleMode(str, Enum):
    """Fixed cadence selected at startup."""

    TESTING = "testing"
    PRODUCTION = "production"


_TICK_INTERVALS: dict[ScheduleMode, timedelta] = {
    ScheduleMode.TESTING: timedelta(minutes=1),
    ScheduleMode.PRODUCTION: timedelta(hours=8),
}

_DESCRIPTIONS: dict[ScheduleMode, str] = {
    ScheduleMode.TESTING: "Every 1 Minute",
    ScheduleMode.PRODUCTION: "Every 8 Hours",
}


def tick_interval(mode: ScheduleMode | str) -> timedelta:
    """Return the time between two ticks for ``mode``."""

    return _TICK_INTERVALS[ScheduleMode(mode)]


def describe_cadence(mode: ScheduleMode | str) -> str:
    return _DESCRIPTIONS[ScheduleMode(mode)]


def _localize(wall: datetime, zone: tzinfo, after: datetime) -> datetime | None:
    """Return the earliest real instant showing ``wall`` that is later than ``after``.

    A wall time repeated by a DST fall-back has two instants; one skipped by a
    spring-forward gap resolves to the instant just after the gap.
    """

    instants = {
        wall.replace(tzinfo=zone, fold=fold).astimezone(timezone.utc) for fold in (0, 1)
    }
    later = [instant for instant in instants if instant > after]
    if not later:
        return None
    return min(later).astimezone(zone)


def next_tick_after(moment: datetime, interval: timedelta) -> datetime:
    """Return the first interval boundary strictly after ``moment``.

    Boundaries are counted in wall-clock time from local midnight, so an 8 hour
    interval fires at 00:00, 08:00 and 16:00 and a one minute interval at every
    minute start, whatever DST transitions happen that day.
    """

    if interval <= timedelta(0):
        raise ValueError("Tick interval must be positive")

    moment = ensure_app_timezone(moment)
    zone = moment.tzinfo
    instant = moment.astimezone(timezone.utc)
    midnight = start_of_day(moment).replace(tzinfo=None)
    steps = (moment.replace(tzinfo=None) - midnight) // interval + 1
    while True:
        boundary = _localize(midnight + interval * steps, zone, instant)
        if boundary is not None:
            return boundary
        steps += 1


def seconds_until(moment: datetime, target: datetime) -> float:
    """Elapsed real seconds from ``moment`` to ``target``, never negative."""

    elapsed = target.astimezone(timezone.utc) - moment.astimezone(timezone.utc)
    return max(elapsed.total_seconds(), 0.0)


__all__ = [
    "ScheduleMode",
    "describe_cadence",
    "next_tick_after",
    "seconds_until",
    "tick_interval",
]
