"""Time helpers anchored to the workspace timezone.

Alert rules reason about calendar days ("yesterday", "this week", "since
midnight") in the timezone configured with ``APP_TIMEZONE``. The store keeps
naive datetimes expressed in that same timezone.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from groona.config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE: Final[str] = "Asia/Kolkata"
_UTC_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"(?:UTC|GMT)\s*(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?",
    re.IGNORECASE,
)


def resolve_timezone(name: str) -> tzinfo:
    """Turn an IANA name or a ``UTC+05:30`` style offset into a ``tzinfo``.

    Unknown names fall back to :data:`DEFAULT_TIMEZONE` with a warning.
    """

    offset = _UTC_OFFSET.fullmatch(name.strip())
    if offset is not None:
        delta = timedelta(
            hours=int(offset["hours"]), minutes=int(offset["minutes"] or 0)
        )
        return timezone(-delta if offset["sign"] == "-" else delta)

    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, using %s", name, DEFAULT_TIMEZONE)
        return ZoneInfo(DEFAULT_TIMEZONE)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    configured = (get_settings().app_timezone or "").strip()
    return resolve_timezone(configured or DEFAULT_TIMEZONE)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Express ``value`` in the app timezone; naive values are assumed local."""

    if value is None:
        return None
    app_tz = get_app_timezone()
    return value.replace(tzinfo=app_tz) if value.tzinfo is None else value.astimezone(app_tz)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return the local wall-clock time of ``value`` as stored in the database."""

    local = ensure_app_timezone(value)
    return None if local is None else local.replace(tzinfo=None)


def start_of_day(value: datetime) -> datetime:
    """Return local midnight of ``value``'s calendar day (timezone aware)."""

    return ensure_app_timezone(value).replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(value: datetime) -> datetime:
    """Return Monday 00:00 of the week containing ``value``."""

    midnight = start_of_day(value)
    return midnight - timedelta(days=midnight.weekday())


__all__ = [
    "DEFAULT_TIMEZONE",
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "now_in_app_timezone",
    "resolve_timezone",
    "start_of_day",
    "start_of_week",
]
