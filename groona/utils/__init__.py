"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    now_in_app_timezone,
    start_of_day,
    start_of_week,
)
from .otp import generate_otp

__all__ = [
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "generate_otp",
    "get_app_timezone",
    "now_in_app_timezone",
    "start_of_day",
    "start_of_week",
]
