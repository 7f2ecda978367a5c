"""One-time verification code helpers."""

from __future__ import annotations

import secrets
import string

OTP_LENGTH = 6
OTP_TTL_MINUTES = 10


def generate_otp(length: int = OTP_LENGTH) -> str:
    """Return a random numeric code of ``length`` digits."""

    if length <= 0:
        raise ValueError("OTP length must be positive")
    return "".join(secrets.choice(string.digits) for _ in range(length))
