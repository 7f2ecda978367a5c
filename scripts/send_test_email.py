"""Send a test or OTP email through SendGrid."""

from __future__ import annotations

import argparse
import logging

from pydantic import ValidationError

from groona.config import get_settings
from groona.infrastructure.email import send_otp_email, send_test_email
from groona.utils import generate_otp


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check that transactional email works.")
    parser.add_argument("recipient", help="Address that receives the message")
    parser.add_argument(
        "--otp",
        action="store_true",
        help="Send the verification code template instead of the plain test message.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    try:
        settings = get_settings()
    except ValidationError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not settings.sendgrid_api_key or not settings.sendgrid_sender:
        raise SystemExit("SENDGRID_API_KEY and SENDGRID_SENDER must be configured.")

    if args.otp:
        otp = generate_otp()
        if not send_otp_email(args.recipient, otp):
            raise SystemExit("OTP email was not delivered, see the log for details.")
        print(f"OTP email sent to {args.recipient} (code {otp}).")
        return

    result = send_test_email(args.recipient)
    if not result.sent:
        raise SystemExit("Test email was not delivered, see the log for details.")
    print(f"Test email sent to {args.recipient}. Message id: {result.message_id or '-'}")


if __name__ == "__main__":
    main()
