"""Look up the delivery status of a sent email."""

from __future__ import annotations

import argparse
import logging

from pydantic import ValidationError

from groona.config import get_settings
from groona.infrastructure.email import get_email_status

STATUS_HINTS = {
    "delivered": "The message reached the recipient's mail server.",
    "processed": "SendGrid accepted the message and is still delivering it.",
    "not_delivered": "Delivery failed. Check the recipient address and bounce logs.",
    "bounced": "The recipient's server rejected the message.",
    "blocked": "The recipient's server blocked the message, check the sender reputation.",
    "deferred": "Delivery is being retried by SendGrid.",
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show the delivery status of an email.")
    parser.add_argument("message_id", help="Message id returned when the email was sent")
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

    if not settings.sendgrid_api_key:
        raise SystemExit("SENDGRID_API_KEY must be configured.")

    status = get_email_status(args.message_id)
    if status is None:
        raise SystemExit(f"Could not retrieve the status of {args.message_id}.")

    print(f"Message: {status.message_id}")
    print(f"Status:  {status.status}")
    print(f"To:      {status.to_email or '-'}")
    print(f"From:    {status.from_email or '-'}")
    print(f"Subject: {status.subject or '-'}")
    print(f"Last event: {status.last_event_time or '-'}")
    print(STATUS_HINTS.get(status.status.lower(), "No further information for this status."))


if __name__ == "__main__":
    main()
