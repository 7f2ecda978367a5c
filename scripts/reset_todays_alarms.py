"""Delete today's timesheet alarms so the next tick raises them again."""

from __future__ import annotations

import logging

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from groona.application.use_cases.notifications import reset_todays_alarms
from groona.config import get_settings
from groona.infrastructure.database import get_session_factory


def main() -> None:
    try:
        settings = get_settings()
    except ValidationError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    session = get_session_factory()()
    try:
        counts = reset_todays_alarms(session)
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Reset failed: {exc}") from exc
    else:
        for alarm_type, deleted in counts.items():
            print(f"Deleted {deleted} {alarm_type} notifications.")
        print("Reset complete. The next scheduler tick will regenerate today's alarms.")
    finally:
        session.close()


if __name__ == "__main__":
    main()
