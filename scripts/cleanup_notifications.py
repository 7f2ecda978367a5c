"""Delete every OPEN notification."""

from __future__ import annotations

import logging

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from groona.application.use_cases.notifications import delete_open_notifications
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
        deleted = delete_open_notifications(session)
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Cleanup failed: {exc}") from exc
    else:
        print(f"Successfully deleted {deleted} open notifications.")
    finally:
        session.close()


if __name__ == "__main__":
    main()
