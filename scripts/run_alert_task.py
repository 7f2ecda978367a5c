"""Run a single alert task once, synchronously, for debugging."""

from __future__ import annotations

import argparse
import logging

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from groona.application.scheduler.runtime import build_task_context
from groona.application.use_cases.alerts import ALERT_TASKS
from groona.config import get_settings
from groona.infrastructure.database import initialize_database


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run one Groona alert task once.")
    parser.add_argument(
        "task",
        choices=[task.name for task in ALERT_TASKS],
        help="Name of the alert task to run",
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

    task = next(task for task in ALERT_TASKS if task.name == args.task)
    try:
        initialize_database()
        created = task.handler(build_task_context(settings))
    except SQLAlchemyError as exc:
        raise SystemExit(f"Database error while running {task.name}: {exc}") from exc

    print(f"{task.name} created {created} notifications.")


if __name__ == "__main__":
    main()
