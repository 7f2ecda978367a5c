"""Run the alert scheduler until interrupted."""

from __future__ import annotations

import argparse
import logging
import signal

from pydantic import ValidationError

from groona.application.scheduler.runtime import build_scheduler
from groona.config import get_settings
from groona.infrastructure.database import dispose_engine, initialize_database

logger = logging.getLogger("groona.scheduler")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Launch the Groona alert tasks on a fixed cadence.",
    )
    parser.add_argument(
        "--run-now",
        action="store_true",
        help="Trigger one tick immediately before waiting for the next boundary.",
    )
    return parser.parse_args()


def main() -> None:
    """Start the scheduler and block until SIGINT or SIGTERM."""

    args = parse_args()

    try:
        settings = get_settings()
    except ValidationError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        scheduler = build_scheduler(settings)
    except ValueError as exc:
        raise SystemExit(f"Invalid scheduler configuration: {exc}") from exc

    initialize_database()

    def _handle_signal(signum: int, _frame: object) -> None:
        logger.info("Received %s, shutting down", signal.Signals(signum).name)
        scheduler.stop()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    scheduler.log_banner()
    if args.run_now:
        scheduler.tick()
    try:
        scheduler.run_forever()
    finally:
        dispose_engine()


if __name__ == "__main__":
    main()
