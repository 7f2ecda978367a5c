"""Recurring trigger that launches the alert tasks with a fixed stagger."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from groona.config import Settings
from groona.utils import now_in_app_timezone

from .cadence import (
    ScheduleMode,
    describe_cadence,
    next_tick_after,
    seconds_until,
    tick_interval,
)
from .launcher import TaskLauncher
from .tasks import TaskDescriptor, select_tasks

logger = logging.getLogger(__name__)

DEFAULT_STAGGER = timedelta(seconds=2)

TimerFactory = Callable[..., threading.Timer]


@dataclass(frozen=True)
class SchedulerConfig:
    """Scheduler options assembled once at startup."""

    mode: ScheduleMode
    interval: timedelta
    stagger: timedelta
    tasks: tuple[TaskDescriptor, ...]

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        registry: Sequence[TaskDescriptor] | None = None,
    ) -> "SchedulerConfig":
        if registry is None:
            from groona.application.use_cases.alerts import ALERT_TASKS

            registry = ALERT_TASKS

        mode = ScheduleMode(settings.scheduler_mode)
        return cls(
            mode=mode,
            interval=tick_interval(mode),
            stagger=timedelta(seconds=settings.scheduler_stagger_seconds),
            tasks=select_tasks(registry, settings.selected_task_names()),
        )


class AlertScheduler:
    """Fire a tick at every interval boundary and launch each task staggered.

    The task at index ``i`` is launched ``i * stagger`` after the tick. Launches
    are fire-and-forget; the run guard held by the launcher is the only
    protection against a slow task overlapping its next run.
    """

    def __init__(
        self,
        config: SchedulerConfig,
        launcher: TaskLauncher,
        *,
        timer_factory: TimerFactory = threading.Timer,
        clock: Callable[[], datetime] = now_in_app_timezone,
        stop_event: threading.Event | None = None,
    ) -> None:
        self._config = config
        self._launcher = launcher
        self._timer_factory = timer_factory
        self._clock = clock
        self._stop_event = stop_event or threading.Event()
        self._pending: list[threading.Timer] = []
        self._pending_lock = threading.Lock()
        self.ticks = 0

    @property
    def config(self) -> SchedulerConfig:
        return self._config

    def log_banner(self) -> None:
        logger.info("=" * 49)
        logger.info("Starting alert scheduler")
        logger.info("Mode: %s", self._config.mode.value.upper())
        logger.info(
            "Schedule: %s (%d tasks, %.1fs stagger)",
            describe_cadence(self._config.mode),
            len(self._config.tasks),
            self._config.stagger.total_seconds(),
        )
        logger.info("=" * 49)

    def tick(self) -> list[threading.Timer]:
        """Schedule one launch per task, the k-th delayed by ``k * stagger``."""

        self.ticks += 1
        logger.info(
            "Triggering %d scheduled tasks (tick %d)", len(self._config.tasks), self.ticks
        )

        timers: list[threading.Timer] = []
        for index, task in enumerate(self._config.tasks):
            delay = (self._config.stagger * index).total_seconds()
            timer = self._timer_factory(delay, self._launcher.launch, args=(task,))
            timer.daemon = True
            timers.append(timer)

        with self._pending_lock:
            self._pending = [timer for timer in self._pending if timer.is_alive()]
            self._pending.extend(timers)

        started: list[threading.Timer] = []
        for task, timer in zip(self._config.tasks, timers):
            try:
                timer.start()
            except (RuntimeError, OSError) as exc:
                logger.error("Failed to schedule %s: %s", task.name, exc)
                with self._pending_lock:
                    if timer in self._pending:
                        self._pending.remove(timer)
                continue
            started.append(timer)
        return started

    def run_forever(self) -> None:
        """Block until :meth:`stop` is called, ticking at every interval boundary."""

        while not self._stop_event.is_set():
            now = self._clock()
            next_tick = next_tick_after(now, self._config.interval)
            wait_seconds = seconds_until(now, next_tick)
            logger.debug("Next tick at %s", next_tick.isoformat())
            if self._stop_event.wait(wait_seconds):
                break
            self.tick()
        logger.info("Alert scheduler stopped after %d ticks", self.ticks)

    def stop(self) -> None:
        """End the loop and cancel launches that have not fired yet."""

        self._stop_event.set()
        with self._pending_lock:
            pending, self._pending = self._pending, []
        for timer in pending:
            timer.cancel()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()


__all__ = ["AlertScheduler", "DEFAULT_STAGGER", "SchedulerConfig", "TimerFactory"]
