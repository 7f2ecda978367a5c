"""Launch alert tasks on isolated worker threads."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from .tasks import RunGuard, TaskContext, TaskDescriptor

logger = logging.getLogger(__name__)

ThreadFactory = Callable[..., threading.Thread]


class TaskLauncher:
    """Start each task run on its own thread, guarded against overlapping runs."""

    def __init__(
        self,
        context: TaskContext,
        *,
        guard: RunGuard | None = None,
        thread_factory: ThreadFactory = threading.Thread,
    ) -> None:
        self._context = context
        self._guard = guard or RunGuard()
        self._thread_factory = thread_factory

    @property
    def guard(self) -> RunGuard:
        return self._guard

    def launch(self, task: TaskDescriptor) -> bool:
        """Start ``task``; return ``False`` when skipped or the worker failed to start."""

        if not self._guard.try_acquire(task.name):
            logger.warning(
                "Skipping %s: the previous run has not finished yet", task.name
            )
            return False

        try:
            worker = self._thread_factory(
                target=self._run,
                args=(task,),
                name=f"alert-task-{task.name}",
                daemon=True,
            )
            worker.start()
        except (RuntimeError, OSError) as exc:
            self._guard.release(task.name)
            logger.error("Failed to start %s: %s", task.name, exc)
            return False
        return True

    def _run(self, task: TaskDescriptor) -> None:
        logger.info("Starting %s...", task.name)
        started = time.monotonic()
        try:
            created = task.handler(self._context)
        except Exception:
            logger.exception(
                "%s failed after %.2fs", task.name, time.monotonic() - started
            )
        else:
            logger.info(
                "%s finished in %.2fs (%s notifications)",
                task.name,
                time.monotonic() - started,
                created,
            )
        finally:
            self._guard.release(task.name)


__all__ = ["TaskLauncher", "ThreadFactory"]
