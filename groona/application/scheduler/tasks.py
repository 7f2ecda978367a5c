"""Task descriptors, execution context and the per-task run guard."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

EmailSender = Callable[[str, str, str], bool]


@dataclass(frozen=True)
class TaskContext:
    """Inputs handed to every alert task.

    ``session_factory`` opens a new session per run, ``clock`` returns the
    current aware datetime and ``send_email(subject, html, recipient)``
    delivers transactional email.
    """

    session_factory: Callable[[], Session]
    clock: Callable[[], datetime]
    send_email: EmailSender
    frontend_url: str = "http://localhost:3000"


TaskHandler = Callable[[TaskContext], Any]


@dataclass(frozen=True)
class TaskDescriptor:
    """Named alert-generation unit invoked once per tick."""

    name: str
    handler: TaskHandler
    description: str = ""


def select_tasks(
    registry: Sequence[TaskDescriptor], names: Iterable[str] | None = None
) -> tuple[TaskDescriptor, ...]:
    """Return the registry entries listed in ``names`` keeping registry order.

    An empty selection keeps every task. Unknown names raise ``ValueError``.
    """

    wanted = [name for name in (names or []) if name]
    if not wanted:
        return tuple(registry)

    known = {task.name for task in registry}
    unknown = [name for name in wanted if name not in known]
    if unknown:
        raise ValueError(f"Unknown alert tasks: {', '.join(unknown)}")
    selected = set(wanted)
    return tuple(task for task in registry if task.name in selected)


class RunGuard:
    """Track which tasks are running so a slow run is never overlapped."""

    def __init__(self) -> None:
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, name: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(name)
            if lock is None:
                lock = self._locks[name] = threading.Lock()
            return lock

    def try_acquire(self, name: str) -> bool:
        """Move ``name`` from idle to running; ``False`` when it is already running."""

        return self._lock_for(name).acquire(blocking=False)

    def release(self, name: str) -> None:
        lock = self._lock_for(name)
        if lock.locked():
            lock.release()

    def is_running(self, name: str) -> bool:
        return self._lock_for(name).locked()


__all__ = [
    "EmailSender",
    "RunGuard",
    "TaskContext",
    "TaskDescriptor",
    "TaskHandler",
    "select_tasks",
]
