"""One-shot delayed callbacks for transient UI flags (copied marker, typing)."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_s: float, callback: Callable[[], None]) -> Handle: ...


class ThreadScheduler:
    """Runs each callback on its own daemon `threading.Timer`.

    Every call gets an independent timer; nothing here cancels an earlier
    timer when a later one is scheduled.
    """

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> threading.Timer:
        def run():
            try:
                callback()
            except Exception:
                logger.exception("Scheduled callback failed")

        t = threading.Timer(delay_s, run)
        t.daemon = True
        t.start()
        return t
