from __future__ import annotations

import logging
import threading
from typing import Sequence

from httpprobe.checks.check import Check
from httpprobe.loop import CheckLoop

logger = logging.getLogger(__name__)


class Scheduler:
    """Pushes the whole check set into the loop every ``interval`` seconds."""

    def __init__(
        self, checks: Sequence[Check], loop: CheckLoop, interval: float = 30
    ) -> None:
        self.checks = tuple(checks)
        self.loop = loop
        self.interval = interval

    def fire(self, stop: threading.Event) -> int:
        sent = 0
        for c in self.checks:
            if not self.loop.submit(c, stop):
                break
            sent += 1
        return sent

    def run(self, stop: threading.Event) -> None:
        logger.info(
            "Scheduler started: %d checks every %ss", len(self.checks), self.interval
        )
        while not stop.wait(self.interval):
            sent = self.fire(stop)
            logger.debug("Scheduled %d/%d checks", sent, len(self.checks))
        logger.info("Scheduler stopped")

    def start(self, stop: threading.Event) -> threading.Thread:
        t = threading.Thread(
            target=self.run, args=(stop,), name="scheduler", daemon=True
        )
        t.start()
        return t
