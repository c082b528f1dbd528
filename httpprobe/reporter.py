from __future__ import annotations

import logging
import threading

from httpprobe.loop import CheckLoop

logger = logging.getLogger(__name__)


class ErrorReporter:
    def __init__(self, loop: CheckLoop) -> None:
        self.loop = loop
        self.reported = 0

    def run(self) -> None:
        # Ends when the loop closes its error queue.
        for err in self.loop.iter_errors():
            logger.error("%s", err)
            self.reported += 1

    def start(self) -> threading.Thread:
        t = threading.Thread(target=self.run, name="error-reporter", daemon=True)
        t.start()
        return t
