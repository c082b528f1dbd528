from __future__ import annotations

import logging
import signal
import threading

import requests

from httpprobe.config import settings
from httpprobe.loop import CheckLoop
from httpprobe.registry import build_checks, load_registry
from httpprobe.reporter import ErrorReporter
from httpprobe.scheduler import Scheduler

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = settings.HTTPPROBE_LOG_LEVEL) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def install_signal_handlers(stop: threading.Event) -> None:
    def handle(signum, _frame) -> None:
        logger.info("Received %s, cancelling...", signal.Signals(signum).name)
        stop.set()

    signal.signal(signal.SIGINT, handle)
    signal.signal(signal.SIGTERM, handle)


def main() -> int:
    configure_logging()

    checks = build_checks(load_registry(settings.HTTPPROBE_CHECKS_PATH))
    stop = threading.Event()
    install_signal_handlers(stop)

    with requests.Session() as session:
        loop = CheckLoop(timeout=settings.HTTPPROBE_REQUEST_TIMEOUT, session=session)
        scheduler = Scheduler(checks, loop, interval=settings.HTTPPROBE_CHECK_INTERVAL)
        reporter = ErrorReporter(loop)

        threads = [loop.start(stop), scheduler.start(stop), reporter.start()]

        # Event.wait with a timeout keeps the main thread responsive to signals.
        while not stop.wait(1.0):
            pass

        for t in threads:
            t.join(timeout=settings.HTTPPROBE_REQUEST_TIMEOUT + 1)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
