from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Iterator

import requests
from urllib3.exceptions import ProtocolError, ReadTimeoutError

from httpprobe.checks.check import Check
from httpprobe.checks.errors import CheckError

logger = logging.getLogger(__name__)

# How often blocked waits look at the stop event.
POLL_INTERVAL_S = 0.1

# Bytes per body read; each read returns as soon as any data is available.
CHUNK_SIZE = 8192

_CLOSED = None


def _read_body(res: requests.Response, deadline: float, timeout: float) -> None:
    """
    Drain the response body, failing with requests.Timeout once ``deadline``
    passes. A single read still waits at most the per-read socket timeout.
    """
    while True:
        if time.monotonic() > deadline:
            raise requests.Timeout(f"request exceeded {timeout}s")
        try:
            chunk = res.raw.read1(CHUNK_SIZE)
        except ReadTimeoutError as e:
            raise requests.ReadTimeout(e) from e
        except ProtocolError as e:
            raise requests.ConnectionError(e) from e
        if not chunk:
            return


class CheckLoop:
    """
    Runs checks one at a time and reports failures on ``errors``.

    Checks arrive on ``checks`` (capacity 1, so a sender blocks while a
    check is in flight). The loop exits once the stop event is set; a check
    that is already executing is allowed to finish or time out.
    """

    def __init__(
        self,
        timeout: float,
        session: requests.Session | None = None,
        poll_interval: float = POLL_INTERVAL_S,
    ) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()
        self.poll_interval = poll_interval
        self.checks: queue.Queue[Check] = queue.Queue(maxsize=1)
        self.errors: queue.Queue[CheckError | None] = queue.Queue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def process(self, check: Check) -> CheckError | None:
        try:
            req = check.make_request(self.session)
        except Exception as e:
            return CheckError("cannot make request", check, cause=e)

        deadline = time.monotonic() + self.timeout
        try:
            res = self.session.send(req, timeout=self.timeout, stream=True)
        except Exception as e:
            return CheckError("cannot execute request", check, cause=e)

        with res:
            try:
                _read_body(res, deadline, self.timeout)
            except Exception as e:
                return CheckError("cannot execute request", check, cause=e)

            try:
                msg, ok = check.validate(res)
            except Exception as e:
                return CheckError("cannot validate response", check, cause=e)
        if not ok:
            return CheckError(msg, check)
        return None

    def submit(self, check: Check, stop: threading.Event) -> bool:
        """Block until the loop takes ``check``. False once stopped or closed."""
        while not stop.is_set() and not self.closed:
            try:
                self.checks.put(check, timeout=self.poll_interval)
                return True
            except queue.Full:
                continue
        return False

    def run(self, stop: threading.Event) -> None:
        logger.info("Check loop started (timeout=%ss)", self.timeout)
        try:
            while not stop.is_set():
                try:
                    check = self.checks.get(timeout=self.poll_interval)
                except queue.Empty:
                    continue

                try:
                    err = self.process(check)
                except Exception as e:
                    logger.exception(
                        "Unexpected error running check %s %s", check.method, check.url
                    )
                    err = CheckError("cannot run check", check, cause=e)
                if err is not None:
                    self.errors.put(err)
        finally:
            self._close()
            logger.info("Check loop stopped")

    def start(self, stop: threading.Event) -> threading.Thread:
        t = threading.Thread(
            target=self.run, args=(stop,), name="check-loop", daemon=True
        )
        t.start()
        return t

    def iter_errors(self) -> Iterator[CheckError]:
        while True:
            err = self.errors.get()
            if err is _CLOSED:
                return
            yield err

    def _close(self) -> None:
        self._closed.set()
        # Unsent checks are dropped.
        while True:
            try:
                self.checks.get_nowait()
            except queue.Empty:
                break
        self.errors.put(_CLOSED)
