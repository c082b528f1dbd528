from __future__ import annotations

from httpprobe.checks.check import Check


class CheckError(RuntimeError):
    """A failed check, carrying the check it came from."""

    def __init__(
        self, message: str, check: Check, cause: BaseException | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.check = check
        self.cause = cause
        self.__cause__ = cause

    @property
    def url(self) -> str:
        return self.check.url

    @property
    def method(self) -> str:
        return self.check.method

    def __str__(self) -> str:
        if self.cause is None:
            return f"{self.message} [{self.check.method} {self.check.url}]"
        return f"{self.message} because {self.cause}"
