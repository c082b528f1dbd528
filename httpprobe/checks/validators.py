from __future__ import annotations

from typing import Callable, Optional

import requests

Validator = Callable[[Optional[requests.Response]], tuple[str, bool]]

MISSING_RESPONSE = "missing response"


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 400


def generally_succeeds(r: requests.Response | None) -> tuple[str, bool]:
    if r is None:
        return MISSING_RESPONSE, False
    if _is_success(r.status_code):
        return "", True
    return f"unexpected response code {r.status_code} (expected success)", False


def generally_fails(r: requests.Response | None) -> tuple[str, bool]:
    if r is None:
        return MISSING_RESPONSE, False
    if _is_success(r.status_code):
        return f"unexpected response code {r.status_code} (expected non-success)", False
    return "", True


def expect_response_code(*codes: int) -> Validator:
    """Validator passing only when the status code is one of ``codes``."""
    expected = tuple(codes)

    def validate(r: requests.Response | None) -> tuple[str, bool]:
        if r is None:
            return MISSING_RESPONSE, False
        if r.status_code in expected:
            return "", True
        listed = " ".join(str(code) for code in expected)
        return f"unexpected response code {r.status_code} (expected [{listed}])", False

    return validate
