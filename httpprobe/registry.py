from __future__ import annotations

from pathlib import Path

import yaml

from httpprobe.checks.check import (
    Check,
    Option,
    new_check,
    opt_expect_code,
    opt_failure,
    opt_forbidden,
    opt_headers,
    opt_method,
    opt_success,
    opt_url,
)
from httpprobe.models import CheckSpec, Registry

_EXPECT_OPTIONS = {
    "success": opt_success,
    "failure": opt_failure,
    "forbidden": opt_forbidden,
}


def load_registry(path: Path | str) -> Registry:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing checks file at {path}")

    data = yaml.safe_load(path.read_text()) or {}
    return Registry.model_validate(data)


def expect_option(expect: str | list[int]) -> Option:
    if isinstance(expect, str):
        return _EXPECT_OPTIONS[expect]()
    return opt_expect_code(*expect)


def to_check(spec: CheckSpec) -> Check:
    return new_check(
        opt_method(spec.method.upper()),
        opt_url(spec.url),
        opt_headers(spec.headers) if spec.headers else None,
        expect_option(spec.expect),
    )


def build_checks(reg: Registry) -> tuple[Check, ...]:
    """Turn the parsed registry into the static, ordered check set."""
    return tuple(to_check(c) for c in reg.checks)
