from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional

import requests
from requests.utils import check_header_validity

from httpprobe.checks.validators import (
    Validator,
    expect_response_code,
    generally_fails,
    generally_succeeds,
)

# RFC 9110 token characters
_METHOD_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


@dataclass(frozen=True)
class Check:
    url: str
    method: str
    headers: Mapping[str, tuple[str, ...]]
    validate: Validator

    def make_request(
        self, session: requests.Session | None = None
    ) -> requests.PreparedRequest:
        """
        Build the request described by this check.

        Check headers replace the session's default headers. Headers that
        preparing the request adds itself (Content-Length, ...) are kept and
        the check's values are appended to them.

        Raises ValueError (requests.InvalidURL, MissingSchema, ...) when the
        method or URL can't be turned into a request.
        """
        method = self.method or "GET"
        if not _METHOD_RE.match(method):
            raise ValueError(f"invalid method {method!r}")

        req = requests.Request(method=method, url=self.url)
        if session is not None:
            prepared = session.prepare_request(req)
            defaults = {k.lower() for k in session.headers}
        else:
            prepared = req.prepare()
            defaults = set()

        for key, values in self.headers.items():
            if key.lower() in defaults:
                defaults.discard(key.lower())
                prepared.headers.pop(key, None)
            for value in values:
                existing = prepared.headers.get(key)
                prepared.headers[key] = f"{existing}, {value}" if existing else value
            if key in prepared.headers:
                check_header_validity((key, prepared.headers[key]))
        return prepared


@dataclass
class CheckDraft:
    url: str = ""
    method: str = "GET"
    headers: Optional[dict[str, list[str]]] = None
    validate: Validator = field(default=generally_succeeds)

    def freeze(self) -> Check:
        headers = {k: tuple(v) for k, v in (self.headers or {}).items()}
        return Check(
            url=self.url,
            method=self.method,
            headers=MappingProxyType(headers),
            validate=self.validate,
        )


Option = Callable[[CheckDraft], None]


def new_check(*options: Optional[Option]) -> Check:
    draft = CheckDraft()
    for opt in options:
        if opt is not None:
            opt(draft)
    return draft.freeze()


def opt_method(method: str) -> Option:
    def apply(c: CheckDraft) -> None:
        c.method = method or "GET"

    return apply


def opt_url(url: str) -> Option:
    def apply(c: CheckDraft) -> None:
        c.url = url

    return apply


def opt_headers(headers: Mapping[str, str | Iterable[str]] | None) -> Option:
    def apply(c: CheckDraft) -> None:
        if headers is None:
            c.headers = None
            return
        c.headers = {
            k: [v] if isinstance(v, str) else list(v) for k, v in headers.items()
        }

    return apply


def opt_set_header(key: str, values: Iterable[str]) -> Option:
    def apply(c: CheckDraft) -> None:
        if c.headers is None:
            c.headers = {}
        c.headers[key] = list(values)

    return apply


def opt_add_header(key: str, value: str) -> Option:
    def apply(c: CheckDraft) -> None:
        if c.headers is None:
            c.headers = {}
        c.headers.setdefault(key, []).append(value)

    return apply


def opt_validate(validator: Validator) -> Option:
    def apply(c: CheckDraft) -> None:
        c.validate = validator

    return apply


def opt_get() -> Option:
    return opt_method("GET")


def opt_put() -> Option:
    return opt_method("PUT")


def opt_post() -> Option:
    return opt_method("POST")


def opt_delete() -> Option:
    return opt_method("DELETE")


def opt_patch() -> Option:
    return opt_method("PATCH")


def opt_options() -> Option:
    return opt_method("OPTIONS")


def opt_expect_code(*codes: int) -> Option:
    return opt_validate(expect_response_code(*codes))


def opt_success() -> Option:
    return opt_validate(generally_succeeds)


def opt_failure() -> Option:
    return opt_validate(generally_fails)


def opt_forbidden() -> Option:
    return opt_expect_code(403)
