import unittest
from dataclasses import replace

import requests

from httpprobe.checks.check import (
    new_check,
    opt_add_header,
    opt_method,
    opt_post,
    opt_set_header,
    opt_url,
)


class MakeRequestTests(unittest.TestCase):
    def test_binds_method_and_url(self) -> None:
        req = new_check(opt_post(), opt_url("http://example.local/health")).make_request()
        self.assertEqual(req.method, "POST")
        self.assertEqual(req.url, "http://example.local/health")

    def test_multi_value_headers_keep_order(self) -> None:
        req = new_check(
            opt_url("http://example.local/"),
            opt_add_header("X-Probe", "1"),
            opt_add_header("X-Probe", "2"),
        ).make_request()
        self.assertEqual(req.headers["X-Probe"], "1, 2")

    def test_check_headers_replace_session_defaults(self) -> None:
        session = requests.Session()
        session.headers["X-Env"] = "prod"
        req = new_check(
            opt_url("http://example.local/"),
            opt_add_header("Accept", "application/json"),
            opt_add_header("user-agent", "monitor/1.0"),
            opt_set_header("X-Env", ["canary", "blue"]),
        ).make_request(session)

        self.assertEqual(req.headers["Accept"], "application/json")
        self.assertEqual(req.headers["User-Agent"], "monitor/1.0")
        self.assertEqual(req.headers["X-Env"], "canary, blue")

    def test_untouched_session_defaults_are_kept(self) -> None:
        session = requests.Session()
        req = new_check(
            opt_url("http://example.local/"),
            opt_add_header("X-Probe", "1"),
        ).make_request(session)

        self.assertEqual(req.headers["User-Agent"], session.headers["User-Agent"])
        self.assertEqual(req.headers["X-Probe"], "1")

    def test_values_append_to_headers_set_by_preparation(self) -> None:
        req = new_check(
            opt_post(),
            opt_url("http://example.local/"),
            opt_add_header("Content-Length", "0"),
        ).make_request(requests.Session())

        self.assertEqual(req.headers["Content-Length"], "0, 0")

    def test_empty_method_means_get(self) -> None:
        c = replace(new_check(opt_url("http://example.local/")), method="")
        req = c.make_request()
        self.assertEqual(req.method, "GET")

    def test_missing_scheme_raises(self) -> None:
        with self.assertRaises(requests.exceptions.MissingSchema):
            new_check(opt_url("example.local/health")).make_request()

    def test_missing_host_raises(self) -> None:
        with self.assertRaises(requests.exceptions.InvalidURL):
            new_check(opt_url("http://")).make_request()

    def test_invalid_method_raises(self) -> None:
        with self.assertRaises(ValueError):
            new_check(opt_method("BAD METHOD"), opt_url("http://example.local/")).make_request()

    def test_invalid_header_value_raises(self) -> None:
        with self.assertRaises(ValueError):
            new_check(
                opt_url("http://example.local/"),
                opt_add_header("X-Bad", "line\r\nbreak"),
            ).make_request()


if __name__ == "__main__":
    unittest.main()
