"""Tests for the fire-and-forget status reporter."""

from __future__ import annotations

import pytest

from minigit_desktop.core.status import (
    StatusReporter,
    escape_js_string,
    navigate_script,
    status_script,
)

from conftest import BrokenSurface, RecordingSurface


@pytest.mark.parametrize(
    ("raw", "escaped"),
    [
        ("plain text", "plain text"),
        ("it's", "it\\'s"),
        ("C:\\jre\\bin", "C:\\\\jre\\\\bin"),
        ("\\'", "\\\\\\'"),
        ("line1\nline2\r", "line1\\nline2\\r"),
        ("a\u2028b\u2029c", "a\\u2028b\\u2029c"),
    ],
)
def test_escape_js_string(raw: str, escaped: str) -> None:
    assert escape_js_string(raw) == escaped


def test_status_script_targets_status_element() -> None:
    assert status_script("Backend is ready, opening...") == (
        "var s=document.querySelector('#status'); "
        "if(s) s.innerText='Backend is ready, opening...';"
    )


def test_status_script_keeps_quote_inside_literal() -> None:
    script = status_script("can't start")
    assert script.endswith("s.innerText='can\\'t start';")


def test_navigate_script() -> None:
    assert navigate_script("http://127.0.0.1:8082/") == (
        "window.location.replace('http://127.0.0.1:8082/');"
    )


def test_set_status_evaluates_on_surface(surface: RecordingSurface) -> None:
    reporter = StatusReporter(lambda: surface)
    reporter.set_status("hello")
    reporter.navigate("http://127.0.0.1:8082/")

    assert surface.scripts == [status_script("hello"), navigate_script("http://127.0.0.1:8082/")]


def test_custom_selector(surface: RecordingSurface) -> None:
    StatusReporter(lambda: surface, selector="#msg").set_status("x")
    assert "querySelector('#msg')" in surface.scripts[0]


def test_missing_surface_is_ignored() -> None:
    reporter = StatusReporter(lambda: None)
    reporter.set_status("nobody listening")
    reporter.navigate("http://127.0.0.1:8082/")
    reporter.maximize()


def test_torn_down_surface_never_raises() -> None:
    reporter = StatusReporter(lambda: BrokenSurface())
    reporter.set_status("window gone")
    reporter.navigate("http://127.0.0.1:8082/")
    reporter.maximize()


def test_failing_surface_getter_never_raises() -> None:
    def _getter():
        raise RuntimeError("GUI loop already stopped")

    StatusReporter(_getter).set_status("still fine")


def test_maximize(surface: RecordingSurface) -> None:
    StatusReporter(lambda: surface).maximize()
    assert surface.maximized == 1


def test_run_js_preferred_over_evaluate_js() -> None:
    class _Window(RecordingSurface):
        def __init__(self) -> None:
            super().__init__()
            self.ran: list = []

        def evaluate_js(self, script: str) -> None:
            raise AssertionError("evaluate_js waits for a result")

        def run_js(self, script: str) -> None:
            self.ran.append(script)

    window = _Window()
    StatusReporter(lambda: window).set_status("hello")
    assert window.ran == [status_script("hello")]
