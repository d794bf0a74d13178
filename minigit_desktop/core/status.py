# minigit_desktop/core/status.py
"""
Mini Git Desktop – status reporter
==================================

Pushes progress text into the loading page by evaluating a short script
in the main webview window, and redirects that window to the backend
once it is up.

Delivery is **fire-and-forget**: the window may not exist yet, may be
closing, or may already be gone.  Any failure is written to stderr and
dropped on purpose – reporting never breaks the task that called it.

pywebview's `evaluate_js` waits for the page to load and for the
script's result, so a window that is navigating or closing could hold
the caller up.  Where the window offers `run_js` (no result, no wait)
that is used instead.
"""

from __future__ import annotations

import sys
from typing import Any, Callable, Optional, Protocol

from minigit_desktop.core import config


class Surface(Protocol):
    """The slice of a pywebview ``Window`` the reporter needs."""

    def evaluate_js(self, script: str) -> Any: ...

    def maximize(self) -> Any: ...


SurfaceGetter = Callable[[], Optional[Surface]]

# characters that would end or corrupt a single-quoted JS string literal
_JS_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def escape_js_string(text: str) -> str:
    """Escape *text* for use inside a single-quoted JavaScript literal."""
    return "".join(_JS_ESCAPES.get(ch, ch) for ch in text)


def status_script(text: str, selector: str = config.STATUS_SELECTOR) -> str:
    return (
        f"var s=document.querySelector('{escape_js_string(selector)}'); "
        f"if(s) s.innerText='{escape_js_string(text)}';"
    )


def navigate_script(url: str) -> str:
    return f"window.location.replace('{escape_js_string(url)}');"


class StatusReporter:
    """Best-effort bridge from background threads to the main window."""

    def __init__(self, get_surface: SurfaceGetter, selector: str = config.STATUS_SELECTOR):
        self._get_surface = get_surface
        self._selector = selector

    def _evaluate(self, script: str) -> None:
        try:
            surface = self._get_surface()
            if surface is None:
                return
            run = getattr(surface, "run_js", None) or surface.evaluate_js
            run(script)
        except Exception as exc:  # window torn down, JS error, GUI thread gone …
            sys.stderr.write(f"[status] delivery dropped: {exc}\n")

    def set_status(self, text: str) -> None:
        sys.stdout.write(f"[status] {text}\n")
        self._evaluate(status_script(text, self._selector))

    def navigate(self, url: str) -> None:
        sys.stdout.write(f"[status] navigating to {url}\n")
        self._evaluate(navigate_script(url))

    def maximize(self) -> None:
        try:
            surface = self._get_surface()
            if surface is not None:
                surface.maximize()
        except Exception as exc:
            sys.stderr.write(f"[status] maximize failed: {exc}\n")
