"""Shared fakes for the supervisor tests."""

from __future__ import annotations

import socket
import threading
import time
from pathlib import Path
from typing import Iterator, List, Optional

import pytest

from minigit_desktop.core import config


class RecordingSurface:
    """Stands in for a pywebview Window."""

    def __init__(self) -> None:
        self.scripts: List[str] = []
        self.maximized = 0

    def evaluate_js(self, script: str) -> None:
        self.scripts.append(script)

    def maximize(self) -> None:
        self.maximized += 1


class BrokenSurface:
    """A window whose native side has already been destroyed."""

    def evaluate_js(self, script: str) -> None:
        raise RuntimeError("window has been destroyed")

    def maximize(self) -> None:
        raise RuntimeError("window has been destroyed")


class RecordingReporter:
    def __init__(self) -> None:
        self.messages: List[str] = []
        self.navigations: List[str] = []
        self._lock = threading.Lock()

    def set_status(self, text: str) -> None:
        with self._lock:
            self.messages.append(text)

    def navigate(self, url: str) -> None:
        with self._lock:
            self.navigations.append(url)

    def maximize(self) -> None:
        pass


class FakeProcess:
    """Minimal Popen look-alike that counts kills."""

    def __init__(self, pid: int = 4242) -> None:
        self.pid = pid
        self.kills = 0
        self.returncode: Optional[int] = None

    def kill(self) -> None:
        self.kills += 1
        self.returncode = -9

    def wait(self, timeout: Optional[float] = None) -> int:
        return self.returncode if self.returncode is not None else 0


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def free_port() -> int:
    """A port nothing is listening on (bound once, then released)."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((config.BACKEND_HOST, 0))
        return s.getsockname()[1]


class DelayedListener:
    """Opens a listening socket on *port* after *delay* seconds."""

    def __init__(self, port: int, delay: float) -> None:
        self.port = port
        self.delay = delay
        self.opened_at: Optional[float] = None
        self._sock: Optional[socket.socket] = None
        self._timer = threading.Timer(delay, self._open)

    def _open(self) -> None:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((config.BACKEND_HOST, self.port))
        sock.listen(8)
        self._sock = sock
        self.opened_at = time.monotonic()

    def start(self) -> "DelayedListener":
        self._timer.start()
        return self

    def close(self) -> None:
        self._timer.cancel()
        if self._sock is not None:
            self._sock.close()


@pytest.fixture
def delayed_listener() -> Iterator:
    listeners: List[DelayedListener] = []

    def _make(port: int, delay: float) -> DelayedListener:
        listener = DelayedListener(port, delay).start()
        listeners.append(listener)
        return listener

    yield _make
    for listener in listeners:
        listener.close()


@pytest.fixture
def install_with_artifact(tmp_path: Path) -> Path:
    """Install dir with server.jar at the primary location."""
    jar = tmp_path / "resources" / "backend" / config.ARTIFACT_NAME
    jar.parent.mkdir(parents=True)
    jar.write_bytes(b"PK\x03\x04")
    return tmp_path
