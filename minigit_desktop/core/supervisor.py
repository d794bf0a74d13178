# minigit_desktop/core/supervisor.py
"""
Mini Git Desktop – backend lifecycle supervisor
===============================================

One `BackendSupervisor` per window session.  On `start()` it runs two
background threads that know nothing about each other:

    launch  : locate server.jar → spawn → keep the Popen handle
    probe   : poll the port → "ready" + redirect, or a timeout message

They share the fixed port and the handle slot, nothing else.  A failed
launch does **not** cut the probe short; it still runs to its own
timeout and reports separately.

`shutdown()` (window closing, interpreter exit) takes the handle out of
the slot under the lock and kills the process.  Calling it again is a
no-op.
"""

from __future__ import annotations

import subprocess
import sys
import threading
from pathlib import Path
from typing import Callable, List, Optional, Union

from minigit_desktop.core import config
from minigit_desktop.core.launcher import BackendLaunchError, launch_backend
from minigit_desktop.core.models import LaunchState, ProbeState, SupervisorSettings
from minigit_desktop.core.prober import wait_for_port
from minigit_desktop.core.status import StatusReporter

LaunchFn = Callable[[Optional[Path], int], subprocess.Popen]
ProbeFn = Callable[[str, int, float, float], bool]

_REAP_TIMEOUT = 5.0


def _reap(proc: subprocess.Popen) -> None:
    try:
        proc.wait(timeout=_REAP_TIMEOUT)
    except subprocess.TimeoutExpired:
        sys.stderr.write(f"[supervisor] backend pid={proc.pid} did not exit\n")


class BackendSupervisor:
    """Owns the backend process handle for one UI session."""

    def __init__(
        self,
        reporter: StatusReporter,
        settings: Optional[SupervisorSettings] = None,
        install_dir: Optional[Union[str, Path]] = None,
        launch: LaunchFn = launch_backend,
        probe: ProbeFn = wait_for_port,
    ) -> None:
        self.reporter = reporter
        self.settings = settings or SupervisorSettings()
        self.install_dir = Path(install_dir) if install_dir is not None else None
        self._launch_fn = launch
        self._probe_fn = probe

        self._lock = threading.Lock()
        self._process: Optional[subprocess.Popen] = None
        self._started = False
        self._threads: List[threading.Thread] = []

        self.launch_state = LaunchState.idle
        self.probe_state = ProbeState.idle

    # ──────────────────────────────────────────
    # Status text
    # ──────────────────────────────────────────
    @property
    def starting_message(self) -> str:
        return f"Starting {config.APP_NAME} on port {self.settings.port} ..."

    ready_message = "Backend is ready, opening..."

    @property
    def timeout_message(self) -> str:
        return (
            "Backend did not respond, please try again or open "
            f"{self.settings.url} in an external browser."
        )

    @staticmethod
    def launch_failed_message(exc: BaseException) -> str:
        return f"Failed to start backend: {exc}"

    # ──────────────────────────────────────────
    # Session start
    # ──────────────────────────────────────────
    @property
    def started(self) -> bool:
        with self._lock:
            return self._started

    def start(self) -> List[threading.Thread]:
        """
        Kick off the launch and probe threads.

        Only the first call per session does anything; later calls
        (e.g. a second `loaded` event after the redirect) return [].
        """
        with self._lock:
            if self._started:
                return []
            self._started = True

        self.reporter.set_status(self.starting_message)

        self._threads = [
            threading.Thread(target=self._run_launch, name="backend-launch", daemon=True),
            threading.Thread(target=self._run_probe, name="backend-probe", daemon=True),
        ]
        for t in self._threads:
            t.start()
        return list(self._threads)

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for both tasks; True if neither is still running."""
        for t in self._threads:
            t.join(timeout)
        return not any(t.is_alive() for t in self._threads)

    # ──────────────────────────────────────────
    # Task A – launch
    # ──────────────────────────────────────────
    def _run_launch(self) -> None:
        self.launch_state = LaunchState.launching
        try:
            proc = self._launch_fn(self.install_dir, self.settings.port)
        except (BackendLaunchError, OSError, ValueError) as exc:
            sys.stderr.write(f"[supervisor] launch failed: {exc}\n")
            self.reporter.set_status(self.launch_failed_message(exc))
            self.launch_state = LaunchState.failed
            return

        with self._lock:
            self._process = proc
        self.launch_state = LaunchState.launched

    # ──────────────────────────────────────────
    # Task B – probe
    # ──────────────────────────────────────────
    def _run_probe(self) -> None:
        self.probe_state = ProbeState.probing
        ok = self._probe_fn(
            self.settings.host,
            self.settings.port,
            self.settings.probe_timeout,
            self.settings.probe_interval,
        )
        if ok:
            self.reporter.set_status(self.ready_message)
            self.reporter.navigate(self.settings.url)
            self.probe_state = ProbeState.ready
        else:
            self.reporter.set_status(self.timeout_message)
            self.probe_state = ProbeState.timed_out

    # ──────────────────────────────────────────
    # Shutdown
    # ──────────────────────────────────────────
    @property
    def process(self) -> Optional[subprocess.Popen]:
        with self._lock:
            return self._process

    def shutdown(self) -> bool:
        """
        Kill the backend if a handle is stored.

        Returns True if a process was taken out of the slot, False when
        there was nothing to do (never launched, or already shut down).
        """
        with self._lock:
            proc, self._process = self._process, None

        if proc is None:
            return False

        sys.stdout.write(f"[supervisor] killing backend pid={proc.pid}\n")
        try:
            proc.kill()
        except OSError as exc:
            # already exited between spawn and now
            sys.stderr.write(f"[supervisor] kill failed: {exc}\n")

        # reap off the caller's thread so window close never waits on it
        threading.Thread(target=_reap, args=(proc,), name="backend-reap", daemon=True).start()
        return True
