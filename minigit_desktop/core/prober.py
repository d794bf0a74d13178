# minigit_desktop/core/prober.py
"""
Mini Git Desktop – backend readiness probe
==========================================

"Ready" means exactly one thing: the backend's TCP port accepts a
connection.  No HTTP request is made.

The probe is a plain blocking poll at a constant interval; only one
probe runs per session so there is no need for an event loop.
"""

from __future__ import annotations

import socket
import sys
import time

from minigit_desktop.core import config


def can_connect(host: str, port: int, timeout: float = config.PROBE_INTERVAL) -> bool:
    """Single TCP connect attempt, bounded by *timeout* seconds."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


def wait_for_port(
    host: str = config.BACKEND_HOST,
    port: int = config.BACKEND_PORT,
    timeout: float = config.PROBE_TIMEOUT,
    interval: float = config.PROBE_INTERVAL,
) -> bool:
    """
    Poll host:port every *interval* seconds until it accepts a connection
    (→ True) or *timeout* seconds have elapsed (→ False).

    Each attempt is itself bounded by *interval*, and the last sleep is
    clipped to the time left, so the result is known at most one interval
    after the deadline.
    """
    start = time.monotonic()
    deadline = start + timeout
    attempts = 0

    while True:
        attempts += 1
        if can_connect(host, port, timeout=interval):
            sys.stdout.write(
                f"[prober] {host}:{port} reachable after "
                f"{time.monotonic() - start:.1f}s ({attempts} attempts)\n"
            )
            return True

        remaining = deadline - time.monotonic()
        if remaining <= 0:
            sys.stderr.write(
                f"[prober] {host}:{port} not reachable within {timeout:.1f}s "
                f"({attempts} attempts)\n"
            )
            return False

        time.sleep(min(interval, remaining))
