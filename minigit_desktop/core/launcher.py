# minigit_desktop/core/launcher.py
"""
Mini Git Desktop – backend process bootstrapper
===============================================

This module is *purely* responsible for building the command line for the
backend (`java -jar server.jar --server.port=<port>`) and spawning the
subprocess with no console attached.

Public helpers
--------------
• build_launch_cmd(location, port) -> List[str]
• start_backend(location, port) -> subprocess.Popen
• launch_backend(install_dir, port) -> subprocess.Popen

The supervisor calls **launch_backend** – it doesn't need to know any
filesystem details.
"""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Union

from minigit_desktop.core import config
from minigit_desktop.core.locator import (
    ArtifactNotFoundError,
    BackendLaunchError,
    locate_backend,
)
from minigit_desktop.core.models import BackendLocation

__all__ = [
    "ArtifactNotFoundError",
    "BackendLaunchError",
    "SpawnError",
    "build_launch_cmd",
    "launch_backend",
    "start_backend",
]


class SpawnError(BackendLaunchError):
    """The OS refused to create the backend process."""


# ──────────────────────────────────────────────
# 1. Build launch arguments
# ──────────────────────────────────────────────
def build_launch_cmd(location: BackendLocation, port: int) -> List[str]:
    """
    Compose the argument vector for subprocess.Popen().
    """
    return [
        location.runtime,
        "-jar",
        str(location.artifact),
        f"--server.port={port}",
    ]


def _creation_flags() -> int:
    # Hide the console window the child would otherwise get on Windows
    if os.name == "nt":
        return subprocess.CREATE_NO_WINDOW
    return 0


# ──────────────────────────────────────────────
# 2. Spawn
# ──────────────────────────────────────────────
def start_backend(location: BackendLocation, port: int = config.BACKEND_PORT) -> subprocess.Popen:
    """
    Spawn the backend **non-blocking** and return the Popen handle.

    All standard streams go to the null device; nothing is read from or
    written to the child after spawn.  Raises SpawnError on any OSError.
    """
    cmd = build_launch_cmd(location, port)
    sys.stdout.write(f"[launcher] Starting backend: {' '.join(cmd)}\n")

    try:
        proc = subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            creationflags=_creation_flags(),
        )
    except OSError as exc:
        raise SpawnError(str(exc)) from exc

    sys.stdout.write(f"[launcher] backend pid={proc.pid}\n")
    return proc


def launch_backend(
    install_dir: Optional[Union[str, Path]] = None,
    port: int = config.BACKEND_PORT,
) -> subprocess.Popen:
    """
    One launch attempt: locate artifact + runtime, then spawn.

    Raises ArtifactNotFoundError or SpawnError; the caller reports and
    does not retry.
    """
    if install_dir is None:
        install_dir = config.install_dir()
    location = locate_backend(install_dir)
    return start_backend(location, port)
