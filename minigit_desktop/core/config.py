# minigit_desktop/core/config.py
"""
Mini Git Desktop – central configuration helper
===============================================

All modules import *only* from this file when they need:
• application constants (name, version, window geometry)
• the fixed backend contract (host, port, artifact & runtime names)
• probe timing (poll interval, overall timeout)
• the resolved install directory of the running application

Nothing here is user-configurable: there is no settings file and no
environment variable.  The port is a compile-time constant shared by the
launcher, the prober and the redirect.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

# ──────────────────────────────────────────────
# 1. Application constants
# ──────────────────────────────────────────────
APP_NAME: str = "Mini Git Server"
APP_ID: str = "minigit-desktop"
APP_VERSION: str = "0.1.0"

WINDOW_TITLE: str = APP_NAME
WINDOW_WIDTH: int = 1280
WINDOW_HEIGHT: int = 800

# DOM element the status reporter writes into (see templates/pages/loading.html)
STATUS_SELECTOR: str = "#status"


# ──────────────────────────────────────────────
# 2. Backend contract
# ──────────────────────────────────────────────
BACKEND_HOST: str = "127.0.0.1"
BACKEND_PORT: int = 8082

PROBE_INTERVAL: float = 0.3      # seconds between connection attempts
PROBE_TIMEOUT: float = 30.0      # JVM cold start can be slow

ARTIFACT_NAME: str = "server.jar"
RESOURCES_DIR_NAME: str = "resources"
ARTIFACT_DIR_NAME: str = "backend"
RUNTIME_DIR_NAME: str = "jre"

# javaw.exe has no console window of its own
RUNTIME_EXECUTABLE: str = "javaw.exe" if os.name == "nt" else "java"


def backend_url(host: str = BACKEND_HOST, port: int = BACKEND_PORT) -> str:
    """URL the window is redirected to once the backend answers."""
    return f"http://{host}:{port}/"


# ──────────────────────────────────────────────
# 3. Install directory
# ──────────────────────────────────────────────
def install_dir() -> Path:
    """
    Return the directory the running application lives in.

    Packaged (PyInstaller & co.) → folder of the frozen executable.
    From source                 → folder of the entry script.
    Interactive / unknown       → current working directory.
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent

    entry = sys.argv[0] if sys.argv else ""
    if entry and entry != "-c":
        return Path(entry).resolve().parent

    return Path.cwd()
