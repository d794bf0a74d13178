# minigit_desktop/main.py
"""
Mini Git Desktop – native window entry point
============================================

Run options
-----------
• From source:       python run_desktop.py
• As a module:       python -m minigit_desktop
• Installed (GUI):   minigit-desktop

Opens a pywebview window showing the loading page, starts the backend
supervisor once the page has loaded, and kills the backend when the
window closes.
"""

from __future__ import annotations

import atexit
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

import jinja2

from minigit_desktop.core import config
from minigit_desktop.core.status import StatusReporter, Surface
from minigit_desktop.core.supervisor import BackendSupervisor

try:
    import webview  # type: ignore
except ModuleNotFoundError:
    webview = None  # run_desktop() will raise

# ────────────────────────────── template setup
BASE_PATH = Path(__file__).resolve().parent
TEMPLATES = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(BASE_PATH / "templates")),
    autoescape=jinja2.select_autoescape(["html"]),
)

PAGE_CONTEXT: Dict[str, Any] = {
    "app_name": config.APP_NAME,
    "app_version": config.APP_VERSION,
    "status_id": config.STATUS_SELECTOR.lstrip("#"),
}


def render_loading_page(port: int = config.BACKEND_PORT) -> str:
    return TEMPLATES.get_template("pages/loading.html").render(
        **PAGE_CONTEXT,
        port=port,
        backend_url=config.backend_url(port=port),
    )


# ────────────────────────────── window helpers
def _main_window() -> Optional[Surface]:
    """First open pywebview window, or None once it has been destroyed."""
    if webview is None or not webview.windows:
        return None
    return webview.windows[0]


def run_desktop(install_dir: Optional[Union[str, Path]] = None) -> None:
    if webview is None:
        raise RuntimeError("pywebview not installed – run:  pip install pywebview")

    reporter = StatusReporter(_main_window)
    supervisor = BackendSupervisor(reporter, install_dir=install_dir)
    atexit.register(supervisor.shutdown)         # covers exits that skip `closing`

    window = webview.create_window(
        title=config.WINDOW_TITLE,
        html=render_loading_page(supervisor.settings.port),
        width=config.WINDOW_WIDTH,
        height=config.WINDOW_HEIGHT,
    )

    def on_loaded() -> None:
        # `loaded` fires again after the redirect to the backend
        if supervisor.started:
            return
        reporter.maximize()
        supervisor.start()

    def on_closing() -> None:
        sys.stdout.write("[desktop] window closing\n")
        supervisor.shutdown()

    window.events.loaded += on_loaded
    window.events.closing += on_closing

    webview.start()
