"""Mini Git Server desktop shell: launches the backend and shows it in a native window."""

from minigit_desktop.core.config import APP_VERSION as __version__

__all__ = ["__version__"]
