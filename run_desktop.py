"""
Standalone entry point that *always* launches a native window.
Run via:  python run_desktop.py
"""

from minigit_desktop.main import run_desktop

# server.jar is looked up next to this script (or under resources/backend/)
run_desktop()
