# minigit_desktop/core/locator.py
"""
Mini Git Desktop – backend artifact locator
===========================================

Resolves *where* the backend lives relative to the install directory:

    resources/backend/server.jar        ← installer layout
    server.jar                          ← portable layout
    resources/jre/bin/<java|javaw.exe>  ← bundled runtime (optional)

Without a bundled runtime the bare executable name is returned and the
OS resolves it through PATH when the process is spawned.

Nothing is cached: every call stats the filesystem again.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional, Union

from minigit_desktop.core import config
from minigit_desktop.core.models import BackendLocation

PathLike = Union[str, Path]


class BackendLaunchError(RuntimeError):
    """Base class for everything that ends a launch attempt."""


class ArtifactNotFoundError(BackendLaunchError, FileNotFoundError):
    """None of the candidate artifact paths exists."""


def _is_file(path: Path) -> bool:
    # unreadable parent, over-long name … count as "not there"
    try:
        return path.is_file()
    except OSError:
        return False


def _base_dir(install_dir: Optional[PathLike]) -> Path:
    if not install_dir:
        return Path.cwd()
    return Path(install_dir).resolve()


def artifact_candidates(install_dir: Optional[PathLike] = None) -> List[Path]:
    """Artifact paths in priority order."""
    base = _base_dir(install_dir)
    return [
        base / config.RESOURCES_DIR_NAME / config.ARTIFACT_DIR_NAME / config.ARTIFACT_NAME,
        base / config.ARTIFACT_NAME,
    ]


def locate_artifact(install_dir: Optional[PathLike] = None) -> Path:
    """
    Return the first candidate that is a regular file.

    Raises ArtifactNotFoundError if neither exists.
    """
    for cand in artifact_candidates(install_dir):
        if _is_file(cand):
            return cand
    raise ArtifactNotFoundError(f"{config.ARTIFACT_NAME} not found")


def locate_runtime(install_dir: Optional[PathLike] = None) -> str:
    """Return the bundled runtime path, or the bare name for a PATH lookup."""
    bundled = (
        _base_dir(install_dir)
        / config.RESOURCES_DIR_NAME
        / config.RUNTIME_DIR_NAME
        / "bin"
        / config.RUNTIME_EXECUTABLE
    )
    if _is_file(bundled):
        return str(bundled)
    return config.RUNTIME_EXECUTABLE


def locate_backend(install_dir: Optional[PathLike] = None) -> BackendLocation:
    """Resolve artifact and runtime in one go (fresh on every call)."""
    artifact = locate_artifact(install_dir)
    runtime = locate_runtime(install_dir)
    location = BackendLocation(
        artifact=artifact,
        runtime=runtime,
        bundled_runtime=runtime != config.RUNTIME_EXECUTABLE,
    )
    sys.stdout.write(f"[locator] artifact={location.artifact} runtime={location.runtime}\n")
    return location
