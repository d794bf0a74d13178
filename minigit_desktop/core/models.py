# minigit_desktop/core/models.py
"""
Mini Git Desktop – shared data models
=====================================

The locator, launcher and supervisor communicate through the **typed**
value objects defined here.  Pydantic gives us validation and immutable
instances for free.

Keep business logic out of this file – it belongs in the `core/`
modules that use these models.
"""

from __future__ import annotations

import enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

from minigit_desktop.core import config


# ──────────────────────────────────────────────
# 1. Backend location
# ──────────────────────────────────────────────
class BackendLocation(BaseModel):
    """Resolved artifact + runtime pair for one launch attempt."""

    model_config = ConfigDict(frozen=True)

    artifact: Path
    runtime: str                     # absolute path, or bare name looked up on PATH
    bundled_runtime: bool = False


# ──────────────────────────────────────────────
# 2. Supervisor settings
# ──────────────────────────────────────────────
class SupervisorSettings(BaseModel):
    """Fixed timing & address values handed to the supervisor."""

    model_config = ConfigDict(frozen=True)

    host: str = config.BACKEND_HOST
    port: int = config.BACKEND_PORT
    probe_interval: float = config.PROBE_INTERVAL
    probe_timeout: float = config.PROBE_TIMEOUT

    @field_validator("port")
    @classmethod
    def port_range(cls, v: int) -> int:
        if not (1 <= v <= 65535):
            raise ValueError("port must be between 1 and 65535")
        return v

    @field_validator("probe_interval", "probe_timeout")
    @classmethod
    def non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("durations must not be negative")
        return v

    @property
    def url(self) -> str:
        return config.backend_url(self.host, self.port)


# ──────────────────────────────────────────────
# 3. Task states
# ──────────────────────────────────────────────
class LaunchState(str, enum.Enum):
    idle = "idle"
    launching = "launching"
    launched = "launched"
    failed = "failed"


class ProbeState(str, enum.Enum):
    idle = "idle"
    probing = "probing"
    ready = "ready"
    timed_out = "timed_out"
