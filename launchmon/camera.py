"""Camera start-up."""

import time
from dataclasses import dataclass
from typing import Optional

from launchmon import logger


@dataclass
class _CameraState:
    initialized: bool = False
    initialized_at: Optional[float] = None


_state = _CameraState()


def init_camera() -> float:
    """Bring the camera up, report it and return the monotonic time it came up."""
    _state.initialized = True
    _state.initialized_at = time.monotonic()
    logger.info("Camera initialized.")
    return _state.initialized_at