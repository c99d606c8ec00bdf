"""Version information for gutter-message."""
from __future__ import annotations

import os
from typing import Optional

__version__ = "0.1.0"

DEV_MODE_ENV_VAR = "GUTTER_MESSAGE_DEV_MODE"


def is_dev_build(version: Optional[str] = None) -> bool:
    """Return True when dev mode is forced via env or the version carries a dev suffix."""
    value = os.getenv(DEV_MODE_ENV_VAR)
    if value is not None:
        token = value.strip().lower()
        if token in {"1", "true", "yes", "on"}:
            return True
        if token in {"0", "false", "no", "off"}:
            return False
    candidate = (version or __version__).lower()
    return "dev" in candidate
