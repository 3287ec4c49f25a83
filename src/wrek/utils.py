from __future__ import annotations

import os
from typing import Optional

from .types import WrkValue

DEBUG_PY_TRACE_ENV = "WREK_DEBUG_PY_TRACE"

_TRUTHY_FLAGS = {"1", "true", "yes", "on"}


def debug_py_trace_enabled() -> bool:
    """True when WREK_DEBUG_PY_TRACE asks for Python tracebacks on errors."""
    raw = os.environ.get(DEBUG_PY_TRACE_ENV)
    if raw is None:
        return False
    return raw.strip().lower() in _TRUTHY_FLAGS


def set_debug_py_trace(enabled: Optional[bool]) -> bool:
    """Set, clear or (with None) toggle the traceback flag; returns the new state."""
    if enabled is None:
        enabled = not debug_py_trace_enabled()

    if enabled:
        os.environ[DEBUG_PY_TRACE_ENV] = "1"
    else:
        os.environ.pop(DEBUG_PY_TRACE_ENV, None)

    return enabled


def stringify(value: WrkValue) -> str:
    return repr(value)
