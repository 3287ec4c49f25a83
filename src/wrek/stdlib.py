"""Built-in native functions (print, time) registered via wrek.runtime."""

from __future__ import annotations

import time
from typing import List

from .runtime import register_stdlib, Environment, WrkNull, WrkNumber, WrkValue
from .utils import stringify

@register_stdlib("print")
def std_print(args: List[WrkValue], _env: Environment) -> WrkNull:
    rendered = [stringify(arg) for arg in args]
    print(*rendered)
    return WrkNull()

@register_stdlib("time")
def std_time(_args: List[WrkValue], _env: Environment) -> WrkNumber:
    # milliseconds since the epoch
    return WrkNumber(float(time.time_ns() // 1_000_000))
