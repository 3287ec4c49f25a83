from __future__ import annotations

import importlib
from typing import Dict

from .types import (
    Environment,
    NativeFn,
    WrkBool,
    WrkNativeFn,
    WrkNull,
    WrkNumber,
    WrkObject,
    WrkFn,
    WrkValue,
    WrekRuntimeError,
    WrekResolutionError,
    WrekRedeclarationError,
    WrekConstantError,
    WrekAssignmentTargetError,
    WrekUnsupportedNode,
)

_STDLIB_INITIALIZED = False

class Builtins:
    stdlib_functions: Dict[str, WrkNativeFn] = {}

def init_stdlib() -> None:
    """Load stdlib modules (idempotent) so register_stdlib hooks run."""
    global _STDLIB_INITIALIZED

    if _STDLIB_INITIALIZED:
        return

    importlib.import_module("wrek.stdlib")
    _STDLIB_INITIALIZED = True

def register_stdlib(name: str):
    def dec(fn: NativeFn):
        Builtins.stdlib_functions[name] = WrkNativeFn(call=fn, name=name)
        return fn

    return dec

def create_global_env() -> Environment:
    """Root scope with the literal constants and every registered native function."""
    init_stdlib()
    env = Environment()

    env.declare_var("true", WrkBool(True), constant=True)
    env.declare_var("false", WrkBool(False), constant=True)
    env.declare_var("null", WrkNull(), constant=True)

    for name, native in Builtins.stdlib_functions.items():
        env.declare_var(name, native, constant=True)

    return env
