from __future__ import annotations

from typing import Callable, Iterable

from ..runtime import Environment, WrkNull, WrkValue
from ..tree import Stmt, VarDeclaration

EvalFunc = Callable[[Stmt, Environment], WrkValue]

def eval_program(body: Iterable[Stmt], env: Environment, eval_func: EvalFunc) -> WrkValue:
    """Run a stmt list in one env, returning the last value (null when empty)."""
    result: WrkValue = WrkNull()

    for stmt in body:
        result = eval_func(stmt, env)

    return result

def eval_var_declaration(node: VarDeclaration, env: Environment, eval_func: EvalFunc) -> WrkValue:
    value = eval_func(node.value, env) if node.value is not None else WrkNull()
    return env.declare_var(node.identifier, value, node.constant)
