from __future__ import annotations

import math
from typing import Callable

from ..runtime import Environment, WrkNull, WrkNumber, WrkValue, WrekAssignmentTargetError
from ..tree import AssignmentExpr, BinaryExpr, Identifier, Stmt

EvalFunc = Callable[[Stmt, Environment], WrkValue]

def eval_identifier(ident: Identifier, env: Environment) -> WrkValue:
    return env.lookup_var(ident.symbol)

def eval_assignment(node: AssignmentExpr, env: Environment, eval_func: EvalFunc) -> WrkValue:
    if not isinstance(node.assignee, Identifier):
        raise WrekAssignmentTargetError(node.assignee)

    value = eval_func(node.value, env)
    return env.assign_var(node.assignee.symbol, value)

def eval_binary_expr(node: BinaryExpr, env: Environment, eval_func: EvalFunc) -> WrkValue:
    # both sides always run, left first
    lhs = eval_func(node.left, env)
    rhs = eval_func(node.right, env)

    if isinstance(lhs, WrkNumber) and isinstance(rhs, WrkNumber):
        return WrkNumber(numeric_binary_op(lhs.value, rhs.value, node.operator))

    # no coercion between kinds
    return WrkNull()

def numeric_binary_op(a: float, b: float, op: str) -> float:
    match op:
        case '+':
            return a + b
        case '-':
            return a - b
        case '*':
            return a * b
        case '/':
            return _ieee_div(a, b)
        case '%':
            return _ieee_mod(a, b)
        case _:
            raise ValueError(f"Unknown numeric operator {op!r}")

def _ieee_div(a: float, b: float) -> float:
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b

def _ieee_mod(a: float, b: float) -> float:
    """Floating remainder taking the sign of the dividend; nan where undefined."""
    if b == 0.0 or math.isinf(a) or math.isnan(a) or math.isnan(b):
        return math.nan
    if math.isinf(b):
        return a
    return math.fmod(a, b)
