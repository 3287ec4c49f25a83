from __future__ import annotations

from typing import Callable, Dict

from ..runtime import Environment, WrkObject, WrkValue
from ..tree import ObjectLiteral, Stmt

EvalFunc = Callable[[Stmt, Environment], WrkValue]

def eval_object(node: ObjectLiteral, env: Environment, eval_func: EvalFunc) -> WrkObject:
    """Build an object literal; shorthand keys read the variable of the same name."""
    properties: Dict[str, WrkValue] = {}

    for prop in node.properties:
        if prop.value is None:
            properties[prop.key] = env.lookup_var(prop.key)
        else:
            properties[prop.key] = eval_func(prop.value, env)

    return WrkObject(properties)
