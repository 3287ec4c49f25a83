from __future__ import annotations

from typing import Optional

from .runtime import Environment, WrkNumber, WrkValue, WrekUnsupportedNode, create_global_env
from .tree import (
    AssignmentExpr,
    BinaryExpr,
    CallExpr,
    FunctionDeclaration,
    Identifier,
    MemberExpr,
    NumericLiteral,
    ObjectLiteral,
    Program,
    Property,
    Stmt,
    VarDeclaration,
)

from .eval.blocks import eval_program, eval_var_declaration
from .eval.expr import eval_assignment, eval_binary_expr, eval_identifier
from .eval.objects import eval_object

# ---------------- Public API ----------------

def eval_expr(ast: Stmt, env: Optional[Environment]=None) -> WrkValue:
    """Evaluate `ast`, creating a fresh global environment when none is given."""
    if env is None:
        env = create_global_env()

    return evaluate(ast, env)

# ---------------- Core evaluator ----------------

def evaluate(node: Stmt, env: Environment) -> WrkValue:
    match node:
        case NumericLiteral(value=value):
            return WrkNumber(value)
        case Identifier():
            return eval_identifier(node, env)
        case ObjectLiteral():
            return eval_object(node, env, evaluate)
        case AssignmentExpr():
            return eval_assignment(node, env, evaluate)
        case BinaryExpr():
            return eval_binary_expr(node, env, evaluate)
        case VarDeclaration():
            return eval_var_declaration(node, env, evaluate)
        case Program(body=body):
            return eval_program(body, env, evaluate)
        case FunctionDeclaration() | CallExpr() | MemberExpr() | Property():
            raise WrekUnsupportedNode(node)
        case _:
            raise TypeError(f"Not an AST node: {type(node).__name__}")
