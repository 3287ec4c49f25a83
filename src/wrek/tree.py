"""AST node set for Wrek plus helpers for viewing it as a lark Tree.

Every node kind is its own dataclass carrying only the fields of that kind;
the evaluator matches on the class. `to_tree` turns any node into a lark
`Tree` so the REPL and runner can pretty-print parsed programs.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import ClassVar, List, Optional, Union

from lark import Token, Tree
from typing_extensions import TypeAlias

# ---------- Statements ----------

@dataclass
class Program:
    kind: ClassVar[str] = "Program"
    body: List['Stmt'] = field(default_factory=list)

@dataclass
class VarDeclaration:
    kind: ClassVar[str] = "VarDeclaration"
    identifier: str
    constant: bool
    value: Optional['Expr'] = None

@dataclass
class FunctionDeclaration:
    kind: ClassVar[str] = "FunctionDeclaration"
    name: str
    parameters: List[str]
    body: List['Stmt']

# ---------- Expressions ----------

@dataclass
class AssignmentExpr:
    kind: ClassVar[str] = "AssignmentExpr"
    assignee: 'Expr'
    value: 'Expr'

@dataclass
class BinaryExpr:
    kind: ClassVar[str] = "BinaryExpr"
    left: 'Expr'
    right: 'Expr'
    operator: str

@dataclass
class CallExpr:
    kind: ClassVar[str] = "CallExpr"
    caller: 'Expr'
    args: List['Expr']

@dataclass
class MemberExpr:
    kind: ClassVar[str] = "MemberExpr"
    object: 'Expr'
    property: 'Expr'
    computed: bool

@dataclass
class Identifier:
    kind: ClassVar[str] = "Identifier"
    symbol: str

@dataclass
class NumericLiteral:
    kind: ClassVar[str] = "NumericLiteral"
    value: float

@dataclass
class Property:
    kind: ClassVar[str] = "Property"
    key: str
    value: Optional['Expr'] = None  # None: shorthand `{ key }`

@dataclass
class ObjectLiteral:
    kind: ClassVar[str] = "ObjectLiteral"
    properties: List[Property] = field(default_factory=list)


Expr: TypeAlias = Union[
    AssignmentExpr,
    BinaryExpr,
    CallExpr,
    MemberExpr,
    Identifier,
    NumericLiteral,
    ObjectLiteral,
    Property,
]

Stmt: TypeAlias = Union[Program, VarDeclaration, FunctionDeclaration, Expr]

NODE_TYPES = (
    Program,
    VarDeclaration,
    FunctionDeclaration,
    AssignmentExpr,
    BinaryExpr,
    CallExpr,
    MemberExpr,
    Identifier,
    NumericLiteral,
    ObjectLiteral,
    Property,
)

def is_node(value: object) -> bool:
    return isinstance(value, NODE_TYPES)

# ---------- lark view ----------

def to_tree(node: Stmt) -> Tree:
    """Render an AST node as a lark Tree labelled by node kind.

    Child nodes become subtrees, lists of nodes are flattened in order, and
    scalar fields become `Token(FIELD_NAME, text)` leaves. Absent optional
    children are omitted.
    """
    children: List[Union[Tree, Token]] = []

    for f in fields(node):
        val = getattr(node, f.name)

        if val is None:
            continue
        if is_node(val):
            children.append(to_tree(val))
        elif isinstance(val, list):
            for item in val:
                if is_node(item):
                    children.append(to_tree(item))
                else:
                    children.append(Token(f.name.upper(), str(item)))
        elif isinstance(val, bool):
            children.append(Token(f.name.upper(), "true" if val else "false"))
        elif isinstance(val, float):
            children.append(Token(f.name.upper(), _format_number(val)))
        else:
            children.append(Token(f.name.upper(), str(val)))

    return Tree(node.kind, children)

def dump_ast(node: Stmt) -> str:
    return to_tree(node).pretty()

def _format_number(v: float) -> str:
    return str(int(v)) if v.is_integer() else str(v)
