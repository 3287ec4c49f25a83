from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set

from typing_extensions import TypeAlias

from .tree import Stmt

# ---------- Value Model ----------

@dataclass
class WrkNull:
    def __repr__(self) -> str:
        return "null"

@dataclass
class WrkBool:
    value: bool
    def __repr__(self) -> str:
        return "true" if self.value else "false"

@dataclass
class WrkNumber:
    value: float
    def __repr__(self) -> str:
        v = self.value
        return str(int(v)) if v.is_integer() else str(v)

@dataclass
class WrkObject:
    properties: Dict[str, 'WrkValue'] = field(default_factory=dict)
    def __repr__(self) -> str:
        pairs = []

        for k, v in self.properties.items():
            pairs.append(f"{k}: {repr(v)}")

        if not pairs:
            return "{}"
        return "{ " + ", ".join(pairs) + " }"

NativeFn = Callable[[List['WrkValue'], 'Environment'], 'WrkValue']

@dataclass
class WrkNativeFn:
    call: NativeFn
    name: str = "native"
    def __repr__(self) -> str:
        return f"<native fn {self.name}>"

@dataclass
class WrkFn:
    name: str
    parameters: List[str]
    body: List[Stmt]
    declaration_env: 'Environment'  # closure
    def __repr__(self) -> str:
        return f"<fn {self.name}({', '.join(self.parameters)})>"

WrkValue: TypeAlias = (
    WrkNull
    | WrkBool
    | WrkNumber
    | WrkObject
    | WrkNativeFn
    | WrkFn
)

# ---------- Scopes ----------

class Environment:
    """One lexical scope: bindings, the names bound constant, and the enclosing scope.

    A child keeps a strong reference to its parent, so the parent lives at
    least as long as every scope nested in it.
    """

    def __init__(self, parent: Optional['Environment']=None):
        self.parent = parent
        self.variables: Dict[str, WrkValue] = {}
        self.constants: Set[str] = set()

    def child(self) -> 'Environment':
        return Environment(parent=self)

    def declare_var(self, name: str, value: WrkValue, constant: bool=False) -> WrkValue:
        if name in self.variables:
            raise WrekRedeclarationError(name)

        self.variables[name] = value

        if constant:
            self.constants.add(name)

        return value

    def assign_var(self, name: str, value: WrkValue) -> WrkValue:
        env = self.resolve(name)

        if name in env.constants:
            raise WrekConstantError(name)

        env.variables[name] = value
        return value

    def lookup_var(self, name: str) -> WrkValue:
        return self.resolve(name).variables[name]

    def resolve(self, name: str) -> 'Environment':
        if name in self.variables:
            return self

        if self.parent is None:
            raise WrekResolutionError(name)

        return self.parent.resolve(name)

# ---------- Exceptions ----------

class WrekRuntimeError(Exception):
    def __init__(self, message: str):
        super().__init__(message)

class WrekResolutionError(WrekRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Cannot resolve '{name}' as it does not exist")
        self.name = name

class WrekRedeclarationError(WrekRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Cannot declare variable '{name}' as it is already defined")
        self.name = name

class WrekConstantError(WrekRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Cannot assign to '{name}' as it was declared constant")
        self.name = name

class WrekAssignmentTargetError(WrekRuntimeError):
    def __init__(self, target: Stmt):
        super().__init__(f"Invalid left-hand side in assignment: {target.kind}")
        self.target = target

class WrekUnsupportedNode(WrekRuntimeError):
    def __init__(self, node: Stmt):
        super().__init__(f"{node.kind} nodes cannot be evaluated yet")
        self.node = node
