"""
Token Types for the Wrek Parser

Shared between lexer and parser to avoid circular dependencies.
"""

from dataclasses import dataclass
from enum import Enum, auto


class TT(Enum):
    """Token Types - one per lexical category"""

    # Literals
    NUMBER = auto()
    IDENT = auto()
    STRING = auto()

    # Keywords
    LET = auto()
    CONST = auto()
    FN = auto()

    # Operators
    BINARY_OP = auto()  # + - * / %
    EQUALS = auto()  # =

    # Punctuation
    COMMA = auto()
    DOT = auto()
    COLON = auto()
    SEMI = auto()
    LPAR = auto()
    RPAR = auto()
    LBRACE = auto()
    RBRACE = auto()
    LSQB = auto()
    RSQB = auto()

    # Special
    EOF = auto()


EOF_VALUE = "EndOfFile"


@dataclass(frozen=True)
class Tok:
    """Token with position info"""

    type: TT
    value: str
    line: int = 0
    column: int = 0

    def __repr__(self):
        return f"Tok({self.type.name}, {self.value!r}, {self.line}:{self.column})"
