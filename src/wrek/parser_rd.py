"""
Recursive Descent Parser for Wrek

Structure:
- Lexer: the whole source is tokenized up front
- Parser: recursive descent, one method per precedence level
- AST: dataclass nodes from `tree`
"""

from typing import List, Optional

from .lexer_rd import LexError, tokenize
from .token_types import EOF_VALUE, TT, Tok
from .tree import (
    AssignmentExpr,
    BinaryExpr,
    CallExpr,
    Expr,
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

# ============================================================================
# Parser
# ============================================================================

class ParseError(Exception):
    """Parse error: what was expected and the token actually found"""
    def __init__(self, message: str, token: Optional[Tok] = None, expected: Optional[str] = None):
        self.message = message
        self.token = token
        self.expected = expected
        self.line = token.line if token else None
        self.column = token.column if token else None
        super().__init__(
            f"{message} at line {token.line}, col {token.column}" if token else message
        )

class Parser:
    """
    Recursive descent parser for Wrek.

    Expression precedence (lowest to highest):
    1. assignment (=, right associative)
    2. object literal ({ key: value })
    3. additive (+, -)
    4. multiplicative (*, /, %)
    5. call / member (f(args), obj.field, obj[expr])
    6. primary (identifiers, numbers, parens)
    """

    ADDITIVE_OPS = ('+', '-')
    MULTIPLICATIVE_OPS = ('*', '/', '%')

    def __init__(self, tokens: List[Tok]):
        self.tokens = tokens
        self.pos = 0
        self.current = tokens[0] if tokens else Tok(TT.EOF, EOF_VALUE)

    # ========================================================================
    # Token Navigation
    # ========================================================================

    def advance(self) -> Tok:
        """Consume current token and move to next"""
        prev = self.current
        # EOF is never consumed past
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
            self.current = self.tokens[self.pos]
        return prev

    def check(self, *types: TT) -> bool:
        """Check if current token matches any of the given types"""
        return self.current.type in types

    def check_op(self, *ops: str) -> bool:
        return self.current.type == TT.BINARY_OP and self.current.value in ops

    def match(self, *types: TT) -> bool:
        """Check and consume if current token matches"""
        if self.check(*types):
            self.advance()
            return True
        return False

    def expect(self, token_type: TT, message: Optional[str] = None) -> Tok:
        """Consume token of expected type or raise error"""
        if not self.check(token_type):
            msg = message or f"Expected {token_type.name}, got {self.current.type.name}"
            raise ParseError(msg, self.current, expected=token_type.name)
        return self.advance()

    # ========================================================================
    # Top-Level Parsing
    # ========================================================================

    def parse(self) -> Program:
        """Parse entire program"""
        program = Program()

        while not self.check(TT.EOF):
            program.body.append(self.parse_statement())

        return program

    # ========================================================================
    # Statements
    # ========================================================================

    def parse_statement(self) -> Stmt:
        if self.check(TT.LET, TT.CONST):
            return self.parse_var_declaration()
        if self.check(TT.FN):
            return self.parse_fn_declaration()

        expr = self.parse_expr()
        # Expression statements may carry one trailing semicolon
        self.match(TT.SEMI)
        return expr

    def parse_var_declaration(self) -> VarDeclaration:
        """
        (let | const) IDENT ;
        (let | const) IDENT = expr ;
        """
        keyword = self.advance()
        is_constant = keyword.type == TT.CONST
        identifier = self.expect(
            TT.IDENT,
            f"Expected identifier name following '{keyword.value}'",
        ).value

        if self.check(TT.SEMI):
            if is_constant:
                raise ParseError(
                    f"Constant '{identifier}' must be initialized",
                    self.current,
                    expected=TT.EQUALS.name,
                )
            self.advance()
            return VarDeclaration(identifier=identifier, constant=False)

        self.expect(TT.EQUALS, "Expected '=' or ';' following identifier in declaration")
        value = self.parse_expr()
        self.expect(TT.SEMI, "Variable declaration must end with ';'")

        return VarDeclaration(identifier=identifier, constant=is_constant, value=value)

    def parse_fn_declaration(self) -> FunctionDeclaration:
        """fn IDENT ( params ) { body }"""
        self.expect(TT.FN)
        name = self.expect(TT.IDENT, "Expected function name following 'fn'").value

        params: List[str] = []
        params_start = self.current
        for arg in self.parse_args():
            if not isinstance(arg, Identifier):
                raise ParseError("Function parameters must be identifiers", params_start, expected=TT.IDENT.name)
            params.append(arg.symbol)

        self.expect(TT.LBRACE, "Expected '{' to open function body")
        body: List[Stmt] = []

        while not self.check(TT.EOF, TT.RBRACE):
            body.append(self.parse_statement())

        self.expect(TT.RBRACE, "Expected '}' to close function body")
        return FunctionDeclaration(name=name, parameters=params, body=body)

    # ========================================================================
    # Expressions
    # ========================================================================

    def parse_expr(self) -> Expr:
        return self.parse_assignment_expr()

    def parse_assignment_expr(self) -> Expr:
        """Parse assignment: target = value (right associative)"""
        left = self.parse_object_expr()

        if self.match(TT.EQUALS):
            # The target is checked by the evaluator, not here
            value = self.parse_assignment_expr()
            return AssignmentExpr(assignee=left, value=value)

        return left

    def parse_object_expr(self) -> Expr:
        """Parse object literal: { key, key: value, }"""
        if not self.check(TT.LBRACE):
            return self.parse_add_expr()

        self.advance()
        properties: List[Property] = []

        while not self.check(TT.EOF, TT.RBRACE):
            key = self.expect(TT.IDENT, "Expected identifier for object property key").value

            # Shorthand: { key, } or { key }
            if self.match(TT.COMMA):
                properties.append(Property(key=key))
                continue
            if self.check(TT.RBRACE):
                properties.append(Property(key=key))
                continue

            self.expect(TT.COLON, "Expected ':' after object property key")
            value = self.parse_expr()
            properties.append(Property(key=key, value=value))

            if not self.check(TT.RBRACE):
                self.expect(TT.COMMA, "Expected ',' or '}' after object property value")

        self.expect(TT.RBRACE, "Expected '}' to close object literal")
        return ObjectLiteral(properties=properties)

    def parse_add_expr(self) -> Expr:
        """Parse addition/subtraction: expr + expr"""
        left = self.parse_mul_expr()

        while self.check_op(*self.ADDITIVE_OPS):
            op = self.advance()
            right = self.parse_mul_expr()
            left = BinaryExpr(left=left, right=right, operator=op.value)

        return left

    def parse_mul_expr(self) -> Expr:
        """Parse multiplication/division/remainder: expr * expr"""
        left = self.parse_call_member_expr()

        while self.check_op(*self.MULTIPLICATIVE_OPS):
            op = self.advance()
            right = self.parse_call_member_expr()
            left = BinaryExpr(left=left, right=right, operator=op.value)

        return left

    def parse_call_member_expr(self) -> Expr:
        member = self.parse_member_expr()

        if self.check(TT.LPAR):
            return self.parse_call_expr(member)

        return member

    def parse_call_expr(self, caller: Expr) -> Expr:
        call: Expr = CallExpr(caller=caller, args=self.parse_args())

        # f()() chains
        while self.check(TT.LPAR):
            call = CallExpr(caller=call, args=self.parse_args())

        return call

    def parse_args(self) -> List[Expr]:
        """Parse parenthesized argument list: ( expr, expr )"""
        self.expect(TT.LPAR, "Expected '('")
        args = [] if self.check(TT.RPAR) else self.parse_arg_list()
        self.expect(TT.RPAR, "Expected ')' to close argument list")
        return args

    def parse_arg_list(self) -> List[Expr]:
        args = [self.parse_assignment_expr()]

        while self.match(TT.COMMA):
            args.append(self.parse_assignment_expr())

        return args

    def parse_member_expr(self) -> Expr:
        """
        Parse member access:
        - field access: expr.field
        - computed access: expr[expr]
        """
        obj = self.parse_primary_expr()

        while self.check(TT.DOT, TT.LSQB):
            op = self.advance()

            if op.type == TT.DOT:
                prop_tok = self.current
                prop = self.parse_primary_expr()
                if not isinstance(prop, Identifier):
                    raise ParseError("Expected field name after '.'", prop_tok, expected=TT.IDENT.name)
                obj = MemberExpr(object=obj, property=prop, computed=False)
            else:
                prop = self.parse_expr()
                self.expect(TT.RSQB, "Expected ']' to close computed member access")
                obj = MemberExpr(object=obj, property=prop, computed=True)

        return obj

    def parse_primary_expr(self) -> Expr:
        """
        Parse primary expressions:
        - Identifiers
        - Numbers
        - Parenthesized expressions
        """
        tok = self.current

        if tok.type == TT.IDENT:
            self.advance()
            return Identifier(symbol=tok.value)

        if tok.type == TT.NUMBER:
            self.advance()
            return NumericLiteral(value=float(tok.value))

        if tok.type == TT.LPAR:
            self.advance()
            value = self.parse_expr()
            self.expect(TT.RPAR, "Expected ')' to close parenthesized expression")
            return value

        raise ParseError(f"Unexpected token {tok.type.name} {tok.value!r}", tok, expected="expression")

# ============================================================================
# Entry points
# ============================================================================

def produce_ast(source: str) -> Program:
    """
    Parse Wrek source code to a Program AST.

    Tokenizes the whole source first; raises LexError or ParseError on the
    first malformed construct.
    """
    parser = Parser(tokenize(source))
    return parser.parse()


parse_source = produce_ast


if __name__ == '__main__':
    import sys

    from .tree import dump_ast

    args = [arg for arg in sys.argv[1:] if not arg.startswith('--')]

    if len(args) > 0 and args[0] != '-':
        with open(args[0], 'r') as f:
            source = f.read()
    else:
        source = sys.stdin.read()

    try:
        print(dump_ast(produce_ast(source)))
    except (LexError, ParseError) as e:
        print(f"Parse error: {e}", file=sys.stderr)
        sys.exit(1)
