"""
Lexer for Wrek - Recursive Descent Parser front end

Tokenizes Wrek source code into a flat list of tokens.

Features:
- Single-pass tokenization, whole source at once
- Position tracking (line, column)
- `.5` style numbers normalized to `0.5`
- Always terminated by exactly one EOF token
"""

from typing import List

from .token_types import EOF_VALUE, TT, Tok

# ============================================================================
# Lexer Implementation
# ============================================================================

class Lexer:
    """
    Wrek lexer.

    Scans left to right one character at a time. Any character outside the
    language's alphabet is fatal: no partial token list is returned.
    """

    KEYWORDS = {
        'let': TT.LET,
        'const': TT.CONST,
        'fn': TT.FN,
    }

    # Single-character punctuation
    PUNCTUATION = {
        '(': TT.LPAR,
        ')': TT.RPAR,
        '{': TT.LBRACE,
        '}': TT.RBRACE,
        '[': TT.LSQB,
        ']': TT.RSQB,
        ',': TT.COMMA,
        '.': TT.DOT,
        ':': TT.COLON,
        ';': TT.SEMI,
        '=': TT.EQUALS,
    }

    BINARY_OPERATORS = ('+', '-', '*', '/', '%')

    WHITESPACE = (' ', '\t', '\n', '\r')

    # Token kinds that can end an operand
    OPERAND_END = (TT.IDENT, TT.NUMBER, TT.RPAR, TT.RSQB, TT.RBRACE)

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Tok] = []

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def tokenize(self) -> List[Tok]:
        """Tokenize entire source, return token list"""
        while self.pos < len(self.source):
            self.scan_token()

        self.emit(TT.EOF, EOF_VALUE, self.line, self.column)
        return self.tokens

    def scan_token(self):
        """Scan next token"""
        ch = self.peek()

        if ch in self.WHITESPACE:
            self.skip_whitespace()
            return

        # A dot followed by a digit starts a number (.5 -> 0.5) only where an
        # operand may begin; after an operand it is member access
        if ch.isdigit() or (ch == '.' and self.peek(1).isdigit() and not self.after_operand()):
            self.scan_number()
            return

        if ch in self.PUNCTUATION:
            line, column = self.line, self.column
            self.emit(self.PUNCTUATION[ch], self.advance(), line, column)
            return

        if ch in self.BINARY_OPERATORS:
            line, column = self.line, self.column
            self.emit(TT.BINARY_OP, self.advance(), line, column)
            return

        if ch in ('"', "'"):
            self.scan_string()
            return

        if ch.isalpha():
            self.scan_identifier()
            return

        raise LexError(ch, self.pos, self.line, self.column)

    # ========================================================================
    # Token Scanners
    # ========================================================================

    def scan_number(self):
        """Scan number literal: digits with at most one decimal point"""
        line, column = self.line, self.column
        value = ''
        seen_dot = False

        while self.peek().isdigit() or (self.peek() == '.' and not seen_dot):
            if self.peek() == '.':
                if not value:
                    value = '0'
                seen_dot = True
            value += self.advance()

        self.emit(TT.NUMBER, value, line, column)

    def scan_string(self):
        """Scan string literal: "..." or '...'"""
        line, column = self.line, self.column
        start = self.pos
        quote = self.advance()
        value = ''

        while self.pos < len(self.source) and self.peek() != quote:
            if self.peek() == '\\':
                # Keep escape sequence as-is
                value += self.advance()
                if self.pos < len(self.source):
                    value += self.advance()
            else:
                value += self.advance()

        if self.pos >= len(self.source):
            raise LexError(quote, start, line, column, reason="Unterminated string")

        self.advance()  # Closing quote
        self.emit(TT.STRING, value, line, column)

    def scan_identifier(self):
        """Scan identifier or keyword"""
        line, column = self.line, self.column
        value = ''

        while self.peek().isalpha():
            value += self.advance()

        token_type = self.KEYWORDS.get(value, TT.IDENT)
        self.emit(token_type, value, line, column)

    # ========================================================================
    # Utilities
    # ========================================================================

    def peek(self, offset: int = 0) -> str:
        """Look ahead at character"""
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def advance(self) -> str:
        """Consume one character and return it"""
        ch = self.source[self.pos]
        self.pos += 1

        if ch == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return ch

    def after_operand(self) -> bool:
        return bool(self.tokens) and self.tokens[-1].type in self.OPERAND_END

    def skip_whitespace(self):
        while self.pos < len(self.source) and self.peek() in self.WHITESPACE:
            self.advance()

    def emit(self, token_type: TT, value: str, line: int, column: int):
        self.tokens.append(Tok(type=token_type, value=value, line=line, column=column))


class LexError(Exception):
    """Lexical analysis error: unrecognized character or unterminated string"""

    def __init__(self, char: str, pos: int, line: int, column: int, reason: str = "Unrecognized character"):
        self.char = char
        self.pos = pos
        self.line = line
        self.column = column
        self.reason = reason
        super().__init__(f"{reason} {char!r} at line {line}, col {column}")


def tokenize(source: str) -> List[Tok]:
    """Convenience function to tokenize source"""
    return Lexer(source).tokenize()
