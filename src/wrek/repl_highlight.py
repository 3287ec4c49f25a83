"""prompt_toolkit lexer for live Wrek syntax highlighting in the REPL."""

from __future__ import annotations

from typing import Callable

from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .lexer_rd import LexError, tokenize
from .token_types import TT, Tok

# Map highlight groups → prompt_toolkit style strings.
GROUP_STYLE = {
    "keyword": "bold ansicyan",
    "number": "ansimagenta",
    "string": "ansigreen",
    "identifier": "",
    "operator": "",
    "punctuation": "",
    "error": "bold ansired",
}

_TT_GROUP = {
    TT.LET: "keyword",
    TT.CONST: "keyword",
    TT.FN: "keyword",
    TT.NUMBER: "number",
    TT.STRING: "string",
    TT.IDENT: "identifier",
    TT.BINARY_OP: "operator",
    TT.EQUALS: "operator",
}


def _token_text(tok: Tok, line: str) -> str:
    if tok.type == TT.STRING:
        # token value drops the quotes; take the span from the source line
        start = tok.column - 1
        return line[start:start + len(tok.value) + 2]
    if tok.type == TT.NUMBER and tok.value.startswith("0.") and line[tok.column - 1] == ".":
        return tok.value[1:]
    return tok.value


def _highlight_line(line: str) -> StyleAndTextTuples:
    """Style one line; unlexable input is shown in the error style from the bad character on."""
    try:
        tokens = tokenize(line)
        bad_at = None
    except LexError as exc:
        # re-lex the valid prefix so it still gets colours
        bad_at = exc.pos
        tokens = tokenize(line[:bad_at]) if bad_at else []

    result: StyleAndTextTuples = []
    pos = 0

    for tok in tokens:
        if tok.type == TT.EOF:
            break

        idx = tok.column - 1
        if idx > pos:
            result.append(("", line[pos:idx]))

        tok_text = _token_text(tok, line)
        style = GROUP_STYLE.get(_TT_GROUP.get(tok.type, "punctuation"), "")
        result.append((style, tok_text))
        pos = idx + len(tok_text)

    if bad_at is not None:
        if bad_at > pos:
            result.append(("", line[pos:bad_at]))
        result.append((GROUP_STYLE["error"], line[bad_at:]))
        pos = len(line)

    # Trailing unstyled text.
    if pos < len(line):
        result.append(("", line[pos:]))

    return result if result else [("", line)]


class WrekLexer(Lexer):
    """prompt_toolkit Lexer that highlights Wrek source using the RD lexer."""

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines

        cache: dict[int, StyleAndTextTuples] = {}

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno not in cache:
                if lineno < len(lines):
                    cache[lineno] = _highlight_line(lines[lineno])
                else:
                    cache[lineno] = [("", "")]

            return cache[lineno]

        return get_line
