from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from .evaluator import evaluate
from .lexer_rd import LexError
from .parser_rd import ParseError, produce_ast
from .runtime import Environment, WrkValue, WrekRuntimeError, create_global_env
from .tree import dump_ast

def run(src: str, env: Optional[Environment]=None) -> WrkValue:
    """Lex, parse and evaluate `src`; a fresh global environment is used when none is given."""
    if env is None:
        env = create_global_env()

    return repl_eval(src, env)

def repl_eval(src: str, env: Environment) -> WrkValue:
    """Evaluate one REPL submission against the session's persistent environment."""
    return evaluate(produce_ast(src), env)

def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - None or "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal source.
    """

    if arg is None or arg == "-":
        data = sys.stdin.read()
        if not data:
            raise SystemExit("No input provided on stdin")
        return data

    candidate = Path(arg)
    if candidate.exists():
        return candidate.read_text(encoding="utf-8")

    return arg

def main() -> None:
    show_ast = False
    arg = None

    for token in sys.argv[1:]:
        if token == "--ast":
            show_ast = True
            continue

        if arg is None:
            arg = token
        else:
            raise SystemExit(f"Unexpected argument: {token}")

    source = _load_source(arg or "-")

    try:
        if show_ast:
            print(dump_ast(produce_ast(source)), end="")
        else:
            print(repr(run(source)))
    except (LexError, ParseError, WrekRuntimeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from None

if __name__ == "__main__":
    main()
