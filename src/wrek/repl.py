"""Interactive REPL for Wrek, powered by prompt_toolkit."""

from __future__ import annotations

import re
import sys
import traceback
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.shortcuts import clear

from .evaluator import evaluate
from .lexer_rd import LexError
from .parser_rd import ParseError, produce_ast
from .repl_highlight import WrekLexer
from .runtime import Environment, WrkNull, WrekRuntimeError, create_global_env
from .tree import dump_ast
from .utils import debug_py_trace_enabled, set_debug_py_trace

# Zero-width and invisible characters to strip from input.
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0\r]")

# Slash commands: name => (description, argument_hint).
_SLASH_CMDS = {
    "/ast": ("Toggle printing the parsed AST", ""),
    "/clear": ("Clear the terminal screen", ""),
    "/py-traceback": ("Toggle Python traceback on errors", "[on|off]"),
    "/reset": ("Reset the REPL environment", ""),
}

_EXIT_WORDS = {"exit", "quit"}


class _SlashCompleter(Completer):
    """Autocomplete slash commands on the prompt."""

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        for cmd, (desc, hint) in _SLASH_CMDS.items():
            if cmd.startswith(text):
                yield Completion(
                    cmd,
                    start_position=-len(text),
                    display_meta=desc,
                )


class ReplState:
    """Mutable session state so slash commands can swap the environment."""

    def __init__(self) -> None:
        self.env: Environment = create_global_env()
        self.show_ast = False


def _handle_slash(line: str, state: ReplState) -> bool:
    """Handle slash commands. Returns True if the line was a command."""
    stripped = line.strip()
    if not stripped.startswith("/"):
        return False

    parts = stripped.split(None, 1)
    cmd = parts[0]
    arg = parts[1] if len(parts) > 1 else ""

    if cmd == "/clear":
        clear()
        return True

    if cmd == "/ast":
        state.show_ast = not state.show_ast
        print(f"AST echo: {'on' if state.show_ast else 'off'}")
        return True

    if cmd == "/py-traceback":
        if arg.lower() in ("on", "1", "true", "yes"):
            set_debug_py_trace(True)
        elif arg.lower() in ("off", "0", "false", "no"):
            set_debug_py_trace(False)
        elif arg == "":
            set_debug_py_trace(None)
        else:
            print("Usage: /py-traceback [on|off]", file=sys.stderr)
            return True

        state_word = "on" if debug_py_trace_enabled() else "off"
        print(f"Python traceback: {state_word}")
        return True

    if cmd == "/reset":
        state.env = create_global_env()
        print("Environment reset.")
        return True

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return True


def _normalize(text: str) -> str:
    """Strip invisible characters from input."""
    return _INVISIBLE_RE.sub("", text)


def eval_line(text: str, state: ReplState) -> None:
    """Evaluate one submission, printing the result or the error."""
    try:
        program = produce_ast(text)
        if state.show_ast:
            print(dump_ast(program), end="")
        result = evaluate(program, state.env)
    except (ParseError, LexError, WrekRuntimeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        if debug_py_trace_enabled() and exc.__traceback__ is not None:
            print("\nPython traceback:", file=sys.stderr)
            print(
                "".join(traceback.format_tb(exc.__traceback__)),
                file=sys.stderr,
                end="",
            )
        return

    if not isinstance(result, WrkNull):
        print(repr(result))


def repl() -> None:
    """Interactive read-eval-print loop with prompt_toolkit."""
    state = ReplState()

    session: PromptSession[str] = PromptSession(
        history=InMemoryHistory(),
        lexer=WrekLexer(),
        completer=_SlashCompleter(),
        complete_while_typing=True,
    )

    print("\nWrek programming language v0.1 - Ctrl-D or 'exit' to leave, / for commands")

    while True:
        try:
            text = session.prompt("Wrek > ")
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("KeyboardInterrupt")
            continue

        text = _normalize(text)
        if not text.strip():
            continue

        if text.strip() in _EXIT_WORDS:
            break

        if _handle_slash(text, state):
            continue

        eval_line(text, state)


if __name__ == "__main__":
    repl()
