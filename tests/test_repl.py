from __future__ import annotations

import pytest
from prompt_toolkit.document import Document

from tests.support.harness import WrkNumber
import wrek.repl as repl_module
from wrek.parser_rd import produce_ast
from wrek.repl import ReplState, _handle_slash, _normalize, eval_line
from wrek.repl_highlight import GROUP_STYLE, WrekLexer, _highlight_line
from wrek.utils import DEBUG_PY_TRACE_ENV, debug_py_trace_enabled


@pytest.fixture
def state() -> ReplState:
    return ReplState()


def test_eval_line_prints_result(state: ReplState, capsys: pytest.CaptureFixture[str]) -> None:
    eval_line("2 + 3 * 4", state)

    assert capsys.readouterr().out == "14\n"


def test_eval_line_hides_null(state: ReplState, capsys: pytest.CaptureFixture[str]) -> None:
    eval_line("let x;", state)

    assert capsys.readouterr().out == ""


def test_eval_line_keeps_session_state(state: ReplState, capsys: pytest.CaptureFixture[str]) -> None:
    eval_line("let total = 10;", state)
    eval_line("total = total / 4", state)

    out = capsys.readouterr().out
    assert out.splitlines() == ["10", "2.5"]
    assert state.env.lookup_var("total") == WrkNumber(2.5)


def test_eval_line_reports_error_and_continues(
    state: ReplState,
    capsys: pytest.CaptureFixture[str],
) -> None:
    eval_line("undefinedThing", state)
    eval_line("1 + 1", state)

    captured = capsys.readouterr()
    assert "Error: Cannot resolve 'undefinedThing'" in captured.err
    assert "Python traceback" not in captured.err
    assert captured.out == "2\n"


def test_eval_line_traceback_when_enabled(
    state: ReplState,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv(DEBUG_PY_TRACE_ENV, "1")

    eval_line("let = 1;", state)

    err = capsys.readouterr().err
    assert err.startswith("Error: ")
    assert "Python traceback:" in err


def test_ast_toggle_echoes_tree(state: ReplState, capsys: pytest.CaptureFixture[str]) -> None:
    assert _handle_slash("/ast", state) is True
    assert state.show_ast is True

    eval_line("x = 1", state)

    out = capsys.readouterr().out
    assert "AST echo: on" in out
    assert "AssignmentExpr" in out

    _handle_slash("/ast", state)
    assert state.show_ast is False


def test_ast_echo_parses_once(
    state: ReplState,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    calls: list[str] = []

    def counting_produce_ast(source: str):
        calls.append(source)
        return produce_ast(source)

    monkeypatch.setattr(repl_module, "produce_ast", counting_produce_ast)
    state.show_ast = True

    eval_line("let v = 2 * 3;", state)

    assert calls == ["let v = 2 * 3;"]
    out = capsys.readouterr().out
    assert "VarDeclaration" in out
    assert out.endswith("6\n")


def test_reset_replaces_environment(state: ReplState, capsys: pytest.CaptureFixture[str]) -> None:
    eval_line("let kept = 1;", state)
    old_env = state.env

    assert _handle_slash("/reset", state) is True

    assert state.env is not old_env
    assert "kept" not in state.env.variables
    assert "Environment reset." in capsys.readouterr().out


@pytest.mark.parametrize(
    "command, expected",
    [
        pytest.param("/py-traceback on", True, id="on"),
        pytest.param("/py-traceback off", False, id="off"),
        pytest.param("/py-traceback", True, id="toggle-from-off"),
    ],
)
def test_py_traceback_command(command: str, expected: bool, state: ReplState) -> None:
    _handle_slash(command, state)

    assert debug_py_trace_enabled() is expected


def test_py_traceback_bad_argument(state: ReplState, capsys: pytest.CaptureFixture[str]) -> None:
    assert _handle_slash("/py-traceback maybe", state) is True

    assert "Usage: /py-traceback" in capsys.readouterr().err
    assert debug_py_trace_enabled() is False


def test_unknown_slash_command(state: ReplState, capsys: pytest.CaptureFixture[str]) -> None:
    assert _handle_slash("/nope", state) is True
    assert "Unknown command: /nope" in capsys.readouterr().err


def test_plain_line_is_not_a_command(state: ReplState) -> None:
    assert _handle_slash("1 / 2", state) is False


def test_normalize_strips_invisible_characters() -> None:
    assert _normalize("let x\u200b = 1;\r") == "let x = 1;"


def _joined(parts) -> str:
    return "".join(text for _style, text in parts)


@pytest.mark.parametrize(
    "line",
    [
        pytest.param("let x = 1;", id="declaration"),
        pytest.param("  { a: .5, b }", id="leading-dot-number"),
        pytest.param("x = 'hi'", id="string"),
        pytest.param("let y = 1 & 2", id="lex-error"),
        pytest.param("", id="empty"),
    ],
)
def test_highlight_preserves_text(line: str) -> None:
    assert _joined(_highlight_line(line)) == line


def test_highlight_styles_token_groups() -> None:
    parts = _highlight_line("const n = 4.5")

    assert (GROUP_STYLE["keyword"], "const") in parts
    assert (GROUP_STYLE["number"], "4.5") in parts


def test_highlight_marks_error_tail() -> None:
    parts = _highlight_line("let y = 1 & 2")

    assert parts[-1] == (GROUP_STYLE["error"], "& 2")
    assert (GROUP_STYLE["keyword"], "let") in parts


def test_highlight_unterminated_string() -> None:
    parts = _highlight_line("x = 'open")

    assert parts[-1] == (GROUP_STYLE["error"], "'open")


def test_lexer_highlights_each_document_line() -> None:
    get_line = WrekLexer().lex_document(Document("let a = 1;\nfn"))

    assert _joined(get_line(0)) == "let a = 1;"
    assert get_line(1) == [(GROUP_STYLE["keyword"], "fn")]
    assert get_line(5) == [("", "")]
