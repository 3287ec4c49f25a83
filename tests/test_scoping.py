from __future__ import annotations

import pytest

from tests.support.harness import (
    Environment,
    WrekConstantError,
    WrekRedeclarationError,
    WrekResolutionError,
    WrkNumber,
    run_program,
    run_runtime_case,
)
from wrek.parser_rd import produce_ast
from wrek.evaluator import evaluate

SCENARIOS = [
    pytest.param(
        "let x = 1; x = x + 1; x",
        ("number", 2),
        None,
        id="assign-updates-binding",
    ),
    pytest.param(
        "let x; x",
        ("null", None),
        None,
        id="uninitialized-is-null",
    ),
    pytest.param(
        "let a = 1; let b = a = 5; a + b",
        ("number", 10),
        None,
        id="assignment-yields-value",
    ),
    pytest.param(
        "let a; let b; a = b = 3; a * b",
        ("number", 9),
        None,
        id="chained-assignment",
    ),
    pytest.param(
        "let x = 45;",
        ("number", 45),
        None,
        id="declaration-yields-value",
    ),
    pytest.param(
        "",
        ("null", None),
        None,
        id="empty-program-null",
    ),
    pytest.param(
        "x = 1",
        None,
        WrekResolutionError,
        id="assign-undeclared",
    ),
    pytest.param(
        "let x = 1; let x = 2;",
        None,
        WrekRedeclarationError,
        id="redeclare-same-scope",
    ),
    pytest.param(
        "let true = 1;",
        None,
        WrekRedeclarationError,
        id="redeclare-builtin",
    ),
    pytest.param(
        "null = 1",
        None,
        WrekConstantError,
        id="assign-builtin-constant",
    ),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_scoping(source: str, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)


def test_child_scope_shadows_parent(global_env: Environment) -> None:
    run_program("let x = 1;", global_env)
    inner = global_env.child()

    run_program("let x = 2;", inner)

    assert run_program("x", inner) == WrkNumber(2.0)
    assert run_program("x", global_env) == WrkNumber(1.0)


def test_assignment_writes_owning_scope(global_env: Environment) -> None:
    run_program("let counter = 0;", global_env)
    inner = global_env.child().child()

    run_program("counter = counter + 5", inner)

    assert "counter" not in inner.variables
    assert global_env.variables["counter"] == WrkNumber(5.0)


def test_child_sees_parent_bindings(global_env: Environment) -> None:
    run_program("let a = 3;", global_env)
    inner = global_env.child()

    assert run_program("a * 2", inner) == WrkNumber(6.0)


def test_parent_does_not_see_child_bindings(global_env: Environment) -> None:
    inner = global_env.child()
    run_program("let hidden = 1;", inner)

    with pytest.raises(WrekResolutionError):
        run_program("hidden", global_env)


def test_resolve_returns_declaring_environment() -> None:
    root = Environment()
    root.declare_var("x", WrkNumber(1.0))
    leaf = root.child().child()

    assert leaf.resolve("x") is root
    assert leaf.lookup_var("x") == WrkNumber(1.0)


def test_resolve_unknown_name() -> None:
    root = Environment()

    with pytest.raises(WrekResolutionError) as exc_info:
        root.child().resolve("nope")

    assert exc_info.value.name == "nope"
    assert "Cannot resolve 'nope'" in str(exc_info.value)


def test_constant_in_parent_blocks_assignment_from_child() -> None:
    root = Environment()
    root.declare_var("c", WrkNumber(1.0), constant=True)

    with pytest.raises(WrekConstantError):
        root.child().assign_var("c", WrkNumber(2.0))

    assert root.lookup_var("c") == WrkNumber(1.0)


def test_constant_shadowed_in_child_is_mutable() -> None:
    root = Environment()
    root.declare_var("c", WrkNumber(1.0), constant=True)
    inner = root.child()
    inner.declare_var("c", WrkNumber(2.0))

    inner.assign_var("c", WrkNumber(3.0))

    assert inner.lookup_var("c") == WrkNumber(3.0)
    assert root.lookup_var("c") == WrkNumber(1.0)


def test_declare_returns_value_and_marks_constant() -> None:
    env = Environment()
    value = WrkNumber(4.0)

    assert env.declare_var("k", value, constant=True) is value
    assert "k" in env.constants


def test_session_environment_persists_between_programs(global_env: Environment) -> None:
    evaluate(produce_ast("let total = 1;"), global_env)
    evaluate(produce_ast("total = total + 1"), global_env)

    assert evaluate(produce_ast("total"), global_env) == WrkNumber(2.0)
