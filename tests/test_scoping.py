from __future__ import annotations

from textwrap import dedent

import pytest

from tests.support.harness import Environment, MkInteger, run_program, run_runtime_case, verify_result

SCENARIOS = [
    pytest.param("let a = 5; a;", ("int", 5), None, id="let-basic"),
    pytest.param("let a = 5 * 5; a;", ("int", 25), None, id="let-expression"),
    pytest.param("let a = 5; let b = a; b;", ("int", 5), None, id="let-from-binding"),
    pytest.param("let a = 5; let b = a; let c = a + b + 5; c;", ("int", 15), None, id="let-chain"),
    pytest.param("let a = 1; let a = 2; a", ("int", 2), None, id="let-redeclare-overwrites"),
    pytest.param(
        "let x = 1; let f = fn() { x }; let x = 2; f()",
        ("int", 2),
        None,
        id="closure-sees-later-outer-let",
    ),
    pytest.param(
        "let x = 10; let f = fn(x) { x }; f(1) + x",
        ("int", 11),
        None,
        id="param-shadows-outer",
    ),
    pytest.param(
        "let f = fn() { let inner = 3; inner }; f(); inner",
        ("error", "identifier not found:inner"),
        None,
        id="call-locals-do-not-leak",
    ),
    pytest.param(
        dedent(
            """\
            let x = "global";
            let show = fn() { x };
            let caller = fn() { let x = "local"; show() };
            caller()
        """
        ),
        ("string", "global"),
        None,
        id="lexical-not-dynamic",
    ),
    pytest.param(
        dedent(
            """\
            let make = fn() {
                let get = fn() { n };
                let n = 7;
                get
            };
            make()()
        """
        ),
        ("int", 7),
        None,
        id="closures-share-defining-env",
    ),
    pytest.param("let len = fn(x) { 42 }; len([1])", ("int", 42), None, id="binding-shadows-builtin"),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_scoping(source: str, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)


def test_environment_lookup_walks_outer_chain() -> None:
    root = Environment()
    root.define("a", MkInteger(1))
    child = root.enclosed()
    child.define("b", MkInteger(2))

    assert child.get("a") == MkInteger(1)
    assert child.get("b") == MkInteger(2)
    assert root.get("b") is None
    assert child.get("missing") is None


def test_environment_define_is_local() -> None:
    root = Environment()
    root.define("a", MkInteger(1))
    child = root.enclosed()
    child.define("a", MkInteger(2))

    assert child.get("a") == MkInteger(2)
    assert root.get("a") == MkInteger(1)


def test_shared_environment_across_runs(env) -> None:
    run_program("let counter = 41;", env)
    verify_result(run_program("counter + 1", env), "int", 42)


def test_function_call_env_is_child_of_closure_env(env) -> None:
    run_program("let mk = fn(a) { fn() { a } }; let g = mk(3);", env)
    g = env.get("g")
    assert g.env.get("a") == MkInteger(3)
    assert g.env.outer is env
