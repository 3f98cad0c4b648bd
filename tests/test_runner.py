from __future__ import annotations

import logging
import sys

import pytest

from monkey_ref.evaluator import evaluate
from monkey_ref.runner import parse
from tests.support.harness import (
    Environment,
    LexError,
    MkInteger,
    MonkeyRuntimeError,
    NULL,
    ParseError,
    run_program,
)
from lark import Tree


def test_run_returns_last_value() -> None:
    assert run_program("1; 2; 3") == MkInteger(3)


def test_run_let_only_program_returns_none() -> None:
    assert run_program("let x = 1;") is None


def test_run_empty_program_returns_none() -> None:
    assert run_program("") is None


def test_run_shares_environment_between_calls() -> None:
    env = Environment()
    run_program("let counter = fn(x) { x + 1 };", env)
    assert run_program("counter(41)", env) == MkInteger(42)


def test_run_uses_fresh_environment_by_default() -> None:
    run_program("let leaked = 1;")
    result = run_program("leaked")
    assert result.message == "identifier not found:leaked"


def test_run_propagates_lex_errors() -> None:
    with pytest.raises(LexError):
        run_program('"open')


def test_run_propagates_parse_errors() -> None:
    with pytest.raises(ParseError):
        run_program("let = 1")


def test_evaluate_accepts_parsed_tree() -> None:
    ast = parse("let a = 2; a * 3")
    assert evaluate(ast) == MkInteger(6)


def test_evaluate_rejects_unknown_node_kind() -> None:
    with pytest.raises(MonkeyRuntimeError, match="Unknown node kind 'mystery'"):
        evaluate(Tree("mystery", []))


def test_evaluate_rejects_foreign_objects() -> None:
    with pytest.raises(MonkeyRuntimeError, match="Cannot evaluate int"):
        evaluate(42)  # type: ignore[arg-type]


def test_block_on_its_own_yields_null() -> None:
    assert evaluate(Tree("block", []), Environment()) is NULL


def test_debug_logging(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="monkey_ref"):
        run_program("1 + 1")

    assert any("evaluated program" in rec.getMessage() for rec in caplog.records)


def test_recursion_limit_is_restored_after_evaluation() -> None:
    before = sys.getrecursionlimit()
    run_program("let down = fn(n) { if (n == 0) { 0 } else { down(n - 1) } }; down(100)")
    assert sys.getrecursionlimit() == before
