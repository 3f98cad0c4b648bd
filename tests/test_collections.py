from __future__ import annotations

import pytest

from tests.support.harness import MkArray, run_program, run_runtime_case

SCENARIOS = [
    pytest.param("[1, 2 * 2, 3 + 3]", ("array", [1, 4, 6]), None, id="array-literal"),
    pytest.param("[]", ("array", []), None, id="array-empty"),
    pytest.param('[1, "two", true]', ("array", [1, "two", True]), None, id="array-mixed-types"),
    pytest.param("[1, 2, 3][0]", ("int", 1), None, id="index-first"),
    pytest.param("[1, 2, 3][1]", ("int", 2), None, id="index-second"),
    pytest.param("let i = 0;[1][i]", ("int", 1), None, id="index-by-binding"),
    pytest.param("[1, 2, 3][1 + 1];", ("int", 3), None, id="index-by-expression"),
    pytest.param("let myArray = [1, 2, 3]; myArray[2];", ("int", 3), None, id="index-bound-array"),
    pytest.param(
        "let myArray = [1, 2, 3]; myArray[0] + myArray[1] + myArray[2];",
        ("int", 6),
        None,
        id="index-sum",
    ),
    pytest.param(
        "let myArray = [1, 2, 3]; let i = myArray[0]; myArray[i]",
        ("int", 2),
        None,
        id="index-by-element",
    ),
    pytest.param("[1, 2, 3][3]", ("null", None), None, id="index-past-end"),
    pytest.param("[1, 2, 3][-1]", ("null", None), None, id="index-negative"),
    pytest.param("[][0]", ("null", None), None, id="index-empty"),
    pytest.param("[[1, 2], [3]][0][1]", ("int", 2), None, id="index-nested"),
    pytest.param("fn() { [7, 8] }()[1]", ("int", 8), None, id="index-call-result"),
    pytest.param("let a = [1, 2, 3]; first(a)", ("int", 1), None, id="first"),
    pytest.param("first([])", ("null", None), None, id="first-empty"),
    pytest.param("last([1, 2, 3])", ("int", 3), None, id="last"),
    pytest.param("last([])", ("null", None), None, id="last-empty"),
    pytest.param("rest([1, 2, 3])", ("array", [2, 3]), None, id="rest"),
    pytest.param("rest([1])", ("array", []), None, id="rest-single"),
    pytest.param("rest([])", ("null", None), None, id="rest-empty"),
    pytest.param("push([1, 2], 3)", ("array", [1, 2, 3]), None, id="push"),
    pytest.param("push([], 1)", ("array", [1]), None, id="push-empty"),
    pytest.param("let a = [1]; push(a, 2); a", ("array", [1]), None, id="push-leaves-input"),
    pytest.param("first(1)", ("error", "argument to `first` must be ARRAY, got INTEGER"), None, id="first-non-array"),
    pytest.param('last("abc")', ("error", "argument to `last` must be ARRAY, got STRING"), None, id="last-non-array"),
    pytest.param("rest(true)", ("error", "argument to `rest` must be ARRAY, got BOOLEAN"), None, id="rest-non-array"),
    pytest.param("push(1, 1)", ("error", "argument to `push` must be ARRAY, got INTEGER"), None, id="push-non-array"),
    pytest.param("push([1])", ("error", "wrong number of arguments. got=1, want=2"), None, id="push-arity"),
    pytest.param("first([1], [2])", ("error", "wrong number of arguments. got=2, want=1"), None, id="first-arity"),
    pytest.param(
        """
        let map = fn(arr, f) {
            let iter = fn(arr, acc) {
                if (len(arr) == 0) { acc } else { iter(rest(arr), push(acc, f(first(arr)))) }
            };
            iter(arr, [])
        };
        map([1, 2, 3], fn(x) { x * 2 })
        """,
        ("array", [2, 4, 6]),
        None,
        id="map-with-builtins",
    ),
    pytest.param(
        """
        let range = fn(n, acc) { if (n == 0) { acc } else { range(n - 1, push(acc, n)) } };
        let map = fn(arr, f) {
            let iter = fn(arr, acc) {
                if (len(arr) == 0) { acc } else { iter(rest(arr), push(acc, f(first(arr)))) }
            };
            iter(arr, [])
        };
        len(map(range(300, []), fn(x) { x * 2 }))
        """,
        ("int", 300),
        None,
        id="map-over-long-array",
    ),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_collections(source: str, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)


def test_index_returns_element_by_reference(env) -> None:
    run_program("let inner = [1]; let outer = [inner];", env)
    element = run_program("outer[0]", env)
    assert element is env.get("inner")


def test_array_renders_elements() -> None:
    result = run_program('[1, "two", true, [3]]')
    assert isinstance(result, MkArray)
    assert repr(result) == "[1, two, true, [3]]"


def test_array_literal_evaluates_left_to_right(capsys) -> None:
    run_program('[puts("a"), puts("b")]')
    assert capsys.readouterr().out == "a\nb\n"
