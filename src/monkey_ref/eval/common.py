from __future__ import annotations

from typing import Any, Callable, List, Optional, Tuple

from lark import Token

from ..runtime import Environment, MkObject, MonkeyRuntimeError, is_error
from ..tree import Node, is_token, token_kind

EvalFunc = Callable[[Node, Environment], Optional[MkObject]]

def expect_ident_token(node: Any, context: str) -> str:
    if is_token(node) and token_kind(node) == 'IDENT':
        return str(node.value)

    raise MonkeyRuntimeError(f"{context} must be an identifier")

def op_text(node: Any) -> str:
    if isinstance(node, Token):
        return str(node.value)

    raise MonkeyRuntimeError(f"Expected an operator token, got {node!r}")

def eval_expressions(nodes: List[Node], env: Environment, eval_func: EvalFunc) -> Tuple[List[MkObject], Optional[MkObject]]:
    """Evaluate left to right; stop at the first Error and hand it back as the second item."""
    result: List[MkObject] = []

    for node in nodes:
        evaluated = eval_func(node, env)
        if is_error(evaluated):
            return [], evaluated
        result.append(evaluated)

    return result, None
