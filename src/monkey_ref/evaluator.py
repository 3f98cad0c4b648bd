from __future__ import annotations

import logging
import sys
from typing import Callable, Dict, Optional

from lark import Token, Tree

from .runtime import (
    Environment,
    MkObject,
    MonkeyRuntimeError,
    init_builtins,
)
from .tree import Node, is_token, node_kind, node_position, tree_children

from .eval.blocks import eval_block, eval_program
from .eval.chains import eval_call, eval_index
from .eval.control import eval_if_expr, eval_return_stmt
from .eval.expr import eval_infix, eval_prefix
from .eval.fn import eval_fn_literal
from .eval.let import eval_identifier, eval_let_stmt
from .eval.literals import eval_array_literal, eval_literal_token

logger = logging.getLogger(__name__)

# Each Monkey call level costs about twenty Python frames
EVAL_RECURSION_LIMIT = 20_000

def _maybe_attach_location(exc: MonkeyRuntimeError, node: Node) -> None:
    if exc.line is not None:
        return

    line, column = node_position(node)
    exc.line = line
    exc.column = column

# ---------------- Public API ----------------

def evaluate(ast: Node, env: Optional[Environment]=None) -> Optional[MkObject]:
    """Evaluate a whole tree, usually a `program`, against `env` (a fresh root if omitted)."""
    init_builtins()

    if env is None:
        env = Environment()

    previous_limit = sys.getrecursionlimit()
    if previous_limit < EVAL_RECURSION_LIMIT:
        sys.setrecursionlimit(EVAL_RECURSION_LIMIT)

    try:
        result = eval_node(ast, env)
    finally:
        sys.setrecursionlimit(previous_limit)

    logger.debug("evaluated %s -> %s", getattr(ast, "data", "token"), type(result).__name__)
    return result

# ---------------- Core evaluator ----------------

def eval_node(n: Node, env: Environment) -> Optional[MkObject]:
    # Dispatch is inlined under the try so each node costs one frame here
    try:
        if is_token(n):
            return _eval_token(n, env)

        if not isinstance(n, Tree):
            raise MonkeyRuntimeError(f"Cannot evaluate {type(n).__name__}")

        kind = node_kind(n)
        handler = _NODE_DISPATCH.get(kind)
        if handler is None:
            raise MonkeyRuntimeError(f"Unknown node kind '{kind}'")

        return handler(n, env)
    except MonkeyRuntimeError as e:
        _maybe_attach_location(e, n)
        raise

def _eval_token(t: Token, env: Environment) -> MkObject:
    if t.type == 'IDENT':
        return eval_identifier(t, env)

    return eval_literal_token(t)

def _eval_expr_stmt(n: Tree, env: Environment) -> Optional[MkObject]:
    children = tree_children(n)
    if len(children) != 1:
        raise MonkeyRuntimeError("Expression statement must hold one expression")

    return eval_node(children[0], env)

_NODE_DISPATCH: Dict[str, Callable[[Tree, Environment], Optional[MkObject]]] = {
    'program': lambda n, env: eval_program(n.children, env, eval_node),
    'block': lambda n, env: eval_block(n.children, env, eval_node),
    'expr_stmt': _eval_expr_stmt,
    'let_stmt': lambda n, env: eval_let_stmt(n.children, env, eval_node),
    'return_stmt': lambda n, env: eval_return_stmt(n.children, env, eval_node),
    'prefix': lambda n, env: eval_prefix(n.children, env, eval_node),
    'infix': lambda n, env: eval_infix(n.children, env, eval_node),
    'if_expr': lambda n, env: eval_if_expr(n.children, env, eval_node),
    'fn_literal': lambda n, env: eval_fn_literal(n.children, env),
    'array': lambda n, env: eval_array_literal(n, env, eval_node),
    'index': lambda n, env: eval_index(n.children, env, eval_node),
    'call': lambda n, env: eval_call(n.children, env, eval_node),
}
