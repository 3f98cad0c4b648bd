from __future__ import annotations

from typing import List

from ..runtime import Environment, MkObject, MkReturnValue, NULL, is_error
from ..tree import Node
from .common import EvalFunc
from .helpers import is_truthy

def eval_if_expr(children: List[Node], env: Environment, eval_func: EvalFunc) -> MkObject:
    condition = eval_func(children[0], env)
    if is_error(condition):
        return condition

    # Branches share the surrounding environment
    if is_truthy(condition):
        return eval_func(children[1], env)

    if len(children) > 2:
        return eval_func(children[2], env)

    return NULL

def eval_return_stmt(children: List[Node], env: Environment, eval_func: EvalFunc) -> MkObject:
    if not children:
        return MkReturnValue(NULL)

    value = eval_func(children[0], env)
    if is_error(value):
        return value

    return MkReturnValue(value)
