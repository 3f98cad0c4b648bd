from __future__ import annotations

from typing import List

from ..runtime import Environment, MkArray, MkInteger, MkObject, NULL, apply_function, is_error, new_error
from ..tree import Node, tree_children
from .common import EvalFunc, eval_expressions

def eval_call(children: List[Node], env: Environment, eval_func: EvalFunc) -> MkObject:
    callee_node, args_node = children

    fn = eval_func(callee_node, env)
    if is_error(fn):
        return fn

    args, err = eval_expressions(tree_children(args_node), env, eval_func)
    if err is not None:
        return err

    return apply_function(fn, args)

def eval_index(children: List[Node], env: Environment, eval_func: EvalFunc) -> MkObject:
    left_node, index_node = children

    left = eval_func(left_node, env)
    if is_error(left):
        return left

    index = eval_func(index_node, env)
    if is_error(index):
        return index

    return apply_index(left, index)

def apply_index(left: MkObject, index: MkObject) -> MkObject:
    if not isinstance(left, MkArray) or not isinstance(index, MkInteger):
        return new_error(f"index operator not supported: {left.type_tag}")

    idx = index.value
    if idx < 0 or idx >= len(left.elements):
        return NULL

    return left.elements[idx]
