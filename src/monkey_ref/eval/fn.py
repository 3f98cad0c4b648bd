from __future__ import annotations

from typing import List

from ..runtime import Environment, MkFunction, MonkeyRuntimeError
from ..tree import Node, is_tree, tree_children, tree_label
from .common import expect_ident_token

def eval_fn_literal(children: List[Node], env: Environment) -> MkFunction:
    if len(children) != 2:
        raise MonkeyRuntimeError("Malformed function literal")

    params_node, body_node = children

    if tree_label(params_node) != 'paramlist' or not is_tree(body_node):
        raise MonkeyRuntimeError("Malformed function literal")

    for p in tree_children(params_node):
        expect_ident_token(p, "Function parameter")

    # Captures env by reference: later `let`s in it stay visible to the closure
    return MkFunction(params=params_node, body=body_node, env=env)
