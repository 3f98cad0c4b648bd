from __future__ import annotations

from typing import List, Optional

from lark import Token

from ..runtime import Environment, MkObject, is_error, lookup_builtin, new_error
from ..tree import Node
from .common import EvalFunc, expect_ident_token

def eval_let_stmt(children: List[Node], env: Environment, eval_func: EvalFunc) -> Optional[MkObject]:
    name_node, value_node = children
    name = expect_ident_token(name_node, "Let binding name")

    value = eval_func(value_node, env)
    if is_error(value):
        return value

    env.define(name, value)
    return None

def eval_identifier(tok: Token, env: Environment) -> MkObject:
    name = str(tok.value)

    value = env.get(name)
    if value is not None:
        return value

    builtin = lookup_builtin(name)
    if builtin is not None:
        return builtin

    return new_error(f"identifier not found:{name}")
