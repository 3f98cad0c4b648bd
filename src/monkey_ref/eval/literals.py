from __future__ import annotations

from lark import Token, Tree

from ..runtime import Environment, MkArray, MkInteger, MkObject, MkString, MonkeyRuntimeError, TRUE, FALSE
from ..tree import tree_children
from .common import EvalFunc, eval_expressions

def eval_literal_token(tok: Token) -> MkObject:
    match tok.type:
        case 'INT':
            return MkInteger(int(tok.value))
        case 'STRING':
            return MkString(str(tok.value))
        case 'TRUE':
            return TRUE
        case 'FALSE':
            return FALSE

    raise MonkeyRuntimeError(f"Unknown literal token {tok.type}")

def eval_array_literal(node: Tree, env: Environment, eval_func: EvalFunc) -> MkObject:
    elements, err = eval_expressions(tree_children(node), env, eval_func)
    if err is not None:
        return err

    return MkArray(tuple(elements))
