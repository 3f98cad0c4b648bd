from __future__ import annotations

from typing import List

from ..runtime import (
    Environment,
    MkInteger,
    MkObject,
    MkString,
    is_error,
    native_bool_to_boolean,
    new_error,
    wrap_int64,
)
from ..tree import Node
from .common import EvalFunc, op_text
from .helpers import is_truthy

# ---------------- Prefix ----------------

def eval_prefix(children: List[Node], env: Environment, eval_func: EvalFunc) -> MkObject:
    op_node, operand_node = children
    op = op_text(op_node)

    right = eval_func(operand_node, env)
    if is_error(right):
        return right

    return apply_prefix_operator(op, right)

def apply_prefix_operator(op: str, right: MkObject) -> MkObject:
    match op:
        case '!':
            return native_bool_to_boolean(not is_truthy(right))
        case '-':
            if not isinstance(right, MkInteger):
                return new_error(f"unknown operator: -{right.type_tag}")
            return MkInteger(wrap_int64(-right.value))

    return new_error(f"unknown operator: {op}{right.type_tag}")

# ---------------- Infix ----------------

def eval_infix(children: List[Node], env: Environment, eval_func: EvalFunc) -> MkObject:
    left_node, op_node, right_node = children
    op = op_text(op_node)

    left = eval_func(left_node, env)
    if is_error(left):
        return left

    right = eval_func(right_node, env)
    if is_error(right):
        return right

    return apply_binary_operator(op, left, right)

def apply_binary_operator(op: str, left: MkObject, right: MkObject) -> MkObject:
    match left, right:
        case MkInteger(), MkInteger():
            return _integer_infix(op, left.value, right.value)
        case MkString(), MkString():
            return _string_infix(op, left.value, right.value)

    if left.type_tag != right.type_tag:
        return new_error(f"type mismatch: {left.type_tag} {op} {right.type_tag}")

    # Singletons make identity the right equality for everything else
    if op == '==':
        return native_bool_to_boolean(left is right)
    if op == '!=':
        return native_bool_to_boolean(left is not right)

    return new_error(f"unknown operator: {left.type_tag} {op} {right.type_tag}")

def _integer_infix(op: str, lhs: int, rhs: int) -> MkObject:
    match op:
        case '+':
            return MkInteger(wrap_int64(lhs + rhs))
        case '-':
            return MkInteger(wrap_int64(lhs - rhs))
        case '*':
            return MkInteger(wrap_int64(lhs * rhs))
        case '/':
            if rhs == 0:
                return new_error(f"division by zero: {lhs} / {rhs}")
            return MkInteger(wrap_int64(_truncating_div(lhs, rhs)))
        case '<':
            return native_bool_to_boolean(lhs < rhs)
        case '>':
            return native_bool_to_boolean(lhs > rhs)
        case '==':
            return native_bool_to_boolean(lhs == rhs)
        case '!=':
            return native_bool_to_boolean(lhs != rhs)

    return new_error(f"unknown operator: INTEGER {op} INTEGER")

def _truncating_div(lhs: int, rhs: int) -> int:
    quotient = abs(lhs) // abs(rhs)
    return quotient if (lhs < 0) == (rhs < 0) else -quotient

def _string_infix(op: str, lhs: str, rhs: str) -> MkObject:
    if op == '+':
        return MkString(lhs + rhs)

    return new_error(f"unknown operator: STRING {op} STRING")
