"""Built-in functions (len, first, last, rest, push, puts) registered via monkey_ref.runtime."""

from __future__ import annotations

from .runtime import (
    register_builtin, wrong_arity, new_error,
    MkArray, MkInteger, MkObject, MkString, NULL, ARRAY_OBJ,
)

def _expect_array(name: str, arg: MkObject):
    if isinstance(arg, MkArray):
        return None

    return new_error(f"argument to `{name}` must be {ARRAY_OBJ}, got {arg.type_tag}")

@register_builtin("len")
def builtin_len(*args: MkObject) -> MkObject:
    if len(args) != 1:
        return wrong_arity(len(args), 1)

    match args[0]:
        case MkString(value=s):
            # Byte length of the UTF-8 encoding, not code points
            return MkInteger(len(s.encode("utf-8")))
        case MkArray(elements=elements):
            return MkInteger(len(elements))
        case other:
            return new_error(f"argument to `len` not supported, got {other.type_tag}")

@register_builtin("first")
def builtin_first(*args: MkObject) -> MkObject:
    if len(args) != 1:
        return wrong_arity(len(args), 1)

    err = _expect_array("first", args[0])
    if err is not None:
        return err

    elements = args[0].elements
    return elements[0] if elements else NULL

@register_builtin("last")
def builtin_last(*args: MkObject) -> MkObject:
    if len(args) != 1:
        return wrong_arity(len(args), 1)

    err = _expect_array("last", args[0])
    if err is not None:
        return err

    elements = args[0].elements
    return elements[-1] if elements else NULL

@register_builtin("rest")
def builtin_rest(*args: MkObject) -> MkObject:
    if len(args) != 1:
        return wrong_arity(len(args), 1)

    err = _expect_array("rest", args[0])
    if err is not None:
        return err

    elements = args[0].elements
    if not elements:
        return NULL

    return MkArray(elements[1:])

@register_builtin("push")
def builtin_push(*args: MkObject) -> MkObject:
    if len(args) != 2:
        return wrong_arity(len(args), 2)

    err = _expect_array("push", args[0])
    if err is not None:
        return err

    return MkArray(args[0].elements + (args[1],))

@register_builtin("puts")
def builtin_puts(*args: MkObject) -> MkObject:
    for arg in args:
        print(repr(arg))

    return NULL
