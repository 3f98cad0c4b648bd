from __future__ import annotations

import importlib
import logging
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

from .types import (
    MkInteger, MkBoolean, MkString, MkNull, MkReturnValue, MkError,
    MkFunction, MkArray, MkBuiltin, MkObject, BuiltinFn,
    TRUE, FALSE, NULL, Environment, MonkeyRuntimeError,
    native_bool_to_boolean, is_error, new_error, wrap_int64,
    INTEGER_OBJ, BOOLEAN_OBJ, STRING_OBJ, NULL_OBJ, RETURN_VALUE_OBJ,
    ERROR_OBJ, FUNCTION_OBJ, ARRAY_OBJ, BUILTIN_OBJ,
)

logger = logging.getLogger(__name__)

_BUILTIN_TABLE: Dict[str, MkBuiltin] = {}

# Read-only view handed to the evaluator; only register_builtin writes the table.
BUILTINS: Mapping[str, MkBuiltin] = MappingProxyType(_BUILTIN_TABLE)

_BUILTINS_INITIALIZED = False

def init_builtins() -> None:
    """Load the stdlib module (idempotent) so its register_builtin hooks run."""
    global _BUILTINS_INITIALIZED

    if _BUILTINS_INITIALIZED:
        return

    importlib.import_module("monkey_ref.stdlib")
    _BUILTINS_INITIALIZED = True
    logger.debug("builtins registered: %s", ", ".join(sorted(_BUILTIN_TABLE)))

def register_builtin(name: str):
    def dec(fn: BuiltinFn):
        if name in _BUILTIN_TABLE:
            raise MonkeyRuntimeError(f"Builtin '{name}' registered twice")
        _BUILTIN_TABLE[name] = MkBuiltin(name=name, fn=fn)
        return fn

    return dec

def lookup_builtin(name: str) -> Optional[MkBuiltin]:
    init_builtins()
    return BUILTINS.get(name)

def wrong_arity(got: int, want: int) -> MkError:
    return new_error(f"wrong number of arguments. got={got}, want={want}")

# ---------- Calls ----------

def apply_function(fn: MkObject, args: List[MkObject]) -> MkObject:
    """Call a Function or Builtin with already-evaluated arguments."""
    match fn:
        case MkFunction():
            if len(args) != len(fn.param_names):
                return wrong_arity(len(args), len(fn.param_names))

            from .evaluator import eval_node  # local import to avoid cycle
            extended_env = extend_function_env(fn, args)
            evaluated = eval_node(fn.body, extended_env)
            return unwrap_return_value(evaluated)
        case MkBuiltin():
            return fn.fn(*args)
        case _:
            return new_error(f"not a function: {fn.type_tag}")

def extend_function_env(fn: MkFunction, args: List[MkObject]) -> Environment:
    # Child of the closure's environment, not the caller's
    env = fn.env.enclosed()

    for name, val in zip(fn.param_names, args):
        env.define(name, val)

    return env

def unwrap_return_value(obj: Optional[MkObject]) -> MkObject:
    if isinstance(obj, MkReturnValue):
        return obj.value

    if obj is None:
        return NULL

    return obj
