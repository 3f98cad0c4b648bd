from __future__ import annotations

from typing import List, Optional

from ..runtime import Environment, MkError, MkObject, MkReturnValue, NULL
from ..tree import Node
from .common import EvalFunc

def eval_program(children: List[Node], env: Environment, eval_func: EvalFunc) -> Optional[MkObject]:
    """Run top-level statements in order; a `return` ends the program with its unwrapped value."""
    result: Optional[MkObject] = None

    for child in children:
        result = eval_func(child, env)

        match result:
            case MkReturnValue(value=value):
                return value
            case MkError():
                return result

    return result

def eval_block(children: List[Node], env: Environment, eval_func: EvalFunc) -> MkObject:
    """Run a block in `env` itself; ReturnValue passes up still wrapped for the call site."""
    result: Optional[MkObject] = None

    for child in children:
        result = eval_func(child, env)

        if isinstance(result, (MkReturnValue, MkError)):
            return result

    # Empty block, or one ending in `let`, still has to yield a value
    return NULL if result is None else result
