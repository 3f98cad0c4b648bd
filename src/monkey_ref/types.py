from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Dict, List, Optional, Tuple
from typing_extensions import TypeAlias, TypeGuard
from .tree import Node, render, render_params

# ---------- Value Model (Mk*) ----------

INTEGER_OBJ = "INTEGER"
BOOLEAN_OBJ = "BOOLEAN"
STRING_OBJ = "STRING"
NULL_OBJ = "NULL"
RETURN_VALUE_OBJ = "RETURN_VALUE"
ERROR_OBJ = "ERROR"
FUNCTION_OBJ = "FUNCTION"
ARRAY_OBJ = "ARRAY"
BUILTIN_OBJ = "BUILTIN"

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

def wrap_int64(value: int) -> int:
    """Fold an unbounded Python int into signed 64-bit two's complement."""
    if INT64_MIN <= value <= INT64_MAX:
        return value
    return (value - INT64_MIN) % 2**64 + INT64_MIN

@dataclass(frozen=True)
class MkInteger:
    type_tag: ClassVar[str] = INTEGER_OBJ
    value: int
    def __repr__(self) -> str:
        return str(self.value)

@dataclass(frozen=True, eq=False)
class MkBoolean:
    """Only TRUE and FALSE below ever exist; compare them with `is`."""
    type_tag: ClassVar[str] = BOOLEAN_OBJ
    value: bool
    def __repr__(self) -> str:
        return "true" if self.value else "false"

@dataclass(frozen=True, eq=False)
class MkNull:
    type_tag: ClassVar[str] = NULL_OBJ
    def __repr__(self) -> str:
        return "null"

@dataclass(frozen=True)
class MkString:
    type_tag: ClassVar[str] = STRING_OBJ
    value: str
    def __repr__(self) -> str:
        return self.value

@dataclass(frozen=True)
class MkReturnValue:
    """Wraps the value of a `return` while it unwinds to the call site."""
    type_tag: ClassVar[str] = RETURN_VALUE_OBJ
    value: MkObject
    def __repr__(self) -> str:
        return repr(self.value)

@dataclass(frozen=True)
class MkError:
    type_tag: ClassVar[str] = ERROR_OBJ
    message: str
    def __repr__(self) -> str:
        return f"ERROR: {self.message}"

@dataclass(frozen=True, eq=False)
class MkFunction:
    type_tag: ClassVar[str] = FUNCTION_OBJ
    params: Node                  # paramlist node, borrowed from the AST
    body: Node                    # block node, borrowed from the AST
    env: Environment              # defining environment, shared not copied

    @property
    def param_names(self) -> List[str]:
        return [str(p) for p in self.params.children]

    def __repr__(self) -> str:
        return f"fn({render_params(self.params)}) {{\n{render(self.body)}\n}}"

@dataclass(frozen=True, eq=False)
class MkArray:
    type_tag: ClassVar[str] = ARRAY_OBJ
    elements: Tuple[MkObject, ...]
    def __repr__(self) -> str:
        return "[" + ", ".join(repr(x) for x in self.elements) + "]"

BuiltinFn = Callable[..., 'MkObject']

@dataclass(frozen=True, eq=False)
class MkBuiltin:
    type_tag: ClassVar[str] = BUILTIN_OBJ
    name: str
    fn: BuiltinFn
    def __repr__(self) -> str:
        return "builtin function"

MkObject: TypeAlias = (
    MkInteger
    | MkBoolean
    | MkString
    | MkNull
    | MkReturnValue
    | MkError
    | MkFunction
    | MkArray
    | MkBuiltin
)

# Process-wide singletons; never construct MkBoolean or MkNull elsewhere.
TRUE = MkBoolean(True)
FALSE = MkBoolean(False)
NULL = MkNull()

def native_bool_to_boolean(value: bool) -> MkBoolean:
    return TRUE if value else FALSE

def is_error(value: Optional[MkObject]) -> TypeGuard[MkError]:
    return isinstance(value, MkError)

def new_error(message: str) -> MkError:
    return MkError(message)

# ---------- Environment ----------

class Environment:
    """Name table chained to the enclosing scope; closures hold a reference, never a copy."""

    def __init__(self, outer: Optional[Environment]=None):
        self.outer = outer
        self.store: Dict[str, MkObject] = {}

    def define(self, name: str, val: MkObject) -> MkObject:
        self.store[name] = val
        return val

    def get(self, name: str) -> Optional[MkObject]:
        if name in self.store:
            return self.store[name]

        if self.outer is not None:
            return self.outer.get(name)

        return None

    def enclosed(self) -> Environment:
        return Environment(outer=self)

# ---------- Exceptions ----------

class MonkeyRuntimeError(Exception):
    """Host-level failure: the evaluator was handed a tree it cannot walk.

    Language-level failures are MkError values and never raised.
    """
    line: Optional[int]
    column: Optional[int]

    def __init__(self, message: str):
        super().__init__(message)
        self.line = None
        self.column = None

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        msg = super().__str__()

        if self.line is None:
            return msg

        if self.column is None:
            return f"{msg} (line {self.line})"

        return f"{msg} (line {self.line}, col {self.column})"

