"""
Token Types for the Monkey Parser

Shared between lexer and parser to avoid circular dependencies.
"""

from typing import Any
from dataclasses import dataclass
from enum import Enum, auto


class TT(Enum):
    """Token Types - one per terminal of the language"""

    # Literals
    INT = auto()
    STRING = auto()
    IDENT = auto()

    # Keywords
    FN = auto()
    LET = auto()
    TRUE = auto()
    FALSE = auto()
    IF = auto()
    ELSE = auto()
    RETURN = auto()

    # Operators
    ASSIGN = auto()
    PLUS = auto()
    MINUS = auto()
    BANG = auto()
    STAR = auto()
    SLASH = auto()
    LT = auto()
    GT = auto()
    EQ = auto()
    NEQ = auto()

    # Delimiters
    COMMA = auto()
    SEMI = auto()
    LPAR = auto()
    RPAR = auto()
    LBRACE = auto()
    RBRACE = auto()
    LSQB = auto()
    RSQB = auto()

    # Special
    EOF = auto()


@dataclass
class Tok:
    """Token with position info"""

    type: TT
    value: Any
    line: int = 0
    column: int = 0

    def __repr__(self):
        return f"Tok({self.type.name}, {self.value!r}, {self.line}:{self.column})"
