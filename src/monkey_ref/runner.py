from __future__ import annotations

import logging
from typing import Optional

from lark import Tree

from .evaluator import evaluate
from .lexer_rd import tokenize
from .parser_rd import Parser
from .runtime import Environment, MkObject, init_builtins

logger = logging.getLogger(__name__)

def parse(src: str) -> Tree:
    return Parser(tokenize(src)).parse()

def run(src: str, env: Optional[Environment]=None) -> Optional[MkObject]:
    """
    Evaluate one whole program.

    - A fresh root environment is used unless `env` is given; passing the
      same one to successive calls keeps earlier bindings visible.
    - Returns the program's final object, or None when the last statement
      was a `let`. Language errors come back as MkError values; LexError and
      ParseError propagate.
    """
    init_builtins()

    ast = parse(src)
    logger.debug("parsed %d top-level statement(s)", len(ast.children))

    if env is None:
        env = Environment()

    return evaluate(ast, env)
