"""
Recursive Descent Parser for Monkey

Structure:
- Lexer: Token stream from source
- Parser: Recursive descent for statements, Pratt parsing for expressions
- AST: Lark Tree/Token nodes labelled by node kind (see tree.py)
"""

from typing import Callable, Dict, List, Optional

from lark import Token, Tree

from .lexer_rd import tokenize
from .token_types import TT, Tok

# ============================================================================
# Precedence
# ============================================================================

LOWEST = 1
EQUALS = 2       # == !=
LESSGREATER = 3  # < >
SUM = 4          # + -
PRODUCT = 5      # * /
PREFIX = 6       # -x !x
CALL = 7         # f(x)
INDEX = 8        # a[i]

PRECEDENCES: Dict[TT, int] = {
    TT.EQ: EQUALS,
    TT.NEQ: EQUALS,
    TT.LT: LESSGREATER,
    TT.GT: LESSGREATER,
    TT.PLUS: SUM,
    TT.MINUS: SUM,
    TT.STAR: PRODUCT,
    TT.SLASH: PRODUCT,
    TT.LPAR: CALL,
    TT.LSQB: INDEX,
}

INFIX_OPS = {TT.PLUS, TT.MINUS, TT.STAR, TT.SLASH, TT.EQ, TT.NEQ, TT.LT, TT.GT}

INT64_MAX = 2**63 - 1

# ============================================================================
# Parser
# ============================================================================

class ParseError(Exception):
    """Parse error with position info"""
    def __init__(self, message: str, token: Optional[Tok] = None):
        self.message = message
        self.token = token
        self.line = token.line if token else None
        self.column = token.column if token else None
        super().__init__(
            f"{message} at line {token.line}, col {token.column}" if token else message
        )

class Parser:
    """
    Recursive descent parser for Monkey.

    Expression precedence (lowest to highest):
    1. equality (==, !=)
    2. ordering (<, >)
    3. additive (+, -)
    4. multiplicative (*, /)
    5. prefix (-, !)
    6. call (f(x))
    7. index (a[i])
    """

    def __init__(self, tokens: List[Tok]):
        self.tokens = tokens
        self.pos = 0
        self.current = tokens[0] if tokens else Tok(TT.EOF, None, 0, 0)

        self.prefix_parsers: Dict[TT, Callable[[], Tree | Token]] = {
            TT.IDENT: self.parse_leaf,
            TT.INT: self.parse_integer_literal,
            TT.STRING: self.parse_leaf,
            TT.TRUE: self.parse_leaf,
            TT.FALSE: self.parse_leaf,
            TT.BANG: self.parse_prefix_expr,
            TT.MINUS: self.parse_prefix_expr,
            TT.LPAR: self.parse_grouped_expr,
            TT.IF: self.parse_if_expr,
            TT.FN: self.parse_fn_literal,
            TT.LSQB: self.parse_array_literal,
        }

    # ========================================================================
    # Token Navigation
    # ========================================================================

    def peek(self, offset: int = 0) -> Tok:
        """Look ahead at token"""
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return Tok(TT.EOF, None, 0, 0)

    def advance(self) -> Tok:
        """Consume current token and move to next"""
        prev = self.current
        self.pos += 1
        if self.pos < len(self.tokens):
            self.current = self.tokens[self.pos]
        else:
            self.current = Tok(TT.EOF, None, 0, 0)
        return prev

    def check(self, *types: TT) -> bool:
        """Check if current token matches any of the given types"""
        return self.current.type in types

    def match(self, *types: TT) -> bool:
        """Check and consume if current token matches"""
        if self.check(*types):
            self.advance()
            return True
        return False

    def expect(self, token_type: TT, message: Optional[str] = None) -> Tok:
        """Consume token of expected type or raise error"""
        if not self.check(token_type):
            msg = message or f"Expected {token_type.name}, got {self.current.type.name}"
            raise ParseError(msg, self.current)
        return self.advance()

    def as_token(self, tok: Tok) -> Token:
        return Token(tok.type.name, tok.value, line=tok.line, column=tok.column)

    # ========================================================================
    # Top-Level Parsing
    # ========================================================================

    def parse(self) -> Tree:
        """Parse entire program"""
        stmts = []

        while not self.check(TT.EOF):
            if self.match(TT.SEMI):
                continue
            stmts.append(self.parse_statement())

        return Tree('program', stmts)

    # ========================================================================
    # Statements
    # ========================================================================

    def parse_statement(self) -> Tree:
        """
        Parse a single statement.

        Statements are `let` bindings, `return`, or a bare expression;
        each may be followed by one semicolon.
        """
        if self.check(TT.LET):
            stmt = self.parse_let_stmt()
        elif self.check(TT.RETURN):
            stmt = self.parse_return_stmt()
        else:
            stmt = Tree('expr_stmt', [self.parse_expr()])

        self.match(TT.SEMI)
        return stmt

    def parse_let_stmt(self) -> Tree:
        self.expect(TT.LET)
        name = self.as_token(self.expect(TT.IDENT, f"Expected identifier after 'let', got {self.current.type.name}"))
        self.expect(TT.ASSIGN)
        value = self.parse_expr()
        return Tree('let_stmt', [name, value])

    def parse_return_stmt(self) -> Tree:
        self.expect(TT.RETURN)
        if self.check(TT.SEMI, TT.RBRACE, TT.EOF):
            return Tree('return_stmt', [])
        return Tree('return_stmt', [self.parse_expr()])

    def parse_block(self) -> Tree:
        """Parse `{ stmt* }`"""
        self.expect(TT.LBRACE)
        stmts = []

        while not self.check(TT.RBRACE):
            if self.check(TT.EOF):
                raise ParseError("Unterminated block, expected RBRACE", self.current)
            if self.match(TT.SEMI):
                continue
            stmts.append(self.parse_statement())

        self.expect(TT.RBRACE)
        return Tree('block', stmts)

    # ========================================================================
    # Expressions
    # ========================================================================

    def parse_expr(self, precedence: int = LOWEST) -> Tree | Token:
        prefix = self.prefix_parsers.get(self.current.type)
        if prefix is None:
            raise ParseError(f"No prefix parse function for {self.current.type.name}", self.current)

        left = prefix()

        while not self.check(TT.SEMI) and precedence < self.current_precedence():
            if self.check(TT.LPAR):
                left = self.parse_call_expr(left)
            elif self.check(TT.LSQB):
                left = self.parse_index_expr(left)
            else:
                left = self.parse_infix_expr(left)

        return left

    def current_precedence(self) -> int:
        return PRECEDENCES.get(self.current.type, LOWEST)

    def parse_infix_expr(self, left: Tree | Token) -> Tree:
        if not self.check(*INFIX_OPS):
            raise ParseError(f"Unexpected operator {self.current.type.name}", self.current)
        precedence = self.current_precedence()
        op = self.as_token(self.advance())
        right = self.parse_expr(precedence)
        return Tree('infix', [left, op, right])

    def parse_prefix_expr(self) -> Tree:
        op = self.as_token(self.advance())
        operand = self.parse_expr(PREFIX)
        return Tree('prefix', [op, operand])

    def parse_grouped_expr(self) -> Tree | Token:
        self.expect(TT.LPAR)
        expr = self.parse_expr()
        self.expect(TT.RPAR)
        return expr

    def parse_if_expr(self) -> Tree:
        self.expect(TT.IF)
        self.expect(TT.LPAR)
        condition = self.parse_expr()
        self.expect(TT.RPAR)
        children = [condition, self.parse_block()]

        if self.match(TT.ELSE):
            children.append(self.parse_block())

        return Tree('if_expr', children)

    def parse_fn_literal(self) -> Tree:
        self.expect(TT.FN)
        params = self.parse_param_list()
        body = self.parse_block()
        return Tree('fn_literal', [params, body])

    def parse_param_list(self) -> Tree:
        self.expect(TT.LPAR)
        params: List[Token] = []

        if not self.check(TT.RPAR):
            params.append(self.as_token(self.expect(TT.IDENT)))
            while self.match(TT.COMMA):
                params.append(self.as_token(self.expect(TT.IDENT)))

        self.expect(TT.RPAR)
        return Tree('paramlist', params)

    def parse_call_expr(self, callee: Tree | Token) -> Tree:
        args = self.parse_expr_list(TT.LPAR, TT.RPAR)
        return Tree('call', [callee, Tree('args', args)])

    def parse_index_expr(self, left: Tree | Token) -> Tree:
        self.expect(TT.LSQB)
        index = self.parse_expr()
        self.expect(TT.RSQB)
        return Tree('index', [left, index])

    def parse_array_literal(self) -> Tree:
        return Tree('array', self.parse_expr_list(TT.LSQB, TT.RSQB))

    def parse_expr_list(self, open_tt: TT, close_tt: TT) -> List[Tree | Token]:
        self.expect(open_tt)
        items: List[Tree | Token] = []

        if self.match(close_tt):
            return items

        items.append(self.parse_expr())
        while self.match(TT.COMMA):
            items.append(self.parse_expr())

        self.expect(close_tt)
        return items

    # ========================================================================
    # Leaves
    # ========================================================================

    def parse_leaf(self) -> Token:
        return self.as_token(self.advance())

    def parse_integer_literal(self) -> Token:
        tok = self.current
        if int(tok.value) > INT64_MAX:
            raise ParseError(f"Could not parse {tok.value!r} as integer", tok)
        return self.as_token(self.advance())


def parse_source(source: str) -> Tree:
    """Convenience function: tokenize and parse a whole program."""
    return Parser(tokenize(source)).parse()
