"""
Lexer for Monkey - Recursive Descent Parser

Tokenizes Monkey source code into a stream of tokens.

Features:
- Single-pass tokenization
- Position tracking (line, column of the first character)
- Double-quoted strings without escape processing
- `//` line comments
"""

from typing import List, Optional

from .token_types import TT, Tok

__all__ = ["Lexer", "LexError", "TT", "Tok", "tokenize"]

# Source text is ASCII outside string literals
def is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'

def is_ident_start(ch: str) -> bool:
    return ('a' <= ch <= 'z') or ('A' <= ch <= 'Z') or ch == '_'

# ============================================================================
# Lexer Implementation
# ============================================================================

class LexError(Exception):
    """Lexical analysis error"""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} at line {line}, col {column}"
        super().__init__(message)


class Lexer:
    """
    Monkey lexer.

    Whitespace (including newlines) only separates tokens; statements are
    delimited by optional semicolons, so no layout tokens are emitted.
    """

    # Keyword mapping
    KEYWORDS = {
        'fn': TT.FN,
        'let': TT.LET,
        'true': TT.TRUE,
        'false': TT.FALSE,
        'if': TT.IF,
        'else': TT.ELSE,
        'return': TT.RETURN,
    }

    # Operator mapping: longest matches first to handle prefixes correctly
    OPERATORS = [
        # Two-character operators
        ('==', TT.EQ),
        ('!=', TT.NEQ),

        # Single-character operators
        ('=', TT.ASSIGN),
        ('+', TT.PLUS),
        ('-', TT.MINUS),
        ('!', TT.BANG),
        ('*', TT.STAR),
        ('/', TT.SLASH),
        ('<', TT.LT),
        ('>', TT.GT),
        (',', TT.COMMA),
        (';', TT.SEMI),
        ('(', TT.LPAR),
        (')', TT.RPAR),
        ('{', TT.LBRACE),
        ('}', TT.RBRACE),
        ('[', TT.LSQB),
        (']', TT.RSQB),
    ]

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Tok] = []

        # Position of the token being scanned
        self.start_line = 1
        self.start_column = 1

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def tokenize(self) -> List[Tok]:
        """Tokenize entire source, return token list"""
        while self.pos < len(self.source):
            self.scan_token()

        self.mark()
        self.emit(TT.EOF, None)
        return self.tokens

    def scan_token(self):
        """Scan next token"""
        if self.skip_whitespace():
            return

        # Comments
        if self.peek() == '/' and self.peek(1) == '/':
            self.skip_comment()
            return

        self.mark()

        if self.peek() == '"':
            self.scan_string()
            return

        if is_digit(self.peek()):
            self.scan_number()
            return

        if is_ident_start(self.peek()):
            self.scan_identifier()
            return

        self.scan_operator()

    # ========================================================================
    # Token Scanners
    # ========================================================================

    def scan_string(self):
        """Scan string literal: "..." (the token value excludes the quotes)"""
        self.advance()  # Opening quote
        value = ''

        while self.pos < len(self.source) and self.peek() != '"':
            value += self.advance()

        if self.pos >= len(self.source):
            raise LexError("Unterminated string", self.start_line, self.start_column)

        self.advance()  # Closing quote
        self.emit(TT.STRING, value)

    def scan_number(self):
        """Scan integer literal"""
        value = ''

        while is_digit(self.peek()):
            value += self.advance()

        # Keep as string; the parser range-checks it
        self.emit(TT.INT, value)

    def scan_identifier(self):
        """Scan identifier or keyword"""
        value = ''

        while is_ident_start(self.peek()) or is_digit(self.peek()):
            value += self.advance()

        token_type = self.KEYWORDS.get(value, TT.IDENT)
        self.emit(token_type, value)

    def scan_operator(self):
        """Scan operators and punctuation"""
        for op_str, op_type in self.OPERATORS:
            if self.source.startswith(op_str, self.pos):
                self.advance(len(op_str))
                self.emit(op_type, op_str)
                return

        ch = self.peek()
        raise LexError(f"Unexpected character '{ch}'", self.line, self.column)

    # ========================================================================
    # Utilities
    # ========================================================================

    def peek(self, offset: int = 0) -> str:
        """Look ahead at character"""
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def advance(self, n: int = 1) -> str:
        """Consume n characters and return them as a string"""
        if n < 0:
            raise ValueError(f"advance() requires n >= 0, got {n}")
        result = ''
        for _ in range(n):
            ch = self.source[self.pos] if self.pos < len(self.source) else '\0'
            result += ch
            self.pos += 1
            if ch == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        return result

    def skip_whitespace(self) -> bool:
        """Skip whitespace and newlines, return True if any skipped"""
        skipped = False
        while self.peek() in (' ', '\t', '\n', '\r'):
            self.advance()
            skipped = True
        return skipped

    def skip_comment(self):
        """Skip comment until end of line"""
        while self.peek() not in ('\n', '\r', '\0'):
            self.advance()

    def mark(self):
        self.start_line = self.line
        self.start_column = self.column

    def emit(self, token_type: TT, value):
        """Emit a token positioned at its first character"""
        tok = Tok(
            type=token_type,
            value=value,
            line=self.start_line,
            column=self.start_column,
        )
        self.tokens.append(tok)


def tokenize(source: str) -> List[Tok]:
    """Convenience function to tokenize source"""
    lexer = Lexer(source)
    return lexer.tokenize()
