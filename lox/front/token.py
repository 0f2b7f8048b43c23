"""Token model for the Lox scanner and parser.

A Token is the smallest lexical unit: its kind, the exact source text it was scanned from (its lexeme), the literal
value it carries (only STRING and NUMBER tokens carry one) and the 1-based line it started on.
"""

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Every kind of token the scanner can produce. Values are the source spelling where one exists."""
    # single-character tokens
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    COMMA = ","
    DOT = "."
    MINUS = "-"
    PLUS = "+"
    SEMICOLON = ";"
    SLASH = "/"
    STAR = "*"

    # one or two character tokens
    BANG = "!"
    BANG_EQUAL = "!="
    EQUAL = "="
    EQUAL_EQUAL = "=="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="

    # literals
    IDENTIFIER = "identifier"
    STRING = "string"
    NUMBER = "number"

    # keywords
    AND = "and"
    CLASS = "class"
    ELSE = "else"
    FALSE = "false"
    FOR = "for"
    FUN = "fun"
    IF = "if"
    NIL = "nil"
    OR = "or"
    PRINT = "print"
    RETURN = "return"
    SUPER = "super"
    THIS = "this"
    TRUE = "true"
    VAR = "var"
    WHILE = "while"

    EOF = "eof"


KEYWORDS = {kind.value: kind for kind in (
    TokenType.AND, TokenType.CLASS, TokenType.ELSE, TokenType.FALSE, TokenType.FOR, TokenType.FUN, TokenType.IF,
    TokenType.NIL, TokenType.OR, TokenType.PRINT, TokenType.RETURN, TokenType.SUPER, TokenType.THIS, TokenType.TRUE,
    TokenType.VAR, TokenType.WHILE
)}


@dataclass(frozen=True)
class Token:
    kind: TokenType
    lexeme: str
    literal: object
    line: int

    def __str__(self):
        literal = "" if self.literal is None else f" {self.literal!r}"
        return f"{self.kind.name} {self.lexeme}{literal}"
