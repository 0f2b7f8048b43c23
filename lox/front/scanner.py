"""Lexical analysis for the Lox language: turns raw source text into a list of Tokens.

Scanning never raises. A bad character or an unterminated string is recorded as a ScanError (and handed to the
reporter, if any, as soon as it is found) and scanning carries on with the next character, so one typo does not hide
the rest of the file. Callers check Scanner.had_error afterwards.
"""

from lox.front.token import KEYWORDS, Token, TokenType
from lox.lang.error import ScanError


class Scanner:
    """Single left-to-right pass over source, tracking start/current offsets and the current line."""
    SINGLE = {
        "(": TokenType.LEFT_PAREN,
        ")": TokenType.RIGHT_PAREN,
        "{": TokenType.LEFT_BRACE,
        "}": TokenType.RIGHT_BRACE,
        ",": TokenType.COMMA,
        ".": TokenType.DOT,
        "-": TokenType.MINUS,
        "+": TokenType.PLUS,
        ";": TokenType.SEMICOLON,
        "*": TokenType.STAR,
    }
    # char: (kind without trailing "=", kind with trailing "=")
    DOUBLE = {
        "!": (TokenType.BANG, TokenType.BANG_EQUAL),
        "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
        "<": (TokenType.LESS, TokenType.LESS_EQUAL),
        ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
    }
    WHITESPACE = " \r\t"

    def __init__(self, source, reporter=None):
        self.source = source
        self.reporter = reporter

        self.tokens = []
        self.errors = []

        self.start = 0
        self.current = 0
        self.line = 1

    @property
    def had_error(self):
        return bool(self.errors)

    def scan_tokens(self):
        """Scans the whole source and returns its tokens, always terminated by an EOF token."""
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        return self.tokens

    def scan_token(self):
        char = self.advance()

        if char in Scanner.SINGLE:
            self.add_token(Scanner.SINGLE[char])
        elif char in Scanner.DOUBLE:
            single, double = Scanner.DOUBLE[char]
            self.add_token(double if self.match("=") else single)
        elif char == "/":
            if self.match("/"):
                while self.peek() != "\n" and not self.is_at_end():
                    self.advance()
            else:
                self.add_token(TokenType.SLASH)
        elif char in Scanner.WHITESPACE:
            pass
        elif char == "\n":
            self.line += 1
        elif char == "\"":
            self.string()
        elif Scanner.is_digit(char):
            self.number()
        elif Scanner.is_alpha(char):
            self.identifier()
        else:
            self.error(f"Unexpected character: {char}")

    def string(self):
        while self.peek() != "\"" and not self.is_at_end():
            if self.peek() == "\n":
                self.line += 1
            self.advance()

        if self.is_at_end():
            self.error("Unterminated string.")
            return

        self.advance()  # closing quote
        self.add_token(TokenType.STRING, self.source[self.start + 1:self.current - 1])

    def number(self):
        while Scanner.is_digit(self.peek()):
            self.advance()

        # a trailing "." is left for the next token unless a digit follows it
        if self.peek() == "." and Scanner.is_digit(self.peek_next()):
            self.advance()
            while Scanner.is_digit(self.peek()):
                self.advance()

        self.add_token(TokenType.NUMBER, float(self.source[self.start:self.current]))

    def identifier(self):
        while Scanner.is_alphanumeric(self.peek()):
            self.advance()

        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def error(self, msg):
        error = ScanError(msg, self.line)
        self.errors.append(error)
        if self.reporter is not None:
            self.reporter(error)

    def add_token(self, kind, literal=None):
        self.tokens.append(Token(kind, self.source[self.start:self.current], literal, self.line))

    def advance(self):
        self.current += 1
        return self.source[self.current - 1]

    def match(self, expected):
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self):
        return "\0" if self.is_at_end() else self.source[self.current]

    def peek_next(self):
        return "\0" if self.current + 1 >= len(self.source) else self.source[self.current + 1]

    def is_at_end(self):
        return self.current >= len(self.source)

    @staticmethod
    def is_digit(char):
        return "0" <= char <= "9"

    @staticmethod
    def is_alpha(char):
        return "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"

    @staticmethod
    def is_alphanumeric(char):
        return Scanner.is_alpha(char) or Scanner.is_digit(char)


def scan(source, reporter=None):
    """Returns the tokens of source. Use a Scanner directly to inspect the errors found along the way."""
    return Scanner(source, reporter).scan_tokens()
