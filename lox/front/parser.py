"""Recursive-descent parser for the Lox language. Turns the scanner's tokens into a list of statements.

Grammar, from lowest to highest precedence:

```
program     ::= declaration* EOF
declaration ::= "var" IDENTIFIER ( "=" expression )? ";" | statement
statement   ::= ifStmt | printStmt | block | exprStmt
ifStmt      ::= "if" "(" expression ")" statement ( "else" statement )?
block       ::= "{" declaration* "}"
printStmt   ::= "print" expression ";"
exprStmt    ::= expression ";"

expression  ::= assignment
assignment  ::= IDENTIFIER "=" assignment | equality
equality    ::= comparison ( ( "==" | "!=" ) comparison )*
comparison  ::= term ( ( ">" | ">=" | "<" | "<=" ) term )*
term        ::= factor ( ( "+" | "-" ) factor )*
factor      ::= unary ( ( "*" | "/" ) unary )*
unary       ::= ( "!" | "-" ) unary | primary
primary     ::= NUMBER | STRING | "true" | "false" | "nil" | IDENTIFIER | "(" expression ")"
```

Every binary level is left-associative. Assignment targets are not a grammar rule of their own: the left-hand side is
parsed as an ordinary expression and checked once an "=" turns up.
"""

from lox.front.syntax import Assign, Binary, Block, Expression, Grouping, If, Literal, Print, Unary, Var, Variable
from lox.front.token import TokenType
from lox.lang.error import ParseError


class Parser:
    """Consumes tokens strictly left to right through an index cursor; never backtracks."""
    # token kinds that start a new statement, used to resynchronise after an error
    STATEMENT_STARTS = {
        TokenType.CLASS, TokenType.FUN, TokenType.VAR, TokenType.FOR, TokenType.IF, TokenType.WHILE, TokenType.PRINT,
        TokenType.RETURN
    }

    def __init__(self, tokens, reporter=None):
        self.tokens = tokens
        self.reporter = reporter

        self.current = 0
        self.errors = []

    def parse(self):
        """Returns the program's statements. On a parse error the parser skips to the next statement so that later
        errors are reported too, and then raises the first error: a program with errors never yields statements.
        """
        statements = []
        try:
            while not self.is_at_end():
                stmt = self.declaration()
                if stmt is not None:
                    statements.append(stmt)
        except RecursionError:
            self.error(self.peek(), "Too much nesting.")

        if self.errors:
            raise self.errors[0]
        return statements

    # statements

    def declaration(self):
        """Parses one declaration, returning None if it contained an error."""
        try:
            if self.match(TokenType.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError:
            self.synchronize()
            return None

    def var_declaration(self):
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()

        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return Var(name, initializer)

    def statement(self):
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.LEFT_BRACE):
            return Block(self.block())
        return self.expression_statement()

    def if_statement(self):
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self.statement()
        else_branch = None
        if self.match(TokenType.ELSE):  # a dangling else binds to the nearest if
            else_branch = self.statement()

        return If(condition, then_branch, else_branch)

    def block(self):
        statements = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)

        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def print_statement(self):
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return Print(value)

    def expression_statement(self):
        expr = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return Expression(expr)

    # expressions

    def expression(self):
        return self.assignment()

    def assignment(self):
        expr = self.equality()

        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()

            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            raise self.error(equals, "Invalid assignment target.")

        return expr

    def _binary(self, operand, *kinds):
        """Parses a left-associative chain of operand separated by any of kinds."""
        expr = operand()
        while self.match(*kinds):
            operator = self.previous()
            right = operand()
            expr = Binary(expr, operator, right)
        return expr

    def equality(self):
        return self._binary(self.comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def comparison(self):
        kinds = (TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL)
        return self._binary(self.term, *kinds)

    def term(self):
        return self._binary(self.factor, TokenType.MINUS, TokenType.PLUS)

    def factor(self):
        return self._binary(self.unary, TokenType.SLASH, TokenType.STAR)

    def unary(self):
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            return Unary(operator, self.unary())
        return self.primary()

    def primary(self):
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(None)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)

        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())

        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        raise self.error(self.peek(), "Expect expression.")

    # token cursor

    def match(self, *kinds):
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def consume(self, kind, msg):
        if self.check(kind):
            return self.advance()
        raise self.error(self.peek(), msg)

    def check(self, kind):
        if self.is_at_end():
            return False
        return self.peek().kind == kind

    def advance(self):
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self):
        return self.peek().kind == TokenType.EOF

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]

    # error recovery

    def error(self, token, msg):
        """Records and reports a ParseError located at token. Returns the error so that callers can raise it."""
        if token.kind == TokenType.EOF:
            msg = f"at end: {msg}"

        error = ParseError(msg, token.line)
        self.errors.append(error)
        if self.reporter is not None:
            self.reporter(error)
        return error

    def synchronize(self):
        """Discards tokens until the start of what is probably the next statement."""
        self.advance()

        while not self.is_at_end():
            if self.previous().kind == TokenType.SEMICOLON:
                return
            if self.peek().kind in Parser.STATEMENT_STARTS:
                return
            self.advance()


def parse(tokens, reporter=None):
    """Returns the statements parsed from tokens, raising the first ParseError if there was one."""
    return Parser(tokens, reporter).parse()
