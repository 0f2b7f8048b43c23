"""Session control for the Lox interpreter: runs source text through scanner, parser and interpreter, either from a
file or one shell line at a time.
"""

from lox.front.parser import Parser
from lox.front.scanner import Scanner
from lox.lang.error import GenericException
from lox.lang.interpreter import Interpreter


class Session:
    """Governs a Lox session. Variables declared at the top level live as long as the session does."""

    def __init__(self, error_handler, show_tokens=False, show_ast=False, output=print):
        self.error_handler = error_handler
        self.show_tokens = show_tokens  # print every scanned token
        self.show_ast = show_ast        # print every parsed statement

        self.output = output
        self.interpreter = Interpreter(output)

    def scan(self, source):
        """Returns the tokens of source. Every scan error is reported as it is found; the first one is raised once
        scanning is done.
        """
        scanner = Scanner(source, self.error_handler.report)
        tokens = scanner.scan_tokens()

        for token in tokens:
            self.error_handler.register_step("token", token)
            if self.show_tokens:
                self.output(str(token))

        if scanner.had_error:
            raise scanner.errors[0]
        return tokens

    def parse(self, tokens):
        """Returns the statements parsed from tokens. Parse errors are reported as they are found and the first one is
        raised.
        """
        statements = Parser(tokens, self.error_handler.report).parse()

        for stmt in statements:
            self.error_handler.register_step("stmt", stmt)
            if self.show_ast:
                self.output(str(stmt))

        return statements

    def run(self, source):
        """Runs source. Raises the ScanError, ParseError or LoxRuntimeError that stopped it, if any."""
        tokens = self.scan(source)
        statements = self.parse(tokens)
        self.interpreter.interpret(statements)

    def run_file(self, path):
        try:
            with open(path, "r", encoding="utf-8") as file:
                source = file.read()
        except OSError:
            raise GenericException(f"'{path}' could not be opened")

        self.run(source)
