"""Error handling for the Lox interpreter. Only GenericExceptions should be encountered during running: if another type
of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Three kinds of error come out of the pipeline and are never conflated: ScanErrors from the scanner, ParseErrors from
the parser and LoxRuntimeErrors from the interpreter. Each one knows the source line it belongs to and prints as
"[line <n>] Error: <message>".
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Base class for every Lox error. line is 0 when the error does not belong to a source line (e.g. a file that
    could not be opened).
    """
    EXIT_CODE = 1

    def __init__(self, msg, line=0, internal=False):
        super().__init__(msg)

        self.msg = msg
        self.line = line
        self.internal = internal
        self.reported = False  # set by ErrorHandler.report so that the error is not printed twice

    @property
    def exit_code(self):
        return self.EXIT_CODE

    def __str__(self):
        if self.line:
            return f"[line {self.line}] Error: {self.msg}"
        return f"Error: {self.msg}"


class ScanError(GenericException):
    """Bad character or unterminated string."""
    EXIT_CODE = 65


class ParseError(GenericException):
    """Unexpected or missing token, or an invalid assignment target."""
    EXIT_CODE = 65


class LoxRuntimeError(GenericException):
    """Type mismatch on an operator or an undefined variable."""
    EXIT_CODE = 70


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom Lox errors."""
    ERROR = "red"
    TRACE = "cyan"

    def __init__(self, fatal=True, verbose=False, stream=None):
        self.fatal = fatal
        self.verbose = verbose
        self.stream = stream  # None means sys.stderr at the time of printing

    def _print(self, msg):
        print(msg, file=self.stream if self.stream is not None else sys.stderr)

    @staticmethod
    def format(error, color=ERROR):
        """Returns error as a single printable line with its location highlighted."""
        if error.line:
            location = colored(f"[line {error.line}] Error:", color, attrs=["bold"])
        else:
            location = colored("Error:", color, attrs=["bold"])

        if error.internal:
            location = colored("[internal] ", color, attrs=["bold"]) + location

        return f"{location} {error.msg}"

    def register_step(self, stage, text):
        """Traces a pipeline step (scanned token, parsed statement...). Only printed in verbose mode."""
        if self.verbose:
            self._print(colored(f"{stage}: ", ErrorHandler.TRACE, attrs=["bold"]) + colored(str(text), attrs=["dark"]))

    def report(self, error):
        """Prints error as soon as it occurs without leaving. Used as the reporter for the scanner and parser, which
        keep going after an error and raise once they are done.
        """
        self._print(ErrorHandler.format(error))
        error.reported = True

    def throw(self, error):
        """Prints error (unless it was already reported) and exits with its exit code if this handler is fatal."""
        if not error.reported:
            self.report(error)

        if self.fatal:
            sys.exit(error.exit_code)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum nesting depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
