"""Runs .lox files or the interactive shell. Called from the lox executable script.

Basic program flow:
    1. Scanner: turns source text into tokens (lox/front/scanner.py)
    2. Parser: builds statements out of the tokens by recursive descent (lox/front/parser.py)
    3. Interpreter: walks the statements against a chain of lexical scopes (lox/lang/interpreter.py)

Errors from any stage are printed by the ErrorHandler as "[line <n>] Error: <message>". When running a file, scan and
parse errors exit with status 65 and runtime errors with status 70.
"""

import argparse
import os

from lox.lang.error import ErrorHandler
from lox.lang.session import Session
from lox.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="lox", description="Tree-walking interpreter for the Lox language.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--tokens", help="print the scanned tokens before running", action="store_true")
    parser.add_argument("--ast", help="print the parsed statements before running", action="store_true")
    parser.add_argument("-v", "--verbose", help="trace every pipeline step on stderr", action="store_true")
    parser.add_argument("--no-color", help="do not colour diagnostics", action="store_true")
    return parser


def main(argv=None):
    """Runs Lox interpreter. Called from lox executable script."""
    args = build_parser().parse_args(argv)

    if args.no_color:
        os.environ["NO_COLOR"] = "1"  # honoured by termcolor

    with ErrorHandler(fatal=args.file is not None, verbose=args.verbose) as error_handler:
        sess = Session(error_handler, show_tokens=args.tokens, show_ast=args.ast)

        if args.file is not None:
            sess.run_file(args.file)
        else:
            Shell(sess).cmdloop()


if __name__ == "__main__":
    main()
