import unittest

from lox.front.parser import Parser, parse
from lox.front.scanner import scan
from lox.front.syntax import Assign, Binary, Block, Expression, Grouping, If, Literal, Print, Unary, Var, Variable
from lox.front.token import Token, TokenType
from lox.lang.error import ParseError


def parse_source(source):
    return parse(scan(source))


def parse_expr(source):
    """Parses source as a single expression statement and returns the expression."""
    stmt, = parse_source(source + ";")
    return stmt.expression


class ExpressionTestCase(unittest.TestCase):

    def test_precedence(self):
        cases = {
            "1 + 2 * 3": "(+ 1.0 (* 2.0 3.0))",
            "1 * 2 + 3": "(+ (* 1.0 2.0) 3.0)",
            "(1 + 2) * 3": "(* (group (+ 1.0 2.0)) 3.0)",
            "1 - 2 - 3": "(- (- 1.0 2.0) 3.0)",
            "8 / 4 / 2": "(/ (/ 8.0 4.0) 2.0)",
            "-1 - -2": "(- (- 1.0) (- 2.0))",
            "!!true": "(! (! true))",
            "1 < 2 == 3 >= 4": "(== (< 1.0 2.0) (>= 3.0 4.0))",
            "a != b == c": "(== (!= a b) c)",
            "1 + 2 > 3 * 4": "(> (+ 1.0 2.0) (* 3.0 4.0))",
            "-a * b": "(* (- a) b)",
            "\"x\" + nil": "(+ \"x\" nil)",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(parse_expr(case)), case)

    def test_primary(self):
        cases = {
            "12.5": Literal(12.5),
            "\"text\"": Literal("text"),
            "true": Literal(True),
            "false": Literal(False),
            "nil": Literal(None),
            "(nil)": Grouping(Literal(None)),
            "name": Variable(Token(TokenType.IDENTIFIER, "name", None, 1)),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse_expr(case), case)

    def test_binary_keeps_operator(self):
        expr = parse_expr("1 +\n2")
        self.assertIsInstance(expr, Binary)
        self.assertEqual(Token(TokenType.PLUS, "+", None, 1), expr.operator)

        expr = parse_expr("-\nx")
        self.assertIsInstance(expr, Unary)
        self.assertEqual(1, expr.operator.line)
        self.assertEqual(2, expr.right.name.line)

    def test_assignment(self):
        expr = parse_expr("a = 1")
        self.assertEqual(Assign(Token(TokenType.IDENTIFIER, "a", None, 1), Literal(1.0)), expr)

        # right-associative
        self.assertEqual("(= a (= b 2.0))", str(parse_expr("a = b = 2")))
        self.assertEqual("(= a (+ b 1.0))", str(parse_expr("a = b + 1")))

    def test_invalid_assignment_target(self):
        should_raise = ["1 = 2;", "(a) = 1;", "a + b = c;", "-a = 1;", "\"s\" = 1;"]
        for case in should_raise:
            with self.assertRaises(ParseError, msg=case) as context:
                parse_source(case)
            self.assertEqual("Invalid assignment target.", context.exception.msg, case)

        with self.assertRaises(ParseError) as context:
            parse_source("a + b\n\n= c;")
        self.assertEqual(3, context.exception.line)


class StatementTestCase(unittest.TestCase):

    def test_statements(self):
        cases = {
            "print 1;": "(print 1.0)",
            "1 + 2;": "(; (+ 1.0 2.0))",
            "var a;": "(var a)",
            "var a = \"x\";": "(var a \"x\")",
            "{ }": "(block)",
            "{ var a = 1; print a; }": "(block (var a 1.0) (print a))",
            "{ { print 1; } }": "(block (block (print 1.0)))",
            "if (a) print 1;": "(if a (print 1.0))",
            "if (a) print 1; else print 2;": "(if a (print 1.0) (print 2.0))",
            "if (a) if (b) print 1; else print 2;": "(if a (if b (print 1.0) (print 2.0)))",
            "if (a) { a = 1; } else { }": "(if a (block (; (= a 1.0))) (block))",
        }
        for case, expected in cases.items():
            stmt, = parse_source(case)
            self.assertEqual(expected, str(stmt), case)

    def test_program_order(self):
        statements = parse_source("var a = 1;\nprint a;\na = 2;")
        self.assertEqual([Var, Print, Expression], [type(stmt) for stmt in statements])

    def test_node_types(self):
        stmt, = parse_source("if (x) { print x; } else x = nil;")
        self.assertIsInstance(stmt, If)
        self.assertIsInstance(stmt.condition, Variable)
        self.assertIsInstance(stmt.then_branch, Block)
        self.assertIsInstance(stmt.then_branch.statements[0], Print)
        self.assertIsInstance(stmt.else_branch, Expression)
        self.assertIsInstance(stmt.else_branch.expression, Assign)

    def test_empty(self):
        self.assertEqual([], parse_source(""))
        self.assertEqual([], parse_source("// nothing"))

    def test_display(self):
        stmt, = parse_source("print -1 + x;")
        expected = ("Print(nodes=[\n"
                    "    Binary('+', nodes=[\n"
                    "        Unary('-', nodes=[\n"
                    "            Literal(1.0)\n"
                    "        ]),\n"
                    "        Variable(x)\n"
                    "    ])\n"
                    "])")
        self.assertEqual(expected, stmt.display())


class ParseErrorTestCase(unittest.TestCase):

    def test_messages(self):
        cases = {
            "print 1": "at end: Expect ';' after value.",
            "1 + 2": "at end: Expect ';' after expression.",
            "(1 + 2;": "Expect ')' after expression.",
            "var 1 = 2;": "Expect variable name.",
            "var a = 1 print a;": "Expect ';' after variable declaration.",
            "if a) print 1;": "Expect '(' after 'if'.",
            "if (a print 1;": "Expect ')' after if condition.",
            "{ print 1;": "at end: Expect '}' after block.",
            "print;": "Expect expression.",
            "1 + ;": "Expect expression.",
            "}": "Expect expression.",
        }
        for case, expected in cases.items():
            with self.assertRaises(ParseError, msg=case) as context:
                parse_source(case)
            self.assertEqual(expected, context.exception.msg, case)

    def test_line(self):
        with self.assertRaises(ParseError) as context:
            parse_source("print 1;\nprint 2;\nprint (3;")
        self.assertEqual(3, context.exception.line)
        self.assertEqual("[line 3] Error: Expect ')' after expression.", str(context.exception))

    def test_synchronize(self):
        reported = []
        parser = Parser(scan("print 1 +;\nvar = 2;\nprint 3;\nprint (4;"), reported.append)

        with self.assertRaises(ParseError) as context:
            parser.parse()

        # every error is reported, the first one is raised
        self.assertEqual([1, 2, 4], [error.line for error in reported])
        self.assertEqual(reported, parser.errors)
        self.assertIs(reported[0], context.exception)

    def test_deep_nesting(self):
        self.assertEqual("(group " * 30 + "1.0" + ")" * 30, str(parse_expr("(" * 30 + "1" + ")" * 30)))

        reported = []
        depth = 1000
        source = "print 0;\nprint " + "(" * depth + "1" + ")" * depth + ";"
        with self.assertRaises(ParseError) as context:
            Parser(scan(source), reported.append).parse()

        self.assertEqual("Too much nesting.", context.exception.msg)
        self.assertEqual(2, context.exception.line)
        self.assertEqual([context.exception], reported)

    def test_error_inside_block(self):
        reported = []
        with self.assertRaises(ParseError):
            Parser(scan("{ print 1 }\nprint 2;"), reported.append).parse()
        self.assertEqual("Expect ';' after value.", reported[0].msg)


if __name__ == '__main__':
    unittest.main()
