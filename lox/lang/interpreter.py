"""Tree-walking evaluator for the Lox language.

Lox values are represented by native Python values: str (String), float (Number), bool (Boolean) and None (nil).
Values of different types are never equal and are never coerced into each other.
"""

import math
from decimal import Decimal

from lox.front.syntax import Assign, Binary, Block, Expression, Grouping, If, Literal, Print, Unary, Var, Variable
from lox.front.token import TokenType
from lox.lang.environment import Environment
from lox.lang.error import GenericException, LoxRuntimeError


def is_truthy(value):
    """nil and false are falsey, everything else (including 0 and "") is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left, right):
    """Structural equality within a type. Checking the type first keeps true from equalling 1."""
    return type(left) is type(right) and left == right


def stringify(value):
    """Text printed for value by a print statement."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if not math.isfinite(value):
            return str(value)
        # shortest round-trip digits, written out without an exponent
        text = format(Decimal(repr(value)), "f")
        if text.endswith(".0"):
            text = text[:-2]
        return text
    return str(value)


def divide(left, right):
    """IEEE-754 division: dividing by zero gives an infinity (or nan for 0/0) instead of failing."""
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


class Interpreter:
    """Executes statements against a chain of Environments. One Interpreter keeps its global scope for its whole
    lifetime, so successive calls to interpret (e.g. shell lines) share variables.
    """
    ARITHMETIC = {
        TokenType.MINUS: lambda left, right: left - right,
        TokenType.STAR: lambda left, right: left * right,
        TokenType.SLASH: divide,
        TokenType.GREATER: lambda left, right: left > right,
        TokenType.GREATER_EQUAL: lambda left, right: left >= right,
        TokenType.LESS: lambda left, right: left < right,
        TokenType.LESS_EQUAL: lambda left, right: left <= right,
    }

    def __init__(self, output=print):
        self.output = output
        self.globals = Environment()
        self.environment = self.globals

        self._evaluators = {
            Literal: self._literal,
            Grouping: self._grouping,
            Unary: self._unary,
            Binary: self._binary,
            Variable: self._variable,
            Assign: self._assign,
        }
        self._executors = {
            Expression: self._expression_stmt,
            Print: self._print_stmt,
            Var: self._var_stmt,
            Block: self._block_stmt,
            If: self._if_stmt,
        }

    def interpret(self, statements):
        """Executes statements in order. The first LoxRuntimeError stops the run and is raised to the caller."""
        for stmt in statements:
            try:
                self.execute(stmt)
            except RecursionError:
                raise LoxRuntimeError("Too much nesting.", stmt.line) from None

    def execute(self, stmt):
        try:
            executor = self._executors[type(stmt)]
        except KeyError:
            raise GenericException(f"cannot execute '{type(stmt).__name__}'", internal=True)
        executor(stmt)

    def evaluate(self, expr):
        try:
            evaluator = self._evaluators[type(expr)]
        except KeyError:
            raise GenericException(f"cannot evaluate '{type(expr).__name__}'", internal=True)
        return evaluator(expr)

    def execute_block(self, statements, environment):
        """Executes statements in environment, restoring the current environment afterwards even if one fails."""
        previous = self.environment
        try:
            self.environment = environment
            for stmt in statements:
                self.execute(stmt)
        finally:
            self.environment = previous

    # statements

    def _expression_stmt(self, stmt):
        self.evaluate(stmt.expression)

    def _print_stmt(self, stmt):
        self.output(stringify(self.evaluate(stmt.expression)))

    def _var_stmt(self, stmt):
        value = None
        if stmt.initializer is not None:
            value = self.evaluate(stmt.initializer)
        self.environment.define(stmt.name.lexeme, value)

    def _block_stmt(self, stmt):
        self.execute_block(stmt.statements, Environment(self.environment))

    def _if_stmt(self, stmt):
        if is_truthy(self.evaluate(stmt.condition)):
            self.execute(stmt.then_branch)
        elif stmt.else_branch is not None:
            self.execute(stmt.else_branch)

    # expressions

    def _literal(self, expr):
        return expr.value

    def _grouping(self, expr):
        return self.evaluate(expr.expression)

    def _variable(self, expr):
        return self.environment.get(expr.name)

    def _assign(self, expr):
        value = self.evaluate(expr.value)
        self.environment.assign(expr.name, value)
        return value

    def _unary(self, expr):
        right = self.evaluate(expr.right)

        if expr.operator.kind == TokenType.MINUS:
            Interpreter.check_number_operands(expr.operator, right)
            return -right
        if expr.operator.kind == TokenType.BANG:
            return not is_truthy(right)

        raise GenericException(f"unknown unary operator '{expr.operator.lexeme}'", expr.operator.line, internal=True)

    def _binary(self, expr):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        kind = expr.operator.kind

        if kind in Interpreter.ARITHMETIC:
            Interpreter.check_number_operands(expr.operator, left, right)
            return Interpreter.ARITHMETIC[kind](left, right)

        if kind == TokenType.PLUS:
            if isinstance(left, float) and isinstance(right, float):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise LoxRuntimeError("Operands must be two numbers or two strings", expr.operator.line)

        if kind == TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if kind == TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        raise GenericException(f"unknown binary operator '{expr.operator.lexeme}'", expr.operator.line, internal=True)

    @staticmethod
    def check_number_operands(operator, *operands):
        if not all(isinstance(operand, float) for operand in operands):
            raise LoxRuntimeError("Operand must be a number", operator.line)
