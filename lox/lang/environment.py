"""Lexical scopes for the Lox interpreter."""

from lox.lang.error import LoxRuntimeError


class Environment:
    """Variable bindings of one scope plus a link to the enclosing scope (None for the global scope). Lookups and
    assignments walk outward through the enclosing links until a binding is found.
    """

    def __init__(self, enclosing=None):
        self.enclosing = enclosing
        self.values = {}

    def define(self, name, value):
        """Binds name in this scope. Redeclaring a name in the same scope overwrites the old binding."""
        self.values[name] = value

    def get(self, name):
        """Returns the value bound to the name Token, raising a LoxRuntimeError if no scope binds it."""
        scope = self._resolve(name)
        return scope.values[name.lexeme]

    def assign(self, name, value):
        """Rebinds the name Token in the innermost scope that already binds it."""
        scope = self._resolve(name)
        scope.values[name.lexeme] = value

    def _resolve(self, name):
        scope = self
        while scope is not None:
            if name.lexeme in scope.values:
                return scope
            scope = scope.enclosing

        raise LoxRuntimeError(f"Undefined variable '{name.lexeme}'.", name.line)
