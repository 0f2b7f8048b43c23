"""Abstract syntax tree for the Lox language.

Two families of nodes, both strict trees (every node owns its children, nothing is shared):

```
<expr> ::= Literal(value) | Grouping(expression) | Unary(operator, right) | Binary(left, operator, right)
         | Variable(name) | Assign(name, value)

<stmt> ::= Expression(expression) | Print(expression) | Var(name, initializer?) | Block(statements)
         | If(condition, then_branch, else_branch?)
```

operator and name fields keep the Token they were parsed from so that errors can point at the right line. Nodes do not
know how to evaluate themselves: the interpreter dispatches on the node class.
"""

from abc import ABC
from dataclasses import dataclass, fields
from typing import List, Optional

from lox.front.token import Token


def literal_text(value):
    """Source-like spelling of a literal value, used when printing trees."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f"\"{value}\""
    return str(value)


class Node(ABC):
    """Superclass of every syntax tree node."""

    @property
    def nodes(self):
        """Child nodes, in source order. Optional children that are absent are skipped."""
        children = []
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, Node):
                children.append(value)
            elif isinstance(value, list):
                children.extend(value)
        return children

    @property
    def label(self):
        """Short text identifying this node besides its children (an operator, a name or a value)."""
        return ""

    @property
    def line(self):
        """Line of the outermost token in this tree, or 0 if it holds only literals. Walks the tree breadth first
        without recursing, so it works on trees too deep to evaluate.
        """
        pending = [self]
        while pending:
            node = pending.pop(0)
            for field in fields(node):
                value = getattr(node, field.name)
                if isinstance(value, Token):
                    return value.line
            pending.extend(node.nodes)
        return 0

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <Node>(<label>, nodes=[
            <Node>(<label>, nodes=[
                ...
                <Node>(<label>)  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}({self.label}"
        if self.nodes:
            result += ", nodes=[" if self.label else "nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def parenthesize(self, name, *nodes):
        parts = [name] + [str(node) for node in nodes if node is not None]
        return "(" + " ".join(parts) + ")"


class Expr(Node):
    """Superclass of expression nodes."""


class Stmt(Node):
    """Superclass of statement nodes."""


@dataclass
class Literal(Expr):
    value: object

    @property
    def label(self):
        return literal_text(self.value)

    def __str__(self):
        return literal_text(self.value)


@dataclass
class Grouping(Expr):
    expression: Expr

    def __str__(self):
        return self.parenthesize("group", self.expression)


@dataclass
class Unary(Expr):
    operator: Token
    right: Expr

    @property
    def label(self):
        return f"'{self.operator.lexeme}'"

    def __str__(self):
        return self.parenthesize(self.operator.lexeme, self.right)


@dataclass
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr

    @property
    def label(self):
        return f"'{self.operator.lexeme}'"

    def __str__(self):
        return self.parenthesize(self.operator.lexeme, self.left, self.right)


@dataclass
class Variable(Expr):
    name: Token

    @property
    def label(self):
        return self.name.lexeme

    def __str__(self):
        return self.name.lexeme


@dataclass
class Assign(Expr):
    name: Token
    value: Expr

    @property
    def label(self):
        return self.name.lexeme

    def __str__(self):
        return self.parenthesize("=", Variable(self.name), self.value)


@dataclass
class Expression(Stmt):
    """Expression statement: evaluated for its side effects, value discarded."""
    expression: Expr

    def __str__(self):
        return self.parenthesize(";", self.expression)


@dataclass
class Print(Stmt):
    expression: Expr

    def __str__(self):
        return self.parenthesize("print", self.expression)


@dataclass
class Var(Stmt):
    name: Token
    initializer: Optional[Expr] = None

    @property
    def label(self):
        return self.name.lexeme

    def __str__(self):
        return self.parenthesize("var", Variable(self.name), self.initializer)


@dataclass
class Block(Stmt):
    statements: List[Stmt]

    def __str__(self):
        return self.parenthesize("block", *self.statements)


@dataclass
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None

    def __str__(self):
        return self.parenthesize("if", self.condition, self.then_branch, self.else_branch)
