"""Directive declarations and the boolean expressions they carry."""

from __future__ import annotations

from dataclasses import field
from typing import Iterator

from .nodes import DirectiveExpression, Node, Statement, syntax_node


@syntax_node
class Directive(Node):
    """A single directive such as a build constraint."""

    name: str = ""
    sub_name: str = ""
    arguments: list[DirectiveExpression] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        yield from self.arguments


@syntax_node
class DirectivesDecl(Statement):
    """A statement holding one or more directives."""

    directives: list[Directive] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        yield from self.directives


@syntax_node
class DirectiveValueExpr(DirectiveExpression):
    """A bare value (tag) in a directive expression."""

    value: str = ""


@syntax_node
class DirectiveGroupExpr(DirectiveExpression):
    """A parenthesized directive expression."""

    expr: DirectiveExpression = field(default_factory=DirectiveExpression)

    def children(self) -> Iterator[Node]:
        yield self.expr


@syntax_node
class DirectiveNotExpr(DirectiveExpression):
    """Logical negation of a directive expression."""

    operand: DirectiveExpression = field(default_factory=DirectiveExpression)

    def children(self) -> Iterator[Node]:
        yield self.operand


@syntax_node
class DirectiveAndExpr(DirectiveExpression):
    """Logical conjunction of two directive expressions."""

    left: DirectiveExpression = field(default_factory=DirectiveExpression)
    right: DirectiveExpression = field(default_factory=DirectiveExpression)

    def children(self) -> Iterator[Node]:
        yield self.left
        yield self.right


@syntax_node
class DirectiveOrExpr(DirectiveExpression):
    """Logical disjunction of two directive expressions."""

    left: DirectiveExpression = field(default_factory=DirectiveExpression)
    right: DirectiveExpression = field(default_factory=DirectiveExpression)

    def children(self) -> Iterator[Node]:
        yield self.left
        yield self.right