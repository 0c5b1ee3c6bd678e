"""List element nodes: field definitions, parameters and arguments."""

from __future__ import annotations

from dataclasses import field
from typing import Iterator, Optional

from .nodes import (
    CommentGroups,
    Emitter,
    Expression,
    Node,
    TextEnum,
    Token,
    TypeExpression,
    TypeProperty,
    syntax_node,
)


class FieldDefQualifier(TextEnum):
    NONE = ""
    VAR = "var"
    LET = "let"
    DEFAULT = "default"


@syntax_node
class FieldDef(TypeProperty):
    """A field of a struct, enum or trait."""

    qualifier: FieldDefQualifier = FieldDefQualifier.NONE
    name: str = ""
    type: TypeExpression = field(default_factory=TypeExpression)

    def is_unnamed(self) -> bool:
        return self.name == ""

    def is_padding(self) -> bool:
        return self.name == "_"

    def children(self) -> Iterator[Node]:
        yield self.type


@syntax_node
class GenericParameter(Node):
    """A generic parameter with its constraint."""

    name: str = ""
    constraint: TypeExpression = field(default_factory=TypeExpression)

    def children(self) -> Iterator[Node]:
        yield self.constraint


class ParameterKind(TextEnum):
    SINGULAR = "singular"
    RECEIVER = "receiver"
    VARIADIC = "variadic"


@syntax_node
class Parameter(Node):
    """A function parameter; an underscore name is stored as empty."""

    kind: ParameterKind = ParameterKind.SINGULAR
    name: str = ""
    type: TypeExpression = field(default_factory=TypeExpression)

    def children(self) -> Iterator[Node]:
        yield self.type

    def validate(self, emitter: Emitter) -> None:
        if self.kind not in set(ParameterKind):
            emitter.emit(
                self.loc(),
                "invalid ast construction. unexpected parameter kind (%s)",
                self.kind,
            )


class ArgumentKind(TextEnum):
    SINGULAR = "singular"
    VARIADIC = "variadic"
    SKIP_PATTERN = "skip-pattern"


@syntax_node
class Argument(Node):
    """A call or pattern argument; expr is None for skip patterns."""

    kind: ArgumentKind = ArgumentKind.SINGULAR
    name: str = ""
    expr: Optional[Expression] = None

    def children(self) -> Iterator[Node]:
        if self.expr is not None:
            yield self.expr

    def validate(self, emitter: Emitter) -> None:
        if self.kind not in set(ArgumentKind):
            emitter.emit(
                self.loc(),
                "invalid ast construction. unexpected argument kind (%s)",
                self.kind,
            )

        if self.name and self.kind != ArgumentKind.SINGULAR:
            emitter.emit(
                self.loc(),
                "invalid ast construction. name set in %s argument",
                self.kind,
            )

        if self.expr is None:
            if self.kind != ArgumentKind.SKIP_PATTERN:
                emitter.emit(
                    self.loc(),
                    "invalid ast construction. expression not set in %s argument",
                    self.kind,
                )
        elif self.kind == ArgumentKind.SKIP_PATTERN:
            emitter.emit(
                self.loc(),
                "invalid ast construction. expression set in %s argument",
                self.kind,
            )


def new_positional_argument(expr: Expression) -> Argument:
    return Argument(
        start_pos=expr.loc(),
        end_pos=expr.end(),
        leading_comment=expr.take_leading(),
        trailing_comment=expr.take_trailing(),
        kind=ArgumentKind.SINGULAR,
        expr=expr,
    )


def new_named_argument(name: Token, assign: Token, expr: Expression) -> Argument:
    arg = Argument(
        start_pos=name.loc(),
        end_pos=expr.end(),
        kind=ArgumentKind.SINGULAR,
        name=name.value,
        expr=expr,
    )
    arg.leading_comment = name.take_leading()
    # Prepended in reverse so the final order follows the source.
    expr.prepend_to_leading(assign.take_trailing())
    expr.prepend_to_leading(assign.take_leading())
    expr.prepend_to_leading(name.take_trailing())
    arg.trailing_comment = expr.take_trailing()
    return arg


def new_variadic_argument(expr: Expression, ellipsis: Token) -> Argument:
    arg = Argument(
        start_pos=expr.loc(),
        end_pos=ellipsis.end(),
        kind=ArgumentKind.VARIADIC,
        expr=expr,
    )
    arg.leading_comment = expr.take_leading()
    expr.append_to_trailing(ellipsis.take_leading())
    arg.trailing_comment = ellipsis.take_trailing()
    return arg


def new_skip_pattern_argument(ellipsis: Token) -> Argument:
    return Argument(
        start_pos=ellipsis.loc(),
        end_pos=ellipsis.end(),
        leading_comment=ellipsis.take_leading(),
        trailing_comment=ellipsis.take_trailing(),
        kind=ArgumentKind.SKIP_PATTERN,
        expr=None,
    )


__all__ = [
    "Argument",
    "ArgumentKind",
    "CommentGroups",
    "FieldDef",
    "FieldDefQualifier",
    "GenericParameter",
    "Parameter",
    "ParameterKind",
    "new_named_argument",
    "new_positional_argument",
    "new_skip_pattern_argument",
    "new_variadic_argument",
]