"""Pattern expressions used by assignments, declarations and matching."""

from __future__ import annotations

from dataclasses import field
from typing import Iterator, Optional

from .nodes import Emitter, Expression, Node, TextEnum, Token, TypeExpression, syntax_node
from .type_exprs import new_implicit_inferred_type_expr


class AssignKind(TextEnum):
    EQUAL = "="
    IN = "in"


@syntax_node
class AssignPattern(Expression):
    """Assignment of a value to a pattern."""

    kind: AssignKind = AssignKind.EQUAL
    pattern: Expression = field(default_factory=Expression)
    value: Expression = field(default_factory=Expression)

    def children(self) -> Iterator[Node]:
        yield self.pattern
        yield self.value

    def validate(self, emitter: Emitter) -> None:
        if self.kind not in set(AssignKind):
            emitter.emit(
                self.loc(),
                "invalid ast construction. unexpected assign pattern kind (%s)",
                self.kind,
            )


@syntax_node
class CasePatterns(Expression):
    """The list of patterns of a case branch."""

    patterns: list[Expression] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        yield from self.patterns


@syntax_node
class AddrDeclPattern(Expression):
    """A var or let declaration pattern with its type."""

    is_var: bool = False
    pattern: Expression = field(default_factory=Expression)
    type: TypeExpression = field(default_factory=TypeExpression)

    def children(self) -> Iterator[Node]:
        yield self.pattern
        yield self.type


def new_addr_decl_pattern(
    var_type: Optional[Token],
    pattern: Expression,
    type_expr: Optional[TypeExpression],
) -> AddrDeclPattern:
    is_var = False
    start: Node = pattern
    if var_type is not None:
        is_var = var_type.value == "var"
        start = var_type
        pattern.prepend_to_leading(var_type.take_trailing())

    end: Node = pattern
    if type_expr is not None:
        end = type_expr
    else:
        type_expr = new_implicit_inferred_type_expr(pattern.end())

    decl = AddrDeclPattern(
        start_pos=start.loc(),
        end_pos=end.end(),
        is_var=is_var,
        pattern=pattern,
        type=type_expr,
    )
    decl.leading_comment = start.take_leading()
    decl.trailing_comment = end.take_trailing()
    return decl


@syntax_node
class AssignToAddrPattern(Expression):
    """A pattern assigning into an existing address (>)."""

    pattern: Expression = field(default_factory=Expression)

    def children(self) -> Iterator[Node]:
        yield self.pattern


def new_assign_to_addr_pattern(greater: Token, pattern: Expression) -> AssignToAddrPattern:
    addr = AssignToAddrPattern(
        start_pos=greater.loc(),
        end_pos=pattern.end(),
        pattern=pattern,
    )
    addr.leading_comment = greater.take_leading()
    pattern.prepend_to_leading(greater.take_trailing())
    addr.trailing_comment = pattern.take_trailing()
    return addr


@syntax_node
class EnumPattern(Expression):
    """Match on an enum value.

    enum_value is a name to match that value, "" for the unnamed struct value,
    or "_" for any value.
    """

    enum_value: str = ""
    pattern: Expression = field(default_factory=Expression)

    def children(self) -> Iterator[Node]:
        yield self.pattern