"""Statement nodes: imports, jumps, branches and definitions."""

from __future__ import annotations

from dataclasses import field
from typing import Iterator, Optional, Union

from .list_elements import GenericParameter
from .nodes import (
    Emitter,
    Expression,
    Node,
    NodeList,
    Statement,
    TextEnum,
    Token,
    TypeExpression,
    syntax_node,
)
from .package_id import PackageID
from .patterns import AddrDeclPattern, AssignKind, AssignPattern


@syntax_node
class ImportClause(Node):
    """One imported package; alias is an identifier, "_", "." or ""."""

    alias: str = ""
    package_id: PackageID = field(default_factory=lambda: PackageID(""))


@syntax_node
class ImportStmt(Statement):
    """An import statement with its clauses."""

    import_clauses: list[ImportClause] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        yield from self.import_clauses


class JumpOp(TextEnum):
    FALLTHROUGH = "fallthrough"
    RETURN = "return"
    CONTINUE = "continue"
    BREAK = "break"


def _jump_op(text: str) -> Union[JumpOp, str]:
    try:
        return JumpOp(text)
    except ValueError:
        return text


@syntax_node
class JumpStmt(Statement):
    """A return, break, continue or fallthrough, with optional label and value."""

    op: Union[JumpOp, str] = JumpOp.RETURN
    label: str = ""
    value: Optional[Expression] = None

    def children(self) -> Iterator[Node]:
        if self.value is not None:
            yield self.value

    def validate(self, emitter: Emitter) -> None:
        if self.op not in set(JumpOp):
            emitter.emit(
                self.loc(),
                "invalid ast construction. unexpected jump statement kind (%s)",
                self.op,
            )


def new_jump_stmt(
    op: Token,
    at_token: Optional[Token],
    label_token: Optional[Token],
    value: Optional[Expression],
) -> JumpStmt:
    start = op.loc()
    end = op.end()
    leading = op.take_leading()
    trailing = op.take_trailing()

    label = ""
    if label_token is not None:
        label = label_token.value
        end = label_token.end()
        if at_token is not None:
            trailing.append(at_token.take_leading())
            trailing.append(at_token.take_trailing())
        trailing.append(label_token.take_leading())
        trailing.append(label_token.take_trailing())

    if value is not None:
        value.prepend_to_leading(trailing)
        end = value.end()
        trailing = value.take_trailing()

    return JumpStmt(
        start_pos=start,
        end_pos=end,
        leading_comment=leading,
        trailing_comment=trailing,
        op=_jump_op(op.value),
        label=label,
        value=value,
    )


@syntax_node
class UnsafeStmt(Statement):
    """Verbatim source in another language."""

    language: str = ""
    verbatim_source: str = ""


@syntax_node
class ConditionBranchStmt(Statement):
    """A branch of an if, switch or select; condition is None for the default."""

    is_default_branch: bool = False
    condition: Optional[Expression] = None
    branch: Expression = field(default_factory=Expression)

    def children(self) -> Iterator[Node]:
        if self.condition is not None:
            yield self.condition
        yield self.branch


@syntax_node
class FloatingComment(Statement):
    """Comments not attached to any other statement."""


@syntax_node
class TypeDef(Statement):
    """A named type definition."""

    name: str = ""
    generic_parameters: NodeList[GenericParameter] = field(default_factory=NodeList)
    base_type: TypeExpression = field(default_factory=TypeExpression)
    constraint: TypeExpression = field(default_factory=TypeExpression)

    def children(self) -> Iterator[Node]:
        yield self.generic_parameters
        yield self.base_type
        yield self.constraint


@syntax_node
class AliasDef(Statement):
    """A type alias definition."""

    alias: str = ""
    generic_parameters: NodeList[GenericParameter] = field(default_factory=NodeList)
    value: TypeExpression = field(default_factory=TypeExpression)

    def children(self) -> Iterator[Node]:
        yield self.generic_parameters
        yield self.value


@syntax_node
class BlockAddrDeclStmt(Statement):
    """A var/let block of declarations; replaced before semantic analysis."""

    is_var: bool = False
    patterns: list[Expression] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        yield from self.patterns

    def validate(self, emitter: Emitter) -> None:
        for expr in self.patterns:
            if isinstance(expr, AssignPattern):
                if expr.kind != AssignKind.EQUAL:
                    emitter.emit(
                        expr.loc(),
                        "invalid ast construction, unexpected assign pattern kind (%s)",
                        expr.kind,
                    )
                decl = expr.pattern
                if not isinstance(decl, AddrDeclPattern):
                    emitter.emit(
                        decl.loc(),
                        "invalid ast construction, expected addr decl in assign pattern",
                    )
                elif self.is_var != decl.is_var:
                    emitter.emit(
                        decl.loc(),
                        "invalid ast construction, addr decl type does not much block",
                    )
            elif isinstance(expr, AddrDeclPattern):
                if self.is_var != expr.is_var:
                    emitter.emit(
                        expr.loc(),
                        "invalid ast construction, addr decl type does not much block",
                    )
            else:
                emitter.emit(
                    expr.loc(),
                    "invalid ast construction, expected assign or addr decl pattern",
                )