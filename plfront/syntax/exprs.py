"""Value expressions: literals, names, operators, calls and constructors."""

from __future__ import annotations

from dataclasses import field
from typing import Iterator, Optional

from .list_elements import Argument, ArgumentKind
from .nodes import (
    Emitter,
    Expression,
    Location,
    Node,
    TextEnum,
    TypeExpression,
    syntax_node,
)
from .type_exprs import MapTypeExpr, SliceTypeExpr


@syntax_node
class ParseErrorExpr(Expression):
    """Placeholder for an expression that failed to parse."""

    error: Optional[Exception] = None


class LiteralKind(TextEnum):
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    RUNE = "rune"
    STRING = "string"


@syntax_node
class LiteralExpr(Expression):
    """A literal value, kept as its source text."""

    kind: LiteralKind = LiteralKind.INT
    value: str = ""

    def validate(self, emitter: Emitter) -> None:
        if self.kind not in set(LiteralKind):
            emitter.emit(
                self.loc(),
                "invalid ast construction. unexpected literal kind (%s)",
                self.kind,
            )


@syntax_node
class NamedExpr(Expression):
    """A reference to a name."""

    name: str = ""

    def is_padding(self) -> bool:
        return self.name == "_"


@syntax_node
class AccessExpr(Expression):
    """Field access on an operand."""

    operand: Expression = field(default_factory=Expression)
    field: str = ""

    def children(self) -> Iterator[Node]:
        yield self.operand


class UnaryOp(TextEnum):
    RETURN_DEFAULT_ENUM = "?"
    PANIC_ON_DEFAULT_ENUM = "!"
    ASSIGN_ADD_ONE = "++"
    ASSIGN_SUB_ONE = "--"
    NOT = "not"
    BITWISE_COMPLEMENT = "^"
    PLUS = "+"
    MINUS = "-"
    DEREF = "*"
    REF = "&"
    ASYNC = "async"
    DEFER = "defer"
    ASSIGN_TO = ">"
    RECV = "<-"


@syntax_node
class UnaryExpr(Expression):
    """A prefix or postfix unary operation."""

    is_prefix: bool = False
    op: UnaryOp = UnaryOp.PLUS
    operand: Expression = field(default_factory=Expression)

    def children(self) -> Iterator[Node]:
        yield self.operand

    def validate(self, emitter: Emitter) -> None:
        if self.op not in set(UnaryOp):
            emitter.emit(
                self.loc(),
                "invalid ast construction. unexpected unary op (%s)",
                self.op,
            )


class BinaryOp(TextEnum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    BIT_AND = "&"
    BIT_OR = "|"
    BIT_XOR = "^"
    BIT_LSHIFT = "<<"
    BIT_RSHIFT = ">>"
    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS = "<"
    LESS_OR_EQUAL = "<="
    GREATER = ">"
    GREATER_OR_EQUAL = ">="
    AND = "and"
    OR = "or"
    SEND = "<-"
    ADD_ASSIGN = "+="
    SUB_ASSIGN = "-="
    MUL_ASSIGN = "*="
    DIV_ASSIGN = "/="
    MOD_ASSIGN = "%="
    BIT_AND_ASSIGN = "&="
    BIT_OR_ASSIGN = "|="
    BIT_XOR_ASSIGN = "^="
    BIT_LSHIFT_ASSIGN = "<<="
    BIT_RSHIFT_ASSIGN = ">>="


@syntax_node
class BinaryExpr(Expression):
    """A binary operation."""

    left: Expression = field(default_factory=Expression)
    op: BinaryOp = BinaryOp.ADD
    right: Expression = field(default_factory=Expression)

    def children(self) -> Iterator[Node]:
        yield self.left
        yield self.right

    def validate(self, emitter: Emitter) -> None:
        if self.op not in set(BinaryOp):
            emitter.emit(
                self.loc(),
                "invalid ast construction. unexpected binary op (%s)",
                self.op,
            )


class ImplicitStructKind(TextEnum):
    # Comma separated expressions within parentheses.
    PROPER = "proper"
    # Comma separated expressions without parentheses.
    IMPROPER = "improper"
    # Colon separated, optional expressions.
    COLON = "colon"


@syntax_node
class ImplicitStructExpr(Expression):
    """A tuple-like list of arguments."""

    kind: ImplicitStructKind = ImplicitStructKind.PROPER
    arguments: list[Argument] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        yield from self.arguments

    def validate(self, emitter: Emitter) -> None:
        if self.kind == ImplicitStructKind.PROPER:
            rejected: tuple[ArgumentKind, ...] = (ArgumentKind.VARIADIC,)
        elif self.kind in (ImplicitStructKind.IMPROPER, ImplicitStructKind.COLON):
            rejected = (ArgumentKind.SKIP_PATTERN, ArgumentKind.VARIADIC)
        else:
            emitter.emit(
                self.loc(),
                "invalid ast construction. unexpected implicit struct expr kind (%s)",
                self.kind,
            )
            return

        for arg in self.arguments:
            if arg.kind in rejected:
                emitter.emit(arg.loc(), "unexpected %s argument", arg.kind)


def new_improper_unit(pos: Location) -> ImplicitStructExpr:
    return ImplicitStructExpr(
        start_pos=pos,
        end_pos=pos,
        kind=ImplicitStructKind.IMPROPER,
    )


@syntax_node
class ParameterizedExpr(Expression):
    """A named value with explicit type parameters."""

    pkg: str = ""
    name: str = ""
    parameters: list[TypeExpression] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        yield from self.parameters


@syntax_node
class CallExpr(Expression):
    """A function call."""

    func_expr: Expression = field(default_factory=Expression)
    arguments: list[Argument] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        yield self.func_expr
        yield from self.arguments

    def validate(self, emitter: Emitter) -> None:
        last = len(self.arguments) - 1
        for idx, arg in enumerate(self.arguments):
            if arg.kind == ArgumentKind.SKIP_PATTERN:
                emitter.emit(arg.loc(), "unexpected %s argument", arg.kind)
            if arg.kind == ArgumentKind.VARIADIC and idx != last:
                emitter.emit(
                    arg.loc(),
                    "%s argument must be the last argument in the list",
                    arg.kind,
                )


@syntax_node
class IndexExpr(Expression):
    """Indexing or slicing; colon expressions are split into index_args."""

    accessible: Expression = field(default_factory=Expression)
    index_args: list[Expression] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        yield self.accessible
        yield from self.index_args


@syntax_node
class AsExpr(Expression):
    """A type cast."""

    accessible: Expression = field(default_factory=Expression)
    cast_type: TypeExpression = field(default_factory=TypeExpression)

    def children(self) -> Iterator[Node]:
        yield self.accessible
        yield self.cast_type


@syntax_node
class MakeExpr(Expression):
    """Allocation of a slice or map; capacity and value apply to slices only."""

    variable_sized_type: TypeExpression = field(default_factory=TypeExpression)
    size: Expression = field(default_factory=Expression)
    capacity: Optional[Expression] = None
    value: Optional[Expression] = None

    def children(self) -> Iterator[Node]:
        yield self.variable_sized_type
        yield self.size
        if self.capacity is not None:
            yield self.capacity
        if self.value is not None:
            yield self.value

    def validate(self, emitter: Emitter) -> None:
        sized = self.variable_sized_type
        if isinstance(sized, SliceTypeExpr):
            return
        if isinstance(sized, MapTypeExpr):
            if self.capacity is not None:
                emitter.emit(
                    self.capacity.loc(),
                    "unexpected capacity specified for map type",
                )
            if self.value is not None:
                emitter.emit(
                    self.value.loc(),
                    "unexpected initial value specified for map type",
                )
            return
        emitter.emit(
            sized.loc(),
            "unexpected fixed size type, make only operate on slice or map types",
        )


@syntax_node
class InitializeExpr(Expression):
    """Construction of a value of an initializable type."""

    initializable: TypeExpression = field(default_factory=TypeExpression)
    arguments: list[Argument] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        yield self.initializable
        yield from self.arguments

    def validate(self, emitter: Emitter) -> None:
        for arg in self.arguments:
            if arg.kind in (ArgumentKind.SKIP_PATTERN, ArgumentKind.VARIADIC):
                emitter.emit(arg.loc(), "unexpected %s argument", arg.kind)