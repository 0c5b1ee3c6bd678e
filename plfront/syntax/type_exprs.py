"""Type expressions, function signatures and function definitions."""

from __future__ import annotations

from dataclasses import field
from typing import Iterator, Optional

from .list_elements import FieldDef, FieldDefQualifier, GenericParameter, Parameter, ParameterKind
from .nodes import (
    Emitter,
    Expression,
    Location,
    Node,
    NodeList,
    TextEnum,
    TypeExpression,
    TypeProperty,
    syntax_node,
)


@syntax_node
class SliceTypeExpr(TypeExpression):
    """A slice type: []Value."""

    value: TypeExpression = field(default_factory=TypeExpression)

    def children(self) -> Iterator[Node]:
        yield self.value


@syntax_node
class ArrayTypeExpr(TypeExpression):
    """A fixed size array type; size is the int literal text."""

    value: TypeExpression = field(default_factory=TypeExpression)
    size: str = ""

    def children(self) -> Iterator[Node]:
        yield self.value


@syntax_node
class MapTypeExpr(TypeExpression):
    """A map type from key to value."""

    key: TypeExpression = field(default_factory=TypeExpression)
    value: TypeExpression = field(default_factory=TypeExpression)

    def children(self) -> Iterator[Node]:
        yield self.key
        yield self.value


@syntax_node
class InferredTypeExpr(TypeExpression):
    """A type left to inference."""

    is_implicit: bool = False


def new_implicit_inferred_type_expr(pos: Location) -> InferredTypeExpr:
    return InferredTypeExpr(start_pos=pos, end_pos=pos, is_implicit=True)


@syntax_node
class NamedTypeExpr(TypeExpression):
    """A possibly package-qualified, possibly parameterized named type."""

    pkg: str = ""
    name: str = ""
    parameters: list[TypeExpression] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        yield from self.parameters


@syntax_node
class RefTypeExpr(TypeExpression):
    """A reference type."""

    value: TypeExpression = field(default_factory=TypeExpression)

    def children(self) -> Iterator[Node]:
        yield self.value


class DefaultEnumOp(TextEnum):
    RETURN_ON_DEFAULT = "?"
    PANIC_ON_DEFAULT = "!"


@syntax_node
class DefaultEnumOpTypeExpr(TypeExpression):
    """An enum type with a default-value operator applied."""

    op: DefaultEnumOp = DefaultEnumOp.RETURN_ON_DEFAULT
    enum: TypeExpression = field(default_factory=TypeExpression)

    def children(self) -> Iterator[Node]:
        yield self.enum

    def validate(self, emitter: Emitter) -> None:
        if self.op not in set(DefaultEnumOp):
            emitter.emit(
                self.loc(),
                "invalid ast construction. unexpected default enum op (%s)",
                self.op,
            )


class UnaryTraitOp(TextEnum):
    ALL_PUBLIC_METHODS = "~"
    ALL_PUBLIC_PROPERTIES = "~~"


@syntax_node
class UnaryTraitOpTypeExpr(TypeExpression):
    """A trait derived from a type by a unary trait operator."""

    op: UnaryTraitOp = UnaryTraitOp.ALL_PUBLIC_METHODS
    base: TypeExpression = field(default_factory=TypeExpression)

    def children(self) -> Iterator[Node]:
        yield self.base

    def validate(self, emitter: Emitter) -> None:
        if self.op not in set(UnaryTraitOp):
            emitter.emit(
                self.loc(),
                "invalid ast construction. unexpected unary trait op (%s)",
                self.op,
            )


class BinaryTraitOp(TextEnum):
    INTERSECT = "*"
    UNION = "+"
    DIFFERENCE = "-"


@syntax_node
class BinaryTraitOpTypeExpr(TypeExpression):
    """Two traits combined by a binary trait operator."""

    left: TypeExpression = field(default_factory=TypeExpression)
    op: BinaryTraitOp = BinaryTraitOp.INTERSECT
    right: TypeExpression = field(default_factory=TypeExpression)

    def children(self) -> Iterator[Node]:
        yield self.left
        yield self.right

    def validate(self, emitter: Emitter) -> None:
        if self.op not in set(BinaryTraitOp):
            emitter.emit(
                self.loc(),
                "invalid ast construction. unexpected binary type expr op (%s)",
                self.op,
            )


class PropertiesKind(TextEnum):
    STRUCT = "struct"
    ENUM = "enum"
    TRAIT = "trait"


@syntax_node
class FuncSignature(TypeExpression, TypeProperty):
    """A function signature; named signatures carry generic parameters."""

    name: str = ""
    generic_parameters: Optional[NodeList[GenericParameter]] = None
    parameters: NodeList[Parameter] = field(default_factory=NodeList)
    return_type: TypeExpression = field(default_factory=TypeExpression)

    def children(self) -> Iterator[Node]:
        if self.generic_parameters is not None:
            yield self.generic_parameters
        yield self.parameters
        yield self.return_type

    def is_method(self) -> bool:
        return (
            self.name != ""
            and len(self.parameters.elements) > 0
            and self.parameters.elements[0].kind == ParameterKind.RECEIVER
        )

    def validate(self, emitter: Emitter) -> None:
        if not self.name:
            if self.generic_parameters is not None:
                emitter.emit(
                    self.loc(),
                    "invalid ast construction, generic parameters set for "
                    "anonymous func signature",
                )
            return

        if self.generic_parameters is None:
            emitter.emit(
                self.loc(),
                "invalid ast construction, generic parameters not set for "
                "named func signature",
            )
            return

        if not self.is_method():
            return

        if self.generic_parameters.elements:
            emitter.emit(
                self.generic_parameters.loc(),
                "cannot specify generic parameters for method signature",
            )

        receiver_type = self.parameters.elements[0].type
        if isinstance(receiver_type, RefTypeExpr):
            receiver_type = receiver_type.value

        if isinstance(receiver_type, InferredTypeExpr):
            return
        if isinstance(receiver_type, NamedTypeExpr):
            if receiver_type.pkg:
                emitter.emit(
                    receiver_type.loc(),
                    "cannot define method for non-locally defined type",
                )
            return
        emitter.emit(receiver_type.loc(), "receiver must be simple named type")


@syntax_node
class FuncDefinition(Expression, TypeProperty):
    """A function or method definition with its body."""

    signature: FuncSignature = field(default_factory=FuncSignature)
    body: Expression = field(default_factory=Expression)

    def children(self) -> Iterator[Node]:
        yield self.signature
        yield self.body


@syntax_node
class PropertiesTypeExpr(TypeExpression):
    """A struct, enum or trait type given by its properties."""

    kind: PropertiesKind = PropertiesKind.STRUCT
    is_implicit: bool = False
    properties: list[TypeProperty] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        yield from self.properties

    def validate(self, emitter: Emitter) -> None:
        if self.kind not in set(PropertiesKind):
            emitter.emit(
                self.loc(),
                "invalid ast construction. unexpected properties type expr kind (%s)",
                self.kind,
            )

        default_count = 0
        for prop in self.properties:
            if isinstance(prop, FieldDef):
                qualifier = prop.qualifier
                if qualifier == FieldDefQualifier.NONE:
                    pass
                elif qualifier in (FieldDefQualifier.LET, FieldDefQualifier.VAR):
                    if self.kind == PropertiesKind.ENUM:
                        emitter.emit(prop.loc(), "unexpected let field")
                elif qualifier == FieldDefQualifier.DEFAULT:
                    default_count += 1
                    if self.kind != PropertiesKind.ENUM:
                        emitter.emit(prop.loc(), "unexpected default field")
                    elif default_count > 1:
                        emitter.emit(prop.loc(), "more than one default field")
                else:
                    emitter.emit(
                        prop.loc(), "unknown field def qualifier: %s", qualifier
                    )

                if prop.is_padding() and self.kind != PropertiesKind.STRUCT:
                    emitter.emit(prop.loc(), "unexpected field padding")
            elif isinstance(prop, FuncSignature):
                if self.kind != PropertiesKind.TRAIT:
                    emitter.emit(
                        prop.loc(), "unexpected method signature in %s", self.kind
                    )
            elif isinstance(prop, FuncDefinition):
                sig = prop.signature
                if not sig.name:
                    emitter.emit(prop.loc(), "unexpected anonymous function definition")
                elif (
                    not sig.parameters.elements
                    or sig.parameters.elements[0].kind != ParameterKind.RECEIVER
                ):
                    emitter.emit(
                        prop.loc(),
                        "unexpected method definition, expected receiver parameter",
                    )
            else:
                raise TypeError(f"unexpected property type: {prop!r}")


def new_any_trait(pos: Location) -> PropertiesTypeExpr:
    return PropertiesTypeExpr(
        start_pos=pos,
        end_pos=pos,
        kind=PropertiesKind.TRAIT,
        is_implicit=True,
    )