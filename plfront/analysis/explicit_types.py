"""Pass requiring explicit types in field definitions and named signatures."""

from __future__ import annotations

from ..syntax.list_elements import FieldDef, Parameter, ParameterKind
from ..syntax.nodes import Emitter, Node, NodeList, Visitor
from ..syntax.type_exprs import FuncSignature, InferredTypeExpr, PropertiesTypeExpr
from .pipeline import Pass, walk_statements


class _Validator(Visitor):
    def __init__(self, emitter: Emitter) -> None:
        self.emitter = emitter
        # "" where inference is allowed, otherwise the kind of enclosing scope.
        self.scopes: list[str] = []

    def _current(self) -> str:
        return self.scopes[-1] if self.scopes else ""

    def _scope_of(self, node: Node) -> str | None:
        if isinstance(node, PropertiesTypeExpr):
            return ""
        if isinstance(node, FieldDef):
            return "field definition"
        if isinstance(node, FuncSignature) and node.name:
            return "named function signature"
        if isinstance(node, Parameter) and node.kind == ParameterKind.RECEIVER:
            return ""
        return None

    def enter(self, node: Node) -> None:
        scope = self._scope_of(node)
        if scope is not None:
            self.scopes.append(scope)
        elif isinstance(node, InferredTypeExpr):
            kind = self._current()
            if kind:
                self.emitter.emit(node.loc(), "unexpected inferred type in %s", kind)

    def exit(self, node: Node) -> None:
        if self._scope_of(node) is not None:
            self.scopes.pop()


class ExplicitlyTypedDefsValidator(Pass):
    """Reports inferred types where an explicit type is required."""

    def __init__(self, emitter: Emitter) -> None:
        self.emitter = emitter

    def process(self, statements: NodeList) -> None:
        walk_statements(statements, lambda _stmt: _Validator(self.emitter))