"""Pass rejecting method definitions inside anonymous (inline) types."""

from __future__ import annotations

from ..syntax.list_elements import FieldDef
from ..syntax.nodes import Emitter, Node, NodeList, Visitor
from ..syntax.type_exprs import FuncDefinition, FuncSignature, PropertiesTypeExpr
from .pipeline import Pass, walk_statements


class _Rejector(Visitor):
    def __init__(self, emitter: Emitter) -> None:
        self.emitter = emitter
        self.scope = 0  # depth of enclosing field defs / func signatures

    def enter(self, node: Node) -> None:
        if isinstance(node, (FieldDef, FuncSignature)):
            self.scope += 1
        elif isinstance(node, PropertiesTypeExpr) and self.scope:
            for prop in node.properties:
                if isinstance(prop, FuncDefinition):
                    self.emitter.emit(
                        prop.loc(),
                        "unexpected method definition, expecting either simple data "
                        "type or named type",
                    )

    def exit(self, node: Node) -> None:
        if isinstance(node, (FieldDef, FuncSignature)):
            self.scope -= 1


class AnonymousMethodTypesRejector(Pass):
    """Reports method definitions in types nested in fields or signatures."""

    def __init__(self, emitter: Emitter) -> None:
        self.emitter = emitter

    def process(self, statements: NodeList) -> None:
        walk_statements(statements, lambda _stmt: _Rejector(self.emitter))