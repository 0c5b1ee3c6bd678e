"""Pass that runs every node's own structural validation."""

from __future__ import annotations

from ..syntax.nodes import Emitter, Node, NodeList, Visitor
from .pipeline import Pass, walk_statements


class NodeValidator(Visitor, Pass):
    """Calls validate on every node in the tree."""

    def __init__(self, emitter: Emitter) -> None:
        self.emitter = emitter

    def process(self, statements: NodeList) -> None:
        walk_statements(statements, lambda _stmt: self)

    def enter(self, node: Node) -> None:
        node.validate(self.emitter)

    def exit(self, node: Node) -> None:
        pass