"""Pass that checks directive names, placement and arguments."""

from __future__ import annotations

from typing import Optional

from ..syntax.directives import Directive, DirectivesDecl
from ..syntax.nodes import Emitter, Node, NodeList, Visitor
from .pipeline import Pass, walk_statements


class DirectivesValidator(Visitor, Pass):
    """Reports unknown directives and misplaced or malformed build directives."""

    def __init__(self, emitter: Emitter) -> None:
        self.emitter = emitter
        self._build_directive: Optional[Directive] = None

    def process(self, statements: NodeList) -> None:
        if statements.elements:
            decl = statements.elements[0]
            if (
                isinstance(decl, DirectivesDecl)
                and decl.directives
                and decl.directives[0].name == "build"
            ):
                self._build_directive = decl.directives[0]

        walk_statements(statements, lambda _stmt: self)

    def enter(self, node: Node) -> None:
        if isinstance(node, Directive):
            self._validate(node)

    def exit(self, node: Node) -> None:
        pass

    def _validate(self, directive: Directive) -> None:
        if directive.name != "build":
            self.emitter.emit(
                directive.loc(), "unexpected directive (%s)", directive.name
            )
            return

        if directive is not self._build_directive:
            self.emitter.emit(
                directive.loc(),
                "build directive must be the first directive declaration at the top "
                "of the source file",
            )

        if directive.sub_name:
            self.emitter.emit(
                directive.loc(),
                "unexpected build sub-directive (%s)",
                directive.sub_name,
            )

        if len(directive.arguments) != 1:
            self.emitter.emit(
                directive.loc(),
                "build directive expects one constraint argument",
            )