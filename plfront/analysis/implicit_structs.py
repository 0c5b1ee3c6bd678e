"""Pass checking where improper and colon implicit structs may appear.

Errors found here only arise from manually constructed trees. Improper
implicit structs are valid in jump statements, statement blocks, assign
patterns, loop post statements and top level statements; unit improper
structs are valid as index arguments, colon struct elements and enum
patterns. Colon implicit structs are valid only as call-like arguments.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..syntax.control_flow import LoopExpr, StatementsExpr
from ..syntax.exprs import CallExpr, ImplicitStructExpr, ImplicitStructKind, IndexExpr, InitializeExpr
from ..syntax.list_elements import Argument, ArgumentKind
from ..syntax.nodes import Emitter, Node, NodeList, Statement, Visitor
from ..syntax.patterns import AssignPattern, EnumPattern
from ..syntax.statements import JumpStmt
from .pipeline import Pass, walk_statements


class _Validator(Visitor):
    def __init__(self, root: Statement, emitter: Emitter) -> None:
        self.root = root
        self.emitter = emitter
        self.valid: set[ImplicitStructExpr] = set()

    def enter(self, node: Node) -> None:
        if node is self.root:
            self._allow_improper(node)

        if isinstance(node, StatementsExpr):
            for stmt in node.statements:
                self._allow_improper(stmt)
        elif isinstance(node, LoopExpr):
            self._allow_improper(node.post)
        elif isinstance(node, AssignPattern):
            self._allow_improper(node.pattern)
            self._allow_improper(node.value)
        elif isinstance(node, JumpStmt):
            self._allow_improper(node.value)
        elif isinstance(node, (CallExpr, InitializeExpr)):
            self._allow_colon_arguments(node.arguments)
        elif isinstance(node, IndexExpr):
            for arg in node.index_args:
                self._allow_unit_improper(arg)
        elif isinstance(node, ImplicitStructExpr):
            self._check_implicit_struct(node)
        elif isinstance(node, EnumPattern):
            self._allow_unit_improper(node.pattern)

    def exit(self, node: Node) -> None:
        pass

    def _check_implicit_struct(self, node: ImplicitStructExpr) -> None:
        if node.kind == ImplicitStructKind.PROPER:
            self._allow_colon_arguments(node.arguments)
            return

        if node.kind == ImplicitStructKind.COLON:
            for arg in node.arguments:
                if arg.kind == ArgumentKind.SINGULAR:
                    self._allow_unit_improper(arg.expr)

        if node not in self.valid:
            self.emitter.emit(
                node.loc(),
                "invalid ast construction. unexpected %s implicit struct",
                node.kind,
            )

    def _allow_colon_arguments(self, args: Iterable[Argument]) -> None:
        for arg in args:
            if (
                arg.kind == ArgumentKind.SINGULAR
                and isinstance(arg.expr, ImplicitStructExpr)
                and arg.expr.kind == ImplicitStructKind.COLON
            ):
                self.valid.add(arg.expr)

    def _allow_unit_improper(self, expr: Optional[Node]) -> None:
        if (
            isinstance(expr, ImplicitStructExpr)
            and expr.kind == ImplicitStructKind.IMPROPER
            and not expr.arguments
        ):
            self.valid.add(expr)

    def _allow_improper(self, node: Optional[Node]) -> None:
        if isinstance(node, ImplicitStructExpr) and node.kind == ImplicitStructKind.IMPROPER:
            self.valid.add(node)


class ImplicitStructsValidator(Pass):
    """Reports improper and colon implicit structs used where they are not allowed."""

    def __init__(self, emitter: Emitter) -> None:
        self.emitter = emitter

    def process(self, statements: NodeList) -> None:
        walk_statements(statements, lambda stmt: _Validator(stmt, self.emitter))