"""Validation of pattern placement, and removal of redundant assign-to-address patterns."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional

from ..syntax.control_flow import IfExpr, LoopExpr, SelectExpr, StatementsExpr, SwitchExpr
from ..syntax.exprs import (
    BinaryExpr,
    BinaryOp,
    ImplicitStructExpr,
    ImplicitStructKind,
    NamedExpr,
    UnaryExpr,
    UnaryOp,
)
from ..syntax.list_elements import ArgumentKind
from ..syntax.nodes import Emitter, Expression, Node, NodeList, Statement, Visitor
from ..syntax.patterns import (
    AddrDeclPattern,
    AssignKind,
    AssignPattern,
    AssignToAddrPattern,
    CasePatterns,
    EnumPattern,
)
from ..syntax.statements import BlockAddrDeclStmt, JumpStmt
from .pipeline import Pass, walk_statements


class _State(IntEnum):
    # A real expression.
    NON_PATTERN = 0
    # Statement level declaration not tied to an assignment or case: a name or
    # nested tuple of names, without skip patterns.
    ADDR_DECL = 1
    # Declaration tied to an assignment or case: names or tuples of names,
    # skip patterns allowed.
    ASSIGN_TO_NEW_ADDR = 2
    # Assignment into existing addresses: real expressions or tuples of them.
    ASSIGN_TO_EXISTING_ADDR = 3
    # Left hand side of an unconditional assignment.
    ADDRESS = 4
    # A match pattern of a case.
    MATCH = 5


class _PatternsVisitor(Visitor):
    """Walks one top level statement, checking that patterns appear where allowed."""

    def __init__(self, root: Statement, emitter: Emitter) -> None:
        self.root = root
        self.emitter = emitter
        self.stack: list[_State] = []
        # True for conditional assignments (paired with case patterns).
        self.valid_assign: dict[AssignPattern, bool] = {}
        self.valid_cases: set[CasePatterns] = set()
        self.valid_enums: set[EnumPattern] = set()
        self.valid_assign_to_addr: set[AssignToAddrPattern] = set()
        self.valid_addr_decls: dict[AddrDeclPattern, _State] = {}
        self.redundant: dict[AssignToAddrPattern, Expression] = {}

    def _current(self) -> _State:
        return self.stack[-1] if self.stack else _State.NON_PATTERN

    def enter(self, node: Node) -> None:
        self._collect_entry_points(node)
        if not isinstance(node, Expression):
            return

        emit = self.emitter.emit
        if isinstance(node, NamedExpr):
            self.stack.append(_State.NON_PATTERN)

        elif isinstance(node, ImplicitStructExpr):
            current = self._current()
            allow_skip = current not in (_State.NON_PATTERN, _State.ADDR_DECL)
            skip_count = 0
            for arg in node.arguments:
                if arg.kind == ArgumentKind.SKIP_PATTERN:
                    skip_count += 1
                    if not allow_skip:
                        emit(arg.loc(), "unexpected %s argument", arg.kind)
                    elif skip_count > 1:
                        emit(arg.loc(), "each tuple can have at most one skip (...) pattern")
                    continue

                if arg.expr is None:
                    continue  # reported by node validation

                if current in (_State.ADDRESS, _State.MATCH):
                    if isinstance(arg.expr, AddrDeclPattern):
                        self.valid_addr_decls[arg.expr] = _State.ASSIGN_TO_NEW_ADDR
                    elif isinstance(arg.expr, AssignToAddrPattern):
                        self.valid_assign_to_addr.add(arg.expr)
                        if current == _State.ADDRESS:
                            self.redundant[arg.expr] = node
            self.stack.append(current)

        elif isinstance(node, AssignPattern):
            conditional = self.valid_assign.get(node)
            if conditional is None:
                emit(node.loc(), "unexpected assign pattern")

            if conditional:
                if isinstance(node.pattern, CasePatterns):
                    self.valid_cases.add(node.pattern)
                else:
                    emit(
                        node.loc(),
                        "invalid ast construction. "
                        "assign pattern must be paired case patterns",
                    )
            elif isinstance(node.pattern, AddrDeclPattern):
                self.valid_addr_decls[node.pattern] = _State.ASSIGN_TO_NEW_ADDR
            elif isinstance(node.pattern, AssignToAddrPattern):
                self.valid_assign_to_addr.add(node.pattern)
                self.redundant[node.pattern] = node
            self.stack.append(_State.ADDRESS)

        elif isinstance(node, CasePatterns):
            if node not in self.valid_cases:
                emit(node.loc(), "unexpected case patterns")
            self.valid_enums.update(p for p in node.patterns if isinstance(p, EnumPattern))
            self.stack.append(_State.MATCH)

        elif isinstance(node, AddrDeclPattern):
            state = self.valid_addr_decls.get(node)
            if state is None:
                emit(node.loc(), "unexpected address declaration pattern")
                state = _State.ASSIGN_TO_NEW_ADDR
            self.stack.append(state)

        elif isinstance(node, AssignToAddrPattern):
            if node not in self.valid_assign_to_addr:
                emit(node.loc(), "unexpected assign to address (>) pattern")
            self.stack.append(_State.ASSIGN_TO_EXISTING_ADDR)

        elif isinstance(node, EnumPattern):
            if node not in self.valid_enums:
                emit(node.loc(), "unexpected enum pattern")
            self.stack.append(_State.MATCH)

        else:
            if self._current() in (_State.ADDR_DECL, _State.ASSIGN_TO_NEW_ADDR):
                emit(
                    node.loc(),
                    "unexpected expression, expecting name or tuple name pattern",
                )
            self.stack.append(_State.NON_PATTERN)

    def exit(self, node: Node) -> None:
        if isinstance(node, Expression):
            self.stack.pop()

    def _collect_entry_points(self, node: Node) -> None:
        if node is self.root:
            self._process_statement(node)

        if isinstance(node, StatementsExpr):
            for stmt in node.statements:
                self._process_statement(stmt)
        elif isinstance(node, LoopExpr):
            if isinstance(node.condition, AssignPattern):
                self.valid_assign[node.condition] = False
        elif isinstance(node, IfExpr):
            for branch in node.condition_branches:
                if isinstance(branch.condition, AssignPattern):
                    self.valid_assign[branch.condition] = True
        elif isinstance(node, SwitchExpr):
            for branch in node.condition_branches:
                if isinstance(branch.condition, CasePatterns):
                    self.valid_cases.add(branch.condition)
        elif isinstance(node, SelectExpr):
            for branch in node.condition_branches:
                cond = branch.condition
                if cond is None:
                    continue
                if isinstance(cond, AssignPattern):
                    self.valid_assign[cond] = False
                    cond = cond.value

                is_valid = (isinstance(cond, UnaryExpr) and cond.op == UnaryOp.RECV) or (
                    isinstance(cond, BinaryExpr) and cond.op == BinaryOp.SEND
                )
                if not is_valid:
                    self.emitter.emit(
                        cond.loc(),
                        "unexpected expression, expecting send/recv expression",
                    )

    def _process_statement(self, stmt: Optional[Node]) -> None:
        if isinstance(stmt, BlockAddrDeclStmt):
            for pattern in stmt.patterns:
                if isinstance(pattern, AssignPattern):
                    self.valid_assign[pattern] = False
                elif isinstance(pattern, AddrDeclPattern):
                    self.valid_addr_decls[pattern] = _State.ADDR_DECL
            return

        if isinstance(stmt, AssignPattern):
            if stmt.kind != AssignKind.EQUAL:
                self.emitter.emit(
                    stmt.loc(),
                    "invalid ast construction. unexpected assign pattern kind (%s)",
                    stmt.kind,
                )
            self.valid_assign[stmt] = False
            return

        if isinstance(stmt, JumpStmt):
            stmt = stmt.value

        if isinstance(stmt, AddrDeclPattern):
            self.valid_addr_decls[stmt] = _State.ADDR_DECL
        elif isinstance(stmt, ImplicitStructExpr):
            # Declarations are also allowed as top level elements of an
            # improper implicit struct.
            if stmt.kind != ImplicitStructKind.IMPROPER:
                return
            for arg in stmt.arguments:
                if isinstance(arg.expr, AddrDeclPattern):
                    self.valid_addr_decls[arg.expr] = _State.ADDR_DECL


class _ValidatePass(Pass):
    def __init__(self, analyzer: PatternsAnalyzer) -> None:
        self.analyzer = analyzer

    def process(self, statements: NodeList) -> None:
        emitter = self.analyzer.emitter
        visitors = {stmt: _PatternsVisitor(stmt, emitter) for stmt in statements.elements}
        walk_statements(statements, lambda stmt: visitors[stmt])
        for visitor in visitors.values():
            self.analyzer.redundant_assign_to_addr.update(visitor.redundant)


class _TransformPass(Pass):
    def __init__(self, analyzer: PatternsAnalyzer) -> None:
        self.analyzer = analyzer

    def process(self, statements: NodeList) -> None:
        for redundant, parent in self.analyzer.redundant_assign_to_addr.items():
            if isinstance(parent, ImplicitStructExpr):
                for arg in parent.arguments:
                    if arg.expr is redundant:
                        arg.expr = redundant.pattern
            elif isinstance(parent, AssignPattern):
                parent.pattern = redundant.pattern
            else:
                raise TypeError(f"unexpected parent expression: {parent!r}")


class PatternsAnalyzer:
    """Checks pattern usage, then strips redundant assign-to-address wrappers."""

    def __init__(self, emitter: Emitter) -> None:
        self.emitter = emitter
        # redundant pattern -> parent (implicit struct or assign pattern)
        self.redundant_assign_to_addr: dict[AssignToAddrPattern, Expression] = {}

    def validate(self) -> Pass:
        """The pass that checks patterns and records redundant ones."""
        return _ValidatePass(self)

    def transform(self) -> Pass:
        """The pass that removes the redundant patterns found by validation."""
        return _TransformPass(self)