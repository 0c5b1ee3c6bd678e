"""Control flow expressions: statement blocks, branches and loops."""

from __future__ import annotations

from dataclasses import field
from typing import Callable, Iterator, Optional, Sequence

from .exprs import BinaryExpr, BinaryOp, UnaryExpr, UnaryOp
from .nodes import (
    Emitter,
    Expression,
    Node,
    Statement,
    TextEnum,
    syntax_node,
)
from .patterns import AssignKind, AssignPattern, CasePatterns
from .statements import ConditionBranchStmt, JumpStmt


@syntax_node
class StatementsExpr(Expression):
    """A (possibly labelled) block of statements."""

    label: str = ""
    statements: list[Statement] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        yield from self.statements

    def validate(self, emitter: Emitter) -> None:
        for stmt, following in zip(self.statements, self.statements[1:]):
            if isinstance(stmt, JumpStmt):
                emitter.emit(following.loc(), "unreachable statement")
                return


def _validate_branches(
    emitter: Emitter,
    parent: Expression,
    branches: Sequence[ConditionBranchStmt],
    check_condition: Callable[[Expression], None],
) -> None:
    if not branches:
        emitter.emit(parent.loc(), "expected at least one branch")

    last = len(branches) - 1
    for idx, branch in enumerate(branches):
        if branch.is_default_branch:
            if idx != last:
                emitter.emit(branch.loc(), "default branch is not the last branch")
            if branch.condition is not None:
                emitter.emit(
                    branch.condition.loc(),
                    "invalid ast construction. condition set on default branch",
                )
        elif branch.condition is None:
            emitter.emit(
                branch.loc(),
                "invalid ast construction. condition not set on non-default branch",
            )
        else:
            check_condition(branch.condition)


@syntax_node
class IfExpr(Expression):
    """An if / else-if / else chain."""

    label: str = ""
    condition_branches: list[ConditionBranchStmt] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        yield from self.condition_branches

    def validate(self, emitter: Emitter) -> None:
        def check(cond: Expression) -> None:
            if isinstance(cond, AssignPattern) and cond.kind != AssignKind.EQUAL:
                emitter.emit(
                    cond.loc(),
                    "invalid ast construction.  unexpected assign pattern kind (%s)",
                    cond.kind,
                )

        _validate_branches(emitter, self, self.condition_branches, check)


@syntax_node
class SwitchExpr(Expression):
    """A switch over an operand with case pattern branches."""

    label: str = ""
    operand: Expression = field(default_factory=Expression)
    condition_branches: list[ConditionBranchStmt] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        yield self.operand
        yield from self.condition_branches

    def validate(self, emitter: Emitter) -> None:
        def check(cond: Expression) -> None:
            if not isinstance(cond, CasePatterns):
                emitter.emit(
                    cond.loc(),
                    "invalid ast construction. expecting case patterns",
                )

        _validate_branches(emitter, self, self.condition_branches, check)


@syntax_node
class SelectExpr(Expression):
    """A select over channel send / receive branches."""

    label: str = ""
    condition_branches: list[ConditionBranchStmt] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        yield from self.condition_branches

    def validate(self, emitter: Emitter) -> None:
        def check(condition: Expression) -> None:
            if isinstance(condition, AssignPattern):
                if condition.kind != AssignKind.EQUAL:
                    emitter.emit(
                        condition.loc(),
                        "invalid ast construction. unexpected assign pattern kind (%s)",
                        condition.kind,
                    )
                condition = condition.value

            if isinstance(condition, CasePatterns):
                emitter.emit(
                    condition.loc(),
                    "unexpected pattern list, expecting only one pattern per case",
                )
            elif isinstance(condition, UnaryExpr):
                if condition.op != UnaryOp.RECV:
                    emitter.emit(
                        condition.loc(),
                        "unexpected expression, expecting send/recv expression",
                    )
            elif isinstance(condition, BinaryExpr):
                if condition.op != BinaryOp.SEND:
                    emitter.emit(
                        condition.loc(),
                        "unexpected expression, expecting send/recv expression",
                    )

        _validate_branches(emitter, self, self.condition_branches, check)


class LoopKind(TextEnum):
    INFINITE = "infinite"
    DO_WHILE = "do-while"
    WHILE = "while"
    ITERATOR = "iterator"
    FOR = "for"


@syntax_node
class LoopExpr(Expression):
    """A loop; condition is None only for infinite loops, post only for for loops."""

    kind: LoopKind = LoopKind.INFINITE
    label: str = ""
    condition: Optional[Expression] = None
    post: Optional[Expression] = None
    body: StatementsExpr = field(default_factory=StatementsExpr)

    def children(self) -> Iterator[Node]:
        if self.condition is not None:
            yield self.condition
        if self.post is not None:
            yield self.post
        yield self.body

    def validate(self, emitter: Emitter) -> None:
        kind = self.kind
        condition = self.condition

        if kind == LoopKind.INFINITE:
            if condition is not None:
                emitter.emit(
                    condition.loc(),
                    "invalid ast construction. condition expression set in %s loop",
                    kind,
                )
        elif kind in (
            LoopKind.DO_WHILE,
            LoopKind.WHILE,
            LoopKind.ITERATOR,
            LoopKind.FOR,
        ):
            if condition is None:
                emitter.emit(
                    self.loc(),
                    "invalid ast construction. nil condition expression in %s loop",
                    kind,
                )
        else:
            emitter.emit(
                self.loc(),
                "invalid ast construction.  unexpected loop kind (%s)",
                kind,
            )

        if kind in (
            LoopKind.INFINITE,
            LoopKind.DO_WHILE,
            LoopKind.WHILE,
            LoopKind.ITERATOR,
        ):
            if self.post is not None:
                emitter.emit(
                    self.post.loc(),
                    "invalid ast construction. post expression set in %s loop",
                    kind,
                )
        elif kind == LoopKind.FOR:
            if self.post is None:
                emitter.emit(
                    self.loc(),
                    "invalid ast construction. nil post expression in %s loop",
                    kind,
                )

        if kind == LoopKind.INFINITE:
            return

        where = condition.loc() if condition is not None else self.loc()
        if isinstance(condition, AssignPattern):
            if kind != LoopKind.ITERATOR or condition.kind != AssignKind.IN:
                emitter.emit(
                    where,
                    "invalid ast construction. unexpected condition set in %s loop",
                    kind,
                )
        elif kind == LoopKind.ITERATOR:
            emitter.emit(
                where,
                "invalid ast construction. unexpected condition set in %s loop",
                kind,
            )