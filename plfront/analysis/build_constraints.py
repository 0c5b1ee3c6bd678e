"""Evaluation of the build constraint directive at the top of a source file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Collection, Optional

from ..syntax.directives import (
    DirectiveAndExpr,
    DirectiveGroupExpr,
    DirectiveNotExpr,
    DirectiveOrExpr,
    DirectivesDecl,
    DirectiveValueExpr,
)
from ..syntax.nodes import DirectiveExpression, NodeList
from .pipeline import Pass


@dataclass
class BuildConfig:
    """Build settings relevant to source analysis."""

    build_tags: frozenset[str] = field(default_factory=frozenset)


def evaluate_constraint(expr: DirectiveExpression, build_tags: Collection[str]) -> bool:
    """Evaluate a directive expression against the set of enabled build tags."""
    if isinstance(expr, DirectiveValueExpr):
        return expr.value in build_tags
    if isinstance(expr, DirectiveGroupExpr):
        return evaluate_constraint(expr.expr, build_tags)
    if isinstance(expr, DirectiveNotExpr):
        return not evaluate_constraint(expr.operand, build_tags)
    if isinstance(expr, DirectiveAndExpr):
        left = evaluate_constraint(expr.left, build_tags)
        right = evaluate_constraint(expr.right, build_tags)
        return left and right
    if isinstance(expr, DirectiveOrExpr):
        left = evaluate_constraint(expr.left, build_tags)
        right = evaluate_constraint(expr.right, build_tags)
        return left or right
    raise TypeError(f"unexpected directive expression: {expr!r}")


class BuildConstraintEvaluator(Pass):
    """Decides whether a source file's build constraint is satisfied."""

    def __init__(self, config: Optional[BuildConfig]) -> None:
        self.config = config
        self._satisfy = True

    def process(self, statements: NodeList) -> None:
        if self.config is None or not statements.elements:
            return

        decl = statements.elements[0]
        if not isinstance(decl, DirectivesDecl) or not decl.directives:
            return

        directive = decl.directives[0]
        if (
            directive.name != "build"
            or directive.sub_name != ""
            or len(directive.arguments) != 1
        ):
            return

        self._satisfy = evaluate_constraint(
            directive.arguments[0], self.config.build_tags
        )

    def satisfy_constraints(self) -> bool:
        return self._satisfy