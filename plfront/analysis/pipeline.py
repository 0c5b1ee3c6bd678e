"""Running analysis passes over a statement list."""

from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, Optional

from ..syntax.nodes import NodeList, Statement, Visitor

_MAX_WORKERS = 32


class Pass(ABC):
    """An analysis or transformation pass over a statement list."""

    @abstractmethod
    def process(self, statements: NodeList) -> None:
        """Analyse or transform the statement list."""


def run_passes(
    node: Any,
    passes: Iterable[Iterable[Pass]],
    should_early_exit: Optional[Callable[[], bool]] = None,
) -> None:
    """Run groups of passes in order; passes within a group run concurrently."""
    for group in passes:
        group = list(group)
        if group:
            with ThreadPoolExecutor(max_workers=min(len(group), _MAX_WORKERS)) as pool:
                futures = [pool.submit(p.process, node) for p in group]
            for future in futures:
                future.result()

        if should_early_exit is not None and should_early_exit():
            return


def walk_statements(
    statements: NodeList,
    new_visitor: Callable[[Statement], Visitor],
) -> None:
    """Walk every statement concurrently with its own visitor."""
    pairs = [(stmt, new_visitor(stmt)) for stmt in statements.elements]
    if not pairs:
        return

    with ThreadPoolExecutor(max_workers=min(len(pairs), _MAX_WORKERS)) as pool:
        futures = [pool.submit(stmt.walk, visitor) for stmt, visitor in pairs]
    for future in futures:
        future.result()