"""Pass that gathers valid import clauses from top level import statements."""

from __future__ import annotations

from ..syntax.nodes import Emitter, LocationError, NodeList
from ..syntax.package_id import PackageIDError
from ..syntax.statements import ImportClause, ImportStmt
from .pipeline import Pass


class ImportClausesCollector(Pass):
    """Collects import clauses, reporting those with invalid package ids."""

    def __init__(self, emitter: Emitter) -> None:
        self.emitter = emitter
        self._clauses: list[ImportClause] = []

    def clauses(self) -> list[ImportClause]:
        return list(self._clauses)

    def process(self, statements: NodeList) -> None:
        for stmt in statements.elements:
            if not isinstance(stmt, ImportStmt):
                continue
            for clause in stmt.import_clauses:
                try:
                    clause.package_id.validate()
                except PackageIDError as err:
                    self.emitter.emit_errors(LocationError(clause.loc(), err))
                    continue
                self._clauses.append(clause)