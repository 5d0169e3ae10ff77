"""Persisted namespace deselections and solution report history."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete
from sqlmodel import col, select

from nscover.core.logging import get_logger
from nscover.store.db import Database
from nscover.store.models import NamespaceSelection, SolutionReport, utcnow

log = get_logger("store.selection")


class SelectionStore:
    """Exclude-only selection persistence keyed by (solution, project).

    The host calls :meth:`initialize` once at startup; everything else
    assumes the tables exist.
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    @property
    def database(self) -> Database:
        return self._db

    def initialize(self) -> None:
        self._db.create_all()
        log.debug("selection_store_ready", location=self._db.location)

    def load_deselected(self, solution_path: str, project_path: str) -> set[str]:
        with self._db.session() as session:
            rows = session.exec(
                select(NamespaceSelection.namespace).where(
                    NamespaceSelection.solution_path == solution_path,
                    NamespaceSelection.project_path == project_path,
                    col(NamespaceSelection.is_checked).is_(False),
                )
            ).all()
        return set(rows)

    def save_deselected(
        self,
        solution_path: str,
        data: Iterable[tuple[str, Iterable[str]]],
    ) -> int:
        """Replace every record of a solution with the given deselections.

        Args:
            solution_path: Solution whose records are replaced.
            data: ``(project_path, deselected_namespaces)`` pairs.

        Returns:
            Number of rows written.
        """
        now = utcnow()
        rows: list[NamespaceSelection] = []
        for project_path, namespaces in data:
            for namespace in dict.fromkeys(namespaces):
                rows.append(
                    NamespaceSelection(
                        solution_path=solution_path,
                        project_path=project_path,
                        namespace=namespace,
                        is_checked=False,
                        saved_at=now,
                    )
                )

        with self._db.immediate_transaction() as session:
            session.execute(
                delete(NamespaceSelection).where(
                    col(NamespaceSelection.solution_path) == solution_path
                )
            )
            session.add_all(rows)

        log.info("deselections_saved", solution=solution_path, rows=len(rows))
        return len(rows)

    def upsert_solution_report(self, solution_path: str) -> None:
        with self._db.immediate_transaction() as session:
            report = session.exec(
                select(SolutionReport).where(SolutionReport.solution_path == solution_path)
            ).first()
            if report is None:
                session.add(SolutionReport(solution_path=solution_path, last_generated_at=utcnow()))
            else:
                report.last_generated_at = utcnow()
                session.add(report)

    def get_recent_solutions(self, limit: int = 10) -> list[str]:
        """Solutions with a generated report, most recent first."""
        with self._db.session() as session:
            rows = session.exec(
                select(SolutionReport.solution_path)
                .order_by(col(SolutionReport.last_generated_at).desc(), col(SolutionReport.id).desc())
                .limit(limit)
            ).all()
        return list(rows)

    def remove_solution_records(self, solution_path: str) -> None:
        """Forget a solution: its deselections and its report history."""
        with self._db.immediate_transaction() as session:
            session.execute(
                delete(NamespaceSelection).where(
                    col(NamespaceSelection.solution_path) == solution_path
                )
            )
            session.execute(
                delete(SolutionReport).where(col(SolutionReport.solution_path) == solution_path)
            )
        log.info("solution_records_removed", solution=solution_path)
