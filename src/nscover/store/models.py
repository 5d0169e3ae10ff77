"""SQLModel tables for persisted namespace selections and report history.

Only deselections are stored: a namespace with no row is checked.
"""

from datetime import UTC, datetime

from sqlalchemy import Index
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(UTC)


class NamespaceSelection(SQLModel, table=True):
    """A namespace the user excluded for one project of one solution."""

    __tablename__ = "namespace_selections"
    __table_args__ = (
        Index("ix_selection_solution_project_ns", "solution_path", "project_path", "namespace"),
    )

    id: int | None = Field(default=None, primary_key=True)
    solution_path: str = Field(index=True)
    project_path: str
    namespace: str
    is_checked: bool = False  # always False today; kept for extensibility
    saved_at: datetime = Field(default_factory=utcnow)


class SolutionReport(SQLModel, table=True):
    """Last successful report generation per solution."""

    __tablename__ = "solution_reports"

    id: int | None = Field(default=None, primary_key=True)
    solution_path: str = Field(unique=True, index=True)
    last_generated_at: datetime = Field(default_factory=utcnow)
