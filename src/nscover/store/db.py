"""SQLite engine and session helpers for the selection store."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from nscover.core.errors import StoreError

# Register tables on SQLModel.metadata before create_all
from nscover.store import models as _models  # noqa: F401

if TYPE_CHECKING:
    from sqlalchemy import Engine


class Database:
    """
    SQLite connection manager.

    Usage::

        db = Database(Path("nscover.sqlite"))
        db.create_all()

        with db.session() as session:
            rows = session.exec(select(SolutionReport)).all()

        with db.immediate_transaction() as session:
            session.add(NamespaceSelection(...))
    """

    def __init__(self, db_path: Path | None, *, busy_timeout_ms: int = 30000) -> None:
        """Initialize with a SQLite file path; ``None`` keeps everything in memory."""
        self.db_path = db_path
        self.busy_timeout_ms = busy_timeout_ms
        self.engine = self._create_engine()

    def _create_engine(self) -> Engine:
        if self.db_path is None:
            from sqlalchemy.pool import StaticPool

            engine = create_engine(
                "sqlite://",
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            engine = create_engine(
                f"sqlite:///{self.db_path}",
                connect_args={"check_same_thread": False},
                pool_pre_ping=True,
            )

        busy_timeout_ms = self.busy_timeout_ms

        def _configure_pragmas(dbapi_conn: Any, _connection_record: Any) -> None:
            cursor = dbapi_conn.cursor()
            cursor.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)}")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        event.listen(engine, "connect", _configure_pragmas)
        return engine

    @property
    def location(self) -> str:
        return str(self.db_path) if self.db_path is not None else ":memory:"

    def create_all(self) -> None:
        """Create all tables from SQLModel metadata.

        Raises:
            StoreError: If the file cannot be created or opened.
        """
        try:
            if self.db_path is not None:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            SQLModel.metadata.create_all(self.engine)
        except (OSError, SQLAlchemyError) as e:
            raise StoreError.unavailable(self.location, str(e)) from e

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        with Session(self.engine) as session:
            yield session

    @contextmanager
    def immediate_transaction(self) -> Generator[Session, None, None]:
        """
        Session with BEGIN IMMEDIATE for serializable writes.

        Commits on successful exit and rolls back on exception.
        """
        with Session(self.engine) as session:
            session.execute(text("BEGIN IMMEDIATE"))
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                raise

    def dispose(self) -> None:
        self.engine.dispose()
