# autociclo/database.py
"""
Database handle, schema lifecycle, and query primitives.
Uses SQLAlchemy over an embedded SQLite file. All models are imported in
create_tables() so the three tables and their indexes are created in one call.

Services never reach for a global engine: they receive a Database instance
and go through execute / query_one / query_many / run_in_transaction.
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, TypeVar, Union

from sqlalchemy import Table, create_engine, event, func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.sql.base import Executable

from autociclo.config import settings
from autociclo.exceptions import StorageError
from autociclo.utils.logger import get_logger

logger = get_logger(__name__)

Base = declarative_base()

T = TypeVar("T")
Statement = Union[str, Executable]

# Drop order respects the foreign keys on inventory_assignments
DROP_ORDER = ("inventory_assignments", "parts", "vehicles")


@dataclass
class ExecuteResult:
    inserted_id: Optional[int]
    rows_affected: int


def _enable_foreign_keys(dbapi_connection, connection_record):
    # SQLite ships with FK enforcement off; it must be set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _as_statement(statement: Statement) -> Executable:
    return text(statement) if isinstance(statement, str) else statement


def _import_models():
    from autociclo.models.vehicle import Vehicle                          # noqa
    from autociclo.models.part import Part                                # noqa
    from autociclo.models.inventory_assignment import InventoryAssignment  # noqa


class Database:
    """One embedded store: engine, session factory and the query primitives."""

    def __init__(self, url: Optional[str] = None, echo: Optional[bool] = None):
        self.url = url or settings.DATABASE_URL
        self.engine = create_engine(
            self.url,
            echo=settings.SQL_ECHO if echo is None else echo,
            future=True,
        )
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_foreign_keys)

        self.SessionLocal = sessionmaker(
            bind=self.engine, autocommit=False, autoflush=False, expire_on_commit=False
        )
        # Session of the transaction currently running on this handle, per thread
        self._local = threading.local()

    def __repr__(self):
        return f"<Database {self.engine.url!r}>"

    def _current_session(self) -> Optional[Session]:
        return getattr(self._local, "session", None)

    # ── Lifecycle ─────────────────────────────────────────────────────────

    def create_tables(self):
        """
        Creates all tables and indexes that do not exist yet.
        Safe to call on every start.
        """
        _import_models()
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            logger.error(f"❌ Schema initialisation failed: {e}", exc_info=True)
            raise StorageError(f"Schema initialisation failed: {e}", original=e) from e

    def init(self):
        self.create_tables()
        logger.info(f"✅ Database ready at {self.engine.url}")

    def drop_tables(self):
        """Drops every table in FK-safe order. Destructive, development only."""
        _import_models()
        try:
            with self.engine.begin() as conn:
                for name in DROP_ORDER:
                    Base.metadata.tables[name].drop(conn, checkfirst=True)
        except SQLAlchemyError as e:
            logger.error(f"❌ Dropping tables failed: {e}", exc_info=True)
            raise StorageError(f"Dropping tables failed: {e}", original=e) from e
        logger.warning(f"🗑️  Tables dropped: {', '.join(DROP_ORDER)}")

    def close(self):
        self.engine.dispose()
        logger.info("Database connections closed")

    # ── Sessions ──────────────────────────────────────────────────────────

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Yields the running transaction's session, or a fresh one that is
        committed on success and rolled back on error.
        """
        active = self._current_session()
        if active is not None:
            yield active
            return

        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @contextmanager
    def _reporting(self, statement: Any, params: Any):
        try:
            yield
        except SQLAlchemyError as e:
            original = getattr(e, "orig", None) or e
            logger.error(f"❌ Query failed: {original} | SQL: {statement} | Params: {params}")
            raise StorageError(
                f"Query failed: {original}", statement=str(statement), params=params, original=e
            ) from e

    # ── Query primitives ──────────────────────────────────────────────────

    def execute(self, statement: Statement, params: Optional[Mapping[str, Any]] = None) -> ExecuteResult:
        """Run an INSERT / UPDATE / DELETE. inserted_id is set for insert() constructs."""
        stmt = _as_statement(statement)
        with self._reporting(stmt, params):
            with self.session_scope() as session:
                result = session.execute(stmt, params or {})
                inserted_id = None
                if getattr(result, "is_insert", False) and result.inserted_primary_key:
                    inserted_id = result.inserted_primary_key[0]
                return ExecuteResult(inserted_id=inserted_id, rows_affected=result.rowcount)

    def query_many(self, statement: Statement, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        stmt = _as_statement(statement)
        with self._reporting(stmt, params):
            with self.session_scope() as session:
                return [dict(row) for row in session.execute(stmt, params or {}).mappings()]

    def query_one(self, statement: Statement, params: Optional[Mapping[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """First row or None. Only execution errors raise."""
        stmt = _as_statement(statement)
        with self._reporting(stmt, params):
            with self.session_scope() as session:
                row = session.execute(stmt, params or {}).mappings().first()
                return dict(row) if row is not None else None

    def run_in_transaction(self, fn: Callable[[], T]) -> T:
        """
        Runs fn() with every primitive sharing one session. Any exception rolls
        the whole unit back and is re-raised unchanged; success commits.
        A nested call joins the outer transaction.
        """
        if self._current_session() is not None:
            return fn()

        session = self.SessionLocal()
        self._local.session = session
        try:
            result = fn()
            with self._reporting("COMMIT", None):
                session.commit()
            logger.debug("Transaction committed")
            return result
        except Exception as e:
            session.rollback()
            logger.warning(f"↩️  Transaction rolled back: {e}")
            raise
        finally:
            self._local.session = None
            session.close()

    def table(self, name: Union[str, Table]) -> Table:
        if isinstance(name, Table):
            return name
        _import_models()
        try:
            return Base.metadata.tables[name]
        except KeyError:
            raise ValueError(f"Unknown table: {name}") from None

    def exists_record(self, table: Union[str, Table], column: str, value: Any,
                      exclude_id: Optional[int] = None) -> bool:
        """Uniqueness probe; exclude_id skips the record being edited."""
        tbl = self.table(table)
        stmt = select(func.count().label("total")).select_from(tbl).where(tbl.c[column] == value)
        if exclude_id is not None:
            pk = next(iter(tbl.primary_key.columns))
            stmt = stmt.where(pk != exclude_id)
        row = self.query_one(stmt)
        return bool(row and row["total"] > 0)

    def count(self, table: Union[str, Table]) -> int:
        tbl = self.table(table)
        row = self.query_one(select(func.count().label("total")).select_from(tbl))
        return row["total"] if row else 0


_database: Optional[Database] = None


def get_database() -> Database:
    """
    Process-wide handle for application startup. The first caller builds and
    initialises it; later callers get the same instance. Initialisation
    errors propagate and leave no half-built handle behind.
    """
    global _database
    if _database is None:
        database = Database()
        database.init()
        _database = database
    return _database
