"""
Entity store gateway.

Generic, table-addressed accessor over the relational store. Rows go in and
come out as plain dicts, and every operation returns a ``Result`` instead of
raising, so callers always check ``success`` before touching ``data``.

Each call opens its own session and commits before returning. There is no
caching and no retry.
"""
import enum
from typing import Any, Dict, Mapping, Optional, Sequence

from sqlalchemy import Table, and_, func, insert, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError, StatementError

from campushub.core import errors
from campushub.core.errors import Result
from campushub.core.logging import logger
from campushub.db.models import (
    Attendance,
    CommitteeProfile,
    Event,
    Notification,
    Payment,
    Registration,
    StudentProfile,
    TeacherProfile,
    User,
    UserSettings,
)
from campushub.db.session import Database

Row = Dict[str, Any]

TABLES: Dict[str, Table] = {
    model.__tablename__: model.__table__
    for model in (
        User,
        StudentProfile,
        TeacherProfile,
        CommitteeProfile,
        Event,
        Registration,
        Attendance,
        Payment,
        Notification,
        UserSettings,
    )
}

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _plain(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        return value.value
    return value


def _to_row(mapping: Mapping) -> Row:
    return {key: _plain(value) for key, value in mapping.items()}


def _classify(exc: SQLAlchemyError) -> str:
    """Map a driver/ORM error onto a PostgreSQL-style error code."""
    if isinstance(exc, IntegrityError):
        sqlstate = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
        if sqlstate:
            return sqlstate
        message = str(exc.orig).lower()
        if "unique" in message or "duplicate key" in message:
            return errors.UNIQUE_VIOLATION
        if "foreign key" in message:
            return errors.FOREIGN_KEY_VIOLATION
        if "not null" in message:
            return errors.NOT_NULL_VIOLATION
        if "check" in message:
            return errors.CHECK_VIOLATION
    elif isinstance(exc, StatementError) and isinstance(exc.orig, LookupError):
        # enum value rejected before reaching the driver
        return errors.CHECK_VIOLATION
    return errors.STORE_FAILURE


class EntityStoreGateway:
    """Typed row access over the tables registered in ``TABLES``."""

    def __init__(self, database: Database):
        self.database = database

    def _table(self, name: str) -> Optional[Table]:
        return TABLES.get(name)

    def _check_columns(self, table: Table, names) -> Optional[Result]:
        unknown = [name for name in names if name not in table.c]
        if unknown:
            return Result.fail(
                errors.UNKNOWN_COLUMN,
                f"Could not find the '{unknown[0]}' column of '{table.name}'",
            )
        return None

    def _prepare(self, table_name: str, *column_sets) -> tuple:
        table = self._table(table_name)
        if table is None:
            return None, Result.fail(errors.UNKNOWN_TABLE, f"Could not find the table '{table_name}'")
        for names in column_sets:
            failure = self._check_columns(table, names or ())
            if failure:
                return None, failure
        return table, None

    @staticmethod
    def _where(table: Table, filters: Optional[Mapping[str, Any]]):
        return and_(*[table.c[key] == _plain(value) for key, value in (filters or {}).items()])

    def _failure(self, operation: str, table_name: str, exc: SQLAlchemyError) -> Result:
        code = _classify(exc)
        message = str(getattr(exc, "orig", None) or exc)
        logger.error(f"Store {operation} on '{table_name}' failed [{code}]: {message}")
        return Result.fail(code, message)

    async def fetch_all(self, table_name: str, filters: Optional[Mapping[str, Any]] = None) -> Result:
        """Unfiltered scan, or every row matching the equality ``filters``."""
        table, failure = self._prepare(table_name, filters)
        if failure:
            return failure

        q = select(table)
        if filters:
            q = q.where(self._where(table, filters))
        if "created_at" in table.c:
            q = q.order_by(table.c.created_at, table.c.id)
        try:
            async with self.database.session() as session:
                res = await session.execute(q)
                return Result.ok([_to_row(m) for m in res.mappings().all()])
        except SQLAlchemyError as e:
            return self._failure("select", table_name, e)

    async def fetch_one(self, table_name: str, filters: Mapping[str, Any]) -> Result:
        """
        Single-row lookup.

        Fails with ``PGRST116`` unless exactly one row matches.
        """
        table, failure = self._prepare(table_name, filters)
        if failure:
            return failure

        q = select(table).where(self._where(table, filters)).limit(2)
        try:
            async with self.database.session() as session:
                res = await session.execute(q)
                rows = res.mappings().all()
        except SQLAlchemyError as e:
            return self._failure("select", table_name, e)

        if len(rows) != 1:
            return Result.fail(
                errors.NO_ROWS,
                f"JSON object requested, multiple (or no) rows returned ({len(rows)} rows)",
            )
        return Result.ok(_to_row(rows[0]))

    async def insert(self, table_name: str, row: Mapping[str, Any]) -> Result:
        table, failure = self._prepare(table_name, row)
        if failure:
            return failure

        stmt = insert(table).values(**row).returning(*table.c)
        try:
            async with self.database.session() as session:
                res = await session.execute(stmt)
                stored = _to_row(res.mappings().one())
                await session.commit()
        except SQLAlchemyError as e:
            return self._failure("insert", table_name, e)
        return Result.ok(stored)

    async def update(self, table_name: str, filters: Mapping[str, Any], values: Mapping[str, Any]) -> Result:
        """
        Apply ``values`` to every row matching ``filters``.

        Succeeds with the list of updated rows; an empty list means nothing
        matched.
        """
        table, failure = self._prepare(table_name, filters, values)
        if failure:
            return failure
        if not filters:
            return Result.fail(errors.STORE_FAILURE, "UPDATE requires a filter")

        stmt = (
            update(table)
            .where(self._where(table, filters))
            .values(**values)
            .returning(*table.c)
        )
        try:
            async with self.database.session() as session:
                res = await session.execute(stmt)
                rows = [_to_row(m) for m in res.mappings().all()]
                await session.commit()
        except SQLAlchemyError as e:
            return self._failure("update", table_name, e)
        return Result.ok(rows)

    async def upsert(self, table_name: str, row: Mapping[str, Any], on_conflict: Sequence[str]) -> Result:
        """
        Atomic insert-or-update keyed on the unique column(s) ``on_conflict``.

        Columns in ``row`` other than the conflict key overwrite the stored row.
        """
        table, failure = self._prepare(table_name, row, on_conflict)
        if failure:
            return failure

        dialect = self.database.dialect
        dialect_insert = _UPSERT_DIALECTS.get(dialect)
        if dialect_insert is None:
            return Result.fail(errors.STORE_FAILURE, f"Upsert is not supported on '{dialect}'")

        stmt = dialect_insert(table).values(**row)
        assignments = {key: stmt.excluded[key] for key in row if key not in on_conflict}
        if "updated_at" in table.c:
            assignments["updated_at"] = func.now()
        stmt = stmt.on_conflict_do_update(index_elements=list(on_conflict), set_=assignments)
        stmt = stmt.returning(*table.c)
        try:
            async with self.database.session() as session:
                res = await session.execute(stmt)
                stored = _to_row(res.mappings().one())
                await session.commit()
        except SQLAlchemyError as e:
            return self._failure("upsert", table_name, e)
        return Result.ok(stored)
