"""
Connection Adapter - one capability set over MySQL and PostgreSQL.

Call sites write statements with "?" markers and never branch on the backend:

    connection = await database.connect()
    try:
        rows = await connection.query("SELECT * FROM company WHERE tax_id = ?", ["900123"])
    finally:
        await connection.release()

Each variant knows three things about its backend:
- how to rewrite "?" markers for its driver (asyncpg wants $1, aiomysql wants %s)
- how the driver reports a new auto-increment id
- how its INSERT statements are spelled
Everything else (result normalization, literal rendering, transactions) is shared.
"""

import abc
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Type

from sqlalchemy import literal
from sqlalchemy.dialects import mysql, postgresql
from sqlalchemy.engine import CursorResult, Dialect
from sqlalchemy.ext.asyncio import AsyncConnection

from internship_registry.core.config import Backend
from internship_registry.db.placeholders import MARKER, count_markers, to_format, to_numbered
from internship_registry.db.tables import TableSpec

Record = Dict[str, Any]


class Rows(list):
    """
    Flat list of records returned by Connection.query().

    Some drivers hand back rows, others only metadata; both end up here so
    callers can always iterate. insert_id is the auto-increment id reported
    by the driver for an INSERT, when it reports one.
    """

    def __init__(self, records: Iterable[Record] = (), insert_id: Optional[int] = None, rowcount: int = -1):
        super().__init__(records)
        self.insert_id = insert_id
        self.rowcount = rowcount


class Connection(abc.ABC):
    """Exclusive handle on one pooled connection. Release exactly once."""

    backend: Backend
    # Dialect used only to render SQL literals for format(); named paramstyle
    # so percent signs inside string literals are left alone.
    literal_dialect: Dialect

    def __init__(self, connection: AsyncConnection):
        self._connection = connection
        self._in_transaction = False

    # ------------------------------------------------------------------
    # Backend specifics
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def translate(self, statement: str) -> str:
        """Rewrite "?" markers into the driver's parameter syntax."""

    def insert_id(self, result: CursorResult) -> Optional[int]:
        if result.returns_rows:
            return None
        return result.lastrowid or None

    def insert_suffix(self, table: TableSpec) -> str:
        """Clause appended to an INSERT so the new primary key comes back."""
        return ""

    # ------------------------------------------------------------------
    # Query execution
    # ------------------------------------------------------------------

    async def query(self, statement: str, params: Optional[Sequence[Any]] = None) -> Rows:
        """
        Execute one statement and return its rows as a flat list of dicts.

        With params, "?" markers are translated for the driver. Without params
        the statement is sent verbatim, which is what format() output needs.
        Outside begin()/commit() every statement is committed on its own.
        """
        try:
            if params:
                result = await self._connection.exec_driver_sql(self.translate(statement), tuple(params))
            else:
                result = await self._connection.exec_driver_sql(
                    statement, execution_options={"no_parameters": True}
                )
            rows = Rows(
                [dict(row) for row in result.mappings().all()] if result.returns_rows else [],
                insert_id=self.insert_id(result),
                rowcount=result.rowcount,
            )
            if not self._in_transaction:
                await self._connection.commit()
            return rows
        except Exception:
            if not self._in_transaction:
                await self._connection.rollback()
            raise

    async def release(self) -> None:
        """Return the connection to the pool. Any open transaction is rolled back."""
        self._in_transaction = False
        await self._connection.close()

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    @property
    def in_transaction(self) -> bool:
        return self._in_transaction

    async def begin(self) -> None:
        if self._in_transaction:
            raise RuntimeError("A transaction is already in progress on this connection")
        await self._connection.begin()
        self._in_transaction = True

    async def commit(self) -> None:
        await self._connection.commit()
        self._in_transaction = False

    async def rollback(self) -> None:
        await self._connection.rollback()
        self._in_transaction = False

    # ------------------------------------------------------------------
    # Literal statements
    # ------------------------------------------------------------------

    def literal(self, value: Any) -> str:
        """Render a Python value as a SQL literal for this backend."""
        if value is None:
            return "NULL"
        expression = literal(value)
        return str(expression.compile(dialect=self.literal_dialect, compile_kwargs={"literal_binds": True}))

    def format(self, statement: str, params: Sequence[Any]) -> str:
        """Substitute the Kth "?" with the literal of params[K-1]."""
        params = list(params)
        expected = count_markers(statement)
        if expected != len(params):
            raise ValueError(f"Statement has {expected} placeholder(s) but {len(params)} value(s) were given")
        values = iter(params)
        return re.sub(re.escape(MARKER), lambda _: self.literal(next(values)), statement)

    def format_insert(self, table: TableSpec, record: Mapping[str, Any]) -> str:
        columns = self._columns(table, record)
        values = ", ".join(self.literal(record[c]) for c in columns)
        return (
            f"INSERT INTO {table.name} ({', '.join(columns)}) VALUES ({values})"
            f"{self.insert_suffix(table)}"
        )

    def format_update(self, table: TableSpec, record: Mapping[str, Any], key: Any) -> str:
        columns = self._columns(table, record)
        assignments = ", ".join(f"{c} = {self.literal(record[c])}" for c in columns)
        return f"UPDATE {table.name} SET {assignments} WHERE {table.primary_key} = {self.literal(key)}"

    def _columns(self, table: TableSpec, record: Mapping[str, Any]) -> List[str]:
        columns = table.validate(record)
        if not columns:
            raise ValueError(f"Refusing to build a statement for {table.name!r} from an empty record")
        return columns


class MySQLConnection(Connection):
    """aiomysql: %s markers, id from cursor.lastrowid."""

    backend = Backend.mysql
    literal_dialect = mysql.dialect(paramstyle="named")

    def translate(self, statement: str) -> str:
        return to_format(statement)

    def format_insert(self, table: TableSpec, record: Mapping[str, Any]) -> str:
        columns = self._columns(table, record)
        assignments = ", ".join(f"{c} = {self.literal(record[c])}" for c in columns)
        return f"INSERT INTO {table.name} SET {assignments}"


class PostgresConnection(Connection):
    """asyncpg: $1..$N markers, id from INSERT ... RETURNING."""

    backend = Backend.postgres
    literal_dialect = postgresql.dialect(paramstyle="named")

    def translate(self, statement: str) -> str:
        return to_numbered(statement)

    def insert_id(self, result: CursorResult) -> Optional[int]:
        return None

    def insert_suffix(self, table: TableSpec) -> str:
        return f" RETURNING {table.primary_key}"


CONNECTION_CLASSES: Dict[Backend, Type[Connection]] = {
    Backend.mysql: MySQLConnection,
    Backend.postgres: PostgresConnection,
}
