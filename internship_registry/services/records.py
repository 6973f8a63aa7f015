"""
Get-or-create for the lookup tables the spreadsheet import fills.

    role = await get_or_create(connection, CONTACT_ROLE, {"name": "Director"}, "name")

Runs on whatever connection it is given, so inside the import it takes part
in the import's transaction; rolling back is the caller's job.
"""

from typing import Any, Dict

from internship_registry.core.logging import get_logger
from internship_registry.db.connection import Connection
from internship_registry.db.tables import TableSpec

logger = get_logger(__name__)


async def _find_by(connection: Connection, table: TableSpec, unique_field: str, value: Any):
    statement = connection.format(f"SELECT * FROM {table.name} WHERE {unique_field} = ?", [value])
    return await connection.query(statement)


async def get_or_create(
    connection: Connection,
    table: TableSpec,
    record: Dict[str, Any],
    unique_field: str,
) -> Dict[str, Any]:
    """
    Return the row of `table` whose `unique_field` matches the record, inserting
    the record first if there is none.

    An existing row is returned as stored; the candidate's other fields are
    ignored. A new row comes back as the candidate merged with the stored row
    (stored values win) plus the new id under "id".
    """
    try:
        table.check_column(unique_field)
        value = record[unique_field]

        rows = await _find_by(connection, table, unique_field, value)
        if rows:
            return rows[0]

        candidate = dict(record)
        inserted = await connection.query(connection.format_insert(table, candidate))
        # MySQL reports the auto-increment id, Postgres returns the key row
        candidate["id"] = inserted.insert_id or (inserted[0].get(table.primary_key) if inserted else None)

        rows = await _find_by(connection, table, unique_field, value)
        if rows:
            return {**candidate, **rows[0]}

        return candidate
    except Exception as e:
        logger.error("get_or_create_failed", table=table.name, unique_field=unique_field, error=str(e))
        raise
