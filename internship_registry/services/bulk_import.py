"""
Bulk Import - loads the internship spreadsheet into the registry.

HOW IT WORKS:
1. Every sheet row is validated into an InternshipImportRow up front
   (a bad row rejects the file before the database is touched)
2. One transaction is opened for the whole file
3. Per row: contact role -> contact -> company -> program -> student are
   resolved with get_or_create, then the internship is updated or inserted
4. Commit after the last row; the first failure rolls everything back

Re-importing the same file is safe: lookups find the existing rows and the
internship for (student, company, program) is updated in place.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from pydantic import ValidationError

from internship_registry.core.exceptions import InvalidImportRowError
from internship_registry.core.logging import get_logger
from internship_registry.db.connection import Connection
from internship_registry.db.tables import COMPANY, CONTACT, CONTACT_ROLE, INTERNSHIP, PROGRAM, STUDENT
from internship_registry.schemas.schemas import InternshipImportRow
from internship_registry.services.records import get_or_create

logger = get_logger(__name__)

# Sheet row 1 holds the headers
FIRST_DATA_ROW = 2


@dataclass
class ImportSummary:
    rows: int = 0
    internships_created: int = 0
    internships_updated: int = 0


def parse_rows(records: Sequence[Dict[str, Any]]) -> List[InternshipImportRow]:
    """Validate raw sheet rows. Raises InvalidImportRowError on the first bad row."""
    parsed = []
    for offset, record in enumerate(records):
        try:
            parsed.append(InternshipImportRow.model_validate(record))
        except ValidationError as e:
            fields = []
            for error in e.errors():
                name = str(error["loc"][0]) if error["loc"] else "?"
                if name not in fields:
                    fields.append(name)
            raise InvalidImportRowError(FIRST_DATA_ROW + offset, fields) from e
    return parsed


async def import_row(connection: Connection, row: InternshipImportRow) -> bool:
    """
    Resolve the row's entities and upsert its internship.
    Returns True if a new internship was inserted, False if one was updated.
    """
    role = await get_or_create(connection, CONTACT_ROLE, {"name": row.contact_role}, "name")

    contact = await get_or_create(connection, CONTACT, {
        "name": row.contact_name,
        "phone": row.contact_phone,
        "mobile": row.contact_mobile,
        "email": row.contact_email,
        "role_id": role["role_id"],
    }, "email")

    company = await get_or_create(connection, COMPANY, {
        "tax_id": row.tax_id,
        "business_name": row.company_name,
        "address": row.company_address,
        "contact_id": contact["contact_id"],
    }, "tax_id")

    program = await get_or_create(connection, PROGRAM, {"name": row.program}, "name")

    student = await get_or_create(connection, STUDENT, {
        "full_name": row.student_name,
        "age": row.student_age,
        "mobile": row.student_mobile,
        "address": row.student_address,
        "phone": row.student_phone,
        "email": row.student_email,
        "contact_id": contact["contact_id"],
    }, "email")

    internship = {
        "program_id": program["program_id"],
        "student_id": student["student_id"],
        "company_id": company["company_id"],
        "start_date": row.start_date,
        "end_date": row.end_date,
        "total_days": row.total_days,
    }

    existing = await connection.query(
        connection.format(
            "SELECT * FROM internship WHERE student_id = ? AND company_id = ? AND program_id = ?",
            [internship["student_id"], internship["company_id"], internship["program_id"]],
        )
    )
    if existing:
        await connection.query(
            connection.format_update(INTERNSHIP, internship, existing[0]["internship_id"])
        )
        return False

    await connection.query(connection.format_insert(INTERNSHIP, internship))
    return True


async def import_rows(connection: Connection, rows: Sequence[InternshipImportRow]) -> ImportSummary:
    """Import every row in one transaction. All rows land or none do."""
    summary = ImportSummary()

    await connection.begin()
    try:
        for row in rows:
            created = await import_row(connection, row)
            summary.rows += 1
            if created:
                summary.internships_created += 1
            else:
                summary.internships_updated += 1
        await connection.commit()
    except Exception as e:
        await connection.rollback()
        logger.error(
            "import_rolled_back",
            failed_row=FIRST_DATA_ROW + summary.rows,
            error=str(e),
        )
        raise

    logger.info(
        "import_committed",
        rows=summary.rows,
        internships_created=summary.internships_created,
        internships_updated=summary.internships_updated,
    )
    return summary
