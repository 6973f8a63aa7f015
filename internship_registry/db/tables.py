"""
Table allowlists.

Every statement that names columns from caller data goes through one of these
specs, so a record with a field the table does not have is rejected instead
of being forwarded into SQL.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Tuple

from internship_registry.core.exceptions import UnknownFieldError


@dataclass(frozen=True)
class TableSpec:
    name: str
    primary_key: str
    columns: Tuple[str, ...]

    @property
    def all_columns(self) -> Tuple[str, ...]:
        return (self.primary_key,) + self.columns

    def validate(self, record: Mapping[str, Any]) -> List[str]:
        """Return the record's columns in table order, or raise UnknownFieldError."""
        unknown = set(record) - set(self.all_columns)
        if unknown:
            raise UnknownFieldError(self.name, unknown)
        return [c for c in self.all_columns if c in record]

    def check_column(self, column: str) -> str:
        if column not in self.all_columns:
            raise UnknownFieldError(self.name, [column])
        return column

    # Fixed CRUD statements, written with "?" markers

    def select_all(self) -> str:
        return f"SELECT * FROM {self.name} ORDER BY {self.primary_key}"

    def select_by_key(self) -> str:
        return f"SELECT * FROM {self.name} WHERE {self.primary_key} = ?"

    def insert(self, columns: List[str]) -> str:
        markers = ", ".join("?" for _ in columns)
        return f"INSERT INTO {self.name} ({', '.join(columns)}) VALUES ({markers})"

    def update_by_key(self, columns: List[str]) -> str:
        assignments = ", ".join(f"{c} = ?" for c in columns)
        return f"UPDATE {self.name} SET {assignments} WHERE {self.primary_key} = ?"

    def delete_by_key(self) -> str:
        return f"DELETE FROM {self.name} WHERE {self.primary_key} = ?"


CONTACT_ROLE = TableSpec("contact_role", "role_id", ("name",))

CONTACT = TableSpec(
    "contact", "contact_id",
    ("name", "role_id", "phone", "mobile", "email", "address"),
)

COMPANY = TableSpec(
    "company", "company_id",
    ("tax_id", "business_name", "address", "contact_id"),
)

SUPERVISOR = TableSpec(
    "supervisor", "supervisor_id",
    ("name", "phone", "email", "position"),
)

PROGRAM = TableSpec("program", "program_id", ("name",))

STUDENT = TableSpec(
    "student", "student_id",
    ("document", "full_name", "age", "mobile", "address", "phone", "email", "contact_id"),
)

INTERNSHIP = TableSpec(
    "internship", "internship_id",
    ("program_id", "student_id", "company_id", "supervisor_id", "start_date", "end_date", "total_days"),
)

TABLES: Dict[str, TableSpec] = {
    t.name: t
    for t in (CONTACT_ROLE, CONTACT, COMPANY, SUPERVISOR, PROGRAM, STUDENT, INTERNSHIP)
}
