"""
Application errors.

Database acquisition and statement errors are SQLAlchemy exceptions and are
not wrapped; these cover configuration, record shape and uploaded files.
"""


class RegistryError(Exception):
    """Base class for internship registry errors."""


class UnsupportedBackendError(RegistryError, ValueError):
    """DB_TYPE names a backend we cannot talk to."""

    def __init__(self, backend: str):
        self.backend = backend
        super().__init__(f"Unsupported database backend: {backend!r} (expected 'mysql' or 'postgres')")


class UnknownFieldError(RegistryError, ValueError):
    """A record carries fields outside the table's column allowlist."""

    def __init__(self, table: str, fields):
        self.table = table
        self.fields = sorted(fields)
        super().__init__(f"Unknown field(s) for table {table!r}: {', '.join(self.fields)}")


class ImportFileError(RegistryError):
    """Uploaded spreadsheet cannot be imported. Maps to HTTP 400."""


class WorkbookError(ImportFileError):
    pass


class SheetNotFoundError(ImportFileError):
    def __init__(self, sheet_name: str):
        self.sheet_name = sheet_name
        super().__init__(f'The sheet named "{sheet_name}" does not exist.')


class InvalidImportRowError(ImportFileError):
    def __init__(self, row_number: int, fields):
        self.row_number = row_number
        self.fields = list(fields)
        super().__init__(
            f"Row {row_number} is missing or has invalid values for: {', '.join(self.fields)}"
        )
