"""
Shared fixtures.

Database-backed tests run on a throwaway SQLite file through SQLiteConnection,
a test-only Connection variant: SQLite takes "?" markers natively and reports
lastrowid like MySQL, so everything above translate() is the production code.
"""

import io
import sqlite3
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook
from sqlalchemy.dialects import sqlite
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool

from internship_registry.db.connection import Connection
from internship_registry.db.database import Database
from internship_registry.main import create_app


SCHEMA = """
CREATE TABLE contact_role (
    role_id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE
);
CREATE TABLE contact (
    contact_id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT, role_id INTEGER, phone TEXT, mobile TEXT,
    email TEXT UNIQUE, address TEXT
);
CREATE TABLE company (
    company_id INTEGER PRIMARY KEY AUTOINCREMENT,
    tax_id TEXT NOT NULL UNIQUE, business_name TEXT, address TEXT, contact_id INTEGER
);
CREATE TABLE supervisor (
    supervisor_id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL, phone TEXT, email TEXT, position TEXT
);
CREATE TABLE program (
    program_id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE
);
CREATE TABLE student (
    student_id INTEGER PRIMARY KEY AUTOINCREMENT,
    document TEXT, full_name TEXT, age INTEGER, mobile TEXT, address TEXT,
    phone TEXT, email TEXT UNIQUE, contact_id INTEGER
);
CREATE TABLE internship (
    internship_id INTEGER PRIMARY KEY AUTOINCREMENT,
    program_id INTEGER NOT NULL, student_id INTEGER NOT NULL, company_id INTEGER NOT NULL,
    supervisor_id INTEGER, start_date DATE, end_date DATE,
    total_days INTEGER CHECK (total_days >= 0)
);
"""

TABLE_NAMES = ["contact_role", "contact", "company", "supervisor", "program", "student", "internship"]

HEADERS = [
    "CARGO DEL CONTACTO", "CONTACTO", "TELEFONO CONTACTO", "CELULAR CONTACTO", "E MAIL CONTACTO",
    "NIT", "EMPRESA DONDE REALIZA LA PRÁCTICA", "DIRECCION CONTACTO", "PROGRAMA",
    "APELLIDOS Y NOMBRES", "EDAD", "CELULAR", "DIRECCION RESIDENCIA", "TELÉFONO RESIDENCIA",
    "CORREO JEFE INMEDIATO", "FECHA INICIO", "FECHA TERMINACIÓN", "TOTAL DIAS EN PRACTICA",
]


class SQLiteConnection(Connection):
    literal_dialect = sqlite.dialect(paramstyle="named")

    def translate(self, statement: str) -> str:
        return statement


def sheet_row(**overrides: Any) -> Dict[str, Any]:
    """One spreadsheet row keyed by header. Override with header=value via dict(**{...})."""
    row = {
        "CARGO DEL CONTACTO": "Directora de Talento Humano",
        "CONTACTO": "Laura Gómez",
        "TELEFONO CONTACTO": "6041234567",
        "CELULAR CONTACTO": 3001234567,
        "E MAIL CONTACTO": "laura.gomez@acme.co",
        "NIT": 900123456,
        "EMPRESA DONDE REALIZA LA PRÁCTICA": "Acme S.A.S.",
        "DIRECCION CONTACTO": "Cra 43A # 1-50",
        "PROGRAMA": "Ingeniería de Sistemas",
        "APELLIDOS Y NOMBRES": "Pérez Ana",
        "EDAD": 21,
        "CELULAR": "3109876543",
        "DIRECCION RESIDENCIA": "Calle 10 # 20-30",
        "TELÉFONO RESIDENCIA": "6047654321",
        "CORREO JEFE INMEDIATO": "ana.perez@uni.edu.co",
        "FECHA INICIO": 45292,        # 2024-01-01
        "FECHA TERMINACIÓN": 45473,   # 2024-06-30
        "TOTAL DIAS EN PRACTICA": 181,
    }
    row.update(overrides)
    return row


def make_workbook(rows: List[Dict[str, Any]], sheet_name: str = "Datos") -> bytes:
    """Build .xlsx bytes with HEADERS in row 1 and one row per dict."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_name
    sheet.append(HEADERS)
    for row in rows:
        sheet.append([row.get(header) for header in HEADERS])
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def build_database(db_path) -> Database:
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{db_path}",
        poolclass=AsyncAdaptedQueuePool,
        pool_size=3,
        max_overflow=0,
        pool_timeout=5,
    )
    return Database(engine, SQLiteConnection)


def checked_out(database: Database) -> int:
    return database.engine.sync_engine.pool.checkedout()


def table_counts(db_path) -> Dict[str, int]:
    """Row count per table, read through a plain sqlite3 connection."""
    with sqlite3.connect(db_path) as conn:
        return {t: conn.execute(f"SELECT COUNT(*) FROM {t}").fetchone()[0] for t in TABLE_NAMES}


def fetch_all(db_path, statement: str) -> List[Dict[str, Any]]:
    with sqlite3.connect(db_path) as conn:
        conn.row_factory = sqlite3.Row
        return [dict(row) for row in conn.execute(statement).fetchall()]


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "registry.db"
    with sqlite3.connect(path) as conn:
        conn.executescript(SCHEMA)
    return path


@pytest.fixture
async def database(db_path):
    database = build_database(db_path)
    yield database
    await database.dispose()


@pytest.fixture
async def connection(database):
    connection = await database.connect()
    yield connection
    await connection.release()


@pytest.fixture
def app_database(db_path):
    return build_database(db_path)


@pytest.fixture
def client(app_database):
    app = create_app(database=app_database)
    # dispose the pool on shutdown, inside the client's event loop
    app.state.owns_database = True
    with TestClient(app) as client:
        yield client
