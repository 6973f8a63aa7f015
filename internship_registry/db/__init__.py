"""
Database module - MySQL/PostgreSQL pool and connection adapter.
"""
from internship_registry.db.connection import Backend, Connection, MySQLConnection, PostgresConnection, Rows
from internship_registry.db.database import Database, get_connection

__all__ = [
    "Backend",
    "Connection",
    "MySQLConnection",
    "PostgresConnection",
    "Rows",
    "Database",
    "get_connection",
]
