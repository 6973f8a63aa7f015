"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from enum import Enum
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

from internship_registry.core.exceptions import UnsupportedBackendError


class Backend(str, Enum):
    mysql = "mysql"
    postgres = "postgres"


def resolve_backend(value: str) -> Backend:
    """Map the DB_TYPE setting to a Backend, failing loudly on anything else."""
    try:
        return Backend(value.strip().lower())
    except (ValueError, AttributeError):
        raise UnsupportedBackendError(str(value)) from None


class Settings(BaseSettings):
    # Active backend: "mysql" or "postgres"
    db_type: str = "postgres"

    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "registry_user"
    postgres_password: str = "password"
    postgres_db: str = "internship_registry"

    # MySQL
    mysql_host: str = "localhost"
    mysql_port: int = 3306
    mysql_user: str = "registry_user"
    mysql_password: str = "password"
    mysql_db: str = "internship_registry"

    # Pool (shared by both backends)
    db_pool_size: int = 10
    db_max_overflow: int = 0
    db_pool_timeout: float = 30.0
    db_pool_recycle: int = 1800
    db_ssl: bool = False

    # Spreadsheet import
    upload_sheet_name: str = "Datos"
    max_upload_size_mb: int = 10

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # App
    debug: bool = False

    @property
    def backend(self) -> Backend:
        """db_type resolved to a Backend. Raises UnsupportedBackendError."""
        return resolve_backend(self.db_type)

    @property
    def database_url(self) -> URL:
        """Construct the SQLAlchemy URL for the selected backend"""
        if self.backend is Backend.mysql:
            return URL.create(
                "mysql+aiomysql",
                username=self.mysql_user,
                password=self.mysql_password,
                host=self.mysql_host,
                port=self.mysql_port,
                database=self.mysql_db,
            )
        return URL.create(
            "postgresql+asyncpg",
            username=self.postgres_user,
            password=self.postgres_password,
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_db,
        )

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
