"""Settings shared by the core services."""

import os
from typing import Optional

from pydantic_settings import BaseSettings  # Configuration management


class ServiceSettings(BaseSettings):
    """Database and logging settings common to every service."""

    postgres_user: str = os.getenv("POSTGRES_USER", "postgres")
    postgres_password: str = os.getenv("POSTGRES_PASSWORD", "postgres")
    postgres_host: str = os.getenv("POSTGRES_HOST", "localhost")
    postgres_port: str = os.getenv("POSTGRES_PORT", "5432")
    postgres_db: str = os.getenv("POSTGRES_DB", "product_composite")
    # Full SQLAlchemy URL, takes precedence over the POSTGRES_* values
    database_url: Optional[str] = os.getenv("DATABASE_URL")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def get_database_url(self) -> str:
        """Return the SQLAlchemy URL for this service's store."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}@"
            f"{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )
