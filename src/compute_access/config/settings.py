"""
Configuration management for compute-access.

Settings are read from the environment (and an optional .env file) through
pydantic-settings. Services embedding the library can subclass
ComputeAccessSettings to add their own fields.
"""
from functools import lru_cache
from typing import Optional, Dict, Any
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DatabaseTables


class ComputeAccessSettings(BaseSettings):
    """Settings for the node access engine and its stores."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Core Application Settings
    app_name: str = Field(default="compute-access")
    environment: str = Field(default="development")

    # Database Configuration
    database_url: Optional[str] = Field(default=None)
    db_pool_min_size: int = Field(default=2)
    db_pool_max_size: int = Field(default=10)
    db_command_timeout: int = Field(default=30)

    # Node access tables
    access_schema: str = Field(default=DatabaseTables.ACCESS_SCHEMA)
    node_access_table: str = Field(default=DatabaseTables.NODE_ACCESS)
    node_scope_table: str = Field(default=DatabaseTables.NODE_SCOPE)

    # Team / organization directory (read-only)
    directory_schema: str = Field(default=DatabaseTables.DIRECTORY_SCHEMA)
    team_lookup_enabled: bool = Field(default=True)

    @field_validator("access_schema", "directory_schema", "node_access_table", "node_scope_table")
    @classmethod
    def validate_identifier(cls, value: str) -> str:
        """Schema and table names are interpolated into SQL, keep them plain."""
        if not value or not value.replace("_", "").isalnum():
            raise ValueError(f"Invalid SQL identifier: {value!r}")
        return value

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def node_access_relation(self) -> str:
        """Fully qualified node access table."""
        return f"{self.access_schema}.{self.node_access_table}"

    @property
    def node_scope_relation(self) -> str:
        """Fully qualified node scope table."""
        return f"{self.access_schema}.{self.node_scope_table}"

    @property
    def is_database_configured(self) -> bool:
        """Check if a database URL was provided."""
        return bool(self.database_url)

    def get_pool_config(self) -> Dict[str, Any]:
        """Get asyncpg pool keyword arguments."""
        return {
            "min_size": self.db_pool_min_size,
            "max_size": self.db_pool_max_size,
            "command_timeout": self.db_command_timeout,
        }


@lru_cache()
def get_settings() -> ComputeAccessSettings:
    """Get cached settings instance."""
    return ComputeAccessSettings()
