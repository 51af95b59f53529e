"""
Configuration management for the Catalog API.

Uses Pydantic Settings for environment variable validation and type safety.
"""

from typing import Optional
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class MongoDbSettings(BaseSettings):
    """MongoDB connection configuration."""

    host: str = Field(
        default="localhost",
        description="MongoDB host name"
    )
    port: int = Field(
        default=27017,
        ge=1,
        le=65535,
        description="MongoDB port"
    )
    user: Optional[str] = Field(
        default=None,
        description="MongoDB user (optional)"
    )
    password: Optional[str] = Field(
        default=None,
        description="MongoDB password (optional)"
    )
    connection_string_override: Optional[str] = Field(
        default=None,
        alias="MONGODB_CONNECTION_STRING",
        description="Full connection string; takes precedence over host/port/user/password"
    )
    database_name: str = Field(
        default="catalog",
        description="Database holding the items collection"
    )
    server_selection_timeout_ms: int = Field(
        default=3000,
        ge=1,
        description="How long the driver waits for a reachable server (milliseconds)"
    )

    @property
    def connection_string(self) -> str:
        """
        Connection string handed to the MongoDB client.

        Built from host/port and, when both are set, user/password.
        """
        if self.connection_string_override:
            return self.connection_string_override
        if self.user and self.password:
            return (
                f"mongodb://{quote_plus(self.user)}:{quote_plus(self.password)}"
                f"@{self.host}:{self.port}"
            )
        return f"mongodb://{self.host}:{self.port}"

    class Config:
        env_prefix = "MONGODB_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        populate_by_name = True
        extra = "ignore"


class AppConfig(BaseSettings):
    """Main application configuration."""

    environment: str = Field(
        default="Production",
        description="Hosting environment name (Development enables Swagger UI)"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    repository: str = Field(
        default="mongodb",
        description="Items repository backend (mongodb or memory)"
    )
    https_redirect: bool = Field(
        default=False,
        description="Redirect plain HTTP requests to HTTPS"
    )

    mongodb: MongoDbSettings = Field(default_factory=MongoDbSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v

    @field_validator("repository")
    @classmethod
    def validate_repository(cls, v: str) -> str:
        """Validate repository backend name."""
        valid_backends = ["mongodb", "memory"]
        v = v.lower()
        if v not in valid_backends:
            raise ValueError(f"Repository must be one of: {valid_backends}")
        return v

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    class Config:
        env_prefix = "CATALOG_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global config instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the global configuration instance.

    Lazily loads configuration on first access.

    Returns:
        AppConfig: The global configuration instance
    """
    global _config
    if _config is None:
        _config = AppConfig(mongodb=MongoDbSettings())
    return _config


def reload_config() -> AppConfig:
    """
    Reload configuration from environment variables.

    Useful for testing or when environment changes.

    Returns:
        AppConfig: The reloaded configuration instance
    """
    global _config
    _config = None
    return get_config()
