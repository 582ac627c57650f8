"""
Application settings loaded from environment variables (and an optional .env file).
"""
from typing import List, Optional

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from db.errors import ConfigurationError


class Settings(BaseSettings):
    """
    Runtime configuration.

    Usage:
        settings = Settings.from_env()
        settings.validate()
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        env_ignore_empty=True,
        populate_by_name=True,
        frozen=True,
    )

    mongo_uri: Optional[str] = Field(None, validation_alias=AliasChoices("MONGODB_URI", "MONGO_URI"))
    db_name: Optional[str] = Field(None, validation_alias=AliasChoices("DB_NAME", "MONGO_DB_NAME"))
    port: Optional[int] = Field(None, validation_alias="PORT")
    host: str = Field("0.0.0.0", validation_alias="HOST")

    connect_timeout_ms: int = Field(10000, validation_alias="MONGO_CONNECT_TIMEOUT_MS")
    server_selection_timeout_ms: int = Field(10000, validation_alias="MONGO_SERVER_SELECTION_TIMEOUT_MS")
    socket_timeout_ms: int = Field(45000, validation_alias="MONGO_SOCKET_TIMEOUT_MS")
    max_pool_size: int = Field(10, validation_alias="MONGO_MAX_POOL_SIZE")
    min_pool_size: int = Field(2, validation_alias="MONGO_MIN_POOL_SIZE")
    tls_allow_invalid: bool = Field(False, validation_alias="MONGO_TLS_ALLOW_INVALID")

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def from_env(cls, env_file: Optional[str] = ".env") -> "Settings":
        """
        Build settings from the process environment and env_file.

        Raises:
            ConfigurationError: If a variable has the wrong type
        """
        try:
            return cls(_env_file=env_file)
        except ValidationError as e:
            problems = [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise ConfigurationError(
                f"Invalid configuration: {'; '.join(problems)}",
                details={"errors": problems}
            ) from e

    def missing(self, require_port: bool = False) -> List[str]:
        """Names of required environment variables that are not set."""
        names = []
        if not self.mongo_uri:
            names.append("MONGODB_URI")
        if not self.db_name:
            names.append("DB_NAME")
        if require_port and self.port is None:
            names.append("PORT")
        return names

    def validate(self, require_port: bool = False) -> None:
        """
        Check required settings.

        Args:
            require_port: Also require PORT (when serving directly)

        Raises:
            ConfigurationError: If any required setting is missing
        """
        missing = self.missing(require_port=require_port)
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}",
                details={"missing": missing}
            )
