"""Configuration management for the CloudStack MCP server."""

from dataclasses import dataclass

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cloudstack_mcp.errors import ConfigurationError

DEFAULT_TIMEOUT_MS = 30000


@dataclass(frozen=True)
class Credentials:
    """Connection details for one CloudStack management endpoint."""

    api_url: str
    api_key: str
    secret_key: str
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    # CloudStack API
    api_url: str = Field(default="", alias="CLOUDSTACK_API_URL")
    api_key: str = Field(default="", alias="CLOUDSTACK_API_KEY")
    secret_key: str = Field(default="", alias="CLOUDSTACK_SECRET_KEY")
    timeout: int = Field(default=DEFAULT_TIMEOUT_MS, alias="CLOUDSTACK_TIMEOUT")  # milliseconds

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="console", alias="LOG_FORMAT")

    # Service info
    service_name: str = Field(default="cloudstack-mcp", alias="SERVICE_NAME")
    service_version: str = Field(default="0.1.0", alias="SERVICE_VERSION")

    def credentials(self) -> Credentials:
        """Build the immutable credentials used by the API client.

        Raises:
            ConfigurationError: If any required CloudStack setting is empty
        """
        required = {
            "CLOUDSTACK_API_URL": self.api_url,
            "CLOUDSTACK_API_KEY": self.api_key,
            "CLOUDSTACK_SECRET_KEY": self.secret_key,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise ConfigurationError(missing)

        return Credentials(
            api_url=self.api_url,
            api_key=self.api_key,
            secret_key=self.secret_key,
            timeout_ms=self.timeout,
        )


# Global settings instance
settings = Settings()
