"""
Configuration settings for the Machina docs MCP server.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Upstream endpoints
    docs_base_url: str = Field(default="https://docs.machina.gg")
    github_api_base: str = Field(default="https://api.github.com")
    templates_repo: str = Field(default="machina-sports/machina-templates")
    github_token: Optional[str] = Field(default=None)
    user_agent: str = Field(default="MachinaDocsFetcher")

    # HTTP / caching
    http_timeout_seconds: int = Field(default=30)
    cache_ttl_seconds: int = Field(default=300)
    # GitHub rate limits unauthenticated callers to 60 requests an hour
    fetch_content_limit: int = Field(default=5)

    # Logging
    log_level: str = Field(default="INFO")
    log_file: Optional[Path] = Field(default=None)

    # MCP Server Configuration
    mcp_server_name: str = Field(default="machina-docs-server")
    mcp_server_version: str = Field(default="1.0.0")
    mcp_transport: str = Field(default="stdio")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.log_file is not None:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)

    @property
    def templates_api_url(self) -> str:
        return f"{self.github_api_base.rstrip('/')}/repos/{self.templates_repo}"


@lru_cache()
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
