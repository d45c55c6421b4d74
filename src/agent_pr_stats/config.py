"""Configuration settings for Agent PR Stats."""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SearchConfig(BaseModel):
    """Configuration for GitHub search queries.

    Controls which author is treated as the coding agent and the
    pagination bounds imposed by the GitHub Search API.
    """

    agent_author: str = Field(
        default="app/copilot-swe-agent",
        min_length=1,
        description="Search author qualifier identifying the coding agent",
    )
    page_size: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Results per page (GitHub maximum is 100)",
    )
    max_pages: int = Field(
        default=10,
        ge=1,
        description="Maximum pages fetched per query",
    )
    result_ceiling: int = Field(
        default=1000,
        ge=1,
        description="Hard result ceiling enforced by the GitHub Search API",
    )
    comparison_sample_size: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Merged PRs (all authors) fetched for response time comparison",
    )


class CacheConfig(BaseModel):
    """Configuration for the result cache.

    Entries are keyed by prefix + version, so bumping the version
    invalidates every previously written entry.
    """

    enabled: bool = Field(
        default=True,
        description="Whether fetched results are cached",
    )
    key_prefix: str = Field(
        default="agent_pr_cache_",
        min_length=1,
        description="Prefix shared by every cache key",
    )
    version: str = Field(
        default="v3",
        min_length=1,
        description="Cache schema version (bump to invalidate old entries)",
    )
    ttl_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Seconds before a cache entry is considered stale (5 minutes)",
    )
    sweep_interval_seconds: float = Field(
        default=60.0,
        ge=0,
        description="Minimum seconds between expired-entry sweeps",
    )
    database_url: str = Field(
        default="sqlite+aiosqlite:///./agent_pr_cache.db",
        description="Async SQLAlchemy URL of the persistent cache store",
    )


class LoggingConfig(BaseModel):
    """Configuration for logging behavior.

    Controls file logging, rotation, and output format.
    """

    log_file: str | None = Field(
        default=None,
        description="Optional path for file logging (enables rotation)",
    )
    rotation: str = Field(
        default="10 MB",
        description="When to rotate log file (e.g., '10 MB', '1 day')",
    )
    retention: str = Field(
        default="7 days",
        description="How long to keep rotated logs",
    )
    serialize: bool = Field(
        default=False,
        description="If True, output JSON format to file",
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # --------------------------------------------------------------------------
    # GitHub API
    # --------------------------------------------------------------------------
    github_token: str = Field(
        default="",
        description="GitHub personal access token (optional, enables GraphQL)",
    )

    # --------------------------------------------------------------------------
    # Application
    # --------------------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    # --------------------------------------------------------------------------
    # Search & Cache
    # --------------------------------------------------------------------------
    search: SearchConfig = Field(
        default_factory=SearchConfig,
        description="GitHub search configuration",
    )
    cache: CacheConfig = Field(
        default_factory=CacheConfig,
        description="Result cache configuration",
    )

    # --------------------------------------------------------------------------
    # Logging Configuration
    # --------------------------------------------------------------------------
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration (file output, rotation)",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
