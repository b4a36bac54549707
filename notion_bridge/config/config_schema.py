"""Pydantic models for configuration validation."""

from typing import List, Optional
from pydantic import BaseModel, Field


class NotionConfig(BaseModel):
    """Notion API configuration."""

    api_key: str = Field(..., min_length=1, description="Notion integration token")
    search_limit: int = Field(default=10, ge=1, le=100, description="Maximum title search results")
    page_size: int = Field(default=100, ge=1, le=100, description="Page size when listing block children")
    max_depth: int = Field(default=20, ge=1, description="Deepest block nesting read by read_page")
    archive_batch_size: int = Field(
        default=25, ge=1, description="Archive calls between two throttle pauses"
    )
    archive_pause_seconds: float = Field(
        default=0.15, ge=0.0, description="Throttle pause length in seconds"
    )


class AuthConfig(BaseModel):
    """Caller authentication configuration."""

    api_key: Optional[str] = Field(
        default=None, description="Key callers must send; requests fail with 500 while unset"
    )
    header_name: str = Field(default="x-api-key", description="Header carrying the caller key")


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=3000, ge=1, le=65535, description="Port to listen on")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")
    max_body_bytes: int = Field(
        default=2 * 1024 * 1024, ge=1, description="Largest accepted JSON request body in bytes"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Optional[str] = Field(
        default=None, description="Log file path (default: timestamped file in logs/)"
    )


class AppConfig(BaseModel):
    """Main application configuration."""

    notion: NotionConfig = Field(..., description="Notion configuration")
    auth: AuthConfig = Field(default_factory=AuthConfig, description="Authentication configuration")
    server: ServerConfig = Field(default_factory=ServerConfig, description="Server configuration")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")
