"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class JWTConfig(BaseModel):
    """Access token issuance and validation configuration."""

    secret: str | None = Field(
        default=None, description="Secret used to sign and verify access tokens"
    )
    algorithm: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256", description="Signing algorithm for access tokens"
    )
    issuer: str = Field(
        default="product-catalog", description="Issuer name embedded in tokens"
    )
    access_token_ttl_seconds: int = Field(
        default=7 * 24 * 3600, description="Access token lifetime (7 days)"
    )
    clock_skew: int = Field(default=0, description="Clock skew tolerance in seconds")


class SecurityConfig(BaseModel):
    """Security configuration for credentials and token cookies."""

    token_cookie_name: str = Field(
        default="token", description="Cookie carrying the access token"
    )
    secure_cookies: bool = Field(
        default=True, description="Force secure cookies in production"
    )
    cookie_samesite: Literal["lax", "strict", "none"] = Field(
        default="lax", description="SameSite cookie attribute"
    )

    # argon2 cost parameters
    password_time_cost: int = Field(default=3, description="argon2 time cost")
    password_memory_cost: int = Field(
        default=65536, description="argon2 memory cost in KiB"
    )
    password_parallelism: int = Field(default=4, description="argon2 parallelism")


class PaginationConfig(BaseModel):
    """Defaults and bounds for product listing."""

    default_limit: int = Field(default=10, ge=1, description="Page size when omitted")
    max_limit: int = Field(default=100, ge=1, description="Largest accepted page size")


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./catalog.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    echo: bool = Field(default=False, description="Echo SQL statements")
    create_tables: bool = Field(
        default=True, description="Create missing tables at application startup"
    )

    @computed_field
    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @computed_field
    @property
    def is_memory(self) -> bool:
        """True for SQLite URLs that point at an in-memory database."""
        return self.is_sqlite and (
            self.url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in self.url
        )


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    name: str = Field(default="Product Catalog API", description="Application title")
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    enable_dev_routes: bool | None = Field(
        default=None,
        description="Expose sample-data routes (defaults to on outside production)",
    )
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"

    @property
    def dev_routes_enabled(self) -> bool:
        if self.enable_dev_routes is None:
            return self.environment != "production"
        return self.enable_dev_routes


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    jwt: JWTConfig = Field(
        default_factory=JWTConfig, description="Access token configuration"
    )
    security: SecurityConfig = Field(
        default_factory=SecurityConfig, description="Security configuration"
    )
    pagination: PaginationConfig = Field(
        default_factory=PaginationConfig, description="Listing configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    def validate_runtime(self) -> None:
        """Fail fast on settings that are unsafe for the current environment."""
        if self.app.environment == "production":
            if not self.jwt.secret:
                raise ValueError("jwt.secret must be set in production")
            if "*" in self.app.cors.origins and self.app.cors.allow_credentials:
                raise ValueError(
                    "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
                )
