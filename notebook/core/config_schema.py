"""
Configuration Schemas.

One strict Pydantic model per file in config/settings/. Unknown keys,
missing keys and out-of-range values fail at startup with the file name in
the message, rather than surfacing later as an AttributeError.

    ApplicationSchema  -> application.yaml
    DatabaseSchema     -> database.yaml
    LoggingSchema      -> logging.yaml
    FeaturesSchema     -> features.yaml
    SecuritySchema     -> security.yaml
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Rejects keys the schema does not declare."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ServerSchema(_StrictBase):
    host: str
    port: int = Field(ge=1, le=65535)


class CorsSchema(_StrictBase):
    # "*" allows any origin (credentials are then disabled)
    origins: list[str]


class FrontendSchema(_StrictBase):
    # Relative to the project root
    directory: str
    index_file: str = "index.html"


class TimeoutsSchema(_StrictBase):
    health_ready: int = Field(gt=0)


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    server: ServerSchema
    cors: CorsSchema
    frontend: FrontendSchema
    timeouts: TimeoutsSchema


# =============================================================================
# database.yaml
# =============================================================================


class DatabaseSchema(_StrictBase):
    # SQLAlchemy async driver, e.g. postgresql+asyncpg or sqlite+aiosqlite
    driver: str
    host: str
    port: int = Field(ge=1, le=65535)
    # Database name, or the file path for SQLite
    name: str
    user: str
    pool_size: int = Field(ge=1)
    max_overflow: int = Field(ge=0)
    # Seconds to wait for a free pooled connection; None waits indefinitely
    pool_timeout: int | None = Field(default=None, gt=0)
    pool_recycle: int
    echo: bool


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int = Field(gt=0)
    backup_count: int = Field(ge=0)


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    format: Literal["json", "console"]
    handlers: HandlersSchema


# =============================================================================
# features.yaml
# =============================================================================


class FeaturesSchema(_StrictBase):
    security_headers_enabled: bool
    api_rate_limit_enabled: bool
    frontend_enabled: bool


# =============================================================================
# security.yaml
# =============================================================================


class ApiRateLimitSchema(_StrictBase):
    path_prefix: str
    window_seconds: int = Field(gt=0)
    max_requests: int = Field(gt=0)


class RateLimitingSchema(_StrictBase):
    api: ApiRateLimitSchema


class AccessSchema(_StrictBase):
    # Paths that need a bearer token instead of an allow-listed IP
    token_protected_paths: list[str]
    # Paths that skip every access check
    bypass_paths: list[str]
    # Reverse proxies in front of the app; the client IP is read that many
    # X-Forwarded-For entries from the right. 0 uses the socket peer.
    trusted_proxy_count: int = Field(default=1, ge=0)


class SecurityHeadersSchema(_StrictBase):
    x_content_type_options: str
    x_frame_options: str
    referrer_policy: str
    hsts_enabled: bool
    hsts_max_age: int = Field(ge=0)


class SecuritySchema(_StrictBase):
    rate_limiting: RateLimitingSchema
    access: AccessSchema
    headers: SecurityHeadersSchema
