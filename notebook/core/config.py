"""
Configuration Management.

Loads secrets from config/.env (or the process environment) and settings
from config/settings/*.yaml.

Secrets (.env / environment):
    DB_PASSWORD    - Database password
    API_AUTHTOKEN  - Comma-separated bearer tokens accepted by /addNote
    IP_WHITELIST   - Comma-separated client IPs allowed to use the API

Settings (YAML):
    application.yaml - App identity, server, cors, frontend, timeouts
    database.yaml    - Database connection and pool settings
    logging.yaml     - Logging configuration
    features.yaml    - Feature flags
    security.yaml    - Rate limiting, access control, security headers
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

from notebook.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    FeaturesSchema,
    LoggingSchema,
    SecuritySchema,
)


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


def split_csv(value: str) -> list[str]:
    """Split a comma-separated setting into its non-empty, stripped entries."""
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Secrets loaded from config/.env and the environment."""

    db_password: str = ""
    api_authtoken: str = ""
    ip_whitelist: str = ""

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def auth_tokens(self) -> list[str]:
        """Bearer tokens accepted on token-protected paths."""
        return split_csv(self.api_authtoken)

    @property
    def allowed_ips(self) -> list[str]:
        """Client IPs allowed through the IP filter. Empty disables it."""
        return split_csv(self.ip_whitelist)


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._database = _load_validated(DatabaseSchema, "database.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")
        self._features = _load_validated(FeaturesSchema, "features.yaml")
        self._security = _load_validated(SecuritySchema, "security.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def database(self) -> DatabaseSchema:
        """Database settings."""
        return self._database

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging

    @property
    def features(self) -> FeaturesSchema:
        """Feature flags."""
        return self._features

    @property
    def security(self) -> SecuritySchema:
        """Security settings."""
        return self._security


@lru_cache
def get_settings() -> Settings:
    """Get cached secrets instance. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_database_url() -> str:
    """
    Construct the database URL from YAML config and secrets.

    SQLite drivers treat `name` as the database file path; every other
    driver gets a full network URL.

    Returns:
        Database connection URL string.
    """
    db = get_app_config().database
    if db.driver.startswith("sqlite"):
        return f"{db.driver}:///{db.name}"

    url = URL.create(
        drivername=db.driver,
        username=db.user,
        password=get_settings().db_password or None,
        host=db.host,
        port=db.port,
        database=db.name,
    )
    return url.render_as_string(hide_password=False)


def get_server_address() -> tuple[str, int]:
    """Get the configured server host and port from application.yaml."""
    server = get_app_config().application.server
    return server.host, server.port
