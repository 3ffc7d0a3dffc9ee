"""
HealthTracker — Application Configuration
===========================================

What:  Typed settings for the API server and the CLI client.
How:   Pydantic Settings reads HEALTH_TRACKER_* environment variables, then a
       .env file, then falls back to the defaults below (in that precedence).
Who:   Built once by the process entry point (create_app, the CLI) and passed
       down explicitly. Nothing below the entry point reads the environment.

Examples:
    HEALTH_TRACKER_DB_PATH=/var/lib/healthtracker/health.db
    HEALTH_TRACKER_API_URL=http://pi.local:8000
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings shared by the server and the client.

    Attributes are grouped by concern. Every field can be overridden with an
    environment variable named HEALTH_TRACKER_<FIELD_NAME>.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Path of the SQLite file. Relative paths resolve against the CWD.
    # The parent directory must already exist; it is never created for you.
    db_path: str = Field(
        default="healthtracker.db",
        description="Location of the SQLite database file",
    )

    # Seconds SQLite waits to open a connection / acquire the file lock
    db_connect_timeout: float = Field(default=5.0, gt=0, le=120)

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1, le=65535)

    # Upper bound on a single request, enforced by TimeoutMiddleware
    request_timeout: float = Field(default=10.0, gt=0, le=300)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Client ────────────────────────────────────────────────────────────
    api_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of a running HealthTracker API (used by the CLI)",
    )
    client_timeout: float = Field(default=5.0, gt=0, le=120)

    model_config = SettingsConfigDict(
        env_prefix="HEALTH_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL for the async aiosqlite driver."""
        return f"sqlite+aiosqlite:///{Path(self.db_path).expanduser()}"
