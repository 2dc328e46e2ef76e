# taskboard/core/config.py
"""
Application configuration - single source of truth for all settings.
"""
import os
from dataclasses import dataclass, field
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class DatabaseSettings:
    """Document store configuration."""
    # "mongo" for MongoDB through Beanie, "memory" for a process-local store
    backend: str = field(default_factory=lambda: os.getenv("TASKBOARD_STORE", "mongo").lower())
    mongo_url: str = field(default_factory=lambda: os.getenv("MONGODB_URL", "mongodb://localhost:27017/taskboard"))
    # Used only when the URL carries no default database
    db_name: str = field(default_factory=lambda: os.getenv("TASKBOARD_DB_NAME", "taskboard"))
    collection: str = "tasks"
    server_selection_timeout_ms: int = field(
        default_factory=lambda: int(os.getenv("MONGODB_TIMEOUT_MS", "5000"))
    )


@dataclass
class AuthSettings:
    """
    Session provider configuration.

    In "proxy" mode an authenticating reverse proxy (oauth2-proxy or similar)
    sits in front of the service and forwards the verified identity in
    request headers. "dev" mode falls back to a fixed local identity.
    """
    mode: str = field(default_factory=lambda: os.getenv("TASKBOARD_AUTH_MODE", "proxy").lower())
    user_header: str = field(default_factory=lambda: os.getenv("TASKBOARD_USER_HEADER", "X-Forwarded-User"))
    name_header: str = field(
        default_factory=lambda: os.getenv("TASKBOARD_NAME_HEADER", "X-Forwarded-Preferred-Username")
    )
    sign_in_url: str = field(default_factory=lambda: os.getenv("TASKBOARD_SIGN_IN_URL", "/oauth2/start"))
    sign_out_url: str = field(default_factory=lambda: os.getenv("TASKBOARD_SIGN_OUT_URL", "/oauth2/sign_out"))
    provider_hint: str = field(default_factory=lambda: os.getenv("TASKBOARD_AUTH_PROVIDER", "google"))
    dev_user_id: str = field(default_factory=lambda: os.getenv("TASKBOARD_DEV_USER_ID", "dev-user"))
    dev_display_name: str = field(default_factory=lambda: os.getenv("TASKBOARD_DEV_USER_NAME", "Developer"))


@dataclass
class TaskSettings:
    """Task list behaviour."""
    categories: List[str] = field(default_factory=lambda: _env_list("TASKBOARD_CATEGORIES", "Personal,Work"))
    default_category: str = field(default_factory=lambda: os.getenv("TASKBOARD_DEFAULT_CATEGORY", "Personal"))
    # IANA zone name for day boundaries of the date filter; empty means server local time
    timezone: Optional[str] = field(default_factory=lambda: os.getenv("TASKBOARD_TIMEZONE") or None)


@dataclass
class Settings:
    """Main application settings."""
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    auth: AuthSettings = field(default_factory=AuthSettings)
    tasks: TaskSettings = field(default_factory=TaskSettings)
    port: int = field(default_factory=lambda: int(os.getenv("PORT", 8000)))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    cors_origins: List[str] = field(default_factory=lambda: _env_list("CORS_ORIGINS", "*"))
    # slowapi limit string, per client address
    rate_limit: str = field(default_factory=lambda: os.getenv("RATE_LIMIT", "100/minute"))


# Singleton instance
settings = Settings()
