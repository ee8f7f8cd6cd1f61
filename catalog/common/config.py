import os
from dataclasses import dataclass


def _get_bool(env_name: str, default: bool = False) -> bool:
    val = os.getenv(env_name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass
class Settings:
    # App
    APP_HOST: str = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT: int = int(os.getenv("APP_PORT", "8000"))
    INSTANCE_ID: str = os.getenv("INSTANCE_ID", "unknown")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Database (SQLite file next to the process by default)
    DB_URL: str = os.getenv("DB_URL", "sqlite+aiosqlite:///./catalog.db")
    DB_ECHO: bool = _get_bool("DB_ECHO", False)
    SEED_DATA: bool = _get_bool("SEED_DATA", True)

    # Paging
    DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
    MAX_PAGE_SIZE: int = int(os.getenv("MAX_PAGE_SIZE", "100"))


settings = Settings()
