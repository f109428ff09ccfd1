"""
Configuration loaded from environment variables (and a .env file if present).
"""

import os
from pathlib import Path
from typing import List
from dotenv import load_dotenv

load_dotenv()

APP_DIR_NAME = "kosha"
DB_FILE_NAME = "sanskrit.db"

DEFAULT_SEARCH_LIMIT = 50
MAX_SEARCH_LIMIT = 1000


def get_data_dir() -> Path:
    """Get the XDG data directory for the app, creating it if needed."""
    data_home = os.getenv("XDG_DATA_HOME")
    if data_home:
        base = Path(data_home)
    else:
        base = Path.home() / ".local" / "share"

    app_dir = base / APP_DIR_NAME
    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir


def get_database_path() -> Path:
    """Get the index database path (KOSHA_DB_PATH overrides the data dir)."""
    override = os.getenv("KOSHA_DB_PATH")
    if override:
        return Path(override)
    return get_data_dir() / DB_FILE_NAME


def get_cors_origins() -> List[str]:
    """Get allowed CORS origins from a comma-separated list."""
    raw = os.getenv(
        "KOSHA_CORS_ORIGINS", "http://localhost:3000,http://localhost:5173"
    )
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_index_config() -> dict:
    """Get index and server configuration from environment variables."""
    search_limit = int(os.getenv("KOSHA_SEARCH_LIMIT", str(DEFAULT_SEARCH_LIMIT)))
    return {
        "db_path": get_database_path(),
        "search_limit": max(1, min(search_limit, MAX_SEARCH_LIMIT)),
        "max_search_limit": MAX_SEARCH_LIMIT,
        "log_level": os.getenv("KOSHA_LOG_LEVEL", "INFO").upper(),
        "log_file": os.getenv("KOSHA_LOG_FILE") or None,
        "cors_origins": get_cors_origins(),
        "host": os.getenv("KOSHA_HOST", "127.0.0.1"),
        "port": int(os.getenv("KOSHA_PORT", "8000")),
    }
