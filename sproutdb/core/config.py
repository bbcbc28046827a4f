"""
Runtime configuration read from environment variables.
"""

import os
from typing import List

# Server configuration
HOST = "127.0.0.1"
DEFAULT_PORT = 3000
SEED_PATH = None  # Optional JSON file or directory

# Tables created empty at startup, comma separated
DEFAULT_TABLES = "users"

LOG_LEVEL = "INFO"
CORS_ORIGINS = "*"

# Version string
VERSION = "1.0.0"


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "true").lower() == "true"


def get_host() -> str:
    return os.getenv("SPROUTDB_HOST", HOST)


def get_port() -> int:
    return int(os.getenv("SPROUTDB_PORT", str(DEFAULT_PORT)))


def get_seed_path():
    return os.getenv("SPROUTDB_SEED", SEED_PATH)


def get_default_tables() -> List[str]:
    """Names of the tables every new server database starts with."""
    raw = os.getenv("SPROUTDB_DEFAULT_TABLES", DEFAULT_TABLES)
    return [name.strip() for name in raw.split(",") if name.strip()]


def get_cors_origins() -> List[str]:
    raw = os.getenv("SPROUTDB_CORS_ORIGINS", CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def validate_config(check_port: bool = True):
    """Validate server configuration and return any issues.

    Pass check_port=False when the port comes from somewhere other than
    SPROUTDB_PORT, such as a command-line flag.
    """
    issues = []

    if check_port:
        try:
            port = get_port()
            if not 0 < port < 65536:
                issues.append(f"SPROUTDB_PORT out of range: {port}")
        except ValueError:
            issues.append(f"Invalid SPROUTDB_PORT: {os.getenv('SPROUTDB_PORT')}")

    if os.getenv("SPROUTDB_LOG_LEVEL", LOG_LEVEL).upper() not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        issues.append(f"Invalid SPROUTDB_LOG_LEVEL: {os.getenv('SPROUTDB_LOG_LEVEL')}")

    return issues
