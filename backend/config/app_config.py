"""
Application Configuration

Reads service settings from environment variables once at import time.

Variables:
- ORDERS_DATABASE_URL: SQLAlchemy database URL (default: local SQLite file)
- ORDERS_SQL_ECHO: Echo SQL statements ('true', '1', 'yes')
- ORDERS_LOG_LEVEL: Root log level name (default: INFO)
- ORDERS_LOG_DIR: Directory for the rotating log file (optional)
- ORDERS_SEED_FILE: JSON file of orders loaded into an empty store at startup (optional)
- ORDERS_HOST / ORDERS_PORT: Bind address for `python main.py` (default 127.0.0.1:8000)
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from exceptions import ConfigurationError

DEFAULT_DATABASE_URL = "sqlite:///./orders.db"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000

_TRUTHY = ('true', '1', 'yes')
_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(frozen=True)
class AppConfig:
    """Immutable snapshot of the service settings."""

    database_url: str = DEFAULT_DATABASE_URL
    sql_echo: bool = False
    log_level: str = DEFAULT_LOG_LEVEL
    log_dir: Optional[Path] = None
    seed_file: Optional[Path] = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


def _optional_path(value: Optional[str]) -> Optional[Path]:
    if value is None or not value.strip():
        return None
    return Path(value.strip()).expanduser()


def load_config(environ: Mapping[str, str] | None = None) -> AppConfig:
    """
    Build an AppConfig from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        AppConfig instance

    Raises:
        ConfigurationError: If a variable holds an unusable value
    """
    env = os.environ if environ is None else environ

    database_url = env.get('ORDERS_DATABASE_URL', DEFAULT_DATABASE_URL).strip()
    if not database_url:
        raise ConfigurationError(
            "ORDERS_DATABASE_URL must not be empty",
            missing_keys=['ORDERS_DATABASE_URL']
        )

    log_level = env.get('ORDERS_LOG_LEVEL', DEFAULT_LOG_LEVEL).strip().upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigurationError(
            f"Invalid ORDERS_LOG_LEVEL '{log_level}'. Expected one of: {', '.join(_LOG_LEVELS)}"
        )

    port_value = env.get('ORDERS_PORT', str(DEFAULT_PORT)).strip()
    try:
        port = int(port_value)
    except ValueError:
        raise ConfigurationError(f"ORDERS_PORT must be an integer, got '{port_value}'")
    if not 0 < port < 65536:
        raise ConfigurationError(f"ORDERS_PORT out of range: {port}")

    return AppConfig(
        database_url=database_url,
        sql_echo=env.get('ORDERS_SQL_ECHO', 'false').lower() in _TRUTHY,
        log_level=log_level,
        log_dir=_optional_path(env.get('ORDERS_LOG_DIR')),
        seed_file=_optional_path(env.get('ORDERS_SEED_FILE')),
        host=env.get('ORDERS_HOST', DEFAULT_HOST).strip() or DEFAULT_HOST,
        port=port,
    )


# Global settings used by database.py and main.py
settings = load_config()
