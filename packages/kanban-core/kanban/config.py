"""
Kanban Configuration

Loads settings from ~/.kanban/config.yaml with environment variable overrides.
Supports both PostgreSQL and SQLite database configurations.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional
import os
import logging

logger = logging.getLogger(__name__)

try:
    import yaml
    HAS_YAML = True
except ImportError:
    HAS_YAML = False

CONFIG_DIR = Path.home() / ".kanban"
CONFIG_FILE = CONFIG_DIR / "config.yaml"


@dataclass
class DatabaseConfig:
    """Database configuration settings."""

    type: str = "sqlite"  # "sqlite" or "postgres"
    sqlite_path: str = "~/.kanban/kanban.db"
    postgres_url: Optional[str] = None


@dataclass
class BoardConfig:
    """Board behaviour settings."""

    timezone: str = "UTC"  # used for recurrence due date arithmetic
    default_color: str = "yellow"


@dataclass
class KanbanConfig:
    """
    Complete kanban configuration.

    Loaded from ~/.kanban/config.yaml with environment variable overrides.
    """

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    board: BoardConfig = field(default_factory=BoardConfig)

    @property
    def timezone(self) -> str:
        return self.board.timezone

    @property
    def default_color(self) -> str:
        return self.board.default_color

    def to_dict(self) -> dict:
        """Convert to dictionary for display (masks secrets)."""
        result = asdict(self)

        if result.get("database", {}).get("postgres_url"):
            url = result["database"]["postgres_url"]
            result["database"]["postgres_url"] = url[:30] + "..." if len(url) > 30 else "***"

        return result


def _parse_database_config(data: dict) -> DatabaseConfig:
    """Parse database configuration from YAML data."""
    db_data = data.get("database", {})

    db_type = db_data.get("type", "sqlite")

    sqlite_config = db_data.get("sqlite", {})
    sqlite_path = sqlite_config.get("path", "~/.kanban/kanban.db")

    postgres_config = db_data.get("postgres", {})
    postgres_url = postgres_config.get("url")

    # URL may come from an environment variable reference
    url_env = postgres_config.get("url_env")
    if url_env and not postgres_url:
        postgres_url = os.environ.get(url_env)

    return DatabaseConfig(
        type=db_type,
        sqlite_path=sqlite_path,
        postgres_url=postgres_url,
    )


def _parse_board_config(data: dict) -> BoardConfig:
    """Parse board configuration from YAML data."""
    board_data = data.get("board", {})

    return BoardConfig(
        timezone=board_data.get("timezone", "UTC"),
        default_color=board_data.get("default_color", "yellow"),
    )


def load_config(config_path: Optional[Path] = None) -> KanbanConfig:
    """
    Load configuration from file with environment variable overrides.

    Args:
        config_path: Optional path to config file. Defaults to ~/.kanban/config.yaml

    Returns:
        KanbanConfig instance
    """
    config_file = config_path or CONFIG_FILE
    config = KanbanConfig()

    if HAS_YAML and config_file.exists():
        try:
            with open(config_file, 'r') as f:
                data = yaml.safe_load(f) or {}

            config.database = _parse_database_config(data)
            config.board = _parse_board_config(data)

        except yaml.YAMLError as e:
            logger.warning(f"Could not parse config file at {config_file}: {e}")
        except Exception as e:
            logger.warning(f"Unexpected error loading config from {config_file}: {e}")

    # Environment variable overrides
    if os.environ.get("KANBAN_DATABASE_URL"):
        config.database.type = "postgres"
        config.database.postgres_url = os.environ["KANBAN_DATABASE_URL"]

    if os.environ.get("KANBAN_TIMEZONE"):
        config.board.timezone = os.environ["KANBAN_TIMEZONE"]

    if os.environ.get("KANBAN_DEFAULT_COLOR"):
        config.board.default_color = os.environ["KANBAN_DEFAULT_COLOR"]

    return config


def save_config(config: KanbanConfig, config_path: Optional[Path] = None) -> None:
    """
    Save configuration to file.

    Args:
        config: KanbanConfig instance to save
        config_path: Optional path to config file. Defaults to ~/.kanban/config.yaml
    """
    if not HAS_YAML:
        raise RuntimeError("PyYAML not installed. Run: pip install pyyaml")

    config_file = config_path or CONFIG_FILE
    config_file.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "database": {
            "type": config.database.type,
        },
        "board": {
            "timezone": config.board.timezone,
            "default_color": config.board.default_color,
        },
    }

    if config.database.type == "sqlite":
        data["database"]["sqlite"] = {"path": config.database.sqlite_path}
    elif config.database.postgres_url:
        data["database"]["postgres"] = {"url": config.database.postgres_url}

    with open(config_file, 'w') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    # Readable only by owner
    config_file.chmod(0o600)

    logger.info(f"Configuration saved to {config_file}")


# Cached config instance
_config: Optional[KanbanConfig] = None


def get_config() -> KanbanConfig:
    """Get cached config instance, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> KanbanConfig:
    """Force reload config from file."""
    global _config
    _config = load_config()
    return _config
