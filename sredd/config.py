"""Configuration loading for sredd."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import ConfigError
from .models import APP_NAME

logger = logging.getLogger(__name__)


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    file: Optional[str] = None


@dataclass
class AppConfig:
    command: str
    subreddits: List[str]
    program_path: str
    command_args: List[str] = field(default_factory=list)
    filter_comments: bool = False
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def default_program_path() -> Path:
    """Directory holding the config and state files, e.g. ``~/.sredd``."""
    return Path.home() / f".{APP_NAME}"


def default_config_path() -> Path:
    return default_program_path() / "config.json"


def _resolve_path(base_path: Path, target_path: str) -> str:
    """Resolve a path relative to the config file if it's not absolute."""
    target = Path(target_path).expanduser()
    if target.is_absolute():
        return str(target)
    return str((base_path.parent / target).resolve())


def _lookup(options: Dict[str, Any], key: str) -> Any:
    """Return ``options[key]`` matching the key case-insensitively."""
    if key in options:
        return options[key]
    wanted = key.lower()
    for name, value in options.items():
        if name.lower() == wanted:
            return value
    return None


def _string_list(value: Any, option: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"option '{option}' must be a list of strings")
    return list(value)


def parse_app_config(path: str) -> AppConfig:
    """Parse the JSON configuration file at ``path``."""
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {path}")

    logger.info("Loading configuration from %s", config_path)
    try:
        options = json.loads(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Failed to read {config_path}: {exc}") from exc
    except ValueError as exc:
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc

    if not isinstance(options, dict):
        raise ConfigError("config must be a JSON object")

    command = _lookup(options, "Command")
    if command is not None and not isinstance(command, str):
        raise ConfigError("option 'Command' must be a string")
    if not command:
        raise ConfigError("option 'Command' not set")

    command_args = _string_list(_lookup(options, "CommandArgs"), "CommandArgs")

    filter_comments = _lookup(options, "FilterComments")
    if filter_comments is None:
        filter_comments = False
    if not isinstance(filter_comments, bool):
        raise ConfigError("option 'FilterComments' must be true or false")

    subreddits = _string_list(_lookup(options, "Subreddits"), "Subreddits")
    if not subreddits:
        raise ConfigError("option 'Subreddits' not set")

    logging_config = LoggingConfig()
    log_node = _lookup(options, "Logging")
    if log_node is not None:
        if not isinstance(log_node, dict):
            raise ConfigError("option 'Logging' must be an object")
        level = _lookup(log_node, "Level")
        if level:
            logging_config.level = str(level)
        log_file = _lookup(log_node, "File")
        if log_file:
            logging_config.file = _resolve_path(config_path, str(log_file))

    return AppConfig(
        command=command,
        subreddits=subreddits,
        program_path=str(config_path.parent),
        command_args=command_args,
        filter_comments=filter_comments,
        logging=logging_config,
    )
