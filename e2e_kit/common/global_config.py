"""
================================================================================
Global Configuration for E2E Kit
================================================================================

Centralized configuration management for the e2e tooling, including logging
setup and configuration file loading.

Features:
    - YAML-based configuration loading (e2e.yaml in the project root)
    - Environment-specific overlays (e2e.<ENV>.yaml)
    - Environment variable support (SECTION__KEY overrides section.key)
    - Centralized Loguru logging configuration

Author: Automation Team
License: MIT
================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

# Name of the project configuration file created by `pytest-e2e init`
CONFIG_FILE_NAME = "e2e.yaml"

DEFAULT_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
)

# Global configuration storage
_config: Dict[str, Any] = {}
_config_loaded: bool = False
_logger_initialized: bool = False


class ConfigurationError(Exception):
    """Raised when configuration loading fails."""
    pass


def init_logger(level: Optional[str] = None, format_str: Optional[str] = None) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_str: Custom log format string. Defaults to config value.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    log_level = level or get_config("logging.level", "INFO")
    log_format = format_str or get_config("logging.format", DEFAULT_LOG_FORMAT)

    logger.remove()
    logger.add(
        sys.stderr,
        level=str(log_level).upper(),
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )

    log_file = get_config("logging.file", None)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=str(log_level).upper(),
            format=log_format.replace("{level: <8}", "{level}"),
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
            compression="zip",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def _ensure_config_loaded() -> None:
    if not _config_loaded:
        _load_config()


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e


def _load_config(config_dir: Optional[Path] = None) -> None:
    """
    Loads configuration from YAML files and environment variables.

    Configuration loading order:
        1. Built-in defaults
        2. e2e.yaml in the working directory
        3. Environment-specific overlay (e2e.{ENV}.yaml)
        4. Environment variables (override YAML settings)
    """
    global _config, _config_loaded

    config_dir = config_dir or Path.cwd()
    _config = _get_defaults()

    config_path = config_dir / CONFIG_FILE_NAME
    if config_path.exists():
        _config = _deep_merge(_config, _read_yaml(config_path))
        logger.debug(f"Loaded configuration from {config_path}")

    env = os.getenv("ENVIRONMENT", os.getenv("ENV", "dev"))
    env_config_path = config_dir / f"e2e.{env}.yaml"
    if env_config_path.exists():
        _config = _deep_merge(_config, _read_yaml(env_config_path))
        logger.debug(f"Merged environment config: {env_config_path}")

    _apply_env_overrides()
    _config_loaded = True


def _get_defaults() -> Dict[str, Any]:
    return {
        "logging": {
            "level": "INFO",
            "format": DEFAULT_LOG_FORMAT,
        },
        "browser": {
            "type": "chromium",
            "viewport": {"width": 1280, "height": 720},
            "args": [
                "--no-sandbox",
                "--disable-setuid-sandbox",
                "--disable-dev-shm-usage",
            ],
        },
    }


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merges two dictionaries, with override taking precedence.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides() -> None:
    """
    Applies environment variable overrides to the configuration.

    Environment variable naming convention:
        - Prefix E2E__, then double underscores between nested keys
        - Example: E2E__LOGGING__LEVEL=DEBUG overrides logging.level
    """
    for key, value in os.environ.items():
        if key.startswith("E2E__"):
            parts = [p.lower() for p in key[len("E2E__"):].split("__") if p]
            if parts:
                _set_nested(_config, parts, value)


def _set_nested(d: Dict, keys: list, value: Any) -> None:
    for key in keys[:-1]:
        if not isinstance(d.get(key), dict):
            d[key] = {}
        d = d[key]
    d[keys[-1]] = value


def get_config(key: str, default: Any = None) -> Any:
    """
    Retrieves a configuration value using a dot-separated key path.

    Args:
        key: Dot-separated key path (e.g., "logging.level", "browser.type").
        default: Default value to return if key is not found.

    Returns:
        The configuration value, or the default if not found.

    Examples:
        >>> get_config("browser.type", "chromium")
        'firefox'
        >>> get_config("browser.viewport.width", 1280)
        1280
    """
    _ensure_config_loaded()

    value = _config
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    return value


def set_config(key: str, value: Any) -> None:
    """
    Sets a configuration value at runtime.

    Args:
        key: Dot-separated key path.
        value: Value to set.
    """
    _ensure_config_loaded()
    _set_nested(_config, key.split("."), value)


def reload_config(config_dir: Optional[Path] = None) -> None:
    """
    Reloads the configuration from files.

    Args:
        config_dir: Directory holding e2e.yaml. Defaults to the working directory.
    """
    global _logger_initialized
    _logger_initialized = False
    _load_config(config_dir)
    init_logger()
    logger.info("Configuration reloaded.")
