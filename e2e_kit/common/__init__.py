"""
================================================================================
E2E Kit Common Utilities
================================================================================

Shared configuration management and logging setup.

Exports:
    - get_config / set_config / reload_config: YAML + environment configuration
    - init_logger: initialize the loguru logger with standard settings
    - env: names of the environment variables passed from CLI to plugin

Usage:
    from e2e_kit.common import get_config, init_logger

    init_logger()
    browser_type = get_config("browser.type", "chromium")

================================================================================
"""

from . import env
from .global_config import (
    CONFIG_FILE_NAME,
    ConfigurationError,
    get_config,
    init_logger,
    reload_config,
    set_config,
)

__all__ = [
    "env",
    "CONFIG_FILE_NAME",
    "ConfigurationError",
    "get_config",
    "init_logger",
    "reload_config",
    "set_config",
]
