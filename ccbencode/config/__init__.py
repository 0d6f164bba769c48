"""Configuration management.

This module handles configuration loading and validation.
"""

from __future__ import annotations

from ccbencode.config.config import (
    ConfigManager,
    current_source_config,
    get_config,
    init_config,
    reload_config,
    reset_config,
    set_config,
)
from ccbencode.models import Config

__all__ = [
    "Config",
    "ConfigManager",
    "current_source_config",
    "get_config",
    "init_config",
    "reload_config",
    "reset_config",
    "set_config",
]
