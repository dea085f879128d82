"""Utility modules for mediawalk."""

from mediawalk.utils.config import (
    coerce_value,
    get_config_value,
    resolve_setting,
    set_config_value,
)
from mediawalk.utils.debug import setup_logger

__all__ = [
    "coerce_value",
    "get_config_value",
    "resolve_setting",
    "set_config_value",
    "setup_logger",
]
