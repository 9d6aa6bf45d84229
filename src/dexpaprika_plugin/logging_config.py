"""
Logging configuration for the DexPaprika plugin.

The plugin logs through loguru everywhere. Hosts that already configure
loguru can skip ``setup_logging`` entirely.
"""

import os
import sys
from typing import Dict, Optional, TextIO

from loguru import logger

LOG_LEVEL_SETTING = "DEXPAPRIKA_LOG_LEVEL"


def get_console_format(style: str = "clean") -> str:
    """Get console format based on style preference."""
    if style == "timestamp":
        return "<dim>{time:HH:mm:ss}</dim> | <level>{message}</level>"
    elif style == "detailed":
        return "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <dim>{name}</dim> | <level>{message}</level>"
    else:
        return "<level>{message}</level>"


def setup_logging(
    level: Optional[str] = None,
    sink: TextIO = sys.stderr,
    style: str = "detailed",
    module_levels: Optional[Dict[str, str]] = None,
) -> int:
    """
    Replace loguru's handlers with a single console sink.

    Args:
        level: Minimum level; defaults to DEXPAPRIKA_LOG_LEVEL or INFO
        sink: Stream receiving log records
        style: One of "clean", "timestamp", "detailed"
        module_levels: Optional per-module minimum levels

    Returns:
        int: Handler id of the added sink
    """
    level = (level or os.getenv(LOG_LEVEL_SETTING) or "INFO").upper()

    logger.remove()
    handler_id = logger.add(
        sink,
        format=get_console_format(style),
        level=level,
        colorize=False,
        filter=create_module_filter(module_levels) if module_levels else None,
        backtrace=False,
        diagnose=False,
    )

    logger.debug(f"Logging configured: level={level}")
    return handler_id


def create_module_filter(module_levels: Dict[str, str]):
    """
    Create a filter function based on module-specific log levels.

    Args:
        module_levels: Dict mapping module names to log levels

    Returns:
        Filter function for loguru
    """
    def filter_func(record):
        module = record["name"]

        for pattern, level in module_levels.items():
            if module.startswith(pattern):
                level_no = logger.level(level).no
                return record["level"].no >= level_no

        return True

    return filter_func
