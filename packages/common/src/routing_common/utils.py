"""Utility functions."""

import hashlib
import os
from typing import Optional
import structlog

logger = structlog.get_logger()


def get_env(key: str, default: Optional[str] = None, required: bool = False) -> str:
    """
    Get environment variable with optional default and required flag.

    Args:
        key: Environment variable name
        default: Default value if not found
        required: If True, raise error if not found and no default

    Returns:
        Environment variable value

    Raises:
        ValueError: If required=True and variable not found
    """
    value = os.getenv(key, default)

    if required and value is None:
        raise ValueError(f"Required environment variable '{key}' not found")

    return value or ""


def get_env_int(key: str, default: int) -> int:
    """Get an integer environment variable, falling back to default on bad input."""
    raw = get_env(key, str(default))
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer environment value", key=key, value=raw)
        return default


def compute_checksum(content: str) -> str:
    """MD5 hex digest of text content, used for change detection only."""
    return hashlib.md5(content.encode("utf-8")).hexdigest()
