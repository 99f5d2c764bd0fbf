"""
Environment variable utilities.
Typed accessors used by the configuration layer.
"""

import os
from typing import Optional


def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get environment variable with optional default.

    Empty strings count as unset.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    value = os.environ.get(key)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def get_env_int(key: str, default: Optional[int] = None) -> Optional[int]:
    """
    Get environment variable as integer.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Integer value

    Raises:
        ValueError: If the value is not an integer
    """
    value = get_env(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Invalid integer for {key}: {value}")


def get_env_float(key: str, default: Optional[float] = None) -> Optional[float]:
    """
    Get environment variable as float (used for durations in seconds).

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Float value

    Raises:
        ValueError: If the value is not a number
    """
    value = get_env(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Invalid number for {key}: {value}")
