"""Admin service layer for runtime configuration."""

from __future__ import annotations

import logging
from typing import Any

from webparser_mcp.config import LIMIT_KEYS, ExtractionLimits

logger = logging.getLogger(__name__)

# Default concurrency limit for batch fetches
DEFAULT_CONCURRENCY = 8

DEFAULT_TIMEOUT = 10
DEFAULT_MAX_RETRIES = 3
DEFAULT_PARSE_TIMEOUT = 30


def _defaults() -> dict[str, Any]:
    return {
        "concurrency": DEFAULT_CONCURRENCY,
        "default_timeout": DEFAULT_TIMEOUT,
        "default_max_retries": DEFAULT_MAX_RETRIES,
        "parse_timeout": DEFAULT_PARSE_TIMEOUT,
        **ExtractionLimits.from_env().to_dict(),
    }


# Runtime configuration overrides (not persisted)
_runtime_config: dict[str, Any] = _defaults()


def get_config(key: str, default: Any = None) -> Any:
    """Get a configuration value with runtime override support.

    Args:
        key: Configuration key
        default: Default value if key not found

    Returns:
        Configuration value or default
    """
    return _runtime_config.get(key, default)


def get_limits() -> ExtractionLimits:
    """Get the extraction limits currently in effect."""
    return ExtractionLimits(**{key: _runtime_config[key] for key in LIMIT_KEYS})


def get_current_config() -> dict[str, Any]:
    """Get current runtime configuration.

    Returns:
        Dictionary with current config, defaults, and note
    """
    return {
        "config": dict(_runtime_config),
        "defaults": {
            "concurrency": DEFAULT_CONCURRENCY,
            "default_timeout": DEFAULT_TIMEOUT,
            "default_max_retries": DEFAULT_MAX_RETRIES,
            "parse_timeout": DEFAULT_PARSE_TIMEOUT,
            **ExtractionLimits().to_dict(),
        },
        "note": "Changes are not persisted and will reset on server restart",
    }


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def update_config(config_updates: dict[str, Any]) -> dict[str, Any]:
    """Update runtime configuration.

    Unknown keys and values that fail validation are ignored.

    Args:
        config_updates: Dictionary of config key-value pairs to update

    Returns:
        Dictionary with status, message, updated keys, and current config
    """
    updated = []
    for key, value in config_updates.items():
        if key == "concurrency":
            valid = _is_positive_int(value) and value <= 50
        elif key in ("default_timeout", "default_max_retries", "parse_timeout") or key in LIMIT_KEYS:
            valid = _is_positive_int(value)
        else:
            logger.debug(f"Ignoring unknown config key: {key}")
            continue

        if valid:
            _runtime_config[key] = value
            updated.append(key)
        else:
            logger.warning(f"Rejected config value {key}={value!r}")

    return {
        "status": "success",
        "message": f"Updated {len(updated)} config value(s)",
        "updated": updated,
        "current_config": dict(_runtime_config),
    }


def reset_config() -> None:
    """Restore the configuration loaded at startup."""
    _runtime_config.clear()
    _runtime_config.update(_defaults())
