"""
Configuration module for votechain.
"""

from votechain.infrastructure.config.settings import (
    DEV_FALLBACK_PROVIDER_URL,
    ENV_FILE_PATH,
    Environment,
    Settings,
    find_env_file,
    get_settings,
    reload_settings,
)


__all__ = [
    "DEV_FALLBACK_PROVIDER_URL",
    "ENV_FILE_PATH",
    "Environment",
    "Settings",
    "find_env_file",
    "get_settings",
    "reload_settings",
]
