"""
Configuration Module
====================

Centralized configuration management using Pydantic Settings.
Loads from environment variables with type validation and defaults.

Usage:
    from shared.config import settings

    print(settings.environment)
    print(settings.engine.obligations_per_week)
"""

from shared.config.settings import (
    EngineSettings,
    Environment,
    LogLevel,
    Settings,
    get_settings,
)


# Global settings instance (singleton)
settings = get_settings()

__all__ = [
    "Settings",
    "EngineSettings",
    "get_settings",
    "settings",
    "Environment",
    "LogLevel",
]
