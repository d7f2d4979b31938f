"""
MSME Compass Shared Library
===========================

Common utilities, configuration, and models shared by the compliance engine.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog
    - models: Shared Pydantic models (profiles, classifications, obligations)

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "MSME Compass Team"

from shared.config import settings
from shared.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
