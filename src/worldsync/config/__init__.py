"""Configuration module using Pydantic Settings.

Usage:
    from worldsync.config import SyncSettings, LoggingSettings

    settings = SyncSettings(offline_mode=True)
"""

from worldsync.config.settings import LoggingSettings, SyncSettings

__all__ = [
    "SyncSettings",
    "LoggingSettings",
]
