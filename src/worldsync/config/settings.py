"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support.

Usage:
    from worldsync.config import SyncSettings, LoggingSettings

    # Load from environment variables (WORLDSYNC_*, WORLDSYNC_LOG_*)
    settings = SyncSettings()

    # Or override with explicit values
    settings = SyncSettings(offline_mode=True, death_link=True)
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SyncSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the synchronization engine.

    Attributes:
        server: Multiworld server address (host:port).
        slot_name: Player slot name.
        password: Session password.
        game: Game name announced to the session.
        offline_mode: Run without a session client; pickups grant locally.
        death_link: Initial DeathLink toggle (the handshake may override it).
        randomize_sigils: Reconcile purple sigils against granted items.
        randomize_stars: Reconcile stars against granted items.
        reusable_objects: Reset every "used" marker on each reconciliation.
        tick_interval_ms: Minimum wall-clock interval between gated passes.
        transition_cooldown_s: World interaction pause after a world transition.
        goal_warmup_s: Delay before completion polling starts.
        goal_item_threshold: Granted items required for the asset-based goal.
        echo_suppression_timeout_s: Lifetime of the DeathLink echo guard
            (None keeps it until consumed).
        death_link_cause: Cause text broadcast for local deaths.
        history_size: Number of pass records kept for diagnostics.

    Environment Variables:
        WORLDSYNC_SERVER, WORLDSYNC_SLOT_NAME, WORLDSYNC_OFFLINE_MODE, ...
    """

    model_config = SettingsConfigDict(
        env_prefix="WORLDSYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    server: str = "archipelago.gg:38281"
    slot_name: str = "Player1"
    password: str = ""
    game: str = "The Talos Principle Reawakened"

    offline_mode: bool = False
    death_link: bool = False

    randomize_sigils: bool = True
    randomize_stars: bool = True
    reusable_objects: bool = False

    tick_interval_ms: int = Field(default=200, ge=1)
    transition_cooldown_s: float = Field(default=10.0, ge=0.0)
    goal_warmup_s: float = Field(default=20.0, ge=0.0)
    goal_item_threshold: int = Field(default=90, ge=0)
    echo_suppression_timeout_s: Annotated[float, Field(gt=0.0)] | None = 30.0
    death_link_cause: str = "Died in The Talos Principle"
    history_size: int = Field(default=256, ge=1)


class LoggingSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for log sinks.

    Attributes:
        level: Minimum level for all sinks.
        file: Optional log file path; rotated and retained as configured.
        rotation: Rotation condition for the file sink.
        retention: Retention period for rotated files.

    Environment Variables:
        WORLDSYNC_LOG_LEVEL
        WORLDSYNC_LOG_FILE
        WORLDSYNC_LOG_ROTATION
        WORLDSYNC_LOG_RETENTION
    """

    model_config = SettingsConfigDict(
        env_prefix="WORLDSYNC_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"
    file: str | None = None
    rotation: str = "1 day"
    retention: str = "30 days"
