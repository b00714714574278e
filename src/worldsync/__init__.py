"""worldsync: keep a game world in agreement with a multiworld session.

Usage:
    from worldsync import Orchestrator, SyncSettings, LocalWorld, LocalSessionClient
    from worldsync import ConnectionEstablished, ItemReceived

    world = LocalWorld()
    world.install_progress()
    client = LocalSessionClient()
    orchestrator = Orchestrator(world, SyncSettings(), session=client)

    client.push(ConnectionEstablished(), ItemReceived(0x540000, sender="Alice"))
    orchestrator.tick()  # "DJ1" is now in the world's collection
"""

__version__ = "0.1.0"

# Configuration
from worldsync.config import LoggingSettings, SyncSettings

# Identifiers
from worldsync.core import (
    BASE_ITEM_ID,
    BASE_LOCATION_ID,
    ItemId,
    LocationId,
    ObjectId,
)
from worldsync.logs import configure_logging
from worldsync.mapping import IdentifierMap

# Collaborators
from worldsync.notify import Notifier, NotifyColor, QueuedNotifier

# Orchestration
from worldsync.orchestration import DebugCommands, Orchestrator
from worldsync.scheduling import TickGate
from worldsync.session import (
    ConnectionEstablished,
    DeathLinkReceived,
    ItemReceived,
    LocalSessionClient,
    SessionClient,
)
from worldsync.state import SessionState

# Services
from worldsync.sync import (
    DeathLinkHandler,
    GoalDetector,
    InventorySync,
    PickupTracker,
    Placement,
)

# Tracing
from worldsync.tracing import HistoryStore, PassHistory, PassRecord
from worldsync.world import (
    LocalWorld,
    StaleHandleError,
    WorldError,
    WorldInterface,
)

__all__ = [
    "__version__",
    # Configuration
    "SyncSettings",
    "LoggingSettings",
    "configure_logging",
    # Identifiers
    "ItemId",
    "LocationId",
    "ObjectId",
    "BASE_ITEM_ID",
    "BASE_LOCATION_ID",
    "IdentifierMap",
    # State
    "SessionState",
    # Services
    "InventorySync",
    "DeathLinkHandler",
    "GoalDetector",
    "Placement",
    "PickupTracker",
    # Orchestration
    "Orchestrator",
    "DebugCommands",
    "TickGate",
    # Collaborators
    "WorldInterface",
    "WorldError",
    "StaleHandleError",
    "LocalWorld",
    "SessionClient",
    "LocalSessionClient",
    "ItemReceived",
    "ConnectionEstablished",
    "DeathLinkReceived",
    "Notifier",
    "NotifyColor",
    "QueuedNotifier",
    # Tracing
    "HistoryStore",
    "PassHistory",
    "PassRecord",
]
