"""Names the synchronization core looks up through the world interface.

These are the world's own class, property, function and asset names. They are
kept in one place so a different build only needs this table changed.
"""

from __future__ import annotations

# Player and context
PLAYER_CONTROLLER = "PlayerController"
GAME_INSTANCE = "TalosGameInstance"
PAWN = "Pawn"
IS_DEAD = "bIsDead"
ROOT_COMPONENT = "RootComponent"
RELATIVE_LOCATION = "RelativeLocation"
SET_ABSOLUTE = "SetAbsolute"

# Progress and collection
PROGRESS_DEFAULT_OBJECT = "/Script/Talos.Default__TalosProgress"
PROGRESS_GETTER = "Get"
COLLECTION_PROPERTY = "CollectedTetrominos"

# DeathLink proxies, in preference order
MINE_CATEGORIES: tuple[str, ...] = ("BP_Mine_C", "BP_PassiveMine_C")

# Completion detection
MEDIA_PLAYER = "BinkMediaPlayer"
SECONDARY_MEDIA_CHANNEL = "SequentialMediaPlayer_Secondary"
MEDIA_URL_PROPERTIES: tuple[str, ...] = ("Url", "URL", "CurrentUrl")
ENDING_MARKERS: dict[str, str] = {"Ending_Ascension": "Ascension"}
TRANSCENDENCE_ASSET = "/Game/Cinematics/Sequences/Endings/Ending_Transcendence.Ending_Transcendence"
SAVE_SUBSYSTEM = "TalosSaveSubsystem"
IS_GAME_COMPLETED = "IsGameCompleted"

# Pickups
PICKUP_ITEM = "BP_TetrominoItem_C"
INSTANCE_INFO = "InstanceInfo"
IS_ANIMATING = "bIsAnimating"
HIDDEN = "bHidden"
HIDE_PICKUP = "HideTetromino"
UNHIDE_PICKUP = "UnhideTetromino"
