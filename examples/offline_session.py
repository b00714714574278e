"""Scripted offline session against the in-memory world.

Usage:
    python offline_session.py            # quiet run
    python offline_session.py --verbose  # DEBUG logging
    python offline_session.py --frames 600
"""

from __future__ import annotations

import argparse

from worldsync import (
    LocalWorld,
    LoggingSettings,
    Orchestrator,
    QueuedNotifier,
    SyncSettings,
    configure_logging,
)
from worldsync.world import names

FRAME_S = 1 / 60


class FrameClock:
    """Clock advanced by the script, one host frame at a time."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def build_world() -> LocalWorld:
    world = LocalWorld()
    world.install_progress({"DJ4": True})  # stale entry from an earlier save
    world.install_player((0.0, 0.0, 0.0))
    for object_id in ("DJ1", "DJ2", "MT1", "SL5"):
        world.spawn_pickup(object_id)
    world.spawn_mine((400.0, 0.0, 0.0))
    return world


def show(message) -> None:
    print("  >> " + "".join(text for text, _ in message))


def run(frames: int) -> None:
    clock = FrameClock()
    world = build_world()
    orchestrator = Orchestrator(
        world,
        SyncSettings(_env_file=None, offline_mode=True, goal_warmup_s=2.0),
        notifier=QueuedNotifier(sink=show),
        clock=clock,
    )
    world.on_death(orchestrator.on_local_death)

    pickups = world.find_all(names.PICKUP_ITEM)
    for frame in range(frames):
        clock.now += FRAME_S
        # The player walks into one pickup every second.
        if frame % 60 == 30 and pickups:
            world.collect_pickup(pickups.pop(0))
        if frame == frames // 2:
            orchestrator.on_world_transition()
        orchestrator.tick()

    progress = world.find_first("TalosProgress")
    collection = world.get_property(progress, names.COLLECTION_PROPERTY)
    print(f"Passes run: {orchestrator.pass_count}")
    print(f"Checked: {sorted(orchestrator.state.checked_locations)}")
    print(f"Collection: {collection.snapshot()}")
    orchestrator.shutdown()


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline worldsync session")
    parser.add_argument("--frames", type=int, default=600)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    configure_logging(
        LoggingSettings(_env_file=None, level="DEBUG" if args.verbose else "WARNING")
    )
    run(args.frames)


if __name__ == "__main__":
    main()
