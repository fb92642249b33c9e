"""Room domain services: registry, lifecycle, identity and leaderboard.

This package holds the room logic used by the Socket.IO handlers and the
HTTP routes, keeping transport concerns separated from room mechanics.
"""
import logging

from .broadcast import Broadcaster
from .registry import RoomRegistry
from .store import LeaderboardStore


class RoomServices:
    """Everything a handler needs to act on rooms, built once per app."""

    def __init__(self, registry: RoomRegistry, store: LeaderboardStore, broadcaster, log=None):
        self.registry = registry
        self.store = store
        self.broadcaster = broadcaster
        self.log = log or logging.getLogger('quizroom')

    @classmethod
    def from_config(cls, config, socketio, log=None):
        return cls(
            registry=RoomRegistry(
                pin_length=int(config.get('PIN_LENGTH', 4)),
                max_pin_attempts=int(config.get('PIN_MAX_ATTEMPTS', 100)),
                idle_ttl_sec=int(config.get('ROOM_IDLE_TTL_SEC', 0)),
            ),
            store=LeaderboardStore(config['LEADERBOARD_DIR']),
            broadcaster=Broadcaster(socketio, namespace=config.get('SOCKETIO_NAMESPACE', '/')),
            log=log,
        )
