from typing import Optional

from quizroom.errors import GameEnded, SessionExpired
from quizroom.models import ENDED, PLAYING, Room
from .leaderboard import compute_leaderboard


def _require_room(services, pin) -> Room:
    room = services.registry.get(pin)
    if room is None:
        raise SessionExpired()
    return room


def evict_idle_rooms(services) -> list:
    """Free rooms idle past the configured TTL and empty their groups."""
    if not services.registry.idle_ttl_sec:
        return []
    evicted = services.registry.evict_idle(services.registry.idle_ttl_sec)
    for pin in evicted:
        services.broadcaster.close(pin)
    return evicted


def create_room(services, game_url: str, admin_sid: str) -> Room:
    evict_idle_rooms(services)
    # A PIN with a saved leaderboard belongs to an earlier room
    room = services.registry.create(game_url, admin_sid, is_taken=services.store.exists)
    services.broadcaster.join(admin_sid, room.pin)
    services.log.info(f"[room-created] pin={room.pin} game_url={game_url}")
    services.broadcaster.to_sid(admin_sid, 'room_created', room.pin)
    return room


def rebind_admin(services, pin, admin_sid: str) -> Room:
    """Point the room's admin at a new connection and replay its state.

    The most recent bind wins; there is only ever one admin connection.
    """
    room = _require_room(services, pin)
    with room.lock:
        room.admin_sid = admin_sid
        room.touch()
        services.broadcaster.join(admin_sid, room.pin)
        services.log.info(f"[admin-rejoin] pin={room.pin} sid={admin_sid}")
        services.broadcaster.to_sid(admin_sid, 'admin_restore_success', {
            'pin': room.pin,
            'status': room.status,
            'gameUrl': room.game_url,
            'players': room.player_list(),
            'leaderboard': services.store.load_sorted(room.pin),
        })
    return room


def lock_room(services, pin) -> Room:
    room = _require_room(services, pin)
    with room.lock:
        room.is_locked = True
        room.touch()
        services.log.info(f"[room-locked] pin={room.pin}")
        services.broadcaster.to_room(room.pin, 'room_locked_status', True)
    return room


def start_game(services, pin) -> Room:
    room = _require_room(services, pin)
    with room.lock:
        if room.status == ENDED:
            raise GameEnded()
        room.status = PLAYING
        room.touch()
        services.log.info(f"[game-start] pin={room.pin}")
        services.broadcaster.to_room(room.pin, 'game_start', room.game_url)
    return room


def end_game(services, pin) -> list:
    room = _require_room(services, pin)
    with room.lock:
        room.status = ENDED
        room.touch()
        leaderboard = compute_leaderboard(room)
        services.store.save(room.pin, leaderboard)
        services.log.info(f"[game-ended] pin={room.pin} ranked={len(leaderboard)}")
        services.broadcaster.to_room(room.pin, 'game_ended', leaderboard)
    return leaderboard


def close_room(services, pin) -> Optional[Room]:
    """Tell the group the room is gone and free it. The saved leaderboard stays."""
    room = _require_room(services, pin)
    with room.lock:
        services.broadcaster.to_room(room.pin, 'room_closed', room.pin)
        services.broadcaster.close(room.pin)
        services.registry.remove(room.pin)
    services.log.info(f"[room-closed] pin={room.pin}")
    return room
