import logging
import random
import threading
import time
from typing import Dict, List, Optional

from quizroom.errors import PinSpaceExhausted
from quizroom.models import Room

logger = logging.getLogger(__name__)


def generate_pin(length: int = 4) -> str:
    """Generate a random numeric PIN with no leading zero."""
    low = 10 ** (length - 1)
    return str(random.randint(low, 10 * low - 1))


class RoomRegistry:
    """In-memory PIN -> Room map owned by the running application.

    One instance is created per app in ``create_app`` and reached from the
    handlers through ``current_app.extensions``.
    """

    def __init__(self, pin_length: int = 4, max_pin_attempts: int = 100, idle_ttl_sec: int = 0):
        self.pin_length = pin_length
        self.max_pin_attempts = max_pin_attempts
        self.idle_ttl_sec = idle_ttl_sec
        self._rooms: Dict[str, Room] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, pin) -> bool:
        return pin in self._rooms

    def create(self, game_url: str, admin_sid: str, is_taken=None) -> Room:
        """Register a room under an unused PIN.

        ``is_taken`` lets the caller veto PINs that are free in memory but
        still in use elsewhere, such as a saved leaderboard.
        """
        with self._lock:
            for _ in range(self.max_pin_attempts):
                pin = generate_pin(self.pin_length)
                if pin not in self._rooms and not (is_taken and is_taken(pin)):
                    room = Room(pin, game_url, admin_sid)
                    self._rooms[pin] = room
                    return room
        raise PinSpaceExhausted()

    def get(self, pin) -> Optional[Room]:
        if pin is None:
            return None
        return self._rooms.get(str(pin))

    def remove(self, pin: str) -> Optional[Room]:
        with self._lock:
            return self._rooms.pop(pin, None)

    def evict_idle(self, max_idle_sec: float, now: Optional[float] = None) -> List[str]:
        """Drop rooms whose last activity is older than ``max_idle_sec``."""
        now = time.time() if now is None else now
        with self._lock:
            stale = [pin for pin, room in self._rooms.items() if now - room.last_activity > max_idle_sec]
            for pin in stale:
                del self._rooms[pin]
        for pin in stale:
            logger.info('[room-evicted] pin=%s idle>%ss', pin, max_idle_sec)
        return stale
