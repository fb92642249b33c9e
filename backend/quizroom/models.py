import threading
import time
from typing import Dict, List, Optional, Union

Score = Union[int, float]

# Room lifecycle: LOBBY -> PLAYING -> ENDED
LOBBY = 'LOBBY'
PLAYING = 'PLAYING'
ENDED = 'ENDED'


class Player:
    def __init__(self, name: str):
        self.name = name
        self.score: Optional[Score] = None
        # Position in the room's submission order, used to break score ties
        self.submitted_seq: Optional[int] = None

    @property
    def has_score(self) -> bool:
        return self.score is not None

    def to_dict(self):
        # Never carries the score value: the admin roster is visible mid-game
        return {
            'name': self.name,
            'hasScore': self.has_score,
        }


class Room:
    def __init__(self, pin: str, game_url: str, admin_sid: str):
        self.pin = pin
        self.game_url = game_url
        self.status = LOBBY
        self.is_locked = False
        self.admin_sid = admin_sid
        # connection sid -> Player
        self.players: Dict[str, Player] = {}
        self.lock = threading.RLock()
        self.last_activity = time.time()
        self._next_seq = 0

    def touch(self) -> None:
        self.last_activity = time.time()

    def find_sid_by_name(self, name: str) -> Optional[str]:
        for sid, player in self.players.items():
            if player.name == name:
                return sid
        return None

    def next_submission_seq(self) -> int:
        self._next_seq += 1
        return self._next_seq

    def player_list(self) -> List[dict]:
        return [p.to_dict() for p in self.players.values()]

    def to_dict(self):
        return {
            'pin': self.pin,
            'status': self.status,
            'isLocked': self.is_locked,
            'players': self.player_list(),
        }
