import math
import numbers
from typing import List

from quizroom.errors import InvalidScore
from quizroom.models import Room


def compute_leaderboard(room: Room) -> List[dict]:
    """Rank players that have a score, highest first.

    Equal scores are ordered by submission, earliest first.
    """
    scored = [p for p in room.players.values() if p.score is not None]
    scored.sort(key=lambda p: (-p.score, p.submitted_seq))
    return [{'name': p.name, 'score': p.score} for p in scored]


def coerce_score(value):
    if isinstance(value, bool):
        raise InvalidScore()
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError:
            try:
                value = float(value)
            except ValueError:
                raise InvalidScore()
    if not isinstance(value, numbers.Real):
        raise InvalidScore()
    # NaN breaks the ranking order and neither NaN nor inf is valid JSON
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidScore()
    return value


def submit_score(services, pin, sid: str, score):
    """Record the first score a connection submits for its player.

    Later submissions leave the stored score alone and are re-acknowledged
    with the recorded value. Only the admin sees the live leaderboard.
    Returns the recorded score, or None when the room or player is unknown.
    """
    room = services.registry.get(pin)
    if room is None:
        return None
    with room.lock:
        player = room.players.get(sid)
        if player is None:
            return None
        room.touch()
        if player.score is not None:
            services.broadcaster.to_sid(sid, 'score_received', player.score)
            return player.score
        score = coerce_score(score)
        player.score = score
        player.submitted_seq = room.next_submission_seq()
        services.log.info(f"[score] pin={room.pin} name={player.name} score={score}")
        services.broadcaster.to_sid(sid, 'score_received', score)
        leaderboard = compute_leaderboard(room)
        services.broadcaster.to_sid(room.admin_sid, 'live_leaderboard', leaderboard)
        services.store.save(room.pin, leaderboard)
        return score
