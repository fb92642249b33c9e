from quizroom.errors import AlreadyJoined, InvalidPin, InvalidUsername, NotInLobby, RoomLocked
from quizroom.models import LOBBY, PLAYING, Player


def clean_username(username) -> str:
    """Strip a username and reject what the leaderboard file cannot hold.

    Records are ``name,score`` lines and ``#`` starts a comment, so a name
    may not contain a line break or begin with ``#``.
    """
    username = username.strip() if isinstance(username, str) else ''
    if not username:
        raise InvalidUsername()
    if '\n' in username or '\r' in username or username.startswith('#'):
        raise InvalidUsername('Username cannot start with # or contain line breaks.')
    return username


def join_or_rejoin(services, pin, sid: str, username) -> Player:
    """Attach a connection to a player identity in the room.

    A name already present in the room is a reconnection: the existing
    record (score included) moves to the new connection. Reconnection is
    allowed whatever the lock or lifecycle state. A new name needs an
    unlocked room that is still in the lobby.
    """
    room = services.registry.get(pin)
    if room is None:
        raise InvalidPin()
    username = clean_username(username)

    with room.lock:
        current = room.players.get(sid)
        if current is not None and current.name != username:
            raise AlreadyJoined()
        existing_sid = room.find_sid_by_name(username)
        if existing_sid is None:
            if room.is_locked:
                raise RoomLocked()
            if room.status != LOBBY:
                raise NotInLobby()

        services.broadcaster.join(sid, room.pin)
        if existing_sid is None:
            player = Player(username)
            room.players[sid] = player
            services.log.info(f"[player-join] pin={room.pin} name={username}")
        elif existing_sid != sid:
            player = room.players.pop(existing_sid)
            room.players[sid] = player
            services.log.info(f"[player-rejoin] pin={room.pin} name={username}")
        else:
            player = room.players[sid]
        room.touch()

        services.broadcaster.to_sid(sid, 'join_success', {'pin': room.pin, 'username': username})
        services.broadcaster.to_sid(room.admin_sid, 'update_player_list', room.player_list())
        # Late joiners and phones waking from sleep go straight to the game
        if room.status == PLAYING:
            services.broadcaster.to_sid(sid, 'game_start', room.game_url)
    return player
