import functools

from flask import current_app, request
from flask_socketio import emit

from quizroom import socketio
from quizroom.errors import RoomError, SessionExpired
from quizroom.services.rooms import RoomServices, leaderboard, players, sessions


def _services() -> RoomServices:
    return current_app.extensions['quizroom']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _reports_errors(handler):
    """Send RoomError messages back to the caller as ``error_msg``."""
    @functools.wraps(handler)
    def wrapper(*args):
        try:
            return handler(*args)
        except RoomError as exc:
            current_app.logger.info(f"[error] event={handler.__name__} sid={_get_sid()} {exc.message}")
            emit('error_msg', exc.message)
    return wrapper


def _admin_pin(data):
    # Admin events send the bare PIN; accept {'pin': ...} as well
    pin = data.get('pin') if isinstance(data, dict) else data
    if pin is None or pin == '':
        raise SessionExpired()
    return str(pin)


def handle_connect(auth=None):
    current_app.logger.debug(f"[connect] sid={_get_sid()}")


def handle_disconnect(*args):
    # Player entries stay put so the same name can reconnect later
    current_app.logger.debug(f"[disconnect] sid={_get_sid()}")


# ---- Admin events ----

@_reports_errors
def handle_admin_create_room(game_url=None):
    if isinstance(game_url, dict):
        game_url = game_url.get('gameUrl')
    sessions.create_room(_services(), game_url or '', _get_sid())


@_reports_errors
def handle_admin_rejoin(data=None):
    sessions.rebind_admin(_services(), _admin_pin(data), _get_sid())


@_reports_errors
def handle_admin_lock_room(data=None):
    sessions.lock_room(_services(), _admin_pin(data))


@_reports_errors
def handle_admin_start_game(data=None):
    sessions.start_game(_services(), _admin_pin(data))


@_reports_errors
def handle_admin_end_game(data=None):
    sessions.end_game(_services(), _admin_pin(data))


@_reports_errors
def handle_admin_close_room(data=None):
    sessions.close_room(_services(), _admin_pin(data))


# ---- Player events ----

@_reports_errors
def handle_player_join(data=None):
    data = data if isinstance(data, dict) else {}
    players.join_or_rejoin(_services(), data.get('pin'), _get_sid(), data.get('username'))


@_reports_errors
def handle_submit_score(data=None):
    data = data if isinstance(data, dict) else {}
    leaderboard.submit_score(_services(), data.get('pin'), _get_sid(), data.get('score'))


def handle_get_leaderboard(data=None):
    pin = data.get('pin') if isinstance(data, dict) else data
    entries = _services().store.load_sorted(str(pin)) if pin else []
    emit('leaderboard_data', entries)
    return entries


EVENT_HANDLERS = {
    'connect': handle_connect,
    'disconnect': handle_disconnect,
    'admin_create_room': handle_admin_create_room,
    'admin_rejoin': handle_admin_rejoin,
    'admin_lock_room': handle_admin_lock_room,
    'admin_start_game': handle_admin_start_game,
    'admin_end_game': handle_admin_end_game,
    'admin_close_room': handle_admin_close_room,
    'player_join': handle_player_join,
    'submit_score': handle_submit_score,
    'get_leaderboard': handle_get_leaderboard,
}


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register every room event handler on ``namespace``."""
    for event, handler in EVENT_HANDLERS.items():
        socketio.on_event(event, handler, namespace=namespace)
