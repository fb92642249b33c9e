"""User-facing room errors.

Services raise these; the Socket.IO layer turns them into an ``error_msg``
event for the connection that sent the offending event.
"""


class RoomError(Exception):
    message = 'Something went wrong.'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidPin(RoomError):
    message = 'Invalid PIN'


class SessionExpired(RoomError):
    message = 'Session expired. Create new room.'


class RoomLocked(RoomError):
    message = 'Room is locked.'


class NotInLobby(RoomError):
    message = 'Game already started.'


class GameEnded(RoomError):
    message = 'Game has already ended.'


class InvalidUsername(RoomError):
    message = 'Username is required.'


class AlreadyJoined(RoomError):
    message = 'This connection already joined under another name.'


class InvalidScore(RoomError):
    message = 'Score must be a number.'


class PinSpaceExhausted(RoomError):
    message = 'No free room PIN available. Try again later.'
