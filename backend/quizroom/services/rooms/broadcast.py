from flask_socketio import close_room, join_room


def group_name(pin: str) -> str:
    return f"room:{pin}"


class Broadcaster:
    """Fan-out of room events over Socket.IO.

    ``to_sid`` addresses one connection (the caller or the admin), ``to_room``
    addresses every connection that joined the room's group.
    """

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def to_sid(self, sid: str, event: str, data=None) -> None:
        if not sid:
            return
        self.socketio.emit(event, data, to=sid, namespace=self.namespace)

    def to_room(self, pin: str, event: str, data=None) -> None:
        self.socketio.emit(event, data, to=group_name(pin), namespace=self.namespace)

    def join(self, sid: str, pin: str) -> None:
        join_room(group_name(pin), sid=sid, namespace=self.namespace)

    def close(self, pin: str) -> None:
        close_room(group_name(pin), namespace=self.namespace)
