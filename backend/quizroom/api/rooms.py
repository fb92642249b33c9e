from flask import Blueprint, current_app, jsonify

rooms = Blueprint('rooms', __name__)


@rooms.route('/<string:pin>', methods=['GET'])
def get_room(pin):
    """
    Lobby view of a live room. Scores are never exposed here.
    """
    room = current_app.extensions['quizroom'].registry.get(pin)
    if room is None:
        return jsonify({'error': 'Room not found'}), 404
    with room.lock:
        return jsonify(room.to_dict())


@rooms.route('/<string:pin>/leaderboard', methods=['GET'])
def get_leaderboard(pin):
    """
    Saved leaderboard for a room, highest score first. Works for rooms that
    are no longer in memory.
    """
    return jsonify(current_app.extensions['quizroom'].store.load_sorted(pin))
