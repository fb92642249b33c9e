from flask import current_app

from quizroom.models import Player


def _services():
    return current_app.extensions['quizroom']


def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert res.get_json()['rooms'] == 0


def test_room_state_hides_scores(client):
    services = _services()
    room = services.registry.create('http://game.example/quiz', 'admin')
    room.players['p1'] = Player('Ali')
    room.players['p1'].score = 12
    res = client.get(f'/api/rooms/{room.pin}')
    assert res.status_code == 200
    assert res.get_json() == {
        'pin': room.pin,
        'status': 'LOBBY',
        'isLocked': False,
        'players': [{'name': 'Ali', 'hasScore': True}],
    }


def test_room_state_unknown_pin(client):
    res = client.get('/api/rooms/0000')
    assert res.status_code == 404
    assert 'error' in res.get_json()


def test_leaderboard_endpoint_reads_saved_record(client):
    _services().store.save('4821', [{'name': 'B', 'score': 5}, {'name': 'A', 'score': 10}])
    res = client.get('/api/rooms/4821/leaderboard')
    assert res.status_code == 200
    assert res.get_json() == [{'name': 'A', 'score': 10}, {'name': 'B', 'score': 5}]


def test_leaderboard_endpoint_unknown_pin_is_empty(client):
    res = client.get('/api/rooms/9999/leaderboard')
    assert res.status_code == 200
    assert res.get_json() == []


def test_leaderboard_show_command(flask_app):
    _services().store.save('4821', [{'name': 'Ali', 'score': 42}, {'name': 'Bea', 'score': 50}])
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['leaderboard-show', '4821'])
    assert result.exit_code == 0
    assert result.output.splitlines() == ['1. Bea - 50', '2. Ali - 42']


def test_leaderboard_show_command_empty(flask_app):
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['leaderboard-show', '1234'])
    assert 'No leaderboard saved for room 1234.' in result.output
