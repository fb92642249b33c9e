from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

socketio = SocketIO(async_mode=None)


def _parse_origins(value):
    if not value or value == '*':
        return '*'
    return [o.strip() for o in value.split(',') if o.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = _parse_origins(flask_app.config.get('CORS_ORIGINS'))
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One registry per app; handlers reach it through current_app.extensions
    from quizroom.services.rooms import RoomServices
    flask_app.extensions['quizroom'] = RoomServices.from_config(
        flask_app.config, socketio, log=flask_app.logger
    )

    # Import and register blueprints here
    from quizroom.main import main
    flask_app.register_blueprint(main)

    from quizroom.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    # Register Socket.IO event handlers
    from quizroom.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/'))

    @click.command('leaderboard-show')
    @click.argument('pin')
    def leaderboard_show_command(pin):
        """Prints the saved leaderboard for a room PIN."""
        entries = flask_app.extensions['quizroom'].store.load_sorted(pin)
        if not entries:
            click.echo(f'No leaderboard saved for room {pin}.')
            return
        for rank, entry in enumerate(entries, start=1):
            click.echo(f"{rank}. {entry['name']} - {entry['score']}")

    flask_app.cli.add_command(leaderboard_show_command)

    return flask_app
