import os

basedir = os.path.abspath(os.path.dirname(__file__))

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma separated list, '*' allows any origin (tunnels, LAN phones)
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # One leaderboard_<pin>.txt per room lives here
    LEADERBOARD_DIR = os.environ.get('LEADERBOARD_DIR') or os.path.join(basedir, 'leaderboards')
    PIN_LENGTH = int(os.environ.get('PIN_LENGTH', '4'))
    PIN_MAX_ATTEMPTS = int(os.environ.get('PIN_MAX_ATTEMPTS', '100'))
    # Rooms untouched for this long are evicted on the next room creation. 0 disables.
    ROOM_IDLE_TTL_SEC = int(os.environ.get('ROOM_IDLE_TTL_SEC', '21600'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
