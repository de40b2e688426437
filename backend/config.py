import os


def _flag(name, default):
    return os.environ.get(name, default).lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma-separated list; '*' allows any origin
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '8080'))
    # Match /TicTacToe/... the same as /tictactoe/...
    CASELESS_ROUTES = _flag('CASELESS_ROUTES', 'true')
    # Hold a per-game lock across each read-modify-write of a game
    SERIALIZE_GAME_UPDATES = _flag('SERIALIZE_GAME_UPDATES', 'true')
