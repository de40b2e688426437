from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config
from tictactoe.store import GameStore

store = GameStore()
socketio = SocketIO(async_mode=None)


class CaselessPaths:
    """WSGI middleware that lower-cases the request path before routing."""

    def __init__(self, wsgi_app):
        self.wsgi_app = wsgi_app

    def __call__(self, environ, start_response):
        environ['PATH_INFO'] = environ.get('PATH_INFO', '').lower()
        return self.wsgi_app(environ, start_response)


def _allowed_origins(value):
    if not value or value.strip() == '*':
        return '*'
    return [origin.strip() for origin in value.split(',') if origin.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = _allowed_origins(flask_app.config.get('CORS_ORIGINS', '*'))
    store.init_app(flask_app)
    CORS(flask_app, origins=allowed_origins)

    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Import and register blueprints here
    from tictactoe.routes import main
    flask_app.register_blueprint(main)

    from tictactoe.api.tictactoe import tictactoe, init_service
    init_service(flask_app)
    flask_app.register_blueprint(tictactoe, url_prefix='/tictactoe')

    from tictactoe.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    if flask_app.config.get('CASELESS_ROUTES', True):
        flask_app.wsgi_app = CaselessPaths(flask_app.wsgi_app)

    return flask_app
