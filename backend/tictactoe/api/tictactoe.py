from flask import Blueprint, jsonify, request, current_app
from tictactoe import socketio, store
from tictactoe.errors import GameError, InvalidRequest
from tictactoe.models import BOARD_SIZE
from tictactoe.services.games import GameService


tictactoe = Blueprint('tictactoe', __name__)


def init_service(app) -> None:
    app.extensions['game_service'] = GameService(
        store,
        serialize_updates=bool(app.config.get('SERIALIZE_GAME_UPDATES', True)),
    )


def _service() -> GameService:
    return current_app.extensions['game_service']


def _broadcast(game_id: str) -> None:
    """Tell clients watching this game that it changed."""
    try:
        state = _service().get_game(game_id).state.value
        socketio.emit('state_update', {'game_id': game_id, 'state': state}, to=f"game:{game_id}", namespace='/ws')
    except Exception as exc:
        current_app.logger.warning(f"[broadcast-failed] game={game_id} {exc}")


def _json_object():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidRequest('Request body must be a JSON object')
    return data


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_int(value: str, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidRequest(f'{name} must be an integer')


@tictactoe.errorhandler(GameError)
def handle_game_error(exc: GameError):
    current_app.logger.warning(f"[rejected] {request.method} {request.path} status={exc.status_code} {exc.message}")
    return jsonify({'error': exc.message}), exc.status_code


@tictactoe.route('', methods=['GET'])
def list_games():
    return jsonify({'games': _service().list_in_progress_game_ids()})


@tictactoe.route('', methods=['POST'])
def create_game():
    data = _json_object()
    players = data.get('players')
    rows = data.get('rows')
    columns = data.get('columns')

    if not isinstance(players, list) or len(players) != 2:
        raise InvalidRequest('players must be a list of exactly 2 names')
    if not all(isinstance(p, str) and p.strip() for p in players):
        raise InvalidRequest('player names must be non-empty strings')
    if not (_is_int(rows) and _is_int(columns)):
        raise InvalidRequest('rows and columns are required integers')
    if rows != BOARD_SIZE or columns != BOARD_SIZE:
        raise InvalidRequest(f'rows and columns must both be {BOARD_SIZE}')

    game_id = _service().create_game(players, rows=rows, columns=columns)
    current_app.logger.info(f"[create] game={game_id} players={players}")
    _broadcast(game_id)
    return jsonify({'gameId': game_id})


@tictactoe.route('/<string:game_id>', methods=['GET'])
def get_game_state(game_id):
    return jsonify(_service().get_game_summary(game_id))


@tictactoe.route('/<string:game_id>/quit', methods=['PUT'])
def quit_game(game_id):
    quit_id = _service().quit_game(game_id)
    current_app.logger.info(f"[quit] game={quit_id}")
    _broadcast(quit_id)
    return jsonify({'quitGame': quit_id})


@tictactoe.route('/<string:game_id>/moves', methods=['GET'])
def list_moves(game_id):
    # Unparsable values fall back to the defaults
    start = request.args.get('start', type=int)
    until = request.args.get('until', type=int)
    moves = _service().list_moves(game_id, start=start, until=until)
    return jsonify({'moves': [m.to_dict() for m in moves]})


@tictactoe.route('/<string:game_id>/moves/<string:move_number>', methods=['GET'])
def get_move(game_id, move_number):
    number = _parse_int(move_number, 'move_number')
    return jsonify(_service().get_move(game_id, number).to_dict())


@tictactoe.route('/<string:game_id>/<string:player_id>', methods=['POST'])
def post_move(game_id, player_id):
    data = _json_object()
    row = data.get('row')
    column = data.get('column')
    if not (_is_int(row) and _is_int(column)):
        raise InvalidRequest('row and column are required integers')
    player_idx = _parse_int(player_id, 'player_id')

    result = _service().apply_player_move(game_id, player_idx, row, column)
    current_app.logger.info(f"[move] game={game_id} player={player_idx} row={row} col={column} ref={result['move']}")
    _broadcast(game_id)
    return jsonify(result)
