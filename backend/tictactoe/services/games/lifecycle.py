import logging
from contextlib import contextmanager
from threading import Lock
from typing import Dict, List, Optional

from tictactoe.errors import (
    GameNotFound,
    IllegalMove,
    InternalError,
    InvalidRange,
    InvalidRequest,
    MoveOutOfRange,
    NotYourTurn,
    PlayerNotFound,
    StoreNotFound,
)
from tictactoe.models import BOARD_SIZE, Game, GameState, Move
from tictactoe.store import GameStore
from . import moves as engine

log = logging.getLogger(__name__)


class GameService:
    """Game lifecycle operations over a GameStore.

    Moves and quits read a game, change a copy and write it back. With
    ``serialize_updates`` on, that sequence runs under a per-game lock so two
    requests for the same game cannot both act on the same snapshot. With it
    off, the get and the update are independent store calls and the last
    writer wins.
    """

    def __init__(self, store: GameStore, serialize_updates: bool = True):
        self.store = store
        self.serialize_updates = serialize_updates
        self._game_locks: Dict[str, Lock] = {}
        self._locks_guard = Lock()

    @contextmanager
    def _exclusive(self, game_id: str):
        if not self.serialize_updates:
            yield
            return
        with self._locks_guard:
            lock = self._game_locks.get(game_id)
        if lock is None:
            # Unknown game: the store lookup inside the block raises
            yield
            return
        with lock:
            yield

    def _fetch(self, game_id: str) -> Game:
        try:
            return self.store.get(game_id)
        except StoreNotFound as exc:
            raise GameNotFound(str(exc))

    def create_game(self, players: List[str], rows: int = BOARD_SIZE, columns: int = BOARD_SIZE) -> str:
        if not isinstance(players, (list, tuple)) or len(players) != 2:
            raise InvalidRequest('players must contain exactly 2 names')
        if rows != BOARD_SIZE or columns != BOARD_SIZE:
            raise InvalidRequest(f'rows and columns must both be {BOARD_SIZE}')
        game = Game(players=list(players), rows=rows, columns=columns)
        with self._locks_guard:
            self._game_locks[game.id] = Lock()
        self.store.put(game)
        return game.id

    def list_in_progress_game_ids(self) -> List[str]:
        return [g.id for g in self.store.list() if g.is_in_progress]

    def get_game(self, game_id: str) -> Game:
        return self._fetch(game_id)

    def get_game_summary(self, game_id: str) -> dict:
        return self._fetch(game_id).summary()

    def apply_player_move(self, game_id: str, player_idx: int, row: int, col: int) -> dict:
        """Play (row, col) for player_idx in an in-progress game.

        Returns ``{'move': '<game_id>/moves/<n>'}`` plus ``winner`` when the
        move won the game.
        """
        with self._exclusive(game_id):
            try:
                game = self.store.get(game_id)
            except StoreNotFound as exc:
                raise GameNotFound(f"Failed to find an IN_PROGRESS game with this game_id. {exc}")
            if not game.is_in_progress:
                raise GameNotFound(f"Failed to find an IN_PROGRESS game with game_id {game_id}")
            if not game.has_player(player_idx):
                raise PlayerNotFound(f"Player with player_id {player_idx} is not found")
            if game.next_player_idx != -1 and game.next_player_idx != player_idx:
                raise NotYourTurn(f"It is not player {player_idx}'s turn")

            try:
                move_number = engine.apply_move(game, row, col, player_idx)
            except IllegalMove as exc:
                raise type(exc)(f"Failed to play the move, it is illegal. {exc.message}") from exc

            result = {'move': f"{game_id}/moves/{move_number}"}
            game.next_player_idx = engine.next_player(player_idx)

            if engine.detect_winner(game, row, col, player_idx):
                game.state = GameState.COMPLETE
                game.winner = game.players[player_idx]
                result['winner'] = game.winner
                log.info(f"[winner] game={game_id} player={game.winner}")
            elif engine.is_draw(game):
                game.state = GameState.COMPLETE
                log.info(f"[draw] game={game_id}")

            try:
                self.store.update(game)
            except StoreNotFound as exc:
                raise InternalError(f"Failed to update the game. {exc}")
        return result

    def list_moves(self, game_id: str, start: Optional[int] = None, until: Optional[int] = None) -> List[Move]:
        """Moves ``start`` through ``until`` inclusive.

        ``start`` defaults to the first move and ``until`` to the last; an
        ``until`` past the end is clamped to the last move.
        """
        game = self._fetch(game_id)
        total = len(game.moves)
        if total == 0:
            raise InvalidRange('There are no moves for this game')
        if start is None:
            start = 0
        if until is None or until >= total:
            until = total - 1

        problems = []
        if start < 0:
            problems.append("'start' must not be negative.")
        if start > until:
            problems.append("'start' must be less than or equal to 'until'.")
        if start >= total:
            problems.append(f"This game has a total of {total} moves, so start must be less than {total}.")
        if problems:
            raise InvalidRange(' '.join(problems))
        return game.moves[start:until + 1]

    def get_move(self, game_id: str, move_number: int) -> Move:
        game = self._fetch(game_id)
        if move_number < 0 or move_number >= len(game.moves):
            raise MoveOutOfRange(f"move_number {move_number} is out of range")
        return game.moves[move_number]

    def quit_game(self, game_id: str) -> str:
        with self._exclusive(game_id):
            game = self._fetch(game_id)
            if game.state == GameState.QUIT:
                return game_id
            if game.state == GameState.COMPLETE:
                raise GameNotFound(f"Failed to find an IN_PROGRESS game with game_id {game_id}")
            game.state = GameState.QUIT
            try:
                self.store.update(game)
            except StoreNotFound as exc:
                raise InternalError(f"Failed to update the game. {exc}")
        return game_id
