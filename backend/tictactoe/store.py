"""In-memory game store.

One lock guards the whole table, so every call is serialized against every
other call, whichever game it touches. Records are copied on the way in and
out: callers never hold a reference to the live record, and an update is a
whole-record replacement.
"""
import copy
import logging
from threading import Lock
from typing import Dict, List

from .errors import StoreNotFound
from .models import Game

log = logging.getLogger(__name__)


class GameStore:

    def __init__(self, app=None):
        self._games: Dict[str, Game] = {}
        self._lock = Lock()
        if app is not None:
            self.init_app(app)

    def init_app(self, app) -> None:
        """Bind the store to an app, starting from an empty table."""
        self.clear()
        app.extensions['game_store'] = self

    def get(self, game_id: str) -> Game:
        with self._lock:
            game = self._games.get(game_id)
            if game is None:
                raise StoreNotFound(f"No game exists with game_id {game_id}")
            return copy.deepcopy(game)

    def list(self) -> List[Game]:
        with self._lock:
            return [copy.deepcopy(g) for g in self._games.values()]

    def put(self, game: Game) -> str:
        with self._lock:
            self._games[game.id] = copy.deepcopy(game)
            return game.id

    def update(self, game: Game) -> None:
        with self._lock:
            if game.id not in self._games:
                # Callers fetch before updating and nothing deletes games
                raise StoreNotFound(f"Failed to update game. Game with game_id {game.id} does not exist")
            self._games[game.id] = copy.deepcopy(game)

    def clear(self) -> None:
        with self._lock:
            count = len(self._games)
            self._games.clear()
        if count:
            log.info(f"[store-clear] dropped {count} games")

    def __len__(self):
        with self._lock:
            return len(self._games)
