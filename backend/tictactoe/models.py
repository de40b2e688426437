from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
import uuid

# Board cell that no player has claimed yet
EMPTY = -1

BOARD_SIZE = 3


class MoveType(str, Enum):
    MOVE = 'MOVE'
    QUIT = 'QUIT'


class GameState(str, Enum):
    IN_PROGRESS = 'IN_PROGRESS'
    COMPLETE = 'COMPLETE'
    QUIT = 'QUIT'


def generate_game_id() -> str:
    """Generate a unique game id."""
    return str(uuid.uuid4())


def new_board(rows: int, columns: int) -> List[List[int]]:
    return [[EMPTY for _ in range(columns)] for _ in range(rows)]


@dataclass(frozen=True)
class Move:
    type: MoveType
    player: str
    row: int
    col: int

    def to_dict(self):
        return {
            'type': self.type.value,
            'player': self.player,
            'row': self.row,
            'col': self.col,
        }


@dataclass
class Game:
    players: List[str]
    rows: int = BOARD_SIZE
    columns: int = BOARD_SIZE
    id: str = field(default_factory=generate_game_id)
    state: GameState = GameState.IN_PROGRESS
    winner: Optional[str] = None
    moves: List[Move] = field(default_factory=list)
    # Index into players of whoever moves next; -1 until the first move
    next_player_idx: int = -1
    board: Optional[List[List[int]]] = None

    def __post_init__(self):
        if self.board is None:
            self.board = new_board(self.rows, self.columns)

    @property
    def is_in_progress(self) -> bool:
        return self.state == GameState.IN_PROGRESS

    def has_player(self, player_idx: int) -> bool:
        return 0 <= player_idx < len(self.players)

    def summary(self):
        """Players and state, plus the winner once the game is complete.

        A draw reports ``winner`` as None; games still running or quit
        leave the key out entirely.
        """
        data = {
            'players': list(self.players),
            'state': self.state.value,
        }
        if self.state == GameState.COMPLETE:
            data['winner'] = self.winner
        return data

    def to_dict(self):
        return {
            'id': self.id,
            'players': list(self.players),
            'columns': self.columns,
            'rows': self.rows,
            'state': self.state.value,
            'winner': self.winner,
            'moves': [m.to_dict() for m in self.moves],
            'nextPlayerIdx': self.next_player_idx,
            'gameBoard': [list(row) for row in self.board],
        }
