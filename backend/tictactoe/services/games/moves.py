from tictactoe.errors import CellOccupied, CellOutOfRange
from tictactoe.models import EMPTY, Game, Move, MoveType

# Draw detection is fixed to the 3x3 board
DRAW_MOVE_COUNT = 9


def apply_move(game: Game, row: int, col: int, player_idx: int) -> int:
    """Claim (row, col) for player_idx and record the move.

    Returns the 0-based number of the new move. Raises CellOutOfRange or
    CellOccupied without touching the game.
    """
    if not 0 <= row < game.rows:
        raise CellOutOfRange(f"row provided ({row}) is out of range [0-{game.rows - 1}]")
    if not 0 <= col < game.columns:
        raise CellOutOfRange(f"col provided ({col}) is out of range [0-{game.columns - 1}]")
    if game.board[row][col] != EMPTY:
        raise CellOccupied(f"move with row {row} and col {col} is already taken")

    game.board[row][col] = player_idx
    game.moves.append(Move(type=MoveType.MOVE, player=game.players[player_idx], row=row, col=col))
    return len(game.moves) - 1


def detect_winner(game: Game, row: int, col: int, player_idx: int) -> bool:
    """Whether the move at (row, col) completed a line for player_idx.

    Only the lines through the moved cell can have changed: its row, its
    column, and a diagonal when the cell sits on one.
    """
    board = game.board
    # Walk each line starting at the moved cell, wrapping around the edge
    if all(board[row][(col + i) % game.columns] == player_idx for i in range(game.columns)):
        return True
    if all(board[(row + i) % game.rows][col] == player_idx for i in range(game.rows)):
        return True

    size = game.rows
    if row == col and all(board[i][i] == player_idx for i in range(size)):
        return True
    if row + col == size - 1 and all(board[i][size - 1 - i] == player_idx for i in range(size)):
        return True
    return False


def is_draw(game: Game) -> bool:
    return len(game.moves) == DRAW_MOVE_COUNT


def next_player(player_idx: int) -> int:
    return 1 - player_idx
