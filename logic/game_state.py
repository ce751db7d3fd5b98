"""
Game state for TicTacToe.
Immutable snapshot of the players, the board, whose turn it is and the result.
"""

from enum import Enum
from typing import Optional, List, Tuple
from dataclasses import dataclass, field, replace


class Mark(Enum):
    """The two marks a player can place."""
    X = "X"
    O = "O"

    def opposite(self) -> "Mark":
        """Get the other mark."""
        return Mark.O if self == Mark.X else Mark.X


class PlayerSlot(Enum):
    """Which of the two seats an operation targets."""
    ONE = 1
    TWO = 2


class Phase(Enum):
    """Lifecycle of a game session."""
    SETUP = "setup"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


@dataclass(frozen=True)
class Player:
    """A named player and the mark they play with."""
    name: str
    mark: Mark


@dataclass(frozen=True)
class Move:
    """
    An accepted move.
    """
    mark: Mark              # Mark that was written
    index: int              # Cell index (0-8)
    move_number: int        # Position in the game (0-8)


Board = Tuple[Optional[Mark], ...]

EMPTY_BOARD: Board = (None,) * 9


def default_players() -> Tuple[Player, Player]:
    """Players for a fresh session: no names, player one holds X."""
    return Player(name="", mark=Mark.X), Player(name="", mark=Mark.O)


@dataclass(frozen=True)
class GameState:
    """
    The complete state of a TicTacToe session.

    Tracks:
    - Both players (names and marks, always one X and one O)
    - The 3x3 board as 9 cells, row by row
    - The active mark (whose move is next)
    - Lifecycle phase and winner
    - Whether the last start attempt failed name validation
    - Move history for the current round

    Never modified in place; every change builds a new GameState.
    """

    player_one: Player = field(default_factory=lambda: default_players()[0])
    player_two: Player = field(default_factory=lambda: default_players()[1])

    # None means empty, otherwise the Mark in that cell
    board: Board = EMPTY_BOARD

    active_mark: Mark = Mark.X
    phase: Phase = Phase.SETUP

    # Set only when a line was completed; stays None on a tie
    winner: Optional[Player] = None
    name_error: bool = False

    moves: Tuple[Move, ...] = ()

    @property
    def players(self) -> Tuple[Player, Player]:
        return self.player_one, self.player_two

    @property
    def is_in_progress(self) -> bool:
        return self.phase == Phase.IN_PROGRESS

    @property
    def is_finished(self) -> bool:
        return self.phase == Phase.FINISHED

    @property
    def is_tie(self) -> bool:
        return self.phase == Phase.FINISHED and self.winner is None

    def get_player(self, which: PlayerSlot) -> Player:
        """Get the player sitting in the given slot."""
        return self.player_one if which == PlayerSlot.ONE else self.player_two

    def player_with_mark(self, mark: Mark) -> Player:
        """Get whichever player currently holds the given mark."""
        return self.player_one if self.player_one.mark == mark else self.player_two

    def get_empty_cells(self) -> List[int]:
        """
        Get all empty cells on the board.

        Returns:
            List of cell indices.
        """
        return [index for index, cell in enumerate(self.board) if cell is None]

    def is_board_full(self) -> bool:
        return all(cell is not None for cell in self.board)

    def count(self, mark: Mark) -> int:
        """Count how many cells hold the given mark."""
        return sum(1 for cell in self.board if cell == mark)

    def with_player(self, which: PlayerSlot, player: Player) -> "GameState":
        """Copy of this state with one player replaced."""
        if which == PlayerSlot.ONE:
            return replace(self, player_one=player)
        return replace(self, player_two=player)

    def with_cell(self, index: int, mark: Mark) -> "GameState":
        """Copy of this state with a mark written into one cell and the move recorded."""
        board = self.board[:index] + (mark,) + self.board[index + 1:]
        move = Move(mark=mark, index=index, move_number=len(self.moves))
        return replace(self, board=board, moves=self.moves + (move,))

    def fresh_round(self, phase: Phase = Phase.IN_PROGRESS) -> "GameState":
        """Copy of this state with an empty board and X to move, players kept."""
        return GameState(
            player_one=self.player_one,
            player_two=self.player_two,
            phase=phase,
        )

    def format_board(self) -> str:
        """Render the board as text, empty cells show their index."""
        rows = []
        for row in range(3):
            cells = []
            for col in range(3):
                index = row * 3 + col
                cell = self.board[index]
                cells.append(cell.value if cell is not None else str(index))
            rows.append(" " + " | ".join(cells) + " ")
        return "\n---+---+---\n".join(rows)

    def print_board(self):
        """Print the board and the game status to console."""
        print()
        print(self.format_board())

        if self.is_finished:
            print(f"\n{winner_label(self)}")
        elif self.is_in_progress:
            player = active_player(self)
            print(f"\nCurrent turn: {player.name} ({player.mark.value})")


def active_player(state: GameState) -> Player:
    """
    Get the player whose move is next.

    Marks can be swapped while a round runs, so this is looked up by mark
    every time instead of by seat.
    """
    return state.player_with_mark(state.active_mark)


def winner_label(state: GameState) -> str:
    """
    Text describing the result of the game.

    Returns:
        "<name> won!" for a win, "It's a tie!" for a tie,
        or an empty string while the game is not finished.
    """
    if not state.is_finished:
        return ""
    if state.winner is not None:
        return f"{state.winner.name} won!"
    return "It's a tie!"
