"""
Move validator for TicTacToe.
Validates moves and player names before the engine applies them.
"""

from typing import Optional, List
from dataclasses import dataclass
from .config import GameConfig
from .game_state import GameState, Phase


@dataclass
class ValidationResult:
    """Result of validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves and setup.

    Rules:
    1. Moves only while the game is in progress
    2. Moves only on cells 0-8
    3. Can only place on empty cells
    4. Both names must be 3-20 characters long to start
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()

    def validate_move(self, game_state: GameState, index: int) -> ValidationResult:
        """
        Validate a move.

        Args:
            game_state: Current game state.
            index: Cell to place the active mark in (0-8).

        Returns:
            ValidationResult with is_valid and error_message.
        """
        if game_state.phase == Phase.SETUP:
            return ValidationResult(
                is_valid=False,
                error_message="Game has not started yet!"
            )

        if game_state.phase == Phase.FINISHED:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        # bool is an int subclass but never a cell
        if not isinstance(index, int) or isinstance(index, bool):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid cell {index!r}. Must be a number."
            )

        if not (0 <= index < self.config.CELL_COUNT):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid cell {index}. Must be 0-{self.config.CELL_COUNT - 1}."
            )

        occupant = game_state.board[index]
        if occupant is not None:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {occupant.value}!"
            )

        return ValidationResult(is_valid=True)

    def validate_names(self, game_state: GameState) -> ValidationResult:
        """
        Validate both player names before a game starts.

        Returns:
            ValidationResult naming the first player with a bad name.
        """
        for label, player in (("Player one", game_state.player_one),
                              ("Player two", game_state.player_two)):
            if not self.config.is_valid_name(player.name):
                return ValidationResult(
                    is_valid=False,
                    error_message=(
                        f"{label} name must be {self.config.NAME_MIN_LENGTH}-"
                        f"{self.config.NAME_MAX_LENGTH} characters long"
                    )
                )

        return ValidationResult(is_valid=True)

    def get_valid_moves(self, game_state: GameState) -> List[int]:
        """
        Get all cells the active mark can go into.

        Returns:
            List of cell indices, empty unless the game is in progress.
        """
        if game_state.phase != Phase.IN_PROGRESS:
            return []

        return game_state.get_empty_cells()
