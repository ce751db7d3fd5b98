"""
Win checker for TicTacToe.
Checks if a mark has completed a line or if the game is a tie.
"""

from dataclasses import replace
from typing import Optional, Tuple
from .game_state import Board, GameState, Mark, Phase


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 identical marks in a row
    (horizontally, vertically, or diagonally)
    """

    # All possible winning lines (as cell index triples)
    WINNING_LINES = [
        # Rows
        (0, 1, 2),
        (3, 4, 5),
        (6, 7, 8),
        # Columns
        (0, 3, 6),
        (1, 4, 7),
        (2, 5, 8),
        # Diagonals
        (0, 4, 8),
        (2, 4, 6),
    ]

    def check_winner(self, board: Board) -> Optional[Mark]:
        """
        Check if a mark has completed a line.

        Lines are checked in order and the first complete one wins.

        Args:
            board: The 9 cells of the board.

        Returns:
            The winning Mark, or None if no line is complete.
        """
        for line in self.WINNING_LINES:
            winner = self._check_line(board, line)
            if winner is not None:
                return winner

        return None

    def _check_line(self, board: Board, line: Tuple[int, int, int]) -> Optional[Mark]:
        """
        Check if a single line is complete.

        Returns:
            The Mark if all 3 cells hold it, None otherwise.
        """
        first = board[line[0]]
        if first is None:
            return None  # Empty cell, no winner on this line

        if all(board[index] == first for index in line[1:]):
            return first

        return None

    def check_draw(self, board: Board) -> bool:
        """
        Check if the game is a tie.

        A tie needs a full board AND no completed line.
        """
        if self.check_winner(board) is not None:
            return False

        return all(cell is not None for cell in board)

    def get_winning_line(self, board: Board) -> Optional[Tuple[int, int, int]]:
        """
        Get the winning line if there is one.

        Returns:
            The winning line as a triple of cell indices, or None.
        """
        for line in self.WINNING_LINES:
            if self._check_line(board, line) is not None:
                return line
        return None

    def evaluate(self, game_state: GameState) -> GameState:
        """
        Run the termination check after a move.

        Args:
            game_state: State right after a mark was written.

        Returns:
            A finished state (with winner or as a tie), or the same state
            if the game goes on.
        """
        winner_mark = self.check_winner(game_state.board)

        if winner_mark is not None:
            return replace(
                game_state,
                phase=Phase.FINISHED,
                winner=game_state.player_with_mark(winner_mark),
            )

        if self.check_draw(game_state.board):
            return replace(game_state, phase=Phase.FINISHED, winner=None)

        return game_state
