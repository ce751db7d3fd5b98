"""
Game engine for TicTacToe.
Owns the current GameState, applies the game operations and pushes every
new snapshot to subscribers.
"""

import threading
from dataclasses import replace
from typing import Callable, List, Optional, Tuple

from .config import GameConfig
from .game_state import (
    GameState,
    Mark,
    Phase,
    Player,
    PlayerSlot,
    active_player,
    winner_label,
)
from .move_validator import MoveValidator
from .win_checker import WinChecker


Subscriber = Callable[[GameState], None]


class GameEngine:
    """
    State machine for a two-player TicTacToe session.

    Phases:
    1. SETUP - players enter names and pick marks
    2. IN_PROGRESS - players alternate moves, X first
    3. FINISHED - a line was completed or the board is full

    restart_game() plays another round with the same players,
    reset_game() goes back to SETUP with blank players.

    Invalid requests (moves on taken cells, moves outside a running game)
    are ignored and leave the state untouched.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize the engine with a fresh session in SETUP.

        Args:
            config: Game settings (default: GameConfig()).
        """
        self.config = config or GameConfig()
        self.validator = MoveValidator(self.config)
        self.win_checker = WinChecker()

        self._state = GameState()
        self._subscribers: List[Subscriber] = []

        # One mutation at a time; re-entrant so subscribers may call back in
        self._lock = threading.RLock()

    # ==================== READ CHANNEL ====================

    @property
    def state(self) -> GameState:
        """The current snapshot."""
        return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback for state changes.

        The callback gets the current snapshot right away, then every new
        snapshot after a state-changing operation.

        Returns:
            A function that removes the callback again.
        """
        with self._lock:
            self._subscribers.append(callback)
            callback(self._state)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _update(self, new_state: GameState) -> bool:
        """
        Swap in a new snapshot and notify subscribers.

        Returns:
            True if the state changed.
        """
        if new_state == self._state:
            return False

        self._state = new_state
        for callback in list(self._subscribers):
            # A subscriber changed the state again; the newer snapshot was
            # already delivered to everyone
            if self._state is not new_state:
                break
            callback(new_state)
        return True

    # ==================== SETUP ====================

    def set_player_name(self, which: PlayerSlot, name: str):
        """
        Replace the name of one player.

        Names are only checked when the game starts.
        """
        with self._lock:
            player = self._state.get_player(which)
            self._update(self._state.with_player(which, replace(player, name=name)))

    def set_player_one_mark(self, mark: Mark):
        """
        Give player one the given mark and player two the other one.

        Works in any phase. A running board keeps its marks and turn order;
        the swap shows up in who owns the active mark.
        """
        with self._lock:
            state = self._state
            self._update(replace(
                state,
                player_one=replace(state.player_one, mark=mark),
                player_two=replace(state.player_two, mark=mark.opposite()),
            ))

    def start_game(self) -> bool:
        """
        Start the game if both names are valid.

        Returns:
            True if the game moved to IN_PROGRESS.
        """
        with self._lock:
            state = self._state

            if state.phase != Phase.SETUP:
                self.config.log("Game has already started!")
                return False

            result = self.validator.validate_names(state)
            if not result.is_valid:
                self.config.log(f"Cannot start: {result.error_message}")
                self._update(replace(state, name_error=True))
                return False

            one, two = state.players
            self.config.log(
                f"Game started: {one.name} ({one.mark.value}) vs {two.name} ({two.mark.value})"
            )
            self._update(state.fresh_round(Phase.IN_PROGRESS))
            return True

    # ==================== PLAY ====================

    def make_move(self, index: int) -> bool:
        """
        Place the active mark in a cell.

        Args:
            index: Cell index (0-8, row by row).

        Returns:
            True if the move was accepted, False if it was ignored.
        """
        with self._lock:
            state = self._state

            result = self.validator.validate_move(state, index)
            if not result.is_valid:
                self.config.log(result.error_message)
                return False

            new_state = self.win_checker.evaluate(state.with_cell(index, state.active_mark))

            if new_state.is_finished:
                self.config.log(winner_label(new_state))
            else:
                new_state = replace(new_state, active_mark=state.active_mark.opposite())

            self._update(new_state)
            return True

    def restart_game(self) -> bool:
        """
        Play another round with the same players.

        Returns:
            True if a new round started, False while still in SETUP.
        """
        with self._lock:
            if self._state.phase == Phase.SETUP:
                self.config.log("Game has not started yet!")
                return False

            self.config.log("Game restarted.")
            self._update(self._state.fresh_round(Phase.IN_PROGRESS))
            return True

    def reset_game(self):
        """Throw the session away and go back to SETUP with blank players."""
        with self._lock:
            self.config.log("Game reset.")
            self._update(GameState())

    # ==================== QUERIES ====================

    def active_player(self) -> Player:
        """The player who holds the active mark."""
        return active_player(self._state)

    def winner_label(self) -> str:
        """Result text, empty while the game is not finished."""
        return winner_label(self._state)

    def winning_line(self, state: Optional[GameState] = None) -> Optional[Tuple[int, int, int]]:
        """
        The completed line, or None if nobody has won.

        Args:
            state: Snapshot to look at (default: the current one).
        """
        if state is None:
            state = self._state
        if state.winner is None:
            return None
        return self.win_checker.get_winning_line(state.board)

    def get_valid_moves(self) -> List[int]:
        """Cells that would accept the next move."""
        return self.validator.get_valid_moves(self._state)
