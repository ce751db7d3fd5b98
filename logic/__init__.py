"""
Logic module for TicTacToe.
Handles game state, rules and the engine the front-ends talk to.
"""

from .config import GameConfig
from .game_state import GameState, Mark, Move, Phase, Player, PlayerSlot, active_player, winner_label
from .move_validator import MoveValidator, ValidationResult
from .win_checker import WinChecker
from .game_engine import GameEngine
