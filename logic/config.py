"""
Game configuration for TicTacToe.
Rules, name limits and display settings in one place.
"""

from typing import Optional


class GameConfig:
    """
    Configuration class for game settings.
    Change these values to tune the rules or the look of the front-ends.
    """

    # ==================== BOARD SETTINGS ====================
    # TicTacToe is a 3x3 grid
    BOARD_SIZE = 3
    CELL_COUNT = BOARD_SIZE * BOARD_SIZE  # 9 cells, indexed 0-8 row by row

    # ==================== PLAYER SETTINGS ====================
    # Names are checked when the game starts (inclusive limits)
    NAME_MIN_LENGTH = 3
    NAME_MAX_LENGTH = 20

    # ==================== DIAGNOSTICS ====================
    # Print rejected moves and phase changes to the console
    VERBOSE = True

    # ==================== WINDOW SETTINGS ====================
    WINDOW_TITLE = "TicTacToe"
    WINDOW_SIZE = "420x560"

    BG_COLOR = '#1a1a2e'
    CELL_COLOR = '#16213e'
    HIGHLIGHT_COLOR = '#ffd700'
    TITLE_COLOR = '#00d4ff'
    ERROR_COLOR = '#ff6b6b'
    X_COLOR = '#00ff88'
    O_COLOR = '#ff6b6b'
    FONT_FAMILY = 'Segoe UI'

    def __init__(self, verbose: Optional[bool] = None):
        """
        Initialize the config.

        Args:
            verbose: Override VERBOSE for this instance (None keeps the default).
        """
        if verbose is not None:
            self.VERBOSE = verbose

    def is_valid_name(self, name: str) -> bool:
        """Check a player name against the length limits."""
        return self.NAME_MIN_LENGTH <= len(name) <= self.NAME_MAX_LENGTH

    def log(self, message: str):
        """Print a diagnostic message if verbose output is on."""
        if self.VERBOSE:
            print(message)
