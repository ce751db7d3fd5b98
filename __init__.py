"""
TicTacToe
=========
Two-player TicTacToe on a 3x3 board.
The game engine lives in the logic package; main.py runs it in the
console and ui.py in a Tkinter window.

X always moves first, whichever player holds it.
"""

__version__ = "1.0.0"
