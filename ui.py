"""
TicTacToe UI
A graphical interface for TicTacToe using Tkinter.

Shows:
- Setup panel: player names, player one's mark, start button
- The 3x3 board as clickable cells
- Whose turn it is, or the result with the winning line highlighted
- Restart (same players) and New Game (back to setup) buttons
"""

import tkinter as tk
from tkinter import ttk
from typing import Optional

from logic.config import GameConfig
from logic.game_engine import GameEngine
from logic.game_state import GameState, Mark, Phase, PlayerSlot, active_player, winner_label


class TicTacToeUI:
    """
    Main UI class for TicTacToe.

    Never changes game state itself: widget events call GameEngine
    operations and the engine pushes the new snapshot back to render().
    """

    def __init__(self, engine: Optional[GameEngine] = None):
        """Initialize the UI."""
        self.engine = engine or GameEngine()
        self.config: GameConfig = self.engine.config

        # Create UI
        self._create_ui()

        self._unsubscribe = self.engine.subscribe(self.render)

    def _create_ui(self):
        """Create the Tkinter UI."""
        cfg = self.config

        self.root = tk.Tk()
        self.root.title(cfg.WINDOW_TITLE)
        self.root.configure(bg=cfg.BG_COLOR)
        self.root.geometry(cfg.WINDOW_SIZE)

        # Configure style
        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background=cfg.BG_COLOR)
        style.configure('TLabel', background=cfg.BG_COLOR, foreground='white', font=(cfg.FONT_FAMILY, 11))
        style.configure('Title.TLabel', font=(cfg.FONT_FAMILY, 16, 'bold'), foreground=cfg.TITLE_COLOR)
        style.configure('Status.TLabel', font=(cfg.FONT_FAMILY, 13, 'bold'), foreground=cfg.HIGHLIGHT_COLOR)
        style.configure('Error.TLabel', foreground=cfg.ERROR_COLOR)
        style.configure('TRadiobutton', background=cfg.BG_COLOR, foreground='white')

        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)

        ttk.Label(main_frame, text="TicTacToe", style='Title.TLabel').pack(pady=(0, 10))

        # Setup panel
        self.setup_frame = ttk.Frame(main_frame)

        self.name_vars = {
            PlayerSlot.ONE: tk.StringVar(),
            PlayerSlot.TWO: tk.StringVar(),
        }
        for slot, label in ((PlayerSlot.ONE, "Player one"), (PlayerSlot.TWO, "Player two")):
            row = ttk.Frame(self.setup_frame)
            row.pack(fill=tk.X, pady=3)
            ttk.Label(row, text=f"{label}:", width=11).pack(side=tk.LEFT)
            entry = ttk.Entry(row, textvariable=self.name_vars[slot], width=24)
            entry.pack(side=tk.LEFT)
            self.name_vars[slot].trace_add(
                'write', lambda *_, s=slot: self.engine.set_player_name(s, self.name_vars[s].get())
            )

        mark_row = ttk.Frame(self.setup_frame)
        mark_row.pack(fill=tk.X, pady=5)
        ttk.Label(mark_row, text="Player one plays:").pack(side=tk.LEFT)

        self.mark_var = tk.StringVar(value=Mark.X.value)
        for mark in Mark:
            ttk.Radiobutton(
                mark_row,
                text=mark.value,
                value=mark.value,
                variable=self.mark_var,
                command=self._set_mark
            ).pack(side=tk.LEFT, padx=5)

        self.name_error_label = ttk.Label(self.setup_frame, text="", style='Error.TLabel')
        self.name_error_label.pack(pady=3)

        self.start_btn = tk.Button(
            self.setup_frame,
            text="▶ Start Game",
            font=(cfg.FONT_FAMILY, 11, 'bold'),
            bg='#10b981',
            fg='white',
            width=14,
            command=self.engine.start_game
        )
        self.start_btn.pack(pady=5)

        # Game panel
        self.game_frame = ttk.Frame(main_frame)

        self.status_label = ttk.Label(self.game_frame, text="", style='Status.TLabel')
        self.status_label.pack(pady=5)

        board_frame = ttk.Frame(self.game_frame)
        board_frame.pack(pady=10)

        self.board_cells = []
        for index in range(cfg.CELL_COUNT):
            cell = tk.Button(
                board_frame,
                text="",
                font=(cfg.FONT_FAMILY, 24, 'bold'),
                width=3,
                height=1,
                bg=cfg.CELL_COLOR,
                fg='white',
                relief='ridge',
                borderwidth=2,
                command=lambda i=index: self.engine.make_move(i)
            )
            cell.grid(row=index // cfg.BOARD_SIZE, column=index % cfg.BOARD_SIZE, padx=2, pady=2)
            self.board_cells.append(cell)

        control_frame = ttk.Frame(self.game_frame)
        control_frame.pack(pady=10)

        tk.Button(
            control_frame,
            text="🔄 Restart",
            font=(cfg.FONT_FAMILY, 11, 'bold'),
            bg='#6366f1',
            fg='white',
            width=12,
            command=self.engine.restart_game
        ).pack(side=tk.LEFT, padx=5)

        tk.Button(
            control_frame,
            text="✚ New Game",
            font=(cfg.FONT_FAMILY, 11, 'bold'),
            bg='#2d3748',
            fg='white',
            width=12,
            command=self.engine.reset_game
        ).pack(side=tk.LEFT, padx=5)

        # Quit button
        tk.Button(
            main_frame,
            text="✕ Quit",
            font=(cfg.FONT_FAMILY, 10),
            bg='#ef4444',
            fg='white',
            width=26,
            command=self._quit
        ).pack(side=tk.BOTTOM, pady=10)

        # Bind close event
        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    def _set_mark(self):
        """Pass player one's mark choice to the engine."""
        self.engine.set_player_one_mark(Mark(self.mark_var.get()))

    def render(self, state: GameState):
        """Update every widget from a snapshot."""
        if state.phase == Phase.SETUP:
            self.game_frame.pack_forget()
            self.setup_frame.pack(fill=tk.X)
            self._render_setup(state)
        else:
            self.setup_frame.pack_forget()
            self.game_frame.pack(fill=tk.BOTH, expand=True)
            self._render_board(state)

    def _render_setup(self, state: GameState):
        # Only push values that differ, the traces would loop otherwise
        for slot, var in self.name_vars.items():
            name = state.get_player(slot).name
            if var.get() != name:
                var.set(name)
        if self.mark_var.get() != state.player_one.mark.value:
            self.mark_var.set(state.player_one.mark.value)

        if state.name_error:
            self.name_error_label.configure(
                text=f"Names must be {self.config.NAME_MIN_LENGTH}-{self.config.NAME_MAX_LENGTH} characters"
            )
        else:
            self.name_error_label.configure(text="")

    def _render_board(self, state: GameState):
        cfg = self.config
        line = self.engine.winning_line(state) or ()

        for index, cell in enumerate(state.board):
            button = self.board_cells[index]
            if cell is None:
                button.configure(text="", fg='white')
            else:
                color = cfg.X_COLOR if cell == Mark.X else cfg.O_COLOR
                button.configure(text=cell.value, fg=color)

            button.configure(bg=cfg.HIGHLIGHT_COLOR if index in line else cfg.CELL_COLOR)

        if state.phase == Phase.FINISHED:
            self.status_label.configure(text=winner_label(state))
        else:
            player = active_player(state)
            self.status_label.configure(text=f"Turn: {player.name} ({player.mark.value})")

    def _quit(self):
        """Quit the application."""
        print("Quitting...")
        self._unsubscribe()
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self.root.mainloop()


def main():
    """Main entry point."""
    print("\n" + "="*60)
    print("   TicTacToe UI")
    print("="*60 + "\n")

    ui = TicTacToeUI()
    ui.run()


if __name__ == "__main__":
    main()
