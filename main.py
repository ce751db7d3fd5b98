"""
Main entry point for TicTacToe.

Runs the game in a Tkinter window by default, or in the console with
--no-ui. Both front-ends only read GameState snapshots and call the
GameEngine operations; all rules live in the logic package.
"""

from typing import Callable, Optional

from logic.config import GameConfig
from logic.game_engine import GameEngine
from logic.game_state import GameState, Mark, Phase, PlayerSlot


class ConsoleGame:
    """
    Plays TicTacToe in the terminal.

    Game flow:
    1. Both players type their names, player one picks X or O
    2. The engine checks the names; bad names are asked for again
    3. Players take turns typing a cell number (0-8)
    4. After a win or tie: r = play again, n = new players, q = quit
    """

    COMMANDS = "Cells 0-8 | r = restart | n = new game | q = quit"

    def __init__(
        self,
        engine: Optional[GameEngine] = None,
        input_fn: Callable[[str], str] = input,
    ):
        """
        Initialize the console game.

        Args:
            engine: Engine to drive (default: a new GameEngine).
            input_fn: Reads one line of user input (injectable for tests).
        """
        self.engine = engine or GameEngine()
        self.input_fn = input_fn
        self.is_running = False
        self._last_state: Optional[GameState] = None

        self._unsubscribe = self.engine.subscribe(self._on_state)

    def _on_state(self, state: GameState):
        """Print the board whenever a round is running or just ended."""
        last = self._last_state
        self._last_state = state

        if state.phase == Phase.SETUP:
            return
        if last is None or state.board != last.board or state.phase != last.phase:
            state.print_board()

    def setup_players(self):
        """Ask for names and marks until the engine accepts them."""
        print("\n" + "="*60)
        print("   TicTacToe - New Game")
        print("="*60 + "\n")

        while self.is_running and self.engine.state.phase == Phase.SETUP:
            one = self._ask_name("Player one name: ")
            if one is None:
                return
            two = self._ask_name("Player two name: ")
            if two is None:
                return
            self.engine.set_player_name(PlayerSlot.ONE, one)
            self.engine.set_player_name(PlayerSlot.TWO, two)

            mark = self._ask_mark(one)
            if mark is None:
                return
            self.engine.set_player_one_mark(mark)

            if not self.engine.start_game():
                result = self.engine.validator.validate_names(self.engine.state)
                print(f"\n{result.error_message}, please try again.\n")

    def _ask_name(self, prompt: str) -> Optional[str]:
        """Ask for a name; q quits (too short to be a valid name anyway)."""
        name = self.input_fn(prompt).strip()
        if name.lower() == "q":
            self.is_running = False
            return None
        return name

    def _ask_mark(self, name: str) -> Optional[Mark]:
        """Ask player one for a mark; empty input keeps X."""
        while True:
            answer = self.input_fn(f"{name}, play X or O? [X]: ").strip().upper()
            if answer == "Q":
                self.is_running = False
                return None
            if not answer:
                return Mark.X
            try:
                return Mark(answer)
            except ValueError:
                print("Please type X or O.")

    def handle_command(self, command: str):
        """
        Apply one line of input during play.

        Args:
            command: A cell number or one of r / n / q.
        """
        command = command.strip().lower()

        if command == "q":
            self.is_running = False
        elif command == "r":
            self.engine.restart_game()
        elif command == "n":
            self.engine.reset_game()
        else:
            try:
                index = int(command)
            except ValueError:
                print(f"Unknown command '{command}'. {self.COMMANDS}")
                return

            if not self.engine.make_move(index):
                print("Move not allowed, try again.")

    def _prompt(self) -> str:
        state = self.engine.state
        if state.phase == Phase.FINISHED:
            return "Play again? (r = restart, n = new game, q = quit): "

        player = self.engine.active_player()
        return f"{player.name} ({player.mark.value}) move: "

    def run(self):
        """Run the console game until the user quits."""
        self.is_running = True
        print(self.COMMANDS)

        try:
            while self.is_running:
                if self.engine.state.phase == Phase.SETUP:
                    self.setup_players()
                    continue

                self.handle_command(self.input_fn(self._prompt()))
        finally:
            self._unsubscribe()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="TicTacToe")
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Run without UI (console mode)"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Don't print engine diagnostics"
    )

    args = parser.parse_args()

    config = GameConfig(verbose=not args.quiet)
    engine = GameEngine(config)

    # Launch UI by default
    if not args.no_ui:
        from ui import TicTacToeUI
        print("\n" + "="*60)
        print("   TicTacToe UI")
        print("="*60 + "\n")
        ui = TicTacToeUI(engine)
        ui.run()
        return

    game = ConsoleGame(engine)

    try:
        game.run()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
