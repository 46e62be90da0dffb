"""
Terminal interaction for the trivia game: menus, validated prompts and screen clearing.

A TerminalController is chosen once at startup by create_terminal_controller():
interactive terminals get an arrow-key menu driven by blessed, anything else
(pipes, redirected input) gets numbered menus over plain line input.
"""
import logging
import sys
from typing import Callable, List, Optional

from blessed import Terminal

from .errors import PromptAbortedError

logger = logging.getLogger(__name__)

# Returns None to accept the text, or the message explaining the rejection
Validator = Callable[[str], Optional[str]]


class TerminalController:
    """Capability interface for everything the game needs from the terminal."""

    def clear_screen(self) -> None:
        raise NotImplementedError

    def select(self, label: str, options: List[str]) -> str:
        """
        Let the player pick one option.

        Args:
            label: Menu title
            options: Option labels in display order

        Returns:
            The chosen option label

        Raises:
            PromptAbortedError: If the player interrupts the menu
        """
        raise NotImplementedError

    def show(self, text: str = "") -> None:
        print(text, flush=True)

    def read_line(self, prompt: str = "") -> str:
        try:
            return input(prompt)
        except (KeyboardInterrupt, EOFError) as e:
            # Keep the cursor off the interrupted line
            print()
            raise PromptAbortedError(f"Input interrupted: {type(e).__name__}") from e

    def prompt(self, label: str, validator: Validator) -> str:
        """
        Ask for free text until the validator accepts it.

        Args:
            label: Prompt text
            validator: Returns None for accepted text, otherwise an error message

        Returns:
            The accepted text

        Raises:
            PromptAbortedError: If the player interrupts the prompt
        """
        self.clear_screen()
        while True:
            text = self.read_line(f"{label}: ")
            error = validator(text)
            if error is None:
                return text
            logger.debug(f"Rejected input {text!r}: {error}")
            self.show_error(error)

    def show_error(self, message: str) -> None:
        self.show(f"✗ {message}")

    def wait_for_enter(self, message: str = "Press 'Enter' to continue...") -> None:
        self.read_line(message)


class PlainTerminalController(TerminalController):
    """Numbered menus over line input, for terminals without cursor control."""

    def clear_screen(self) -> None:
        self.show()

    def select(self, label: str, options: List[str]) -> str:
        if not options:
            raise ValueError("Cannot select from an empty option list")

        self.clear_screen()
        self.show(label)
        for number, option in enumerate(options, start=1):
            self.show(f"  {number}) {option}")

        while True:
            choice = self.read_line(f"Choose 1-{len(options)}: ").strip()
            if choice.isdecimal() and 1 <= int(choice) <= len(options):
                return options[int(choice) - 1]
            self.show_error(f"choose a number between 1 and {len(options)}")


class BlessedTerminalController(TerminalController):
    """Arrow-key selection menus and screen clearing on an interactive terminal."""

    UP_KEYS = ("KEY_UP",)
    DOWN_KEYS = ("KEY_DOWN",)
    ENTER_KEYS = ("KEY_ENTER",)

    def __init__(self, term: Optional[Terminal] = None, select_size: int = 10):
        """
        Initialize the controller.

        Args:
            term: blessed Terminal, a new one bound to stdout is created if omitted
            select_size: Maximum number of menu rows visible at once
        """
        self.term = term if term is not None else Terminal()
        self.select_size = select_size

    def clear_screen(self) -> None:
        print(self.term.home + self.term.clear, end="", flush=True)

    def show_error(self, message: str) -> None:
        self.show(self.term.red(f"✗ {message}"))

    def select(self, label: str, options: List[str]) -> str:
        if not options:
            raise ValueError("Cannot select from an empty option list")

        index = 0
        try:
            with self.term.cbreak(), self.term.hidden_cursor():
                while True:
                    self._render_menu(label, options, index)
                    key = self.term.inkey()
                    name = getattr(key, "name", None)

                    if name in self.UP_KEYS or key == "k":
                        index = max(0, index - 1)
                    elif name in self.DOWN_KEYS or key == "j":
                        index = min(len(options) - 1, index + 1)
                    elif name in self.ENTER_KEYS or key in ("\n", "\r"):
                        return options[index]
        except KeyboardInterrupt as e:
            raise PromptAbortedError("Selection interrupted") from e

    def _window_start(self, index: int, count: int) -> int:
        """First visible row so that the highlighted row stays inside the window."""
        if count <= self.select_size:
            return 0
        return min(max(0, index - self.select_size + 1), count - self.select_size)

    def _render_menu(self, label: str, options: List[str], index: int) -> None:
        self.clear_screen()
        self.show(self.term.bold(f"? {label}"))
        self.show(self.term.dim("Use the arrow keys to navigate: ↓ ↑"))

        start = self._window_start(index, len(options))
        for position in range(start, min(start + self.select_size, len(options))):
            if position == index:
                self.show(self.term.bold_cyan(f"▸ {options[position]}"))
            else:
                self.show(f"  {options[position]}")


def create_terminal_controller(select_size: int = 10, stdin=None, stdout=None) -> TerminalController:
    """
    Pick the terminal implementation for the current environment.

    Args:
        select_size: Visible rows for arrow-key menus
        stdin: Input stream to inspect, sys.stdin by default
        stdout: Output stream to inspect, sys.stdout by default

    Returns:
        BlessedTerminalController for interactive terminals, PlainTerminalController otherwise
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    if stdin.isatty() and stdout.isatty():
        logger.info(f"Using interactive terminal controller on {sys.platform}")
        return BlessedTerminalController(Terminal(stream=stdout), select_size=select_size)

    logger.info("Standard streams are not a terminal, using plain line prompts")
    return PlainTerminalController()
