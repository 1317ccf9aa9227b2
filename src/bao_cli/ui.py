"""User-facing output for Bao."""

from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console
from rich.panel import Panel

from .theme import get_themed_console


BANNER = """\
 ____
| __ )  __ _  ___
|  _ \\ / _` |/ _ \\
| |_) | (_| | (_) |
|____/ \\__,_|\\___/
"""

PROMPT = "> "


class OutputSink(ABC):
    """Output port used by the command interpreter."""

    @abstractmethod
    def show(self, message: str) -> None:
        """Display one line of text to the user."""
        pass

    def show_welcome(self) -> None:
        self.show("Hello! Bao is here to track your tasks.")
        self.show("What can Bao do for you?")

    def show_exit_message(self) -> None:
        self.show("Bye! Bao hopes to see you again soon!")

    def show_loading_error(self, message: str) -> None:
        self.show(f"Bao could not load saved tasks ({message}). Starting with an empty list.")


class ConsoleUi(OutputSink):
    """Output sink and command reader backed by a rich Console."""

    def __init__(self, console: Optional[Console] = None, show_banner: bool = True):
        self.console = console or get_themed_console()
        self.show_banner = show_banner

    def show(self, message: str) -> None:
        # Task descriptions are user text; never interpret them as markup.
        self.console.print(message, style="default", markup=False, highlight=False)

    def show_welcome(self) -> None:
        if self.show_banner:
            self.console.print(
                Panel(BANNER, title="[bright]Welcome to[/bright]", border_style="border", expand=False),
                style="primary",
            )
        super().show_welcome()

    def show_exit_message(self) -> None:
        self.console.print("Bye! Bao hopes to see you again soon!", style="success", markup=False)

    def show_loading_error(self, message: str) -> None:
        self.console.print(
            f"Bao could not load saved tasks ({message}). Starting with an empty list.",
            style="warning",
            markup=False,
        )

    def read_command(self) -> str:
        """Read one command line from the user.

        Raises:
            EOFError: When input is exhausted
            KeyboardInterrupt: When the user interrupts
        """
        return self.console.input(f"[prompt]{PROMPT}[/prompt]")
