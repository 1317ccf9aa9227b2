"""Application wiring for Bao: loads tasks and runs the command loop."""

import logging
from typing import Optional

from .config import ConfigModel
from .domain import TaskList
from .parser import CommandParser, CommandResult
from .storage import Storage, StorageError, TaskStore
from .theme import get_themed_console
from .ui import ConsoleUi


logger = logging.getLogger(__name__)


class Bao:
    """Owns the task list and connects it to the console and the task file."""

    def __init__(self, config: ConfigModel, ui: Optional[ConsoleUi] = None,
                 storage: Optional[TaskStore] = None):
        self.config = config
        self.ui = ui or ConsoleUi(
            console=get_themed_console(no_color=config.no_color),
            show_banner=config.show_banner,
        )
        self.storage = storage or Storage(config)
        self.parser = CommandParser(config)
        self.tasks = self._load_tasks()

    def _load_tasks(self) -> TaskList:
        try:
            return TaskList(self.storage.load())
        except StorageError as e:
            logger.error(f"Failed to load tasks: {e}")
            self.ui.show_loading_error(str(e))
            return TaskList()

    def execute(self, command: str) -> CommandResult:
        """Run a single command line."""
        return self.parser.parse(command, self.tasks, self.ui, self.storage)

    def run(self) -> None:
        """Read and execute commands until ``bye``, end of input or Ctrl-C."""
        self.ui.show_welcome()
        while True:
            try:
                line = self.ui.read_command()
            except (EOFError, KeyboardInterrupt):
                logger.debug("Input closed; leaving the command loop")
                self.ui.show_exit_message()
                break

            line = line.strip()
            if not line:
                continue
            if self.execute(line) is CommandResult.EXIT:
                break
        logger.info(f"Session ended with {self.tasks.size()} tasks")
