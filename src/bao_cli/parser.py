"""Command interpreter for Bao.

A command line is split on its first space into a keyword and an argument
string. The keyword selects a handler; the handler validates its arguments,
mutates the task list, saves it, and reports back through the output sink.
Handlers return a :class:`CommandResult` so the hosting loop decides when
to stop.
"""

import logging
import re
from datetime import date
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from fuzzywuzzy import fuzz, process

from .config import ConfigModel
from .domain import Deadline, Event, Task, TaskIndexError, TaskList, ToDo
from .storage import StorageError, TaskStore
from .ui import OutputSink
from .utils.datetime import (
    DATE_ONLY_FORMAT,
    DISPLAY_DATE_FORMAT,
    DISPLAY_DATETIME_FORMAT,
    INPUT_DATETIME_FORMAT,
    example_date,
    format_date,
    parse_date,
    parse_datetime,
)


logger = logging.getLogger(__name__)

DEADLINE_SEPARATOR = " /by "
DEADLINE_SEPARATOR_RE = re.compile(re.escape(DEADLINE_SEPARATOR))
EVENT_SEPARATOR_RE = re.compile(r" /from | /to ")
INDEX_RE = re.compile(r"-?[0-9]+")
SUGGESTION_CUTOFF = 70

MSG_NOTHING_TRACKED = "Bao is not tracking anything!"
MSG_MARKED = "Bao has marked it as done!"
MSG_UNMARKED = "Bao has marked it as not done!"
MSG_MARK_INVALID = "Bao needs a valid task number to mark!"
MSG_UNMARK_INVALID = "Bao needs a valid task number to unmark!"
MSG_ADDED = "Bao got it! Bao is now tracking:"
MSG_TODO_INVALID = "Bao needs a description of the task!"
MSG_DEADLINE_INVALID = "Bao needs a proper description and deadline for the task!"
MSG_EVENT_INVALID = "Bao needs a proper description and duration for the task!"
MSG_DATE_INVALID = "Bao needs a valid date format"
MSG_SAVE_FAILED = "Bao could not save tasks"
MSG_REMOVED = "Bao has removed this task:"
MSG_DELETE_INVALID = "Bao needs a task number to delete!"
MSG_ON_DATE_INVALID = "Bao needs a valid date format such as {example}"
MSG_ON_HEADER = "Bao showing tasks on {date}:"
MSG_ON_NOT_FOUND = "Bao cannot find any tasks on this date!"
MSG_FIND_INVALID = "Bao needs a keyword to find in the tasks!"
MSG_FIND_NONE = "Bao could not find any tasks with the keyword"
MSG_FIND_HEADER = "Bao found these tasks with the keyword!"
MSG_INVALID_COMMAND = "Bao needs a proper command :("
MSG_SUGGESTION = " Did you mean '{command}'?"
MSG_HELP_HEADER = "Bao understands these commands:"


class CommandResult(Enum):
    """What the hosting loop should do after a command."""
    CONTINUE = "continue"
    EXIT = "exit"


CommandHandler = Callable[[str, TaskList, OutputSink, TaskStore], CommandResult]


def split_command(line: str) -> Tuple[str, str]:
    """Split a raw line on its first space into (command, args)."""
    parts = line.split(" ", 1)
    return parts[0], parts[1] if len(parts) > 1 else ""


def _split_args(args: str, separator: "re.Pattern[str]") -> List[str]:
    """Split arguments, dropping trailing empty pieces."""
    parts = separator.split(args)
    while parts and not parts[-1]:
        parts.pop()
    return parts


class CommandParser:
    """Interprets one command line at a time against a task list."""

    USAGE = {
        "todo": "todo <description>",
        "deadline": "deadline <description> /by <yyyy-mm-dd HHMM>",
        "event": "event <description> /from <yyyy-mm-dd HHMM> /to <yyyy-mm-dd HHMM>",
        "list": "list",
        "mark": "mark <task number>",
        "unmark": "unmark <task number>",
        "delete": "delete <task number>",
        "on": "on <yyyy-mm-dd>",
        "find": "find <keyword>",
        "help": "help",
        "bye": "bye",
    }

    def __init__(self, config: Optional[ConfigModel] = None):
        self.input_format = config.input_datetime_format if config else INPUT_DATETIME_FORMAT
        self.date_only_format = config.date_only_format if config else DATE_ONLY_FORMAT
        self.display_format = config.display_datetime_format if config else DISPLAY_DATETIME_FORMAT
        self.display_date_format = config.display_date_format if config else DISPLAY_DATE_FORMAT

        self.handlers: Dict[str, CommandHandler] = {
            "bye": self.cmd_bye,
            "list": self.cmd_list,
            "mark": self.cmd_mark,
            "unmark": self.cmd_unmark,
            "todo": self.cmd_todo,
            "deadline": self.cmd_deadline,
            "event": self.cmd_event,
            "delete": self.cmd_delete,
            "on": self.cmd_on,
            "find": self.cmd_find,
            "help": self.cmd_help,
        }

    @property
    def commands(self) -> List[str]:
        return list(self.handlers)

    def parse(self, command: str, tasks: TaskList, ui: OutputSink, storage: TaskStore) -> CommandResult:
        """Parse the user command and execute the matching action.

        Args:
            command: Full user command string
            tasks: Task list to read and mutate
            ui: Where messages are shown
            storage: Where the task list is saved after a mutation

        Returns:
            CommandResult.EXIT after ``bye``, CONTINUE otherwise
        """
        command_type, args = split_command(command)
        handler = self.handlers.get(command_type)
        if handler is None:
            logger.debug(f"Unknown command: {command_type!r}")
            ui.show(MSG_INVALID_COMMAND + self._suggestion(command_type))
            return CommandResult.CONTINUE

        logger.debug(f"Dispatching {command_type!r} with args {args!r}")
        return handler(args, tasks, ui, storage)

    # -------------------- individual commands --------------------

    def cmd_bye(self, args: str, tasks: TaskList, ui: OutputSink, storage: TaskStore) -> CommandResult:
        ui.show_exit_message()
        return CommandResult.EXIT

    def cmd_list(self, args: str, tasks: TaskList, ui: OutputSink, storage: TaskStore) -> CommandResult:
        if tasks.is_empty():
            ui.show(MSG_NOTHING_TRACKED)
            return CommandResult.CONTINUE
        self._show_numbered(tasks.tasks, ui)
        return CommandResult.CONTINUE

    def cmd_mark(self, args: str, tasks: TaskList, ui: OutputSink, storage: TaskStore) -> CommandResult:
        return self._set_done(args, tasks, ui, storage, True)

    def cmd_unmark(self, args: str, tasks: TaskList, ui: OutputSink, storage: TaskStore) -> CommandResult:
        return self._set_done(args, tasks, ui, storage, False)

    def cmd_todo(self, args: str, tasks: TaskList, ui: OutputSink, storage: TaskStore) -> CommandResult:
        if not args.strip():
            ui.show(MSG_TODO_INVALID)
            return CommandResult.CONTINUE
        self._add_task(ToDo(args), tasks, ui, storage)
        return CommandResult.CONTINUE

    def cmd_deadline(self, args: str, tasks: TaskList, ui: OutputSink, storage: TaskStore) -> CommandResult:
        parts = _split_args(args, DEADLINE_SEPARATOR_RE)
        if len(parts) < 2 or not parts[0].strip():
            ui.show(MSG_DEADLINE_INVALID)
            return CommandResult.CONTINUE

        try:
            due = parse_datetime(parts[1], self.input_format)
        except ValueError:
            ui.show(MSG_DATE_INVALID)
            return CommandResult.CONTINUE

        self._add_task(Deadline(parts[0], due), tasks, ui, storage)
        return CommandResult.CONTINUE

    def cmd_event(self, args: str, tasks: TaskList, ui: OutputSink, storage: TaskStore) -> CommandResult:
        parts = _split_args(args, EVENT_SEPARATOR_RE)
        if len(parts) < 3 or not parts[0].strip():
            ui.show(MSG_EVENT_INVALID)
            return CommandResult.CONTINUE

        try:
            start = parse_datetime(parts[1], self.input_format)
            end = parse_datetime(parts[2], self.input_format)
        except ValueError:
            ui.show(MSG_DATE_INVALID)
            return CommandResult.CONTINUE

        self._add_task(Event(parts[0], start, end), tasks, ui, storage)
        return CommandResult.CONTINUE

    def cmd_delete(self, args: str, tasks: TaskList, ui: OutputSink, storage: TaskStore) -> CommandResult:
        index = self._parse_index(args, tasks)
        if index is None:
            ui.show(MSG_DELETE_INVALID)
            return CommandResult.CONTINUE

        removed = tasks.delete(index)
        if not self._save(tasks, ui, storage):
            return CommandResult.CONTINUE
        ui.show(MSG_REMOVED)
        ui.show(removed.render(self.display_format))
        ui.show(f"Bao is now tracking {tasks.size()} tasks")
        return CommandResult.CONTINUE

    def cmd_on(self, args: str, tasks: TaskList, ui: OutputSink, storage: TaskStore) -> CommandResult:
        try:
            target = parse_date(args, self.date_only_format)
        except ValueError:
            ui.show(MSG_ON_DATE_INVALID.format(example=example_date(self.date_only_format)))
            return CommandResult.CONTINUE

        ui.show(MSG_ON_HEADER.format(date=format_date(target, self.display_date_format)))
        matches = self.tasks_on(tasks, target)
        if not matches:
            ui.show(MSG_ON_NOT_FOUND)
        for task in matches:
            ui.show(task.render(self.display_format))
        return CommandResult.CONTINUE

    def cmd_find(self, args: str, tasks: TaskList, ui: OutputSink, storage: TaskStore) -> CommandResult:
        keyword = args.strip()
        if not keyword:
            ui.show(MSG_FIND_INVALID)
            return CommandResult.CONTINUE

        found = tasks.find_by_keyword(keyword)
        if not found:
            ui.show(MSG_FIND_NONE)
            return CommandResult.CONTINUE

        ui.show(MSG_FIND_HEADER)
        self._show_numbered(found, ui)
        return CommandResult.CONTINUE

    def cmd_help(self, args: str, tasks: TaskList, ui: OutputSink, storage: TaskStore) -> CommandResult:
        ui.show(MSG_HELP_HEADER)
        for name in self.handlers:
            ui.show(f"  {self.USAGE.get(name, name)}")
        return CommandResult.CONTINUE

    # -------------------- helpers --------------------

    @staticmethod
    def tasks_on(tasks: TaskList, target: date) -> List[Task]:
        """Return tasks scheduled on the target date, in list order."""
        return [task for task in tasks if task.scheduled_date() == target]

    def _set_done(self, args: str, tasks: TaskList, ui: OutputSink, storage: TaskStore,
                  done: bool) -> CommandResult:
        index = self._parse_index(args, tasks)
        if index is None:
            ui.show(MSG_MARK_INVALID if done else MSG_UNMARK_INVALID)
            return CommandResult.CONTINUE

        task = tasks.get(index)
        if done:
            task.mark()
        else:
            task.unmark()
        if not self._save(tasks, ui, storage):
            return CommandResult.CONTINUE
        ui.show(MSG_MARKED if done else MSG_UNMARKED)
        ui.show(task.render(self.display_format))
        return CommandResult.CONTINUE

    def _add_task(self, task: Task, tasks: TaskList, ui: OutputSink, storage: TaskStore) -> None:
        tasks.add(task)
        if not self._save(tasks, ui, storage):
            return
        ui.show(MSG_ADDED)
        ui.show(task.render(self.display_format))

    @staticmethod
    def _parse_index(args: str, tasks: TaskList) -> Optional[int]:
        """Turn a 1-based task number into a valid 0-based index, or None."""
        if not INDEX_RE.fullmatch(args):
            return None
        try:
            index = int(args) - 1
            tasks.get(index)
        except (ValueError, TaskIndexError):
            return None
        return index

    @staticmethod
    def _save(tasks: TaskList, ui: OutputSink, storage: TaskStore) -> bool:
        """Save the task list; report and return False on failure.

        The in-memory change is kept even when saving fails.
        """
        try:
            storage.save(tasks.tasks)
        except StorageError as e:
            logger.error(f"Could not save tasks: {e}")
            ui.show(MSG_SAVE_FAILED)
            return False
        return True

    def _show_numbered(self, items: List[Task], ui: OutputSink) -> None:
        for number, task in enumerate(items, start=1):
            ui.show(f"{number}. {task.render(self.display_format)}")

    def _suggestion(self, command_type: str) -> str:
        if not command_type.strip():
            return ""
        match = process.extractOne(
            command_type, self.commands, scorer=fuzz.ratio, score_cutoff=SUGGESTION_CUTOFF
        )
        if not match:
            return ""
        return MSG_SUGGESTION.format(command=match[0])


def parse_command(command: str, tasks: TaskList, ui: OutputSink, storage: TaskStore,
                  config: Optional[ConfigModel] = None) -> CommandResult:
    """Parse and execute a single command with a fresh parser."""
    return CommandParser(config).parse(command, tasks, ui, storage)
