"""Task data model for Bao."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Type

from ..utils.datetime import (
    DISPLAY_DATETIME_FORMAT,
    format_datetime,
    from_iso_string,
    to_iso_string,
)


class TaskType(Enum):
    """Task variants and their one-letter tags."""
    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


@dataclass
class Task:
    """Base task shared by every variant.

    Subclasses set ``task_type`` and override :meth:`details` and
    :meth:`scheduled_date` to describe their own dates.
    """

    task_type: ClassVar[TaskType]

    description: str
    done: bool = field(default=False, kw_only=True)

    def mark(self) -> None:
        """Mark the task as done."""
        self.done = True

    def unmark(self) -> None:
        """Mark the task as not done."""
        self.done = False

    @property
    def status_icon(self) -> str:
        return "X" if self.done else " "

    def scheduled_date(self) -> Optional[date]:
        """Return the calendar date this task falls on, if it has one."""
        return None

    def details(self, display_format: str = DISPLAY_DATETIME_FORMAT) -> str:
        """Return the variant-specific part of the rendering."""
        return ""

    def render(self, display_format: str = DISPLAY_DATETIME_FORMAT) -> str:
        """Render the task as a single human-readable line."""
        line = f"{self.task_type.value} | [{self.status_icon}] {self.description}"
        extra = self.details(display_format)
        if extra:
            line += f" | {extra}"
        return line

    def __str__(self) -> str:
        return self.render()

    def timestamps(self) -> Dict[str, datetime]:
        """Return the variant's datetime fields keyed by storage name."""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert the task to a dictionary with ISO timestamps."""
        data: Dict[str, Any] = {
            "type": self.task_type.name.lower(),
            "description": self.description,
            "done": self.done,
        }
        for key, value in self.timestamps().items():
            data[key] = to_iso_string(value)
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Task":
        """Create the right task variant from a dictionary.

        Raises:
            ValueError: If the type is unknown or a timestamp is missing/invalid
        """
        type_name = str(data.get("type", "")).lower()
        task_cls = TASK_CLASSES.get(type_name)
        if task_cls is None:
            raise ValueError(f"Unknown task type: {type_name!r}")

        description = data.get("description", "")
        done = bool(data.get("done", False))

        if task_cls is ToDo:
            return ToDo(description, done=done)

        def required(key: str) -> datetime:
            value = from_iso_string(data.get(key))
            if value is None:
                raise ValueError(f"Missing '{key}' for {type_name} task")
            return value

        if task_cls is Deadline:
            return Deadline(description, required("by"), done=done)
        return Event(description, required("from"), required("to"), done=done)


@dataclass
class ToDo(Task):
    """A plain to-do with no dates."""

    task_type: ClassVar[TaskType] = TaskType.TODO


@dataclass
class Deadline(Task):
    """A task that must be done by a date and time."""

    task_type: ClassVar[TaskType] = TaskType.DEADLINE

    due: datetime

    def scheduled_date(self) -> Optional[date]:
        return self.due.date()

    def details(self, display_format: str = DISPLAY_DATETIME_FORMAT) -> str:
        return f"by: {format_datetime(self.due, display_format)}"

    def timestamps(self) -> Dict[str, datetime]:
        return {"by": self.due}


@dataclass
class Event(Task):
    """A task spanning a start and end time.

    The end is not required to come after the start.
    """

    task_type: ClassVar[TaskType] = TaskType.EVENT

    start: datetime
    end: datetime

    def scheduled_date(self) -> Optional[date]:
        return self.start.date()

    def details(self, display_format: str = DISPLAY_DATETIME_FORMAT) -> str:
        return (
            f"from: {format_datetime(self.start, display_format)} "
            f"to: {format_datetime(self.end, display_format)}"
        )

    def timestamps(self) -> Dict[str, datetime]:
        return {"from": self.start, "to": self.end}


TASK_CLASSES: Dict[str, Type[Task]] = {
    "todo": ToDo,
    "deadline": Deadline,
    "event": Event,
}
