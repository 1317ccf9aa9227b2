"""Domain models for Bao."""

from .task import Task, TaskType, ToDo, Deadline, Event
from .task_list import TaskList, TaskIndexError

__all__ = [
    "Task",
    "TaskType",
    "ToDo",
    "Deadline",
    "Event",
    "TaskList",
    "TaskIndexError",
]
