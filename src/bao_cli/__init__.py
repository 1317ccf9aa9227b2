"""Bao - a text-command tracker for to-dos, deadlines and events."""

__version__ = "0.1.0"
__author__ = "Bao Team"

from .domain import (
    Task,
    TaskType,
    ToDo,
    Deadline,
    Event,
    TaskList,
)

__all__ = ["Task", "TaskType", "ToDo", "Deadline", "Event", "TaskList", "__version__"]
