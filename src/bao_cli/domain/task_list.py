"""Ordered task collection."""

from typing import Iterable, Iterator, List, Optional

from .task import Task


class TaskIndexError(IndexError):
    """Raised when a task position is outside the collection."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Task index {index} out of range for {size} tasks")


class TaskList:
    """Tasks in insertion order, addressed by 0-based position.

    Positions are never reordered by marking, unmarking or searching; only
    :meth:`delete` shifts the tasks after the removed one.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = list(tasks) if tasks else []

    def add(self, task: Task) -> None:
        """Append a task to the end of the list."""
        self._tasks.append(task)

    def get(self, index: int) -> Task:
        """Return the task at a 0-based index.

        Raises:
            TaskIndexError: If index is negative or not below size()
        """
        self._check_index(index)
        return self._tasks[index]

    def delete(self, index: int) -> Task:
        """Remove and return the task at a 0-based index.

        Raises:
            TaskIndexError: If index is negative or not below size()
        """
        self._check_index(index)
        return self._tasks.pop(index)

    def size(self) -> int:
        return len(self._tasks)

    def is_empty(self) -> bool:
        return not self._tasks

    def find_by_keyword(self, keyword: str) -> List[Task]:
        """Return tasks whose description contains keyword, in list order.

        Matching is a case-sensitive literal substring test.
        """
        return [task for task in self._tasks if keyword in task.description]

    @property
    def tasks(self) -> List[Task]:
        """Snapshot of the current tasks, in order."""
        return list(self._tasks)

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._tasks):
            raise TaskIndexError(index, len(self._tasks))

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def __str__(self) -> str:
        return f"TaskList({len(self._tasks)} tasks)"
