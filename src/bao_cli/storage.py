"""Storage layer for Bao using a markdown file with YAML frontmatter."""

import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import frontmatter
import yaml

from .config import ConfigModel
from .domain import Task


logger = logging.getLogger(__name__)

FORMAT_VERSION = 1
DOCUMENT_TITLE = "# Bao Tasks"

TASK_LINE_RE = re.compile(r"^- \[( |x)\] (.*) <!--\s*(\w+)((?:\s+[\w-]+=\S+)*)\s*-->$")
FIELD_RE = re.compile(r"([\w-]+)=(\S+)")


class StorageError(OSError):
    """Raised when tasks cannot be read from or written to disk."""
    pass


class TaskStore(ABC):
    """Persistence port used by the command interpreter."""

    @abstractmethod
    def save(self, tasks: Sequence[Task]) -> None:
        """Replace the saved state with the given tasks.

        Raises:
            StorageError: If the underlying medium cannot be written
        """
        pass

    @abstractmethod
    def load(self) -> List[Task]:
        """Return the saved tasks, in order."""
        pass


class TaskMarkdownFormat:
    """Handles conversion between Task objects and markdown task lines."""

    @staticmethod
    def to_markdown(task: Task) -> str:
        """Convert a task to a checkbox line with an inline metadata comment."""
        data = task.to_dict()
        checkbox = "- [x]" if data.pop("done") else "- [ ]"
        description = data.pop("description")
        kind = data.pop("type")

        meta = kind
        for key, value in data.items():
            meta += f" {key}={value}"

        return f"{checkbox} {description} <!-- {meta} -->"

    @staticmethod
    def from_markdown(line: str) -> Optional[Task]:
        """Parse a task line back to a Task.

        Returns None for lines that are not task lines.

        Raises:
            ValueError: If the line looks like a task but its metadata is invalid
        """
        match = TASK_LINE_RE.match(line.rstrip("\r\n"))
        if not match:
            return None

        mark, description, kind, raw_fields = match.groups()
        data: Dict[str, Any] = dict(FIELD_RE.findall(raw_fields))
        data.update(type=kind, description=description, done=mark == "x")
        return Task.from_dict(data)


class TaskFileFormat:
    """Handles conversion between a task sequence and the whole file."""

    @staticmethod
    def to_markdown(tasks: Sequence[Task]) -> str:
        metadata = {
            "app": "bao",
            "format_version": FORMAT_VERSION,
            "saved_at": datetime.now().isoformat(timespec="seconds"),
            "task_count": len(tasks),
        }

        content_lines = [DOCUMENT_TITLE, ""]
        content_lines.extend(TaskMarkdownFormat.to_markdown(task) for task in tasks)

        post = frontmatter.Post("\n".join(content_lines), **metadata)
        return frontmatter.dumps(post) + "\n"

    @staticmethod
    def from_markdown(content: str) -> List[Task]:
        post = frontmatter.loads(content)

        version = post.metadata.get("format_version", FORMAT_VERSION)
        if version != FORMAT_VERSION:
            logger.warning(f"Task file format version {version} is not {FORMAT_VERSION}; reading anyway")

        tasks = []
        for line_no, line in enumerate(post.content.split("\n"), start=1):
            try:
                task = TaskMarkdownFormat.from_markdown(line)
            except ValueError as e:
                logger.warning(f"Skipping malformed task on line {line_no}: {e}")
                continue
            if task:
                tasks.append(task)

        expected = post.metadata.get("task_count")
        if isinstance(expected, int) and expected != len(tasks):
            logger.warning(f"Task file declares {expected} tasks but {len(tasks)} were read")

        return tasks


class Storage(TaskStore):
    """File-based storage for Bao using a single markdown file."""

    def __init__(self, config: ConfigModel, path: Optional[Path] = None):
        self.config = config
        self.path = Path(path) if path else config.get_data_path()

    def load(self) -> List[Task]:
        """Load tasks from the task file.

        Returns an empty list when the file does not exist yet.

        Raises:
            StorageError: If the file exists but cannot be read or parsed
        """
        if not self.path.exists():
            logger.info(f"No task file at {self.path}; starting empty")
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = f.read()
            tasks = TaskFileFormat.from_markdown(content)
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Could not read {self.path}: {e}") from e
        except yaml.YAMLError as e:
            raise StorageError(f"Could not parse {self.path}: {e}") from e

        logger.debug(f"Loaded {len(tasks)} tasks from {self.path}")
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        """Write every task to the task file, replacing its contents.

        The file is written to a temporary sibling and renamed over the
        target so an interrupted write leaves the previous file in place.

        Raises:
            StorageError: If the file cannot be written
        """
        content = TaskFileFormat.to_markdown(tasks)
        temp_file = self.path.with_suffix(self.path.suffix + ".tmp")

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_file, "w", encoding="utf-8") as f:
                f.write(content)
            temp_file.replace(self.path)
        except OSError as e:
            temp_file.unlink(missing_ok=True)
            logger.error(f"Failed to save tasks to {self.path}: {e}")
            raise StorageError(f"Could not write {self.path}: {e}") from e

        logger.debug(f"Saved {len(tasks)} tasks to {self.path}")
