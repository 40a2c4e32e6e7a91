"""Task stores: the Todoist REST API and a local YAML file."""

from .file_store import FileTaskStore
from .interfaces import TaskStore
from .todoist import TodoistStore

__all__ = ["FileTaskStore", "TaskStore", "TodoistStore"]
