"""Repository for task documents.

Maps the persisted ``{"tasks": [...]}`` layout onto ``TaskDocument`` and
back, returning Result types for explicit error handling.
"""

from pathlib import Path

from pydantic import ValidationError

from taskpie.domain.shared.result import Err, Ok, Result
from taskpie.domain.task import TaskDocument
from taskpie.infrastructure.storage.json_storage import JsonStorage


class TaskDocumentRepository:
    """Repository for task document persistence."""

    def __init__(self, storage: JsonStorage | None = None) -> None:
        """Initialize the repository.

        Args:
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        self._storage = storage or JsonStorage()

    def load(self, path: Path) -> Result[TaskDocument, str]:
        """Load a task document.

        Returns:
            Ok(TaskDocument) if successful, Err(str) with error message if failed.
        """
        result = self._storage.load_json(path)
        if isinstance(result, Err):
            return result

        try:
            return Ok(TaskDocument(**result.value))
        except ValidationError as e:
            return Err(f"Invalid task data in {path}: {e}")

    def load_or_empty(self, path: Path) -> Result[TaskDocument, str]:
        """Like ``load`` but a missing file is an empty document."""
        if not path.exists():
            return Ok(TaskDocument())
        return self.load(path)

    def save(self, path: Path, document: TaskDocument) -> Result[None, str]:
        """Save a task document."""
        return self._storage.save_json(path, document.model_dump())

    def exists(self, path: Path) -> bool:
        return path.exists()
