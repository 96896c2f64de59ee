"""Infrastructure layer: everything that touches the file system."""

from taskpie.infrastructure.storage import JsonStorage, TaskDocumentRepository

__all__ = [
    "JsonStorage",
    "TaskDocumentRepository",
]
