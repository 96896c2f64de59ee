"""Storage infrastructure for taskpie.

Persistence of task documents, using Result types for explicit error
handling.
"""

from taskpie.infrastructure.storage.json_storage import JsonStorage
from taskpie.infrastructure.storage.repositories import TaskDocumentRepository

__all__ = [
    "JsonStorage",
    "TaskDocumentRepository",
]
