"""Task domain models.

Pure value models for the weighted task tree. Tasks are frozen pydantic
models: a change always produces a new node through ``model_copy``, so a
forest handed to the pie engine can never change underneath it.
"""

from pydantic import BaseModel, Field

DEFAULT_EFFORT = 100.0

# Root-to-node sequence of task ids. The empty path selects nothing.
TaskPath = tuple[int, ...]


class Task(BaseModel):
    """A node in the task tree.

    ``effort`` is the relative weight that decides the size of the task's
    slice among its siblings. Ids are unique across the whole forest.
    """

    id: int
    name: str
    description: str = ""
    effort: float = Field(default=DEFAULT_EFFORT, ge=0)
    completed: bool = False
    subtasks: list["Task"] = Field(default_factory=list)

    model_config = {"frozen": True}


# Ordered top-level list of root tasks.
Forest = list[Task]


class TaskDocument(BaseModel):
    """The persisted layout of a forest: ``{"tasks": [...]}``."""

    tasks: list[Task] = Field(default_factory=list)
