"""Task details panel widget for the taskpie TUI."""

from typing import Any, Optional

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Button, Checkbox, Input, Label, Static

from taskpie.application import ForestStats
from taskpie.domain.task import Task, TaskPath, format_path


class TaskPanel(Static):
    """Editable fields of the selected task."""

    DEFAULT_CSS = """
    TaskPanel {
        background: $surface;
        padding: 1 2;
        border: solid $primary;
        width: 44;
        height: 100%;
    }

    TaskPanel .task-header {
        text-style: bold;
        margin-bottom: 1;
    }

    TaskPanel .field-label {
        margin-top: 1;
        color: $text-muted;
    }

    TaskPanel #panel-buttons {
        height: auto;
        margin-top: 1;
    }

    TaskPanel #panel-stats {
        margin-top: 1;
        color: $text-muted;
    }

    TaskPanel .no-task {
        color: $text-muted;
        text-align: center;
        margin-top: 5;
    }
    """

    class Applied(Message):
        """Sent when the user applies edited fields."""

        def __init__(self, path: TaskPath, fields: dict[str, Any]) -> None:
            self.path = path
            self.fields = fields
            super().__init__()

    def __init__(
        self,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self._task: Optional[Task] = None
        self._path: TaskPath = ()

    def compose(self) -> ComposeResult:
        """Create the panel structure."""
        with Vertical(id="task-panel-container"):
            yield Label("No task selected", id="panel-title", classes="task-header")
            yield Label("Name", classes="field-label")
            yield Input(id="field-name")
            yield Label("Description", classes="field-label")
            yield Input(id="field-description")
            yield Label("Effort", classes="field-label")
            yield Input(id="field-effort", type="number")
            yield Checkbox("Done", id="field-completed")
            with Horizontal(id="panel-buttons"):
                yield Button("Apply", variant="primary", id="btn-apply")
                yield Button("Revert", id="btn-revert")
            yield Label("", id="panel-stats")

    def update_task(self, task: Optional[Task], path: TaskPath) -> None:
        """Show ``task`` (or nothing) in the form, dropping unsaved edits."""
        self._task = task
        self._path = path
        self._refresh_content()

    def update_stats(self, stats: ForestStats) -> None:
        self.query_one("#panel-stats", Label).update(
            f"{stats.completed}/{stats.total} done, {stats.progress_percent}% of effort"
        )

    def _refresh_content(self) -> None:
        title = self.query_one("#panel-title", Label)
        task = self._task
        for widget in self.query("Input, Checkbox, Button"):
            widget.disabled = task is None

        if task is None:
            title.update("No task selected")
            for field in ("#field-name", "#field-description", "#field-effort"):
                self.query_one(field, Input).value = ""
            self.query_one("#field-completed", Checkbox).value = False
            return

        title.update(f"{escape(task.name)}  [dim]({format_path(self._path)})[/dim]")
        self.query_one("#field-name", Input).value = task.name
        self.query_one("#field-description", Input).value = task.description
        self.query_one("#field-effort", Input).value = f"{task.effort:g}"
        self.query_one("#field-completed", Checkbox).value = task.completed

    def form_fields(self) -> dict[str, Any]:
        """Fields that differ from the shown task."""
        task = self._task
        if task is None:
            return {}
        values: dict[str, Any] = {
            "name": self.query_one("#field-name", Input).value,
            "description": self.query_one("#field-description", Input).value,
            "effort": self.query_one("#field-effort", Input).value,
            "completed": self.query_one("#field-completed", Checkbox).value,
        }
        changed = {}
        for key, value in values.items():
            current = getattr(task, key)
            if key == "effort":
                try:
                    if float(value) == current:
                        continue
                except ValueError:
                    pass
            elif value == current:
                continue
            changed[key] = value
        return changed

    @property
    def is_dirty(self) -> bool:
        """True if the form holds edits that were not applied."""
        return bool(self.form_fields())

    @property
    def current_task(self) -> Optional[Task]:
        return self._task

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-apply":
            self._apply()
        elif event.button.id == "btn-revert":
            self._refresh_content()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._apply()

    def _apply(self) -> None:
        fields = self.form_fields()
        if self._task is not None and fields:
            self.post_message(self.Applied(self._path, fields))
