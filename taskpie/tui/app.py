"""Main taskpie TUI application.

The TaskPieApp class is the entry point for the terminal user interface.
It owns the navigation session for one task document and coordinates the
pie, the details panel and persistence.
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Header

from taskpie.application import NavigationSession, get_forest_stats
from taskpie.domain.shared import Err
from taskpie.domain.task import TaskDocument, TaskPath, format_path, path_names
from taskpie.global_config import PieConfig, get_global_config, save_last_document
from taskpie.infrastructure.storage import TaskDocumentRepository
from taskpie.tui.screens import ConfirmModal, HelpModal, UnsavedEditsModal
from taskpie.tui.widgets import PieView, TaskPanel

logger = logging.getLogger(__name__)


class TaskPieApp(App):
    """Interactive pie for a weighted task tree.

    Selecting a slice drills into its subtasks; the center disk goes back
    up. Edits are kept in memory until saved with ctrl+s.
    """

    TITLE = "taskpie"

    CSS = """
    Screen {
        background: $surface;
    }

    #main-container {
        layout: horizontal;
        height: 100%;
    }

    Footer {
        dock: bottom;
        height: 1;
        background: $primary;
    }
    """

    BINDINGS = [
        Binding("a", "add_child", "Add Subtask", show=True),
        Binding("s", "add_sibling", "Add Sibling", show=True),
        Binding("backspace", "go_up", "Up", show=True),
        Binding("space", "toggle_done", "Done", show=True),
        Binding("d", "delete", "Delete", show=True),
        Binding("ctrl+s", "save", "Save", show=True, priority=True),
        Binding("question_mark", "show_help", "Help", show=True, key_display="?"),
        Binding("q", "quit_app", "Quit", show=True),
    ]

    def __init__(
        self,
        document_path: Path,
        document: Optional[TaskDocument] = None,
        config: Optional[PieConfig] = None,
    ) -> None:
        """Initialize the app.

        Args:
            document_path: Where the document is loaded from and saved to.
            document: Already loaded document; an empty one if None.
            config: Pie settings; loaded from the global config if None.
        """
        super().__init__()
        self._document_path = document_path
        self._config = config or get_global_config()
        self._repository = TaskDocumentRepository()
        self.session = NavigationSession.from_document(
            document or TaskDocument(),
            geometry=self._config.ring_geometry(),
        )

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-container"):
            yield PieView(self.session, self._config, id="pie")
            yield TaskPanel(id="task-panel")
        yield Footer()

    def on_mount(self) -> None:
        save_last_document(self._document_path)
        self._refresh_views()
        self.query_one(PieView).focus()

    # =========================================================================
    # Events
    # =========================================================================

    def on_pie_view_selected(self, event: PieView.Selected) -> None:
        self._select(event.path)

    def on_task_panel_applied(self, event: TaskPanel.Applied) -> None:
        self._apply_edits(event.path, event.fields)

    # =========================================================================
    # Actions
    # =========================================================================

    def action_add_child(self) -> None:
        self._guard_edits(lambda: self._add(self.session.path))

    def action_add_sibling(self) -> None:
        self._guard_edits(lambda: self._add(None))

    def action_go_up(self) -> None:
        if self.session.path:
            self._select(self.session.path[:-1])

    def action_toggle_done(self) -> None:
        if not self.session.path:
            self.notify("No task selected", severity="warning")
            return
        result = self.session.toggle_completed()
        if isinstance(result, Err):
            self.notify(result.error, severity="error")
            return
        self._refresh_views()

    def action_delete(self) -> None:
        task = self.session.selected_task
        if task is None:
            self.notify("No task selected", severity="warning")
            return

        def on_confirm(confirmed: bool | None) -> None:
            if not confirmed:
                return
            result = self.session.delete_task()
            if isinstance(result, Err):
                self.notify(result.error, severity="error")
                return
            self.notify(f"Deleted: {task.name}")
            self._refresh_views()

        count = len(task.subtasks)
        detail = f"Its {count} subtask(s) are deleted too." if count else ""
        self.push_screen(ConfirmModal(f"Delete '{task.name}'?", detail, "Delete"), on_confirm)

    def action_save(self) -> None:
        result = self._repository.save(self._document_path, self.session.document())
        if isinstance(result, Err):
            self.notify(result.error, severity="error")
            return
        self.session.mark_saved()
        self._update_title()
        logger.info(f"Saved {self._document_path}")
        self.notify(f"Saved {self._document_path.name}")

    def action_show_help(self) -> None:
        self.push_screen(HelpModal())

    def action_quit_app(self) -> None:
        if not self.session.dirty:
            self.exit()
            return

        def on_confirm(confirmed: bool | None) -> None:
            if confirmed:
                self.exit()

        self.push_screen(
            ConfirmModal("Quit without saving?", "Unsaved changes will be lost.", "Quit"),
            on_confirm,
        )

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _guard_edits(self, then: Callable[[], None]) -> None:
        """Run ``then`` once unapplied panel edits are applied or discarded.

        With no pending edits ``then`` runs at once. Otherwise the user picks
        Apply, Discard or Cancel; a failed apply keeps the edits and stays put.
        """
        panel = self.query_one(TaskPanel)
        task = panel.current_task
        fields = panel.form_fields()
        if task is None or not fields:
            then()
            return
        path = self.session.path

        def on_choice(choice: str | None) -> None:
            if choice == "apply" and self._apply_edits(path, fields):
                then()
            elif choice == "discard":
                then()

        self.push_screen(UnsavedEditsModal(task.name), on_choice)

    def _apply_edits(self, path: TaskPath, fields: dict[str, Any]) -> bool:
        result = self.session.update_task(path, **fields)
        if isinstance(result, Err):
            self.notify(result.error, severity="error")
            return False
        self._refresh_views()
        return True

    def _select(self, path: TaskPath) -> None:
        def select() -> None:
            result = self.session.select(path)
            if isinstance(result, Err):
                self.notify(result.error, severity="error")
                return
            self._refresh_views()

        if path != self.session.path:
            self._guard_edits(select)

    def _add(self, parent_path: Optional[TaskPath]) -> None:
        result = self.session.add_task(parent_path)
        if isinstance(result, Err):
            self.notify(result.error, severity="error")
            return
        self._refresh_views()

    def _refresh_views(self) -> None:
        session = self.session
        panel = self.query_one(TaskPanel)
        panel.update_task(session.selected_task, session.path)
        panel.update_stats(get_forest_stats(session.forest))
        self.query_one(PieView).refresh()
        self._update_title()

    def _update_title(self) -> None:
        session = self.session
        names = path_names(session.forest, session.path)
        location = " > ".join(names) if names else format_path(session.path)
        marker = " *" if session.dirty else ""
        self.sub_title = f"{self._document_path.name}{marker}  {location}"


__all__ = ["TaskPieApp"]
