"""Modal dialogs for the taskpie TUI."""

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Label


class ConfirmModal(ModalScreen[bool]):
    """Yes/no question; dismisses with True when confirmed."""

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
        ("y", "confirm", "Yes"),
        ("n", "cancel", "No"),
    ]

    CSS = """
    ConfirmModal {
        align: center middle;
    }

    #confirm-modal {
        width: 56;
        height: auto;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }

    #confirm-title {
        text-style: bold;
        text-align: center;
        margin-bottom: 1;
    }

    #confirm-buttons {
        height: auto;
        margin-top: 1;
        align: center middle;
    }

    #confirm-buttons Button {
        margin: 0 1;
    }
    """

    def __init__(self, title: str, message: str = "", confirm_label: str = "Yes") -> None:
        super().__init__()
        self._title = title
        self._message = message
        self._confirm_label = confirm_label

    def compose(self) -> ComposeResult:
        with Container(id="confirm-modal"):
            yield Label(self._title, id="confirm-title")
            if self._message:
                yield Label(self._message)
            with Horizontal(id="confirm-buttons"):
                yield Button(self._confirm_label, variant="error", id="btn-confirm")
                yield Button("Cancel", variant="default", id="btn-cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "btn-confirm")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


class UnsavedEditsModal(ModalScreen[str]):
    """Asks what to do with panel edits before moving on.

    Dismisses with ``"apply"``, ``"discard"`` or ``"cancel"``.
    """

    BINDINGS = [
        ("escape", "choose('cancel')", "Cancel"),
        ("a", "choose('apply')", "Apply"),
        ("d", "choose('discard')", "Discard"),
    ]

    CSS = """
    UnsavedEditsModal {
        align: center middle;
    }

    #unsaved-modal {
        width: 60;
        height: auto;
        border: thick $warning;
        background: $surface;
        padding: 1 2;
    }

    #unsaved-title {
        text-style: bold;
        text-align: center;
        margin-bottom: 1;
    }

    #unsaved-buttons {
        height: auto;
        margin-top: 1;
        align: center middle;
    }

    #unsaved-buttons Button {
        margin: 0 1;
    }
    """

    def __init__(self, task_name: str) -> None:
        super().__init__()
        self._task_name = task_name

    def compose(self) -> ComposeResult:
        with Container(id="unsaved-modal"):
            yield Label("Unapplied edits", id="unsaved-title")
            yield Label(f"The panel holds changes to '{escape(self._task_name)}'.")
            with Horizontal(id="unsaved-buttons"):
                yield Button("Apply", variant="primary", id="btn-apply")
                yield Button("Discard", variant="error", id="btn-discard")
                yield Button("Cancel", variant="default", id="btn-cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        choice = (event.button.id or "btn-cancel").removeprefix("btn-")
        self.dismiss(choice)

    def action_choose(self, choice: str) -> None:
        self.dismiss(choice)


class HelpModal(ModalScreen):
    """Modal dialog showing keybinding help."""

    BINDINGS = [
        ("escape", "dismiss", "Close"),
        ("question_mark", "dismiss", "Close"),
    ]

    CSS = """
    HelpModal {
        align: center middle;
    }

    #help-modal {
        width: 64;
        height: auto;
        max-height: 30;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }

    #help-title {
        text-style: bold;
        text-align: center;
        margin-bottom: 1;
        color: $primary;
    }

    .help-section-title {
        text-style: bold;
        color: $secondary;
        margin-top: 1;
    }

    .help-row {
        layout: horizontal;
        height: 1;
    }

    .help-key {
        width: 15;
        color: $warning;
    }

    .help-desc {
        width: 100%;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the help modal content."""
        with Container(id="help-modal"):
            yield Label("taskpie - Keyboard Shortcuts", id="help-title")

            yield Label("Pie", classes="help-section-title")
            yield self._help_row("Click", "Select a slice; click the center to go up")
            yield self._help_row("Backspace", "Go up one level")

            yield Label("Tasks", classes="help-section-title")
            yield self._help_row("a", "Add a subtask to the selection")
            yield self._help_row("s", "Add a sibling of the selection")
            yield self._help_row("Space", "Toggle done")
            yield self._help_row("d", "Delete the selection")
            yield self._help_row("Enter", "Apply edits from the panel")

            yield Label("Application", classes="help-section-title")
            yield self._help_row("Ctrl+S", "Save the document")
            yield self._help_row("?", "Show this help")
            yield self._help_row("q", "Quit application")

            yield Label("")
            yield Label("Press Escape or ? to close", id="help-footer")

    def _help_row(self, key: str, description: str) -> Horizontal:
        """Create a help row with key and description."""
        return Horizontal(
            Label(f"  {key}", classes="help-key"),
            Label(description, classes="help-desc"),
            classes="help-row",
        )


__all__ = ["ConfirmModal", "HelpModal", "UnsavedEditsModal"]
