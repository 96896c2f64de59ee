"""Pie widget for the taskpie TUI.

Draws the animated pie with the half-block raster surface and turns
mouse clicks into selection requests. A timer ticks the session's frame
scheduler at the configured frame rate; the widget only repaints while
something is moving.
"""

from typing import Optional

from rich.text import Text
from textual import events
from textual.message import Message
from textual.timer import Timer
from textual.widget import Widget

from taskpie.application import NavigationSession
from taskpie.domain.pie import pick
from taskpie.domain.task import TaskPath
from taskpie.global_config import PieConfig
from taskpie.render import Viewport, to_rich_text


class PieView(Widget, can_focus=True):
    """Animated pie of the session's forest."""

    DEFAULT_CSS = """
    PieView {
        width: 1fr;
        height: 100%;
        min-width: 20;
        min-height: 10;
    }

    PieView:focus {
        border: none;
    }
    """

    class Selected(Message):
        """Sent when a click on the pie asks for a new selection."""

        def __init__(self, path: TaskPath) -> None:
            self.path = path
            super().__init__()

    def __init__(
        self,
        session: NavigationSession,
        config: PieConfig,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self._session = session
        self._config = config
        self._timer: Optional[Timer] = None

    @property
    def viewport(self) -> Viewport:
        return Viewport(
            columns=max(self.size.width, 1),
            rows=max(self.size.height, 1),
            view_size=self._config.view_size,
        )

    def on_mount(self) -> None:
        self._timer = self.set_interval(1 / self._config.frame_rate, self._on_frame)

    def on_unmount(self) -> None:
        if self._timer:
            self._timer.stop()
            self._timer = None
        self._session.animator.dispose()

    def on_resize(self, event: events.Resize) -> None:
        self._session.animator.is_mobile = event.size.width < self._config.narrow_width
        self.refresh()

    def _on_frame(self) -> None:
        if self._session.scheduler.pending:
            self._session.tick()
            self.refresh()

    def render(self) -> Text:
        return to_rich_text(self._session.frame(), self.viewport)

    def on_click(self, event: events.Click) -> None:
        x, y = self.viewport.cell_to_pie(event.x, event.y)
        path = pick(self._session.frame(), x, y)
        if path is not None:
            self.post_message(self.Selected(path))
