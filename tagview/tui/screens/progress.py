"""
Progress Screen components for background loading feedback.

Provides a base ProgressScreen class and the LoadingScreen shown while tag
records are decoded and aggregated.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Center, Middle
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Footer, Header, Static


class ProgressScreen(Screen):
    """Base screen for displaying progress of background tasks.

    Usage:
        screen = ProgressScreen(title="Working...")
        screen.update_status("Aggregating tags")
        screen.update_detail("5 of 10 files")
        screen.set_complete("Done!", "10 records loaded")
    """

    DEFAULT_CSS = """
    ProgressScreen .progress-container {
        width: 60;
        height: auto;
        border: solid $primary;
        padding: 1 2;
    }

    ProgressScreen .progress-title {
        text-style: bold;
        text-align: center;
    }

    ProgressScreen .progress-status, ProgressScreen .progress-detail {
        text-align: center;
        color: $text-muted;
    }
    """

    TITLE_DEFAULT: str = "Processing..."

    def __init__(
        self,
        title: str | None = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the progress screen.

        Args:
            title: Title text to display. Uses TITLE_DEFAULT if not provided.
            name: Optional screen name.
            id: Optional screen ID.
            classes: Optional CSS classes.
        """
        super().__init__(name=name, id=id, classes=classes)
        self._title_text = title or self.TITLE_DEFAULT
        self._status_text = "Preparing..."
        self._detail_text = ""

    def compose(self) -> ComposeResult:
        """Compose the progress screen layout."""
        yield Header()
        with Center():
            with Middle(id=self._get_container_id(), classes="progress-container"):
                yield Static(self._title_text, id="progress-title", classes="progress-title")
                yield Static(self._status_text, id="progress-status", classes="progress-status")
                yield Static(self._detail_text, id="progress-detail", classes="progress-detail")
        yield Footer()

    def _get_container_id(self) -> str:
        """Return the container ID. Override in subclasses for custom CSS."""
        return "progress-container"

    def _set_text(self, selector: str, text: str) -> None:
        # Updates may arrive before compose() has run
        try:
            self.query_one(selector, Static).update(text)
        except NoMatches:
            pass

    def update_status(self, status: str) -> None:
        self._status_text = status
        self._set_text("#progress-status", status)

    def update_detail(self, detail: str) -> None:
        self._detail_text = detail
        self._set_text("#progress-detail", detail)

    def set_complete(self, message: str, detail: str = "") -> None:
        self._set_text("#progress-title", "Complete")
        self.update_status(message)
        self.update_detail(detail)

    def set_error(self, message: str, detail: str = "") -> None:
        self._set_text("#progress-title", "Error")
        self.update_status(message)
        self.update_detail(detail)


class LoadingScreen(ProgressScreen):
    """Screen displayed while loading tag records."""

    TITLE_DEFAULT = "Loading..."

    def __init__(
        self,
        filename: str = "",
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        title = f"Loading {filename}..." if filename else None
        super().__init__(title=title, name=name, id=id, classes=classes)
        self.filename = filename

    def _get_container_id(self) -> str:
        return "loading-container"

    def update_loaded_count(self, count: int) -> None:
        """Show the number of records decoded so far."""
        self.update_status("Loading records...")
        self.update_detail(f"{count:,} records loaded")
