"""Modal screen listing the key bindings."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import ScrollableContainer, Vertical
from textual.screen import ModalScreen
from textual.widgets import Label, Static

from tagview.tui.help import HELP_TITLE, help_text


class HelpModal(ModalScreen[None]):
    """A modal screen that displays the key reference."""

    BINDINGS = [
        Binding("escape,question_mark,q", "close", "Close"),
        Binding("j,down", "scroll_down", "Scroll down", show=False),
        Binding("k,up", "scroll_up", "Scroll up", show=False),
    ]

    CSS = """
    HelpModal {
        align: center middle;
    }

    HelpModal > Vertical {
        width: 60%;
        height: 70%;
        background: $surface;
        border: round $primary;
        padding: 0 1;
    }

    HelpModal .modal-header {
        dock: top;
        width: 100%;
        height: auto;
        padding: 0 1;
        background: $primary;
        color: $text;
        text-align: center;
        text-style: bold;
    }

    HelpModal .content-container {
        height: 1fr;
        padding: 0 1;
    }

    HelpModal .close-hint {
        dock: bottom;
        height: auto;
        text-align: center;
        color: $text-muted;
    }
    """

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(HELP_TITLE, classes="modal-header", markup=False)
            with ScrollableContainer(classes="content-container"):
                yield Static(help_text(), classes="help-content", markup=False)
            yield Label("Press [ESC], [?] or [q] to close", classes="close-hint", markup=False)

    def _container(self) -> ScrollableContainer:
        return self.query_one(".content-container", ScrollableContainer)

    def action_scroll_down(self) -> None:
        self._container().scroll_down()

    def action_scroll_up(self) -> None:
        self._container().scroll_up()

    def action_close(self) -> None:
        """Close the modal."""
        self.dismiss(None)
