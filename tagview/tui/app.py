"""
Main Textual application for the tag browser.

Loads decoded tag records from a file or a directory, builds the tree for the
selected sort mode and browses it with vim-style keys.

Supported Formats:
    - JSON (.json): DICOM JSON model dataset, or an array of datasets
    - JSONL (.jsonl): One DICOM JSON model dataset per line
    - Parquet (.parquet, .pq): Long tag table (record, group, element, vr, value, length)
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import sys

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Input, Static

from tagview import logging_setup
from tagview.config import DEFAULT_CONFIG, SORT_MODES, ViewerConfig
from tagview.data_formats import SUPPORTED_FORMATS
from tagview.data_loader import iter_records, load_tag_records
from tagview.records import TagRecord
from tagview.tree import (
    NodeId,
    SortMode,
    TagStatistics,
    TreeNavigator,
    build_tree,
    compute_statistics,
)
from tagview.tui.mixins import BackgroundTaskMixin
from tagview.tui.widgets import HelpModal, TagTreeView

logger = logging.getLogger(__name__)


class TagBrowserApp(BackgroundTaskMixin, App):
    """A Textual app for browsing and comparing tag records."""

    TITLE = "Tag Browser"

    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        background: $surface;
    }

    Header {
        dock: top;
        background: $primary;
        color: $text;
    }

    Footer {
        dock: bottom;
        height: 1;
        background: $primary-darken-2;
    }

    #status {
        dock: bottom;
        height: 1;
        padding: 0 1;
        background: $primary-darken-1;
        color: $text;
    }

    #search {
        dock: bottom;
        display: none;
    }

    #search.-active {
        display: block;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("escape", "back", "Quit", show=False),
        Binding("1", "sort('source')", "By file", show=True),
        Binding("2", "sort('tag')", "By tag", show=True),
        Binding("3", "sort('diff')", "Differences", show=True),
        Binding("slash", "start_search", "Search", show=True),
        Binding("n", "search_next", "Next match", show=False),
        Binding("N", "search_prev", "Previous match", show=False),
        Binding("question_mark", "help", "Help", show=True),
    ]

    def __init__(
        self,
        path: str,
        input_format: str = "auto",
        config: ViewerConfig = DEFAULT_CONFIG,
    ):
        """Initialize the app with a data file or directory.

        Args:
            path: Path to the data file or directory.
            input_format: Format hint ('auto', 'jsonl', 'json', 'parquet').
            config: Viewer settings.
        """
        super().__init__()
        self._path = path
        self._input_format = input_format
        self.config = config
        self.records: list[TagRecord] = []
        self.stats: TagStatistics | None = None
        self.sort_mode = SortMode(config.default_sort)
        self.navigator: TreeNavigator | None = None
        self.handler_text = ""
        self._search_text = ""
        self._search_origin: NodeId | None = None
        self._loading = False

    def compose(self) -> ComposeResult:
        yield Header()
        yield TagTreeView(id="tree")
        yield Input(placeholder="Search tags and values...", id="search")
        yield Static("", id="status")
        yield Footer()

    def on_mount(self) -> None:
        """Load the records, in the background when the input is large."""
        basename = os.path.basename(os.path.normpath(self._path))
        self.title = f"Tag Browser - {basename}"

        if self.should_load_async(self._path, self.LARGE_FILE_THRESHOLD):
            self._loading = True
            self._run_loading_task(
                filename=basename,
                load_fn=lambda: iter_records(self._path, self._input_format),
                on_complete=self._on_records_loaded,
                on_error=self._on_loading_error,
            )
            return

        try:
            records = load_tag_records(self._path, self._input_format)
        except Exception as e:
            logger.exception("Loading %s failed", self._path)
            self._on_loading_error(str(e))
            return
        self._on_records_loaded(records, compute_statistics(records))

    def _on_records_loaded(self, records: list[TagRecord], stats: TagStatistics) -> None:
        """Called when loading completes successfully."""
        self._loading = False
        self.records = records
        self.stats = stats
        if not records:
            self._on_loading_error(f"No records found in {self._path}")
            return
        self.install_tree(self.sort_mode)
        self.query_one(TagTreeView).focus()
        self.notify(f"Loaded {len(records):,} records")

    def _on_loading_error(self, error: str) -> None:
        """Called when loading fails."""
        self._loading = False
        self.notify(f"Error loading {self._path}: {error}", severity="error")
        self.exit(return_code=1, message=f"Error loading {self._path}: {error}")

    def install_tree(self, mode: SortMode) -> None:
        """Build the tree for ``mode`` and replace the current one."""
        if self.stats is None:
            return
        store, state = build_tree(mode, self._path, self.records, self.stats, self.config)
        self.sort_mode = mode
        self.navigator = TreeNavigator(store, state)
        self.query_one(TagTreeView).set_navigator(self.navigator)
        logger.info("Installed %s tree with %d nodes", mode.value, len(store))
        self._set_status(mode.description)

    def _set_status(self, handler_text: str) -> None:
        self.handler_text = handler_text
        status = Text(handler_text, style="bold")
        if self.navigator is not None:
            status.append("   ")
            status.append(" / ".join(self.navigator.selected_path()), style="dim")
        self.query_one("#status", Static).update(status)

    def on_tag_tree_view_navigated(self, message: TagTreeView.Navigated) -> None:
        self._set_status(message.description)

    # Actions

    def action_sort(self, mode: str) -> None:
        if self._loading:
            return
        self.install_tree(SortMode(mode))

    def action_help(self) -> None:
        self.push_screen(HelpModal())

    def action_back(self) -> None:
        """Leave search mode, or quit."""
        search = self.query_one("#search", Input)
        if search.has_class("-active"):
            origin = self._search_origin
            self._close_search()
            if origin is not None:
                self.query_one(TagTreeView).jump_to(origin, "search cancelled")
            return
        self.exit()

    def action_start_search(self) -> None:
        """Open the search line; matches are selected while typing."""
        if self.navigator is None:
            return
        self._search_origin = self.navigator.selected
        search = self.query_one("#search", Input)
        search.value = ""
        search.add_class("-active")
        search.focus()

    def _close_search(self) -> None:
        self._search_origin = None
        self.query_one("#search", Input).remove_class("-active")
        self.query_one(TagTreeView).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "search" or self._search_origin is None:
            return
        self.query_one(TagTreeView).search(
            event.value, forward=True, start=self._search_origin
        )

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "search":
            return
        self._search_text = event.value
        self._close_search()

    def action_search_next(self) -> None:
        self.query_one(TagTreeView).search(self._search_text, forward=True)

    def action_search_prev(self) -> None:
        self.query_one(TagTreeView).search(self._search_text, forward=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tagview",
        description="Browse and compare DICOM-style tag records in a terminal UI. "
        "Supports JSON, JSONL, and Parquet formats.",
    )
    parser.add_argument(
        "path",
        help="Path to data file or directory of data files (JSON, JSONL, or Parquet)",
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="input_format",
        default="auto",
        choices=["auto", *sorted(SUPPORTED_FORMATS)],
        help="Input format (default: detect from the file)",
    )
    parser.add_argument(
        "-s",
        "--sort",
        choices=SORT_MODES,
        default=None,
        help="Initial sort mode (default: source, or TAGVIEW_SORT)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: WARNING, or TAGVIEW_LOG_LEVEL)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Log file path (default: a new file under TAGVIEW_LOG_DIR)",
    )
    return parser


def main() -> None:
    """Parse arguments and run the application."""
    args = build_parser().parse_args()

    # Verify the path exists
    if not os.path.exists(args.path):
        print(f"Error: Path not found: {args.path}", file=sys.stderr)
        sys.exit(1)

    if not os.access(args.path, os.R_OK):
        print(f"Error: Permission denied: {args.path}", file=sys.stderr)
        sys.exit(1)

    try:
        config = ViewerConfig.from_env()
        overrides = {
            "default_sort": args.sort,
            "log_level": args.log_level,
            "log_file": args.log_file,
        }
        config = dataclasses.replace(
            config, **{k: v for k, v in overrides.items() if v is not None}
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    logging_setup.configure(config)

    app = TagBrowserApp(path=args.path, input_format=args.input_format, config=config)
    app.run()
    if app.return_code:
        sys.exit(app.return_code)


if __name__ == "__main__":
    main()
