"""
Background Task Mixin for loading tag records with progress feedback.

Provides a reusable pattern for:
- Pushing a loading screen
- Decoding records and aggregating tag statistics in a background thread
- Updating progress from the background thread
- Handling completion and errors
- Dismissing the loading screen
"""

from __future__ import annotations

import logging
import os
import time
from typing import TYPE_CHECKING, Callable, Iterator

from textual import work

from tagview.data_formats import discover_data_files
from tagview.records import TagRecord
from tagview.tree import TagStatistics, compute_statistics

if TYPE_CHECKING:
    from tagview.tui.screens.progress import LoadingScreen

logger = logging.getLogger(__name__)


class BackgroundTaskMixin:
    """Mixin providing background loading with a progress UI.

    The worker owns no UI state: it reports through ``call_from_thread`` and
    hands the finished batch to ``on_complete`` on the UI thread, so the tree
    is only ever built and swapped between input events.

    Usage:
        class MyApp(BackgroundTaskMixin, App):
            def on_mount(self):
                self._run_loading_task(
                    filename="study.jsonl",
                    load_fn=lambda: iter_records("study.jsonl"),
                    on_complete=self._on_loaded,
                )

            def _on_loaded(self, records, stats):
                ...
    """

    # Configurable delays
    TASK_COMPLETION_DELAY: float = 0.5
    TASK_ERROR_DELAY: float = 2.0

    # Default size threshold for async loading (10 MB)
    LARGE_FILE_THRESHOLD: int = 10 * 1024 * 1024

    # Progress update frequency (every N records)
    PROGRESS_UPDATE_FREQUENCY: int = 100

    def _run_loading_task(
        self,
        filename: str,
        load_fn: Callable[[], Iterator[TagRecord]],
        on_complete: Callable[[list[TagRecord], TagStatistics], None],
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        """Run a loading task with progress screen.

        Args:
            filename: Name of file being loaded (for display).
            load_fn: Function that yields records one at a time.
            on_complete: Called with the records and their statistics on success.
            on_error: Called with error message on failure.
        """
        from tagview.tui.screens.progress import LoadingScreen

        screen = LoadingScreen(filename=filename)
        self.app.push_screen(screen)
        self._run_loading_worker(screen, load_fn, on_complete, on_error)

    @work(thread=True)
    def _run_loading_worker(
        self,
        screen: "LoadingScreen",
        load_fn: Callable[[], Iterator[TagRecord]],
        on_complete: Callable[[list[TagRecord], TagStatistics], None],
        on_error: Callable[[str], None] | None,
    ) -> None:
        """Background worker for loading tasks."""
        records: list[TagRecord] = []

        try:
            self.app.call_from_thread(screen.update_status, "Loading records...")

            for i, record in enumerate(load_fn()):
                records.append(record)
                if i % self.PROGRESS_UPDATE_FREQUENCY == 0:
                    self.app.call_from_thread(screen.update_loaded_count, i + 1)

            self.app.call_from_thread(screen.update_status, "Aggregating tags...")
            stats = compute_statistics(records)

            self.app.call_from_thread(
                screen.set_complete,
                f"Loaded {len(records):,} records",
                f"{len(stats):,} distinct tags",
            )

            time.sleep(self.TASK_COMPLETION_DELAY)
            self.app.call_from_thread(self.app.pop_screen)
            self.app.call_from_thread(on_complete, records, stats)

        except Exception as e:
            logger.exception("Loading %s failed", screen.filename)
            error_msg = str(e)
            self.app.call_from_thread(screen.set_error, f"Error: {error_msg}")
            time.sleep(self.TASK_ERROR_DELAY)
            self.app.call_from_thread(self.app.pop_screen)

            if on_error:
                self.app.call_from_thread(on_error, error_msg)

    @staticmethod
    def should_load_async(path: str, threshold: int | None = None) -> bool:
        """Check if an input should be loaded asynchronously based on size.

        A directory counts with the total size of its supported files.

        Args:
            path: Path to the file or directory.
            threshold: Size threshold in bytes. Uses LARGE_FILE_THRESHOLD if None.

        Returns:
            True if the input is larger than threshold.
        """
        if threshold is None:
            threshold = BackgroundTaskMixin.LARGE_FILE_THRESHOLD

        if os.path.isdir(path):
            return sum(f["size"] for f in discover_data_files(path)) > threshold

        try:
            return os.path.getsize(path) > threshold
        except OSError:
            return False
