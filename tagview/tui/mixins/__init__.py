"""Mixins for the TUI application."""

from tagview.tui.mixins.background_task import BackgroundTaskMixin

__all__ = [
    "BackgroundTaskMixin",
]
