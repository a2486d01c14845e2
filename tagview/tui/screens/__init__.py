"""Reusable screen components for the TUI application."""

from tagview.tui.screens.progress import (
    ProgressScreen,
    LoadingScreen,
)

__all__ = [
    "ProgressScreen",
    "LoadingScreen",
]
