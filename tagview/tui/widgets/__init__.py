"""TUI widgets for the tag browser."""

from tagview.tui.widgets.help_modal import HelpModal
from tagview.tui.widgets.tag_tree_view import TagTreeView

__all__ = [
    # Tree view
    "TagTreeView",
    # Help modal
    "HelpModal",
]
