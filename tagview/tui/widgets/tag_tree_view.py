"""
Tag tree widget.

Draws the rows a TreeNavigator hands out for the widget's current height and
maps key bindings onto navigator commands. The widget keeps no tree state of
its own; swapping the navigator swaps the whole tree.
"""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.binding import Binding
from textual.message import Message
from textual.widget import Widget

from tagview.tree import NodeId, TreeNavigator, WindowRow


class TagTreeView(Widget, can_focus=True):
    """Keyboard-driven view over one tag tree."""

    DEFAULT_CSS = """
    TagTreeView {
        height: 1fr;
        background: $surface;
        padding: 0 1;
    }

    TagTreeView > .tag-tree--cursor {
        background: $secondary;
        color: $text;
        text-style: bold;
    }

    TagTreeView > .tag-tree--branch {
        color: $accent;
    }
    """

    COMPONENT_CLASSES = {"tag-tree--cursor", "tag-tree--branch"}

    BINDINGS = [
        Binding("j,down,ctrl+n", "cursor_down", "Down", show=False),
        Binding("k,up,ctrl+p", "cursor_up", "Up", show=False),
        Binding("ctrl+d", "half_page_down", "Half page down", show=False),
        Binding("ctrl+u", "half_page_up", "Half page up", show=False),
        Binding("ctrl+f,pagedown", "page_down", "Page down", show=False),
        Binding("ctrl+b,pageup", "page_up", "Page up", show=False),
        Binding("g", "first", "First", show=False),
        Binding("G", "last", "Last", show=False),
        Binding("enter,space", "toggle", "Toggle", show=True),
        Binding("l,right", "expand_or_enter", "Expand", show=False),
        Binding("h,left", "collapse_or_leave", "Collapse", show=False),
        Binding("H,shift+left", "parent", "Parent", show=False),
        Binding("L,shift+right", "first_child", "First child", show=False),
        Binding("J,shift+down", "next_sibling", "Next sibling", show=False),
        Binding("K,shift+up", "prev_sibling", "Previous sibling", show=False),
        Binding("0,circumflex_accent", "first_sibling", "First sibling", show=False),
        Binding("dollar_sign", "last_sibling", "Last sibling", show=False),
        Binding("e", "expand_siblings", "Expand siblings", show=False),
        Binding("c", "collapse_siblings", "Collapse siblings", show=False),
        Binding("E", "expand_recursive", "Expand all", show=False),
        Binding("C", "collapse_recursive", "Collapse all", show=False),
    ]

    class Navigated(Message):
        """Posted after a key command ran against the tree."""

        def __init__(self, description: str, changed: bool) -> None:
            super().__init__()
            self.description = description
            self.changed = changed

    def __init__(
        self,
        navigator: TreeNavigator | None = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self._navigator = navigator

    @property
    def navigator(self) -> TreeNavigator | None:
        return self._navigator

    def set_navigator(self, navigator: TreeNavigator) -> None:
        """Install the tree to browse, replacing the previous one."""
        self._navigator = navigator
        self.refresh()

    @property
    def page_size(self) -> int:
        return max(self.size.height, 1)

    def window(self) -> list[WindowRow]:
        if self._navigator is None:
            return []
        return self._navigator.visible_window(self.page_size)

    def render(self) -> Text:
        rows = self.window()
        if not rows:
            return Text("No records loaded", style="dim")

        cursor_style = self.get_component_rich_style("tag-tree--cursor", partial=True)
        branch_style = self.get_component_rich_style("tag-tree--branch", partial=True)

        text = Text(no_wrap=True, overflow="ellipsis")
        for index, row in enumerate(rows):
            if index:
                text.append("\n")
            if row.has_children:
                marker = "▼ " if row.is_open else "▶ "
            else:
                marker = "  "
            line = Text("  " * row.level)
            line.append(marker, style=branch_style)
            line.append(row.label)
            if row.is_selected:
                line.stylize(cursor_style)
            text.append_text(line)
        return text

    def _run(self, command: Callable[[TreeNavigator], bool], description: str) -> bool:
        if self._navigator is None:
            return False
        changed = command(self._navigator)
        if changed:
            self.refresh()
        self.post_message(self.Navigated(description, changed))
        return changed

    def search(self, text: str, forward: bool = True, start: NodeId | None = None) -> bool:
        """Select the next (or previous) node whose label contains ``text``.

        With ``start`` the search runs from that node instead of the
        selection, and empty text returns the selection to it.
        """
        if not text.strip():
            if start is not None:
                return self.jump_to(start, "nothing to search for")
            return self._run(lambda nav: False, "nothing to search for")
        direction = "next" if forward else "previous"
        return self._run(
            lambda nav: nav.search(text, forward=forward, start=start),
            f"{direction} match for '{text}'",
        )

    def jump_to(self, node_id: NodeId, description: str) -> bool:
        return self._run(lambda nav: nav.select(node_id), description)

    # Key commands

    def action_cursor_down(self) -> None:
        self._run(lambda nav: nav.select_next(), "down")

    def action_cursor_up(self) -> None:
        self._run(lambda nav: nav.select_prev(), "up")

    def action_half_page_down(self) -> None:
        step = max(self.page_size // 2, 1)
        self._run(lambda nav: nav.select_next(step), "ctrl + d -> half page down")

    def action_half_page_up(self) -> None:
        step = max(self.page_size // 2, 1)
        self._run(lambda nav: nav.select_prev(step), "ctrl + u -> half page up")

    def action_page_down(self) -> None:
        self._run(
            lambda nav: nav.select_next(self.page_size),
            "ctrl + f/page-down -> one screen down",
        )

    def action_page_up(self) -> None:
        self._run(
            lambda nav: nav.select_prev(self.page_size),
            "ctrl + b/page-up -> one screen up",
        )

    def action_first(self) -> None:
        self._run(lambda nav: nav.select_first(), "g -> move to first")

    def action_last(self) -> None:
        self._run(lambda nav: nav.select_last(), "G -> move to last")

    def action_toggle(self) -> None:
        self._run(lambda nav: nav.toggle_selected(), "toggled node")

    def action_expand_or_enter(self) -> None:
        self._run(lambda nav: nav.expand_or_select_first_child(), "l/→ -> move into tree")

    def action_collapse_or_leave(self) -> None:
        self._run(lambda nav: nav.collapse_or_select_parent(), "h/← -> move up tree")

    def action_parent(self) -> None:
        self._run(lambda nav: nav.select_parent(), "H/shift+← -> move to parent")

    def action_first_child(self) -> None:
        self._run(lambda nav: nav.select_first_child(), "L/shift+→ -> move to first child")

    def action_next_sibling(self) -> None:
        self._run(lambda nav: nav.select_next_sibling(), "J/shift+↓ -> move to next sibling")

    def action_prev_sibling(self) -> None:
        self._run(lambda nav: nav.select_prev_sibling(), "K/shift+↑ -> move to previous sibling")

    def action_first_sibling(self) -> None:
        self._run(lambda nav: nav.select_first_sibling(), "0/^ -> move to first sibling")

    def action_last_sibling(self) -> None:
        self._run(lambda nav: nav.select_last_sibling(), "$ -> move to last sibling")

    def action_expand_siblings(self) -> None:
        self._run(
            lambda nav: nav.expand_siblings_of_selected(),
            "e -> expand current node and siblings",
        )

    def action_collapse_siblings(self) -> None:
        self._run(
            lambda nav: nav.collapse_siblings_of_selected(),
            "c -> collapse current node and siblings",
        )

    def action_expand_recursive(self) -> None:
        self._run(
            lambda nav: nav.expand_selected_recursive(),
            "shift + E -> expand current node recursively",
        )

    def action_collapse_recursive(self) -> None:
        self._run(
            lambda nav: nav.collapse_selected_recursive(),
            "shift + C -> collapse current node recursively",
        )
