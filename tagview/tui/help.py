"""Key reference shown by the help modal."""

from __future__ import annotations

HELP_TITLE = "Tag Browser Help"

HELP_LINES: tuple[str, ...] = (
    "Navigation:",
    "  q/Esc                - Quit",
    "  1                    - Sort tree by filename",
    "  2                    - Sort tree by tags",
    "  3                    - Sort tree by tags, only showing tags with different values",
    "  /                    - Enter search mode (matches are selected while typing)",
    "                         Enter keeps the match, Esc returns to the start",
    "  ?                    - Show help",
    "",
    "  Enter/Space          - Toggle expand/collapse",
    "  j/↓/ctrl+n           - Move down over all visible rows",
    "  k/↑/ctrl+p           - Move up over all visible rows",
    "  h/←                  - Close node or move to parent",
    "  l/→                  - Expand node or move to first child",
    "  H/shift+←            - Move to parent",
    "  L/shift+→            - Move to first child (expand if collapsed)",
    "  J/shift+↓            - Move to next sibling",
    "  K/shift+↑            - Move to previous sibling",
    "  g                    - Move to first row",
    "  G                    - Move to last row",
    "  0/^                  - Move to first sibling",
    "  $                    - Move to last sibling",
    "  c                    - Collapse current node and siblings",
    "  e                    - Expand current node and siblings",
    "  E                    - Expand current node recursively",
    "  C                    - Collapse current node recursively",
    "",
    "  ctrl+u               - Move half page up",
    "  ctrl+d               - Move half page down",
    "  ctrl+f/page-down     - Move page down",
    "  ctrl+b/page-up       - Move page up",
    "",
    "  n                    - Search for next occurrence of the last search",
    "  N                    - Search for previous occurrence of the last search",
)


def help_text() -> str:
    return "\n".join(HELP_LINES)
