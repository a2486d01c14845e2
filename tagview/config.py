"""
Runtime configuration for the tag browser.

Defaults live in module constants; ``ViewerConfig.from_env()`` applies
``TAGVIEW_*`` environment overrides, and the CLI applies its flags on top via
``dataclasses.replace``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


# Values at or above this length are truncated in source-order leaves
MAX_VALUE_LENGTH = 150

# Widest value cell in merged (by tag) leaves before truncation
MERGED_VALUE_WIDTH = 64

# Pad width used when a tag mixes defined and undefined lengths
PLACEHOLDER_WIDTH = 12

SORT_MODES = ("source", "tag", "diff")

DEFAULT_LOG_DIR = "~/.local/share/tagview/logs"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer (got {raw!r})") from e
    if value < 1:
        raise ValueError(f"{name} must be positive (got {value})")
    return value


@dataclass(frozen=True)
class ViewerConfig:
    """Resolved viewer settings.

    Attributes:
        max_value_length: Values this long or longer are truncated in source-order leaves.
        merged_value_width: Maximum width of the value cell in merged leaves.
        placeholder_width: Pad width for tags with undefined-length values.
        default_sort: Sort mode installed at startup ('source', 'tag' or 'diff').
        log_level: Name of the logging level.
        log_file: Log file path; None picks a file under DEFAULT_LOG_DIR.
    """

    max_value_length: int = MAX_VALUE_LENGTH
    merged_value_width: int = MERGED_VALUE_WIDTH
    placeholder_width: int = PLACEHOLDER_WIDTH
    default_sort: str = "source"
    log_level: str = "WARNING"
    log_file: str | None = None

    def __post_init__(self) -> None:
        if self.default_sort not in SORT_MODES:
            raise ValueError(
                f"Unknown sort mode '{self.default_sort}'. "
                f"Expected one of: {', '.join(SORT_MODES)}"
            )

    @classmethod
    def from_env(cls) -> "ViewerConfig":
        """Build a config from ``TAGVIEW_*`` environment variables."""
        return cls(
            max_value_length=_env_int("TAGVIEW_MAX_VALUE_LENGTH", MAX_VALUE_LENGTH),
            merged_value_width=_env_int("TAGVIEW_MERGED_VALUE_WIDTH", MERGED_VALUE_WIDTH),
            placeholder_width=_env_int("TAGVIEW_PLACEHOLDER_WIDTH", PLACEHOLDER_WIDTH),
            default_sort=os.environ.get("TAGVIEW_SORT", "source").strip().lower(),
            log_level=os.environ.get("TAGVIEW_LOG_LEVEL", "WARNING").strip().upper(),
            log_file=os.environ.get("TAGVIEW_LOG_FILE") or None,
        )

    def resolved_log_dir(self) -> Path:
        return Path(os.environ.get("TAGVIEW_LOG_DIR", os.path.expanduser(DEFAULT_LOG_DIR)))


DEFAULT_CONFIG = ViewerConfig()
