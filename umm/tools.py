"""External tool probing.

Tool availability is probed once per session with ``shutil.which`` and the
result is threaded through preview and session code as an immutable value.
"""

from __future__ import annotations

import enum
import shutil
from dataclasses import dataclass
from typing import Callable

from .errors import DependencyMissing

Which = Callable[[str], "str | None"]

INSTALL_HINT = "Install with: brew install ripgrep fzf bat neovim"


class DiffPager(enum.Enum):
    """How repository previews render diff text, in probe priority order."""

    DELTA = "delta"
    BAT = "bat"
    PLAIN = "plain"

    @property
    def command(self) -> list[str] | None:
        """argv that diff text is piped into, or ``None`` for passthrough."""
        if self is DiffPager.DELTA:
            return ["delta"]
        if self is DiffPager.BAT:
            return ["bat", "--style=numbers,changes", "--language=diff", "--color=always"]
        return None

    @property
    def git_color(self) -> str:
        """delta recolors raw diff text itself, so git must not color it."""
        return "never" if self is DiffPager.DELTA else "always"

    @property
    def label(self) -> str:
        return "cat" if self is DiffPager.PLAIN else self.value


class ContentPreviewTool(enum.Enum):
    BAT = "bat"
    PLAIN = "plain"


@dataclass(frozen=True)
class Capabilities:
    content_preview: ContentPreviewTool
    diff_pager: DiffPager


def probe_diff_pager(which: Which = shutil.which) -> DiffPager:
    if which("delta") is not None:
        return DiffPager.DELTA
    if which("bat") is not None:
        return DiffPager.BAT
    return DiffPager.PLAIN


def probe_capabilities(which: Which = shutil.which) -> Capabilities:
    content = ContentPreviewTool.BAT if which("bat") is not None else ContentPreviewTool.PLAIN
    return Capabilities(content_preview=content, diff_pager=probe_diff_pager(which))


def missing_tools(tools: list[tuple[str, str]], which: Which = shutil.which) -> list[str]:
    """Return display names of every ``(executable, display)`` pair not found."""
    return [display for executable, display in tools if which(executable) is None]


def require_tools(tools: list[tuple[str, str]], which: Which = shutil.which) -> None:
    """Raise one ``DependencyMissing`` naming every absent tool."""
    missing = missing_tools(tools, which)
    if missing:
        raise DependencyMissing(missing)
