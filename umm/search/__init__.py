"""Search package exports."""

from __future__ import annotations

from .command import (
    build_initial_shell_command,
    build_search_args,
    build_search_flags,
    build_search_shell_command,
    first_match,
)

__all__ = [
    "build_initial_shell_command",
    "build_search_args",
    "build_search_flags",
    "build_search_shell_command",
    "first_match",
]
