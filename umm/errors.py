"""Error taxonomy for umm.

Every fatal condition derives from ``UmmError`` so the CLI can report it with
one message and exit code 1. Preview failures are not modeled here: previews
degrade to inline text and never raise.
"""

from __future__ import annotations

from pathlib import Path


class UmmError(Exception):
    """Base class for user-facing failures."""

    exit_code = 1


class ConfigurationError(UmmError):
    """Bad flag value, missing value, or invalid search configuration."""


class DependencyMissing(UmmError):
    """One or more required external tools are not on ``PATH``."""

    def __init__(self, tools: list[str]) -> None:
        self.tools = list(tools)
        super().__init__("Missing required dependencies: " + ", ".join(self.tools))


class NotARepository(UmmError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Not a git repository: {path}")


class NoMatchesFound(UmmError):
    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f"No matches found for pattern: {pattern}")


class NoValidTargets(UmmError):
    def __init__(self) -> None:
        super().__init__("No valid files to open")


class PickerFailed(UmmError):
    """The picker exited with an internal error rather than select/cancel."""

    def __init__(self, returncode: int) -> None:
        self.returncode = returncode
        super().__init__(f"fzf failed with exit code {returncode}")


class EmptyRepository(UmmError):
    def __init__(self) -> None:
        super().__init__("No git objects found in repository")
