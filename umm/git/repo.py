"""Repository object aggregation for git search mode.

Collects commits, branches, tags, reflog entries and stashes into one
type-prefixed, line-oriented list. Every source is optional: a failing or
empty source contributes zero rows without aborting the others.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from ..errors import NotARepository

logger = logging.getLogger(__name__)

COMMIT = "commit"
BRANCH = "branch"
TAG = "tag"
REFLOG = "reflog"
STASH = "stash"
TYPE_ORDER = (COMMIT, BRANCH, TAG, REFLOG, STASH)

COMMIT_LIMIT = 1000
REFLOG_LIMIT = 100
TAG_WIDTH = len("reflog:  ")
GIT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class RepositoryObjectEntry:
    type_tag: str
    payload: str

    def format(self) -> str:
        """Render as ``type:`` padded to a common width, then the payload."""
        return f"{self.type_tag}:".ljust(TAG_WIDTH) + self.payload


def run_git(
    repo: Path,
    args: list[str],
    timeout_seconds: float = GIT_TIMEOUT_SECONDS,
) -> subprocess.CompletedProcess[str] | None:
    """Execute a git subcommand with timeout and tolerant failure handling."""
    try:
        return subprocess.run(
            ["git", "-C", str(repo), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.debug("git %s failed: %s", " ".join(args), exc)
        return None


def is_repository(path: Path) -> bool:
    proc = run_git(path, ["rev-parse", "--git-dir"])
    return proc is not None and proc.returncode == 0


def validate_repository(path: Path) -> Path:
    """Return the absolute repository path, or raise ``NotARepository``."""
    resolved = path.resolve()
    if not is_repository(resolved):
        raise NotARepository(resolved)
    return resolved


def _source_commands(color: bool) -> list[tuple[str, list[str]]]:
    color_flag = "--color=always" if color else "--color=never"
    return [
        (COMMIT, ["log", "--oneline", "--all", color_flag, "-n", str(COMMIT_LIMIT)]),
        (BRANCH, ["branch", "-a", color_flag]),
        (TAG, ["tag", "-l", "--format=%(refname:short) %(subject)"]),
        (REFLOG, ["reflog", color_flag, "-n", str(REFLOG_LIMIT)]),
        (STASH, ["stash", "list"]),
    ]


def collect(repo: Path, type_tag: str, args: list[str]) -> list[RepositoryObjectEntry]:
    """Run one source command; failures and empty output yield no entries."""
    proc = run_git(repo, args)
    if proc is None or proc.returncode != 0:
        return []
    return [RepositoryObjectEntry(type_tag, line.rstrip()) for line in proc.stdout.splitlines() if line.strip()]


def aggregate(repo: Path, color: bool = True) -> list[RepositoryObjectEntry]:
    """Enumerate all repository objects grouped by type in ``TYPE_ORDER``.

    Entries are never cached; each call re-reads the repository.
    """
    repo = validate_repository(repo)
    entries: list[RepositoryObjectEntry] = []
    for type_tag, args in _source_commands(color):
        entries.extend(collect(repo, type_tag, args))
    return entries


def format_entries(entries: list[RepositoryObjectEntry]) -> str:
    return "".join(entry.format() + "\n" for entry in entries)
