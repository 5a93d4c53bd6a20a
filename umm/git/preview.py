"""Preview dispatch for repository rows.

Each row type maps to one git command whose output is optionally piped through
the session's diff pager. Lookups that fail produce a short message instead of
raising, since a preview must never end the picker session.
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path

from ..rows import RepositoryRow, parse_repository_line
from ..tools import DiffPager
from .repo import BRANCH, COMMIT, REFLOG, STASH, TAG, run_git

BRANCH_LOG_LIMIT = 10
_STASH_REF_RE = re.compile(r"stash@\{[0-9]+\}")
_SHOW_LABELS = {
    COMMIT: "commit",
    TAG: "tag",
    REFLOG: "reflog entry",
}


def leading_token(payload: str) -> str:
    parts = payload.split()
    return parts[0] if parts else ""


def branch_name(payload: str) -> str:
    """Drop the current-branch marker and return the first token."""
    return leading_token(payload.lstrip("* "))


def stash_ref(payload: str) -> str:
    match = _STASH_REF_RE.search(payload)
    return match.group(0) if match else ""


def _could_not_show(label: str, name: str) -> str:
    return f"Error: Could not show {label} {name}\n"


def pipe_through_pager(text: str, diff_pager: DiffPager) -> str:
    """Render ``text`` with the pager command, passing it through on failure."""
    command = diff_pager.command
    if command is None:
        return text
    try:
        proc = subprocess.run(
            command,
            input=text,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError:
        return text
    if proc.returncode != 0:
        return text
    return proc.stdout


def _git_output(repo: Path, args: list[str]) -> str | None:
    proc = run_git(repo, args)
    if proc is None or proc.returncode != 0:
        return None
    return proc.stdout


def preview_show(repo: Path, type_tag: str, payload: str, diff_pager: DiffPager) -> str:
    """Preview a commit, tag or reflog entry.

    The plain viewer gets a ``--stat`` summary; rendered diffs get the full patch.
    """
    label = _SHOW_LABELS[type_tag]
    ref = leading_token(payload)
    if not ref:
        return _could_not_show(label, ref)
    if diff_pager is DiffPager.PLAIN:
        output = _git_output(repo, ["show", "--color=always", "--stat", ref])
        return output if output is not None else _could_not_show(label, ref)
    output = _git_output(repo, ["show", f"--color={diff_pager.git_color}", ref])
    if output is None:
        return _could_not_show(label, ref)
    return pipe_through_pager(output, diff_pager)


def preview_branch(repo: Path, payload: str) -> str:
    name = branch_name(payload)
    header = f"Recent commits on branch: {name}\n" + "-" * 40 + "\n"
    if not name:
        return header + _could_not_show("branch", name)
    output = _git_output(repo, ["log", "--oneline", "--color=always", f"-{BRANCH_LOG_LIMIT}", name])
    return header + (output if output is not None else _could_not_show("branch", name))


def preview_stash(repo: Path, payload: str, diff_pager: DiffPager) -> str:
    """Stash previews always show the full patch."""
    ref = stash_ref(payload)
    if not ref:
        return _could_not_show("stash", ref)
    output = _git_output(repo, ["stash", "show", "-p", f"--color={diff_pager.git_color}", ref])
    if output is None:
        return _could_not_show("stash", ref)
    return pipe_through_pager(output, diff_pager)


def preview_entry(repo: Path, row: RepositoryRow, diff_pager: DiffPager) -> str:
    if row.type_tag in _SHOW_LABELS:
        return preview_show(repo, row.type_tag, row.payload, diff_pager)
    if row.type_tag == BRANCH:
        return preview_branch(repo, row.payload)
    if row.type_tag == STASH:
        return preview_stash(repo, row.payload, diff_pager)
    return f"Unknown type: {row.type_tag}\n"


def preview_line(repo: Path, line: str, diff_pager: DiffPager) -> str:
    """Parse a raw picker row and dispatch its preview."""
    return preview_entry(repo, parse_repository_line(line), diff_pager)
