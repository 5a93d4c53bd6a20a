"""ripgrep invocation for content search.

Builds the argv for one self-contained ``rg`` run, the shell form the picker
re-runs on every query change, and the non-interactive first-match lookup.
"""

from __future__ import annotations

import logging
import shutil
import subprocess

from ..config import SearchConfig
from ..quoting import join_command, quote

logger = logging.getLogger(__name__)

RG = "rg"
QUERY_PLACEHOLDER = "{q}"


def build_search_flags(config: SearchConfig) -> list[str]:
    """Return rg flags for ``config`` in a fixed, deterministic order."""
    flags = [
        "--line-number",
        "--no-heading",
        "--smart-case",
    ]
    if config.interactive:
        flags.append("--color=always")
    if config.max_depth is not None:
        flags.extend(["--max-depth", str(config.max_depth)])
    for glob in config.exclude_globs:
        flags.extend(["--glob", f"!{glob}"])
    if config.include_ignored:
        flags.extend(["--no-ignore", "--hidden"])
    return flags


def build_search_args(config: SearchConfig, query: str | None = None) -> list[str]:
    """Return the full argv for searching ``query`` (default: the config pattern).

    Query and root are the two positionals after ``--`` so patterns starting
    with ``-`` are never read as flags.
    """
    pattern = config.pattern if query is None else query
    return [RG, *build_search_flags(config), "--", pattern, str(config.root)]


def build_search_shell_command(config: SearchConfig, query_placeholder: str = QUERY_PLACEHOLDER) -> str:
    """Return the shell command the picker runs with the live query substituted.

    fzf replaces ``{q}`` with an already-quoted query; every other value is
    quoted here. No-match and error exits are swallowed so an empty result is
    a normal display state.
    """
    flags = join_command([RG, *build_search_flags(config)])
    return f"{flags} -- {query_placeholder} {quote(str(config.root))} 2>/dev/null || true"


def build_initial_shell_command(config: SearchConfig) -> str:
    """Shell command for the startup population with the initial pattern."""
    return build_search_shell_command(config, quote(config.pattern))


def first_match(config: SearchConfig) -> str | None:
    """Run rg non-interactively and return the first output row, if any.

    The process is killed as soon as one row has been read.
    """
    if shutil.which(RG) is None:
        return None
    args = build_search_args(config)
    logger.debug("running %s", args)
    proc = subprocess.Popen(
        args,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        text=True,
        encoding="utf-8",
        errors="replace",
    )
    first: str | None = None
    try:
        assert proc.stdout is not None
        for raw in proc.stdout:
            line = raw.rstrip("\r\n")
            if line:
                first = line
                break
    finally:
        if proc.poll() is None:
            proc.kill()
        proc.communicate()
    return first
