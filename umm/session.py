"""Interactive session controller.

The picker (fzf) owns the event loop: typing, navigation, multi-select and the
preview pane all happen inside its process. This module configures that process
with command templates and interprets how it exits.

Content mode disables fzf's own filtering and re-runs ripgrep on every query
change, debounced with a short ``sleep`` in the reload binding. fzf terminates
an in-flight reload when a newer one starts, so the list always converges on
the latest query. Every reload is a fresh, self-contained rg invocation.

Repository mode feeds the aggregated object list on stdin and keeps fzf's
filtering on.

Previews call back into ``python -m umm`` with the row fields as arguments.
"""

from __future__ import annotations

import contextlib
import logging
import subprocess
import sys
from pathlib import Path
from typing import Callable, Iterator

from .config import SearchConfig, Settings
from .errors import EmptyRepository, PickerFailed
from .git.repo import aggregate, format_entries
from .quoting import join_command
from .search.command import build_initial_shell_command, build_search_shell_command
from .selection import split_selection
from .tools import Capabilities, DiffPager

logger = logging.getLogger(__name__)

FZF = "fzf"
EXIT_SELECTED = 0
EXIT_NO_MATCH = 1
EXIT_INTERRUPTED = 130
MULTI_SELECT_BINDING = "tab:toggle+down,shift-tab:toggle+up"
TOGGLE_PREVIEW_BINDING = "ctrl-/:toggle-preview"
REPOSITORY_HEADER = "COMMITS | BRANCHES | TAGS | REFLOG | STASHES"

Runner = Callable[..., subprocess.Popen]


def self_command(executable: str | None = None) -> list[str]:
    """argv prefix that re-enters this package from a picker callback."""
    return [executable or sys.executable, "-m", "umm"]


def debounced(command: str, seconds: float) -> str:
    if seconds <= 0:
        return command
    return f"sleep {seconds:g}; {command}"


def content_preview_command(settings: Settings, capabilities: Capabilities, executable: str | None = None) -> str:
    prefix = join_command([*self_command(executable), "--preview-file"])
    options = join_command(["--preview-tool", capabilities.content_preview.value, "--style", settings.style])
    return f"{prefix} {{1}} {{2}} {options}"


def repository_preview_command(repo: Path, diff_pager: DiffPager, executable: str | None = None) -> str:
    prefix = join_command([*self_command(executable), "--preview-git"])
    options = join_command(["--diff-pager", diff_pager.value, "--root", str(repo)])
    return f"{prefix} {{}} {options}"


def build_content_picker_args(
    config: SearchConfig,
    settings: Settings,
    capabilities: Capabilities,
    executable: str | None = None,
) -> list[str]:
    reload_command = debounced(build_search_shell_command(config), settings.debounce_seconds)
    return [
        FZF,
        "--ansi",
        "--disabled",
        f"--query={config.pattern}",
        "--delimiter=:",
        "--prompt=> Search: ",
        "--info=inline",
        f"--preview={content_preview_command(settings, capabilities, executable)}",
        f"--preview-window={settings.preview_window}",
        "--bind",
        f"start:reload:{build_initial_shell_command(config)}",
        "--bind",
        f"change:reload:{reload_command}",
        "--multi",
        "--bind",
        MULTI_SELECT_BINDING,
        "--bind",
        TOGGLE_PREVIEW_BINDING,
    ]


def build_repository_picker_args(
    repo: Path,
    pattern: str,
    settings: Settings,
    diff_pager: DiffPager,
    executable: str | None = None,
) -> list[str]:
    return [
        FZF,
        "--ansi",
        "--no-sort",
        "--tiebreak=index",
        f"--query={pattern}",
        "--delimiter=:",
        "--prompt=> Git: ",
        "--info=inline",
        f"--preview={repository_preview_command(repo, diff_pager, executable)}",
        f"--preview-window={settings.preview_window}",
        "--bind",
        TOGGLE_PREVIEW_BINDING,
        f"--header={REPOSITORY_HEADER} | Pager: {diff_pager.label}",
    ]


@contextlib.contextmanager
def picker_process(args: list[str], feed_stdin: bool, runner: Runner = subprocess.Popen) -> Iterator[subprocess.Popen]:
    """Start the picker and guarantee it is gone when the block exits."""
    proc = runner(
        args,
        stdin=subprocess.PIPE if feed_stdin else subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
    )
    try:
        yield proc
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.wait()


def run_picker(args: list[str], input_text: str | None = None, runner: Runner = subprocess.Popen) -> list[str]:
    """Run the picker to completion and return the confirmed rows.

    Cancellation and "nothing matched" both return an empty list.
    """
    logger.debug("starting picker %s", args)
    with picker_process(args, input_text is not None, runner) as proc:
        stdout, _stderr = proc.communicate(input_text)
        returncode = proc.returncode

    if returncode == EXIT_SELECTED:
        return split_selection(stdout or "")
    if returncode in (EXIT_NO_MATCH, EXIT_INTERRUPTED):
        return []
    raise PickerFailed(returncode)


def run_content_session(
    config: SearchConfig,
    settings: Settings,
    capabilities: Capabilities,
    runner: Runner = subprocess.Popen,
) -> list[str]:
    args = build_content_picker_args(config, settings, capabilities)
    return run_picker(args, runner=runner)


def run_repository_session(
    repo: Path,
    pattern: str,
    settings: Settings,
    diff_pager: DiffPager,
    runner: Runner = subprocess.Popen,
) -> list[str]:
    entries = aggregate(repo)
    if not entries:
        raise EmptyRepository()
    args = build_repository_picker_args(repo, pattern, settings, diff_pager)
    return run_picker(args, input_text=format_entries(entries), runner=runner)
