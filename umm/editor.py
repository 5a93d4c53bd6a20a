"""Editor argument conventions and launch.

Editors differ in how they accept a line to jump to. The convention is looked
up by the editor's executable base name; unknown editors get ``+N path``.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Callable, Sequence

from .errors import ConfigurationError
from .selection import ResolvedTarget

logger = logging.getLogger(__name__)

PLUS_LINE = "plus-line"
GOTO = "goto"
PATH_SUFFIX = "path-suffix"

EDITOR_CONVENTIONS: dict[str, str] = {
    "vim": PLUS_LINE,
    "vi": PLUS_LINE,
    "nvim": PLUS_LINE,
    "nano": PLUS_LINE,
    "micro": PLUS_LINE,
    "emacs": PLUS_LINE,
    "emacsclient": PLUS_LINE,
    "code": GOTO,
    "code-insiders": GOTO,
    "cursor": GOTO,
    "agy": GOTO,
    "subl": PATH_SUFFIX,
    "sublime_text": PATH_SUFFIX,
}


def split_editor_command(editor: str) -> list[str]:
    """Split an editor setting such as ``"code -w"`` into argv words."""
    try:
        return shlex.split(editor)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid editor command: {editor}") from exc


def editor_base_name(editor: str) -> str:
    words = split_editor_command(editor)
    program = words[0] if words else editor
    return Path(program).name


def build_editor_args(editor: str, path: Path | str, line_number: int | None = None) -> list[str]:
    """Return the arguments that open ``path`` at ``line_number`` in ``editor``."""
    path_text = str(path)
    if line_number is None:
        return [path_text]
    convention = EDITOR_CONVENTIONS.get(editor_base_name(editor), PLUS_LINE)
    if convention == GOTO:
        return ["--goto", f"{path_text}:{line_number}"]
    if convention == PATH_SUFFIX:
        return [f"{path_text}:{line_number}"]
    return [f"+{line_number}", path_text]


def build_editor_command(editor: str, targets: Sequence[ResolvedTarget]) -> list[str]:
    """Full argv: the primary target with its line jump, then the rest."""
    if not targets:
        return []
    primary, *secondary = targets
    argv = split_editor_command(editor)
    argv.extend(build_editor_args(editor, primary.path, primary.line_number))
    argv.extend(str(target.path) for target in secondary)
    return argv


def launch_editor(
    editor: str,
    targets: Sequence[ResolvedTarget],
    run: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> int:
    """Open ``targets`` in ``editor`` and return the editor's exit status."""
    argv = build_editor_command(editor, targets)
    if len(targets) == 1:
        logger.info("Opening %s in %s", targets[0].path, editor, extra={"success": True})
    else:
        logger.info("Opening %d files in %s", len(targets), editor, extra={"success": True})
    proc = run(argv, check=False)
    return proc.returncode
