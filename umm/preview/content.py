"""Preview rendering for content-search rows.

Prefers ``bat`` for a highlighted window around the target line and falls back
to a numbered excerpt highlighted in-process. Both paths return an empty string
when the file vanished between selection and render.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from ..rows import strip_ansi
from ..tools import ContentPreviewTool
from .syntax import colorize_source, read_text, sanitize_terminal_text

BAT_CONTEXT_LINES = 15
EXCERPT_BEFORE = 10
EXCERPT_AFTER = 20
LINE_NUMBER_WIDTH = 4
TARGET_LINE_SGR = "\033[7m"
RESET_SGR = "\033[0m"


def bat_preview_args(path: Path, line: int) -> list[str]:
    start = max(1, line - BAT_CONTEXT_LINES)
    end = line + BAT_CONTEXT_LINES
    return [
        "bat",
        "--color=always",
        "--style=numbers,header",
        "--highlight-line",
        str(line),
        "--line-range",
        f"{start}:{end}",
        str(path),
    ]


def excerpt_bounds(line: int) -> tuple[int, int]:
    """Return the inclusive 1-based line window shown by the plain preview."""
    return max(1, line - EXCERPT_BEFORE), line + EXCERPT_AFTER


def split_source_lines(source: str) -> list[str]:
    """Split on ``\\n`` only, numbering lines the way ripgrep does."""
    lines = source.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [text.rstrip("\r") for text in lines]


def render_excerpt(path: Path, line: int, style: str = "monokai", color: bool = True) -> str:
    """Render a numbered excerpt around ``line``, marking the target line."""
    try:
        source = read_text(path)
    except OSError:
        return ""

    start, end = excerpt_bounds(line)
    lines = split_source_lines(source)[start - 1 : end]
    if not lines:
        return ""
    excerpt = sanitize_terminal_text("\n".join(lines) + "\n")
    if color:
        excerpt = colorize_source(excerpt, path, style)

    rows = excerpt.split("\n")
    if rows and not strip_ansi(rows[-1]):
        rows.pop()
    out: list[str] = []
    for offset, text in enumerate(rows):
        number = start + offset
        label = f"{number:>{LINE_NUMBER_WIDTH}}"
        if color and number == line:
            label = f"{TARGET_LINE_SGR}{label}{RESET_SGR}"
        out.append(f"{label} {text}\n")
    return "".join(out)


def render_bat(path: Path, line: int) -> str:
    try:
        proc = subprocess.run(
            bat_preview_args(path, line),
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError:
        return ""
    if proc.returncode != 0:
        return ""
    return proc.stdout


def render_content_preview(
    path: Path,
    line: int | None,
    tool: ContentPreviewTool,
    style: str = "monokai",
    color: bool = True,
) -> str:
    """Render the preview text for one ``path:line`` row."""
    if not path.is_file():
        return ""
    target_line = line if line is not None and line > 0 else 1
    if tool is ContentPreviewTool.BAT:
        return render_bat(path, target_line)
    return render_excerpt(path, target_line, style=style, color=color)
