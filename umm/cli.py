"""Command-line front door for umm.

Parses CLI options into a ``SearchConfig``, runs pre-flight checks, and
dispatches into content search, repository search, or one of the preview
callbacks the picker invokes for the highlighted row.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from . import __version__
from .config import SearchConfig, Settings, load_settings
from .editor import launch_editor, split_editor_command
from .errors import ConfigurationError, DependencyMissing, NoMatchesFound, UmmError
from .git.preview import preview_line
from .git.repo import validate_repository
from .logs import configure_logging
from .preview.content import render_content_preview
from .rows import ResultLine, parse_repository_line
from .search.command import first_match
from .selection import resolve
from .session import run_content_session, run_repository_session
from .tools import INSTALL_HINT, ContentPreviewTool, DiffPager, probe_capabilities, probe_diff_pager, require_tools

logger = logging.getLogger(__name__)

EPILOG = """\
environment:
  EDITOR                 Editor to use (default: nvim)
                         Supported: vim, vi, nvim, nano, micro, emacs,
                         code, subl, and more

examples:
  umm                                # Interactive search in current directory
  umm ~/projects                     # Search in ~/projects
  umm -p "function" ~/projects       # Search with initial pattern
  umm -e "*.log" -e "test"           # Exclude log files and test directories
  umm -a                             # Search all files (ignore .gitignore)
  umm -p "TODO" -n ~/src             # Open first match directly
  umm -g -p "fix"                    # Search git objects with initial pattern
  umm -g | cut -d' ' -f1 | xargs git show
"""


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit code 1."""

    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        logger.error("%s", message)
        raise SystemExit(1)


def _nonnegative_int(value: str) -> int:
    """argparse type for non-negative integer values."""
    if not value.isdigit():
        raise argparse.ArgumentTypeError("Option --max-depth must be a number")
    return int(value)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="umm",
        description="umm - Ultimate Multi-file Matcher: interactive search with live preview.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to search (default: current directory).")
    parser.add_argument("--root", default=None, help=argparse.SUPPRESS)
    parser.add_argument("-p", "--pattern", default="", metavar="REGEXP", help="Initial search pattern.")
    parser.add_argument(
        "-e",
        "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Exclude file/directory pattern (gitignore-style glob). Repeatable.",
    )
    parser.add_argument(
        "-a", "--all", action="store_true", help="Search all files (ignore .gitignore, include hidden)."
    )
    parser.add_argument(
        "-g", "--git", action="store_true", help="Search git repository (commits, branches, tags, reflog, stashes)."
    )
    parser.add_argument("-n", "--noui", action="store_true", help="Non-interactive mode, open first match.")
    parser.add_argument("-d", "--max-depth", type=_nonnegative_int, default=None, metavar="N", help="Maximum search depth.")
    parser.add_argument("-v", "--version", action="version", version=f"umm version {__version__}")

    # Picker callbacks.
    parser.add_argument("--preview-file", nargs=2, metavar=("PATH", "LINE"), default=None, help=argparse.SUPPRESS)
    parser.add_argument(
        "--preview-tool",
        choices=[tool.value for tool in ContentPreviewTool],
        default=ContentPreviewTool.PLAIN.value,
        help=argparse.SUPPRESS,
    )
    parser.add_argument("--style", default=None, help=argparse.SUPPRESS)
    parser.add_argument("--preview-git", metavar="ROW", default=None, help=argparse.SUPPRESS)
    parser.add_argument(
        "--diff-pager",
        choices=[pager.value for pager in DiffPager],
        default=DiffPager.PLAIN.value,
        help=argparse.SUPPRESS,
    )
    return parser


def _root_argument(args: argparse.Namespace) -> Path:
    if args.path is not None and args.root is not None:
        raise ConfigurationError("Too many arguments. Expected: umm [OPTIONS] [root_path]")
    return Path(args.path or args.root or ".")


def search_config_from_args(args: argparse.Namespace) -> SearchConfig:
    return SearchConfig(
        root=_root_argument(args),
        pattern=args.pattern,
        exclude_globs=tuple(args.exclude),
        max_depth=args.max_depth,
        include_ignored=args.all,
        interactive=not args.noui,
    )


def required_tools(config: SearchConfig, settings: Settings, git_mode: bool) -> list[tuple[str, str]]:
    if git_mode:
        return [("fzf", "fzf"), ("git", "git")]
    editor_words = split_editor_command(settings.editor)
    editor_program = editor_words[0] if editor_words else settings.editor
    tools = [("rg", "ripgrep (rg)")]
    if config.interactive:
        tools.append(("fzf", "fzf"))
    tools.append((editor_program, settings.editor))
    return tools


def run_file_preview(args: argparse.Namespace) -> int:
    path_text, line_text = args.preview_file
    row = ResultLine(discriminator=path_text, position=line_text)
    sys.stdout.write(
        render_content_preview(
            Path(path_text),
            row.line_number,
            ContentPreviewTool(args.preview_tool),
            style=args.style or "monokai",
        )
    )
    return 0


def run_git_preview(args: argparse.Namespace) -> int:
    repo = _root_argument(args)
    sys.stdout.write(preview_line(repo, args.preview_git, DiffPager(args.diff_pager)))
    return 0


def run_git_search(config: SearchConfig, settings: Settings) -> int:
    if not config.root.is_dir():
        raise ConfigurationError(f"Directory '{config.root}' does not exist")
    require_tools(required_tools(config, settings, git_mode=True))
    repo = validate_repository(config.root)
    rows = run_repository_session(repo, config.pattern, settings, probe_diff_pager())
    if not rows:
        logger.info("Search cancelled")
        return 0
    for row in rows:
        sys.stdout.write(parse_repository_line(row).payload + "\n")
    return 0


def run_content_search(config: SearchConfig, settings: Settings) -> int:
    config.validate()
    require_tools(required_tools(config, settings, git_mode=False))

    if config.interactive:
        rows = run_content_session(config, settings, probe_capabilities())
        if not rows:
            logger.info("Search cancelled")
            return 0
    else:
        row = first_match(config)
        if row is None:
            raise NoMatchesFound(config.pattern)
        logger.info("Found match, opening in %s...", settings.editor, extra={"success": True})
        rows = [row]

    targets = resolve(rows)
    return launch_editor(settings.editor, targets)


def run(args: argparse.Namespace) -> int:
    if args.preview_file is not None:
        return run_file_preview(args)
    if args.preview_git is not None:
        return run_git_preview(args)

    settings = load_settings()
    config = search_config_from_args(args)
    if args.git:
        return run_git_search(config, settings)
    return run_content_search(config, settings)


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments and run the requested search.

    Exits with status 1 on any ``UmmError``; cancellation is a normal exit.
    """
    configure_logging()
    args = build_parser().parse_args(argv)
    try:
        code = run(args)
    except DependencyMissing as exc:
        logger.error("Missing required dependencies:")
        for tool in exc.tools:
            logger.error("  - %s", tool)
        logger.info(INSTALL_HINT)
        raise SystemExit(exc.exit_code) from None
    except UmmError as exc:
        logger.error("%s", exc)
        raise SystemExit(exc.exit_code) from None
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    main()
