"""Search configuration and persisted user defaults.

``SearchConfig`` captures one invocation's search parameters. ``Settings``
holds process-wide values (editor, preview layout, debounce) resolved once at
startup from the JSON config file and the environment, then passed by value.
Config file access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from platformdirs import user_config_dir

from .errors import ConfigurationError

APP_NAME = "umm"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_EDITOR = "nvim"
DEFAULT_STYLE = "monokai"
DEFAULT_PREVIEW_WINDOW = "top:60%"
DEFAULT_DEBOUNCE_MS = 50


@dataclass(frozen=True)
class SearchConfig:
    root: Path
    pattern: str = ""
    exclude_globs: tuple[str, ...] = field(default_factory=tuple)
    max_depth: int | None = None
    include_ignored: bool = False
    interactive: bool = True

    def validate(self) -> None:
        """Raise ``ConfigurationError`` when the configuration cannot run."""
        if not self.root.is_dir():
            raise ConfigurationError(f"Directory '{self.root}' does not exist")
        if self.max_depth is not None and (isinstance(self.max_depth, bool) or self.max_depth < 0):
            raise ConfigurationError("Option --max-depth must be a number")
        if not self.pattern and not self.interactive:
            raise ConfigurationError("Option --pattern is required when using --noui")


@dataclass(frozen=True)
class Settings:
    editor: str = DEFAULT_EDITOR
    style: str = DEFAULT_STYLE
    preview_window: str = DEFAULT_PREVIEW_WINDOW
    debounce_ms: int = DEFAULT_DEBOUNCE_MS

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _nonempty_str(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _coerce_debounce(value: object) -> int:
    """Accept non-negative integer milliseconds; anything else uses the default."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return DEFAULT_DEBOUNCE_MS
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Resolve ``Settings`` from config file plus environment.

    ``$EDITOR`` wins over the configured ``editor`` key, which wins over the
    ``nvim`` default.
    """
    env = os.environ if environ is None else environ
    data = load_config()
    editor = _nonempty_str(env.get("EDITOR")) or _nonempty_str(data.get("editor")) or DEFAULT_EDITOR
    return Settings(
        editor=editor,
        style=_nonempty_str(data.get("style")) or DEFAULT_STYLE,
        preview_window=_nonempty_str(data.get("preview_window")) or DEFAULT_PREVIEW_WINDOW,
        debounce_ms=_coerce_debounce(data.get("debounce_ms")),
    )
