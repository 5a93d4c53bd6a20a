"""Shell quoting for values spliced into picker command templates.

fzf runs ``reload`` and ``preview`` bindings through ``$SHELL -c``, so every
query, path and glob embedded in those strings goes through ``quote``.
Discrete argv lists handed to ``subprocess`` need no quoting at all.
"""

from __future__ import annotations

import shlex
from typing import Iterable


def quote(value: str) -> str:
    """Return ``value`` as one POSIX shell word that expands back to itself.

    Total over all strings: the empty string becomes ``''`` and embedded
    single quotes are closed, escaped and reopened.
    """
    return shlex.quote(str(value))


def join_command(argv: Iterable[str]) -> str:
    """Quote each argument and join them into one shell command line."""
    return " ".join(quote(arg) for arg in argv)
