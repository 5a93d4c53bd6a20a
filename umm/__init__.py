"""Public package surface for umm.

Exports ``main`` for programmatic CLI invocation.
Most implementation lives in submodules under ``umm``.
"""

from __future__ import annotations

__version__ = "1.0.0"


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["__version__", "main"]
