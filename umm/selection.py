"""Turn picker output rows into editor targets.

The first surviving row is the primary target and keeps its line number; all
later rows are opened without one. Bad rows are warned about and skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .errors import NoValidTargets
from .rows import parse_result_line

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedTarget:
    path: Path
    line_number: int | None = None


def split_selection(output: str) -> list[str]:
    """Split raw picker stdout into non-empty rows, preserving order."""
    return [line for line in output.splitlines() if line.strip()]


def resolve(selection: Iterable[str]) -> list[ResolvedTarget]:
    """Resolve rows to targets, raising ``NoValidTargets`` if none survive."""
    targets: list[ResolvedTarget] = []
    for raw in selection:
        if not raw.strip():
            continue
        row = parse_result_line(raw)
        if not row.discriminator:
            logger.warning("Could not parse file from selection: %s", raw)
            continue
        path = Path(row.discriminator)
        if not path.is_file():
            logger.warning("File does not exist: %s", path)
            continue
        line_number = row.line_number if not targets else None
        targets.append(ResolvedTarget(path=path, line_number=line_number))

    if not targets:
        raise NoValidTargets()
    return targets
