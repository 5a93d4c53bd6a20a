"""Result-row parsing shared by the selection resolver and preview dispatch.

Rows are ``path:line:content`` in content mode and ``type:   payload`` in
repository mode. The first ``:`` always separates the discriminator; the
remainder is interpreted only by the caller that owns that row type.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
DELIMITER = ":"


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


@dataclass(frozen=True)
class ResultLine:
    """One parsed search row.

    ``position`` is the raw token after the discriminator (the line number in
    content mode); ``rest`` is everything after that.
    """

    discriminator: str
    position: str = ""
    rest: str = ""

    @property
    def line_number(self) -> int | None:
        """Positive line number, or ``None`` for missing/non-numeric tokens."""
        token = self.position.strip()
        if not token.isdigit():
            return None
        value = int(token)
        return value if value > 0 else None


@dataclass(frozen=True)
class RepositoryRow:
    type_tag: str
    payload: str


def parse_result_line(text: str) -> ResultLine:
    """Split a row on the first delimiter, then split the remainder once more."""
    clean = strip_ansi(text).rstrip("\r\n")
    discriminator, sep, remainder = clean.partition(DELIMITER)
    if not sep:
        return ResultLine(discriminator=discriminator)
    position, _sep, rest = remainder.partition(DELIMITER)
    return ResultLine(discriminator=discriminator, position=position, rest=rest)


def parse_repository_line(text: str) -> RepositoryRow:
    """Split a repository row into its type tag and left-trimmed payload."""
    clean = strip_ansi(text).rstrip("\r\n")
    type_tag, _sep, payload = clean.partition(DELIMITER)
    return RepositoryRow(type_tag=type_tag.strip(), payload=payload.lstrip())
