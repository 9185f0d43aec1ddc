"""Recognize the header line that opens each exported message.

Two export conventions are in circulation::

    [1/2/24, 9:00:12 PM] Anna: Ciao
    1/2/24, 21:00 - Anna: Ciao

Each is described by a :class:`HeaderGrammar`; :func:`match_header` tries them
in order and returns the first match.
"""

from __future__ import annotations

import re
from typing import NamedTuple

_DATE = r"([0-9]{1,2}/[0-9]{1,2}/[0-9]{2,4})"
_TIME = r"([0-9]{1,2}:[0-9]{2}(?::[0-9]{2})?(?:\s*[AaPp][Mm])?)"

LEFT_TO_RIGHT_MARK = "\u200e"
NARROW_NO_BREAK_SPACE = "\u202f"

_WHITESPACE_RUN = re.compile(r"\s+")


class HeaderGrammar(NamedTuple):
    name: str
    pattern: re.Pattern[str]


class HeaderMatch(NamedTuple):
    date: str
    time: str
    body: str


GRAMMARS: tuple[HeaderGrammar, ...] = (
    HeaderGrammar("bracketed", re.compile(rf"^\[{_DATE},?\s+{_TIME}\]\s?(.*)$")),
    HeaderGrammar("dashed", re.compile(rf"^{_DATE},\s+{_TIME}\s+-\s+(.*)$")),
)


def clean_line(line: str) -> str:
    """Drop export encoding artifacts that would otherwise defeat the grammars."""
    return line.replace(LEFT_TO_RIGHT_MARK, "").replace(NARROW_NO_BREAK_SPACE, " ")


def match_header(line: str) -> HeaderMatch | None:
    """Return the date, time and body of a header line, or None for any other line."""
    cleaned = clean_line(line)
    for grammar in GRAMMARS:
        found = grammar.pattern.match(cleaned)
        if found:
            date, time, body = found.groups()
            return HeaderMatch(
                date=date,
                time=_WHITESPACE_RUN.sub(" ", time).strip(),
                body=body.strip(),
            )
    return None
