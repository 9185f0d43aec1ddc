"""Split a header body into sender and text, or flag it as a system notice."""

from __future__ import annotations

import re
from typing import NamedTuple

from .config import SYSTEM_SENDER

# Everything before the first colon is taken as the sender name. A notice
# that happens to contain a colon is therefore read as a normal message.
SENDER_PATTERN = re.compile(r"^([^:]+):\s*(.*)$", re.DOTALL)


class Classification(NamedTuple):
    sender: str
    text: str
    is_system: bool


def classify_body(body: str, system_label: str = SYSTEM_SENDER) -> Classification:
    found = SENDER_PATTERN.match(body)
    if found:
        return Classification(
            sender=found.group(1).strip(),
            text=found.group(2).strip(),
            is_system=False,
        )
    return Classification(sender=system_label, text=body.strip(), is_system=True)
