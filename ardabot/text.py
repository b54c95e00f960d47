"""Text helpers for fitting game output into Discord messages."""

from __future__ import annotations

import re
from typing import Iterable, List, Mapping, Optional

LONG_TEXT_THRESHOLD = 1900
WORD_DELIMITERS = frozenset(" ,\n")
FENCE_CHAR = "`"
FENCE_LENGTH = 3

_CAPITALIZE_SPLIT = re.compile(r"[,.\s]+")


class BoundaryNotFound(ValueError):
    """Raised when a long text has no safe split point after the threshold."""

    def __init__(self, position: int, format_aware: bool):
        mode = "code fence" if format_aware else "word"
        super().__init__(f"No {mode} boundary found at or after offset {position}.")
        self.position = position
        self.format_aware = format_aware


def is_long_text(text: str) -> bool:
    return len(text) >= LONG_TEXT_THRESHOLD


def find_boundary(text: str, position: int, format_aware: bool) -> Optional[int]:
    """Return the offset just past the first safe split point at or after ``position``.

    Word mode stops after the first space, comma or newline. Fence mode stops
    after the third backtick. ``None`` means the text ran out first.
    """
    offset = position
    fence_counter = 0
    for char in text[position:]:
        offset += 1
        if format_aware:
            if char == FENCE_CHAR:
                fence_counter += 1
                if fence_counter == FENCE_LENGTH:
                    return offset
        elif char in WORD_DELIMITERS:
            return offset
    return None


def segment(text: str, format_aware: bool = False) -> List[str]:
    """Split ``text`` into message-sized chunks that join back into ``text``."""
    chunks: List[str] = []
    remaining = text
    while is_long_text(remaining):
        boundary = find_boundary(remaining, LONG_TEXT_THRESHOLD, format_aware)
        if boundary is None:
            raise BoundaryNotFound(len(text) - len(remaining) + LONG_TEXT_THRESHOLD, format_aware)
        chunks.append(remaining[:boundary])
        remaining = remaining[boundary:]
    chunks.append(remaining)
    return chunks


def capitalize_first_letters(text: str) -> str:
    words = _CAPITALIZE_SPLIT.split(text)
    return " ".join(word[:1].upper() + word[1:] for word in words)


def format_army_units(army: Mapping[str, object]) -> str:
    lines = []
    for unit in army.get("units") or []:
        unit_type = unit.get("unitType")
        if isinstance(unit_type, Mapping) and unit_type.get("unitName") is not None:
            unit_name = unit_type["unitName"]
        else:
            unit_name = unit_type
        lines.append(f"{unit.get('amountAlive')}/{unit.get('count')} {unit_name}\n")
    return "".join(lines)


def format_unpaid_armies(armies: Iterable[Mapping[str, object]]) -> str:
    lines = []
    for army in armies:
        faction = army.get("faction") or {}
        faction_name = faction.get("name") if isinstance(faction, Mapping) else faction
        created_at = str(army.get("createdAt") or "")[:10]
        lines.append(f"Name: {army.get('name')} | Faction: {faction_name} | Creation date: {created_at}\n")
    if not lines:
        return "No armies unpaid"
    return "".join(lines)


__all__ = [
    "BoundaryNotFound",
    "LONG_TEXT_THRESHOLD",
    "capitalize_first_letters",
    "find_boundary",
    "format_army_units",
    "format_unpaid_armies",
    "is_long_text",
    "segment",
]
