"""Small text helpers shared by message-handling services."""

import re
from typing import Any, Mapping

# Inbound SMS keywords handled by the carrier or the messaging layer, never free text
RESERVED_KEYWORDS = frozenset({
    'start', 'stop', 'help', 'cancel', 'end', 'quit', 'unsubscribe',
    'stopall', 'info', 'upgrade', 'quote', 'last', 'call',
})

_WORD_RE = re.compile(r"[A-Za-z0-9]+")


def camelize(text: str) -> str:
    """Turn a phrase into camelCase: ``"Event Type Name"`` -> ``"eventTypeName"``.

    Words already in camelCase keep their inner capitals.
    """
    words = _WORD_RE.findall(text or "")
    if not words:
        return ""
    first, rest = words[0], words[1:]
    return first[0].lower() + first[1:] + "".join(word[0].upper() + word[1:] for word in rest)


def is_empty(mapping: Mapping[Any, Any]) -> bool:
    return len(mapping) == 0


def is_reserved_keyword(word: str) -> bool:
    """True if an inbound message is exactly one reserved keyword (case-insensitive)."""
    return (word or "").strip().lower() in RESERVED_KEYWORDS
