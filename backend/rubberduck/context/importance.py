"""Heuristic importance classification for conversation messages."""

from collections.abc import Mapping
from typing import Any

# Messages before this index usually frame the task.
LEADING_IMPORTANT_COUNT = 3

IMPORTANT_KEYWORDS: tuple[str, ...] = (
    "remember",
    "important",
    "context",
    "background",
    "my name is",
    "i am",
    "project",
    "working on",
    "objective",
    "goal",
    "requirement",
    "specification",
)


def is_important_message(
    message: Mapping[str, Any], index: int, total_messages: int
) -> bool:
    """Return True if the message likely carries context later turns rely on.

    Positional rule first (index < 3), then a lowercase substring search for
    any of IMPORTANT_KEYWORDS. total_messages is accepted for call-site
    symmetry with the selector and does not affect the result.
    """
    if index < LEADING_IMPORTANT_COUNT:
        return True
    content = (message.get("content") or "").lower()
    return any(keyword in content for keyword in IMPORTANT_KEYWORDS)
