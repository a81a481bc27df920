"""Shared test helpers."""

from typing import Literal

from rubberduck.context.tokens import TokenEstimator


class CharTokenEstimator(TokenEstimator):
    """One token per character, so budgets in tests read as plain lengths."""

    def estimate(self, text: str) -> int:
        return len(text)


def make_message(
    content: str,
    role: Literal["user", "assistant", "system"] = "user",
) -> dict[str, str]:
    return {"role": role, "content": content}


def make_conversation(n: int, content_len: int) -> list[dict[str, str]]:
    """Alternating user/assistant messages, each exactly content_len characters.

    Contents are unique per index (prefix m00, m01, ...) and contain none of
    the importance keywords.
    """
    messages = []
    for i in range(n):
        role = "user" if i % 2 == 0 else "assistant"
        messages.append(make_message(f"m{i:02d} ".ljust(content_len, "x"), role))
    return messages


def make_sized(*lengths: int) -> list[dict[str, str]]:
    """Messages of the given lengths, each a run of one distinct letter."""
    letters = "abcdefghjklnopqrsuvxyz"  # no letter sequence forms a keyword
    return [
        make_message(letters[i] * length, "user" if i % 2 == 0 else "assistant")
        for i, length in enumerate(lengths)
    ]
