"""Context-window selection for chat generation.

ContextSelector decides which prior messages go to the model for a turn.
It walks a fixed fallback ladder and returns the first tier that fits:

1. full-context: every message, when the history is short and small enough
2. recent-window: the last max_recent_messages messages
3. important-plus-recent: early anchors, a few important early messages,
   and the longest fitting suffix of the recent window
4. aggressive-truncation: newest messages backward until one does not fit

Selection is pure. The input is never mutated, nothing is cached between
calls, and output order is always a subsequence of input order.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, get_args

from rubberduck.context.importance import is_important_message
from rubberduck.context.tokens import ApproximateTokenEstimator, TokenEstimator
from rubberduck.models import (
    DEFAULT_CONTEXT_CONFIG,
    ContextConfig,
    ContextResult,
    ContextStrategy,
    Message,
    MessageRole,
)

logger = logging.getLogger(__name__)

VALID_ROLES: frozenset[str] = frozenset(get_args(MessageRole))

# Share of max_total_tokens that anchors plus important messages may use.
IMPORTANT_BUDGET_RATIO = 0.4
MAX_IMPORTANT_MESSAGES = 3


class InvalidContextInputError(ValueError):
    """Raised when selection is called with malformed messages or config."""


def to_api_messages(messages: Sequence[Message | Mapping[str, Any]]) -> list[dict[str, str]]:
    """Validate a message history and project it onto {role, content} dicts.

    Accepts Message models or mappings with role/content keys. Anything else
    is a caller error and raises InvalidContextInputError.
    """
    if isinstance(messages, (str, bytes)) or not isinstance(messages, Sequence):
        raise InvalidContextInputError(
            f"messages must be a list of messages, got {type(messages).__name__}"
        )

    api_messages: list[dict[str, str]] = []
    for i, message in enumerate(messages):
        if isinstance(message, Message):
            role, content = message.role, message.content
        elif isinstance(message, Mapping):
            role, content = message.get("role"), message.get("content")
        else:
            raise InvalidContextInputError(
                f"Message {i} must be a mapping, got {type(message).__name__}"
            )
        if role not in VALID_ROLES:
            raise InvalidContextInputError(f"Message {i} has invalid role: {role!r}")
        if not isinstance(content, str):
            raise InvalidContextInputError(f"Message {i} content must be a string")
        api_messages.append({"role": role, "content": content})
    return api_messages


class ContextSelector:
    """Selects the messages to send to the model under count and token budgets.

    The estimator is pluggable so callers with a real tokenizer can swap it
    in; the default is the character approximation.
    """

    def __init__(self, estimator: TokenEstimator | None = None) -> None:
        self._estimator = estimator or ApproximateTokenEstimator()

    def select(
        self,
        messages: Sequence[Message | Mapping[str, Any]],
        config: ContextConfig | None = None,
    ) -> ContextResult:
        """Run the fallback ladder and return the first tier that fits.

        Raises:
            InvalidContextInputError: If messages or config are malformed.
        """
        if config is None:
            config = DEFAULT_CONTEXT_CONFIG
        elif not isinstance(config, ContextConfig):
            raise InvalidContextInputError(
                f"config must be a ContextConfig, got {type(config).__name__}"
            )
        api_messages = to_api_messages(messages)

        if not api_messages:
            return ContextResult(messages=[], total_tokens=0, truncated=False, strategy="empty")

        count = len(api_messages)
        budget = config.max_total_tokens
        token_counts = [self._estimator.estimate(m["content"]) for m in api_messages]

        # 1. Full context
        total = sum(token_counts)
        if count <= config.max_recent_messages and total <= budget:
            return self._result(api_messages, range(count), token_counts, "full-context")

        # 2. Recent window
        recent_start = max(0, count - config.max_recent_messages)
        if sum(token_counts[recent_start:]) <= budget:
            return self._result(
                api_messages, range(recent_start, count), token_counts, "recent-window"
            )

        # 3. Important messages + recent suffix
        if config.keep_important_messages and count > config.max_recent_messages:
            indices = self._important_plus_recent(
                api_messages, token_counts, recent_start, config
            )
            return self._result(api_messages, indices, token_counts, "important-plus-recent")

        # 4. Aggressive truncation
        indices = self._newest_that_fit(token_counts, range(count), budget)
        return self._result(api_messages, indices, token_counts, "aggressive-truncation")

    @staticmethod
    def _important_plus_recent(
        messages: list[dict[str, str]],
        token_counts: list[int],
        recent_start: int,
        config: ContextConfig,
    ) -> list[int]:
        """Anchors, then up to three important early messages, then a recent suffix.

        Anchors and important messages share 40% of the budget. Important
        candidates that would overflow it are skipped and the scan moves on.
        The recent window gets whatever budget remains.
        """
        count = len(messages)
        anchor_count = min(config.keep_first_messages, recent_start)
        anchors = list(range(anchor_count))
        running = sum(token_counts[i] for i in anchors)

        important_cap = config.max_total_tokens * IMPORTANT_BUDGET_RATIO
        admitted: list[int] = []
        for i in range(anchor_count, recent_start):
            if len(admitted) >= MAX_IMPORTANT_MESSAGES:
                break
            if not is_important_message(messages[i], i, count):
                continue
            if running + token_counts[i] <= important_cap:
                admitted.append(i)
                running += token_counts[i]

        remaining = config.max_total_tokens - running
        recent = ContextSelector._newest_that_fit(
            token_counts, range(recent_start, count), remaining
        )
        return anchors + admitted + recent

    @staticmethod
    def _newest_that_fit(
        token_counts: list[int], window: range, budget: int
    ) -> list[int]:
        """Longest suffix of window whose tokens fit in budget.

        Scans newest to oldest and stops at the first message that does not
        fit. May return an empty list.
        """
        kept: list[int] = []
        remaining = budget
        for i in reversed(window):
            if token_counts[i] > remaining:
                break
            kept.append(i)
            remaining -= token_counts[i]
        kept.reverse()
        return kept

    @staticmethod
    def _result(
        messages: list[dict[str, str]],
        indices: Sequence[int],
        token_counts: list[int],
        strategy: ContextStrategy,
    ) -> ContextResult:
        selected = [messages[i] for i in indices]
        total = sum(token_counts[i] for i in indices)
        logger.debug(
            "Context selection: strategy=%s kept=%d/%d tokens=%d",
            strategy, len(selected), len(messages), total,
        )
        return ContextResult(
            messages=selected,
            total_tokens=total,
            truncated=len(selected) < len(messages),
            strategy=strategy,
        )


_default_selector = ContextSelector()


def select_optimal_context(
    messages: Sequence[Message | Mapping[str, Any]],
    config: ContextConfig | None = None,
) -> ContextResult:
    """Select context with the default estimator. See ContextSelector.select."""
    return _default_selector.select(messages, config)
