"""Conversation statistics and verbosity-adaptive context configuration."""

from collections.abc import Mapping, Sequence
from typing import Any

from rubberduck.context.selector import to_api_messages
from rubberduck.context.tokens import estimate_tokens
from rubberduck.models import DEFAULT_CONTEXT_CONFIG, ContextConfig, ContextStats, Message

# Average tokens/message thresholds for tightening or loosening the budgets.
VERBOSE_AVERAGE_TOKENS = 200
TERSE_AVERAGE_TOKENS = 50

VERBOSE_CONFIG = DEFAULT_CONTEXT_CONFIG.model_copy(
    update={"max_recent_messages": 8, "max_total_tokens": 6000}
)
TERSE_CONFIG = DEFAULT_CONTEXT_CONFIG.model_copy(
    update={"max_recent_messages": 20, "max_total_tokens": 10000}
)


def get_context_stats(messages: Sequence[Message | Mapping[str, Any]]) -> ContextStats:
    """Message count, estimated tokens, and average tokens per message."""
    api_messages = to_api_messages(messages)
    total_messages = len(api_messages)
    total_tokens = sum(estimate_tokens(m["content"]) for m in api_messages)

    if total_messages == 0:
        average = 0
    else:
        # Round half up, matching the display layer rather than banker's rounding
        average = (2 * total_tokens + total_messages) // (2 * total_messages)

    return ContextStats(
        total_messages=total_messages,
        total_tokens=total_tokens,
        average_tokens_per_message=average,
    )


def get_adaptive_config(messages: Sequence[Message | Mapping[str, Any]]) -> ContextConfig:
    """Pick a config tuned to how verbose the conversation is.

    Long messages get a smaller window and budget; short chatty ones get a
    larger window. Everything else uses DEFAULT_CONTEXT_CONFIG.
    """
    average = get_context_stats(messages).average_tokens_per_message
    if average > VERBOSE_AVERAGE_TOKENS:
        return VERBOSE_CONFIG
    if average < TERSE_AVERAGE_TOKENS:
        return TERSE_CONFIG
    return DEFAULT_CONTEXT_CONFIG
