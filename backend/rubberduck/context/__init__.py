"""Context-window selection: token estimation, importance, selection, stats."""

from rubberduck.context.importance import IMPORTANT_KEYWORDS, is_important_message
from rubberduck.context.selector import (
    ContextSelector,
    InvalidContextInputError,
    select_optimal_context,
)
from rubberduck.context.stats import get_adaptive_config, get_context_stats
from rubberduck.context.tokens import ApproximateTokenEstimator, TokenEstimator, estimate_tokens

__all__ = [
    "IMPORTANT_KEYWORDS",
    "ApproximateTokenEstimator",
    "ContextSelector",
    "InvalidContextInputError",
    "TokenEstimator",
    "estimate_tokens",
    "get_adaptive_config",
    "get_context_stats",
    "is_important_message",
    "select_optimal_context",
]
