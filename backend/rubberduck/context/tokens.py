"""Token estimation for context selection.

Provides a TokenEstimator interface and the default character-based
approximation. Downstream tokenizers differ per model, so budgets are
computed against an estimate that leans toward overcounting.
"""

from abc import ABC, abstractmethod

CHARS_PER_TOKEN = 3.5


class TokenEstimator(ABC):
    """Interface for estimating tokens in text."""

    @abstractmethod
    def estimate(self, text: str) -> int:
        """Return the estimated token count for the given text."""
        ...


class ApproximateTokenEstimator(TokenEstimator):
    """ceil(len(text) / 3.5).

    Rounds up so a budget computed from these estimates is not silently
    exceeded downstream. Not precise enough for billing.
    """

    def estimate(self, text: str) -> int:
        # ceil(n / 3.5) == ceil(2n / 7), kept in integers to avoid float drift
        return -(-2 * len(text) // 7)


_default_estimator = ApproximateTokenEstimator()


def estimate_tokens(content: str) -> int:
    """Estimate tokens with the default approximate estimator."""
    return _default_estimator.estimate(content)
