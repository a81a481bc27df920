"""Canonical data structures for Rubber Duck context selection.

Defined once here, referenced everywhere else. The selector consumes
Message-shaped records and produces a ContextResult; ContextConfig carries
the budgets that drive the fallback ladder.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MessageRole = Literal["user", "assistant", "system"]

ContextStrategy = Literal[
    "empty",
    "full-context",
    "recent-window",
    "important-plus-recent",
    "aggressive-truncation",
]


class AudioMetadata(BaseModel):
    duration: float | None = None
    language: str | None = None


class Message(BaseModel):
    """A chat message as stored by the conversation layer.

    Only role and content are read during context selection; the remaining
    fields ride along so callers can pass stored messages through unchanged.
    """

    role: MessageRole
    content: str
    id: str | None = None
    timestamp: datetime | None = None
    audio_metadata: AudioMetadata | None = None
    agent_used: str | None = None
    tags: list[str] | None = None


class ContextConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_recent_messages: int = Field(default=12, gt=0)
    max_total_tokens: int = Field(default=8000, gt=0)
    keep_first_messages: int = Field(default=2, ge=0)
    keep_important_messages: bool = True


DEFAULT_CONTEXT_CONFIG = ContextConfig()


class ContextResult(BaseModel):
    messages: list[dict[str, str]]  # {"role", "content"} in input order
    total_tokens: int
    truncated: bool
    strategy: ContextStrategy


class ContextStats(BaseModel):
    total_messages: int
    total_tokens: int
    average_tokens_per_message: int
