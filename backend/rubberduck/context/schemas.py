"""Request and response schemas for context endpoints."""

from pydantic import BaseModel

from rubberduck.models import ContextConfig, ContextResult, Message

# -- Requests --


class SelectContextRequest(BaseModel):
    """Request body for POST /api/context/select.

    When config is omitted, adaptive picks between get_adaptive_config and
    the defaults; adaptive=None defers to the service setting.
    """

    messages: list[Message]
    config: ContextConfig | None = None
    adaptive: bool | None = None


class MessagesRequest(BaseModel):
    messages: list[Message]


# -- Responses --


class SelectContextResponse(ContextResult):
    config: ContextConfig
