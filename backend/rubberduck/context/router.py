"""FastAPI routes for context selection and conversation statistics."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from rubberduck.config import Settings
from rubberduck.context.schemas import (
    MessagesRequest,
    SelectContextRequest,
    SelectContextResponse,
)
from rubberduck.context.selector import InvalidContextInputError, select_optimal_context
from rubberduck.context.stats import get_adaptive_config, get_context_stats
from rubberduck.models import DEFAULT_CONTEXT_CONFIG, ContextConfig, ContextStats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/context", tags=["context"])


def get_settings() -> Settings:
    """Dependency placeholder, overridden at app startup."""
    raise RuntimeError("Settings not initialized")


@router.post("/select")
async def select_context(
    request: SelectContextRequest,
    settings: Settings = Depends(get_settings),
) -> SelectContextResponse:
    config = request.config
    if config is None:
        adaptive = settings.adaptive_context if request.adaptive is None else request.adaptive
        config = get_adaptive_config(request.messages) if adaptive else DEFAULT_CONTEXT_CONFIG

    try:
        result = select_optimal_context(request.messages, config)
    except InvalidContextInputError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if request.messages and not result.messages:
        logger.warning(
            "Context budget of %d tokens fits none of %d messages",
            config.max_total_tokens, len(request.messages),
        )
    logger.info(
        "Selected %d/%d messages (%s, %d tokens)",
        len(result.messages), len(request.messages), result.strategy, result.total_tokens,
    )
    return SelectContextResponse(**result.model_dump(), config=config)


@router.post("/stats")
async def context_stats(request: MessagesRequest) -> ContextStats:
    return get_context_stats(request.messages)


@router.post("/adaptive-config")
async def adaptive_config(request: MessagesRequest) -> ContextConfig:
    return get_adaptive_config(request.messages)
