"""Summary API endpoints."""

import logging

from fastapi import APIRouter, Query, Request

from summarist.api.dependencies import RateLimitDep, SummarizerDep, SummaryRepoDep
from summarist.api.v1.schemas import (
    MessageEnvelope,
    SummaryEnvelope,
    SummaryListEnvelope,
    SummaryResponse,
)
from summarist.config import get_settings
from summarist.domain.errors import (
    InternalError,
    NotFoundError,
    SummaristError,
    ValidationError,
)
from summarist.repositories.summary_repo import build_filters
from summarist.services.validation import validate_create_request

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/summaries", tags=["summaries"])

NOT_FOUND_MESSAGE = "Summary not found"


@router.post("", response_model=SummaryEnvelope)
async def create_summary(
    request: Request,
    summary_repo: SummaryRepoDep,
    summarizer: SummarizerDep,
    _client: RateLimitDep,
) -> SummaryEnvelope:
    """Generate a summary for the submitted text and store it."""
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError("Invalid JSON body")

    command = validate_create_request(payload, max_length=settings.max_text_length)

    try:
        summary_text = await summarizer.generate(command.original_text, command.summary_style)
        summary = await summary_repo.create(
            original_text=command.original_text,
            summary_text=summary_text,
            summary_style=command.summary_style,
        )
        await summary_repo.commit()
    except SummaristError:
        raise
    except Exception as e:
        logger.exception(f"Failed to create summary: {e}")
        raise InternalError("Failed to create summary") from e

    logger.info(f"Created {command.summary_style} summary {summary.id}")
    return SummaryEnvelope(data=SummaryResponse.model_validate(summary))


@router.get("", response_model=SummaryListEnvelope)
async def list_summaries(
    summary_repo: SummaryRepoDep,
    search: str | None = Query(None),
    style: str | None = Query(None),
) -> SummaryListEnvelope:
    """List the newest summaries, optionally filtered by text and style."""
    try:
        summaries = await summary_repo.list_summaries(
            build_filters(search=search, style=style),
            limit=settings.list_limit,
        )
    except Exception as e:
        logger.exception(f"Failed to fetch summaries: {e}")
        raise InternalError("Failed to fetch summaries") from e

    return SummaryListEnvelope(data=[SummaryResponse.model_validate(s) for s in summaries])


@router.get("/{summary_id}", response_model=SummaryEnvelope)
async def get_summary(summary_id: str, summary_repo: SummaryRepoDep) -> SummaryEnvelope:
    """Get a single summary by ID."""
    try:
        summary = await summary_repo.get_by_id(summary_id)
    except Exception as e:
        logger.exception(f"Failed to fetch summary {summary_id}: {e}")
        raise InternalError("Failed to fetch summary") from e

    if not summary:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return SummaryEnvelope(data=SummaryResponse.model_validate(summary))


@router.delete("/{summary_id}", response_model=MessageEnvelope)
async def delete_summary(summary_id: str, summary_repo: SummaryRepoDep) -> MessageEnvelope:
    """Delete a summary by ID."""
    try:
        summary = await summary_repo.get_by_id(summary_id)
    except Exception as e:
        logger.exception(f"Failed to delete summary {summary_id}: {e}")
        raise InternalError("Failed to delete summary") from e

    if not summary:
        raise NotFoundError(NOT_FOUND_MESSAGE)

    try:
        deleted = await summary_repo.delete(summary_id)
        await summary_repo.commit()
    except Exception as e:
        logger.exception(f"Failed to delete summary {summary_id}: {e}")
        raise InternalError("Failed to delete summary") from e

    # Removed by a concurrent request between the lookup and the delete
    if not deleted:
        raise NotFoundError(NOT_FOUND_MESSAGE)

    logger.info(f"Deleted summary {summary_id}")
    return MessageEnvelope(message="Summary deleted successfully")
