"""Pydantic schemas for API request/response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from summarist.domain.summary import SummaryStyle


class SummaryResponse(BaseModel):
    """Response schema for a summary, serialized with camelCase keys."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    original_text: str
    summary_text: str
    summary_style: SummaryStyle
    created_at: datetime
    updated_at: datetime


class SummaryEnvelope(BaseModel):
    """Envelope for a single summary."""

    success: bool = True
    data: SummaryResponse


class SummaryListEnvelope(BaseModel):
    """Envelope for a list of summaries."""

    success: bool = True
    data: list[SummaryResponse]


class MessageEnvelope(BaseModel):
    """Envelope for operations that only report a message."""

    success: bool = True
    message: str


class ErrorEnvelope(BaseModel):
    """Envelope returned for every failure."""

    success: bool = False
    error: str
