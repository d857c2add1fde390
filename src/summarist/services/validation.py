"""Validation of summary creation requests."""

from typing import Any

from summarist.domain.errors import ValidationError
from summarist.domain.summary import DEFAULT_STYLE, CreateSummaryCommand, SummaryStyle

MAX_TEXT_LENGTH = 10_000


def validate_create_request(
    payload: Any, max_length: int = MAX_TEXT_LENGTH
) -> CreateSummaryCommand:
    """Check a decoded JSON body and return the command it describes.

    Raises:
        ValidationError: with a message naming the first failed check.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Original text is required")

    original_text = payload.get("originalText")
    if not isinstance(original_text, str):
        raise ValidationError("Original text is required")
    if not original_text.strip():
        raise ValidationError("Original text cannot be empty")
    if len(original_text) > max_length:
        raise ValidationError("Text is too long. Please limit to 10,000 characters.")

    raw_style = payload.get("summaryStyle")
    if raw_style is None:
        return CreateSummaryCommand(original_text=original_text, summary_style=DEFAULT_STYLE)

    style = SummaryStyle.parse(raw_style) if isinstance(raw_style, str) else None
    if style is None:
        raise ValidationError("Invalid summary style")
    return CreateSummaryCommand(original_text=original_text, summary_style=style)
