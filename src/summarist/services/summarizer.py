"""OpenAI-powered text summarization service using chat completions."""

import logging
from time import perf_counter

from openai import AsyncOpenAI

from summarist.config import get_settings
from summarist.domain.errors import GenerationError
from summarist.domain.summary import DEFAULT_STYLE, SummaryStyle
from summarist.infrastructure.csv_logger import get_generation_logger

logger = logging.getLogger(__name__)
settings = get_settings()

SYSTEM_PROMPT = "You are a helpful assistant that creates high-quality summaries of text content."

SUMMARY_PROMPTS: dict[SummaryStyle, str] = {
    SummaryStyle.CONCISE: (
        "Please provide a concise summary of the following text. Keep it brief "
        "and to the point, highlighting only the most important information:"
    ),
    SummaryStyle.DETAILED: (
        "Please provide a detailed summary of the following text. Include key "
        "points, important details, and context while maintaining clarity:"
    ),
    SummaryStyle.BULLET_POINTS: (
        "Please provide a summary of the following text in bullet point format. "
        "Organize the information into clear, digestible bullet points:"
    ),
}


def build_messages(text: str, style: SummaryStyle) -> list[dict[str, str]]:
    """Build the system/user message pair sent to the model."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": f"{SUMMARY_PROMPTS[style]}\n\n{text}"},
    ]


class SummarizerService:
    """Service for generating summaries of user-submitted text."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        """Initialize the summarizer."""
        self.client = client or AsyncOpenAI(
            api_key=api_key or settings.openai_api_key,
            timeout=settings.openai_timeout_seconds,
        )
        self.model = model or settings.summarization_model
        self.max_tokens = settings.summary_max_tokens
        self.temperature = settings.summary_temperature
        self.max_text_length = settings.max_text_length

    async def generate(self, text: str, style: SummaryStyle = DEFAULT_STYLE) -> str:
        """Generate a summary of ``text`` in the requested style.

        Raises:
            GenerationError: input is empty or too long, the service failed,
                or it returned no usable content.
        """
        if not text.strip():
            raise GenerationError("Summary generation failed: Text cannot be empty")
        if len(text) > self.max_text_length:
            raise GenerationError(
                "Summary generation failed: Text is too long. "
                "Please limit to 10,000 characters."
            )

        started = perf_counter()
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=build_messages(text, style),
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
            content = completion.choices[0].message.content if completion.choices else None
        except Exception as e:
            logger.error(f"OpenAI API error: {e}", exc_info=True)
            raise GenerationError(f"Summary generation failed: {e}") from e

        summary = (content or "").strip()
        if not summary:
            logger.error(f"OpenAI returned empty content for {style} summary")
            raise GenerationError("Summary generation failed: Failed to generate summary")

        duration_ms = (perf_counter() - started) * 1000
        metrics = get_generation_logger()
        if metrics is not None:
            usage = getattr(completion, "usage", None)
            metrics.log(
                style=str(style),
                duration_ms=duration_ms,
                input_chars=len(text),
                tokens=getattr(usage, "total_tokens", 0) or 0,
            )

        logger.info(f"Generated {style} summary in {duration_ms:.0f}ms")
        return summary
