"""Summary domain types: styles and validated commands."""

from dataclasses import dataclass
from enum import StrEnum


class SummaryStyle(StrEnum):
    """Instruction style used when generating a summary."""

    CONCISE = "concise"
    DETAILED = "detailed"
    BULLET_POINTS = "bullet-points"

    @classmethod
    def parse(cls, value: str | None) -> "SummaryStyle | None":
        """Return the matching style, or None for unknown values."""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


DEFAULT_STYLE = SummaryStyle.CONCISE


@dataclass(frozen=True)
class CreateSummaryCommand:
    """Validated input for creating a summary."""

    original_text: str
    summary_style: SummaryStyle = DEFAULT_STYLE
