"""Summary repository for database operations."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy import ColumnElement, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from summarist.domain.summary import SummaryStyle
from summarist.infrastructure.models import SummaryModel

DEFAULT_LIST_LIMIT = 50


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass(frozen=True)
class TextSearch:
    """Case-insensitive substring match on the original or summary text."""

    term: str

    def to_clause(self) -> ColumnElement[bool]:
        pattern = f"%{_escape_like(self.term)}%"
        return or_(
            SummaryModel.original_text.ilike(pattern, escape="\\"),
            SummaryModel.summary_text.ilike(pattern, escape="\\"),
        )


@dataclass(frozen=True)
class StyleMatch:
    """Exact match on the summary style."""

    style: SummaryStyle

    def to_clause(self) -> ColumnElement[bool]:
        return SummaryModel.summary_style == self.style.value


SummaryPredicate = TextSearch | StyleMatch


def build_filters(search: str | None = None, style: str | None = None) -> list[SummaryPredicate]:
    """Turn optional query values into predicates.

    Empty search terms and unrecognised styles are ignored. A whitespace-only
    term is kept and matched literally.
    """
    filters: list[SummaryPredicate] = []
    if search:
        filters.append(TextSearch(search))
    parsed_style = SummaryStyle.parse(style)
    if parsed_style is not None:
        filters.append(StyleMatch(parsed_style))
    return filters


class SummaryRepository:
    """Repository for Summary CRUD operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def create(
        self,
        original_text: str,
        summary_text: str,
        summary_style: SummaryStyle,
    ) -> SummaryModel:
        """Persist a new summary and return the stored row."""
        now = datetime.now(UTC)
        summary = SummaryModel(
            original_text=original_text,
            summary_text=summary_text,
            summary_style=summary_style.value,
            created_at=now,
            updated_at=now,
        )
        self.session.add(summary)
        await self.session.flush()
        await self.session.refresh(summary)
        return summary

    async def get_by_id(self, summary_id: str) -> SummaryModel | None:
        """Get a summary by its ID."""
        stmt = select(SummaryModel).where(SummaryModel.id == summary_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_summaries(
        self,
        filters: Sequence[SummaryPredicate] = (),
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> list[SummaryModel]:
        """List summaries matching all filters, newest first."""
        stmt = select(SummaryModel)
        for predicate in filters:
            stmt = stmt.where(predicate.to_clause())
        stmt = stmt.order_by(SummaryModel.created_at.desc(), SummaryModel.id.desc()).limit(
            min(limit, DEFAULT_LIST_LIMIT)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def commit(self) -> None:
        """Commit pending writes in the current session."""
        await self.session.commit()

    async def delete(self, summary_id: str) -> bool:
        """Delete a summary. Returns False if it did not exist."""
        stmt = delete(SummaryModel).where(SummaryModel.id == summary_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
