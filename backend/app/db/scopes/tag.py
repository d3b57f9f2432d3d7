"""Query scopes for tags."""

from __future__ import annotations

from sqlalchemy import Select, or_
from sqlalchemy.sql.elements import ColumnElement

from app.db.models import Tag, TagCategory

# Score floor used by the popular() listing scope. Lower than the
# Tag.is_popular instance check, which also requires usage.
ABOVE_AVERAGE_SCORE = 5.0


def has_above_average_score() -> ColumnElement[bool]:
    """Predicate for tags scoring above the listing floor."""
    return Tag.popularity_score > ABOVE_AVERAGE_SCORE


def approved(query: Select) -> Select:
    return query.where(Tag.is_approved.is_(True))


def by_category(query: Select, category: TagCategory) -> Select:
    return query.where(Tag.category == category)


def featured(query: Select) -> Select:
    return query.where(Tag.is_featured.is_(True)).order_by(Tag.display_order)


def popular(query: Select) -> Select:
    """Tags above the score floor, best first."""
    return query.where(has_above_average_score()).order_by(Tag.popularity_score.desc())


def trending(query: Select) -> Select:
    return query.where(Tag.is_trending.is_(True)).order_by(Tag.usage_count.desc())


def roots(query: Select) -> Select:
    return query.where(Tag.parent_tag_id.is_(None))


def search(query: Select, term: str) -> Select:
    """Case-insensitive substring match on name or description.

    ``%`` and ``_`` in ``term`` match literally. On SQLite case folding only
    covers ASCII letters, so ``"épaule"`` does not match ``"Épaule"``.
    """
    term = term.strip()
    return query.where(
        or_(
            Tag.name.icontains(term, autoescape=True),
            Tag.description.icontains(term, autoescape=True),
        )
    )
