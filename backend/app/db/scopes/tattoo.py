"""Query scopes for tattoos."""

from __future__ import annotations

from sqlalchemy import Select, String, cast, or_

from app.db.models import BodyPlacement, Tattoo, TattooStatus, TattooStyle
from app.db.models.tattoo import HIGH_ENGAGEMENT_THRESHOLD


def published(query: Select) -> Select:
    """Published tattoos with a publication date, newest first."""
    return query.where(
        Tattoo.status == TattooStatus.PUBLISHED,
        Tattoo.published_at.is_not(None),
    ).order_by(Tattoo.published_at.desc())


def by_style(query: Select, style: TattooStyle) -> Select:
    return query.where(Tattoo.tattoo_style == style)


def by_body_placement(query: Select, placement: BodyPlacement) -> Select:
    return query.where(Tattoo.body_placement == placement)


def featured(query: Select) -> Select:
    return query.where(Tattoo.is_featured.is_(True))


def portfolio_highlights(query: Select) -> Select:
    return query.where(Tattoo.is_portfolio_highlight.is_(True)).order_by(
        Tattoo.display_order
    )


def high_engagement(query: Select) -> Select:
    return query.where(Tattoo.engagement_score > HIGH_ENGAGEMENT_THRESHOLD).order_by(
        Tattoo.engagement_score.desc()
    )


def price_range(
    query: Select, min_price: float | None = None, max_price: float | None = None
) -> Select:
    """Tattoos whose price estimate falls within the inclusive bounds."""
    query = query.where(Tattoo.price_estimate.is_not(None))
    if min_price is not None:
        query = query.where(Tattoo.price_estimate >= min_price)
    if max_price is not None:
        query = query.where(Tattoo.price_estimate <= max_price)
    return query


def search(query: Select, term: str) -> Select:
    """Case-insensitive match on title, description or search keywords.

    Same matching rules as the tag search: wildcards in ``term`` are literal
    and SQLite only folds ASCII case.
    """
    term = term.strip()
    return query.where(
        or_(
            Tattoo.title.icontains(term, autoescape=True),
            Tattoo.description.icontains(term, autoescape=True),
            # Keywords are a JSON list serialized without ASCII escapes
            cast(Tattoo.search_keywords, String).icontains(term, autoescape=True),
        )
    )
