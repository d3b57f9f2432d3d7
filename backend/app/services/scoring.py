"""Score formulas for tag popularity and tattoo engagement.

Both scores live on a 0-10 scale and are monotonic in their inputs: raising a
count or switching a flag on never lowers the result.
"""

from __future__ import annotations

import math

MAX_SCORE = 10.0

# Tag popularity
USAGE_WEIGHT = 2.0
FEATURED_BONUS = 2.0
TRENDING_BONUS = 1.5

# Tattoo engagement, per interaction
VIEW_WEIGHT = 1.0
LIKE_WEIGHT = 5.0
SHARE_WEIGHT = 10.0
ENGAGEMENT_SCALE = 2.5


def popularity_score(usage_count: int, is_featured: bool, is_trending: bool) -> float:
    """Compute a tag's popularity from its usage and curation flags.

    Args:
        usage_count: Number of tattoos the tag is attached to.
        is_featured: Whether the tag is featured.
        is_trending: Whether the tag is trending.

    Returns:
        Score in [0, 10], rounded to two decimals.
    """
    score = math.log(max(usage_count, 0) + 1) * USAGE_WEIGHT
    if is_featured:
        score += FEATURED_BONUS
    if is_trending:
        score += TRENDING_BONUS
    return round(min(MAX_SCORE, score), 2)


def engagement_score(view_count: int, like_count: int, share_count: int) -> float:
    """Compute a tattoo's engagement from its interaction counters.

    Shares weigh more than likes, which weigh more than views. The weighted
    total is log-scaled so the first interactions move the score the most.

    Returns:
        Score in [0, 10], rounded to two decimals.
    """
    weighted = (
        max(view_count, 0) * VIEW_WEIGHT
        + max(like_count, 0) * LIKE_WEIGHT
        + max(share_count, 0) * SHARE_WEIGHT
    )
    score = math.log10(weighted + 1) * ENGAGEMENT_SCALE
    return round(min(MAX_SCORE, score), 2)


def ratchet(current: float | None, computed: float) -> float:
    """Return the new score without ever dropping below the stored one."""
    return max(current or 0.0, computed)
