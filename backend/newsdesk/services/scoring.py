"""Relevance scoring - freshness and quality heuristics on a 0-100 scale."""

from datetime import datetime, timedelta

from newsdesk.models import MAX_RELEVANCE

BASE_SCORE = 50

# (maximum age, bonus), checked in order
RECENCY_BONUSES: tuple[tuple[timedelta, int], ...] = (
    (timedelta(hours=1), 25),
    (timedelta(hours=6), 20),
    (timedelta(hours=24), 15),
    (timedelta(hours=72), 10),
)
STALE_BONUS = 5

IMAGE_BONUS = 8
LONG_BODY_BONUS = 10
LONG_BODY_MIN_CHARS = 200
TITLE_BONUS = 7
TITLE_LENGTH_RANGE = (30, 100)


def recency_bonus(published_at: datetime, now: datetime) -> int:
    age = now - published_at
    for max_age, bonus in RECENCY_BONUSES:
        if age < max_age:
            return bonus
    return STALE_BONUS


def clamp_score(score: int) -> int:
    return max(0, min(score, MAX_RELEVANCE))


def score_relevance(
    *,
    title: str,
    content: str | None,
    image_url: str | None,
    published_at: datetime,
    now: datetime,
) -> int:
    """Compute the initial relevance score of an article.

    Starts at 50, adds a recency bonus (+25 under an hour old down to +5 past
    three days) and quality bonuses for an image (+8), a body longer than 200
    characters (+10) and a title strictly between 30 and 100 characters (+7).
    The total is clamped to 100.
    """
    score = BASE_SCORE + recency_bonus(published_at, now)

    if image_url:
        score += IMAGE_BONUS
    if content and len(content) > LONG_BODY_MIN_CHARS:
        score += LONG_BODY_BONUS
    low, high = TITLE_LENGTH_RANGE
    if low < len(title) < high:
        score += TITLE_BONUS

    return clamp_score(score)
