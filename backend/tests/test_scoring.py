"""Relevance scoring tests."""

from datetime import timedelta

import pytest

from conftest import NOW
from newsdesk.services import scoring
from newsdesk.services.scoring import clamp_score, recency_bonus, score_relevance

IDEAL_TITLE = "Scientists map the deep ocean floor in record detail"  # 52 chars
LONG_BODY = "x" * 250


def _score(**overrides) -> int:
    fields = {
        "title": "Short",
        "content": "",
        "image_url": None,
        "published_at": NOW - timedelta(days=5),
        "now": NOW,
    }
    fields.update(overrides)
    return score_relevance(**fields)


class TestRecency:
    """Recency bucket boundaries."""

    @pytest.mark.parametrize(
        ("age", "bonus"),
        [
            (timedelta(minutes=30), 25),
            (timedelta(minutes=59), 25),
            (timedelta(hours=1), 20),
            (timedelta(hours=5), 20),
            (timedelta(hours=6), 15),
            (timedelta(hours=23), 15),
            (timedelta(hours=24), 10),
            (timedelta(hours=71), 10),
            (timedelta(hours=72), 5),
            (timedelta(days=30), 5),
        ],
    )
    def test_bucket(self, age: timedelta, bonus: int) -> None:
        assert recency_bonus(NOW - age, NOW) == bonus

    def test_future_publish_date_counts_as_fresh(self) -> None:
        assert recency_bonus(NOW + timedelta(hours=2), NOW) == 25


class TestScoreRelevance:
    def test_stale_bare_article_gets_base_plus_minimum(self) -> None:
        assert _score() == 55

    def test_fresh_complete_article_reaches_exactly_100(self) -> None:
        score = _score(
            title=IDEAL_TITLE,
            content=LONG_BODY,
            image_url="https://example.com/a.jpg",
            published_at=NOW - timedelta(minutes=10),
        )
        assert score == 50 + 25 + 8 + 10 + 7 == 100

    def test_image_bonus(self) -> None:
        assert _score(image_url="https://example.com/a.jpg") == 63

    def test_body_must_exceed_200_chars(self) -> None:
        assert _score(content="y" * 200) == 55
        assert _score(content="y" * 201) == 65

    @pytest.mark.parametrize(("length", "expected"), [(30, 55), (31, 62), (99, 62), (100, 55)])
    def test_title_length_is_strictly_between_30_and_100(self, length: int, expected: int) -> None:
        assert _score(title="t" * length) == expected

    def test_pre_clamp_total_above_100_is_clamped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(scoring, "IMAGE_BONUS", 40)
        score = _score(
            title=IDEAL_TITLE,
            content=LONG_BODY,
            image_url="https://example.com/a.jpg",
            published_at=NOW,
        )
        assert score == 100

    def test_score_is_deterministic(self) -> None:
        kwargs = {"title": IDEAL_TITLE, "content": LONG_BODY, "published_at": NOW - timedelta(hours=3)}
        assert _score(**kwargs) == _score(**kwargs)

    def test_none_content_is_accepted(self) -> None:
        assert _score(content=None) == 55


class TestClamp:
    @pytest.mark.parametrize(("raw", "expected"), [(-5, 0), (0, 0), (64, 64), (100, 100), (130, 100)])
    def test_clamp_score(self, raw: int, expected: int) -> None:
        assert clamp_score(raw) == expected
