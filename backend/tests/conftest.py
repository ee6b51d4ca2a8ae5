from __future__ import annotations

from datetime import datetime, timezone

import pytest

from app.core.subjects import build_default_registry
from app.models import Article, EngagementMetrics, ScoreBreakdown, ScoredArticle


@pytest.fixture
def registry():
    """Fresh registry per test so dynamic additions don't leak."""
    return build_default_registry()


@pytest.fixture
def make_article():
    def _make(
        article_id: str = "test-1",
        title: str = "Test Article",
        content: str = "Test content",
        source: str = "Test Source",
        url: str = "https://example.com",
        **metrics,
    ) -> Article:
        return Article(
            id=article_id,
            title=title,
            url=url,
            content=content,
            source=source,
            published_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
            engagement=EngagementMetrics(**metrics),
        )

    return _make


@pytest.fixture
def make_scored():
    def _make(article_id: str, score: float, content: str = "Test content", url: str = "https://example.com") -> ScoredArticle:
        return ScoredArticle(
            id=article_id,
            title="Test",
            url=url,
            content=content,
            source="Test",
            published_at=None,
            engagement=EngagementMetrics(),
            engagement_score=score,
            score_breakdown=ScoreBreakdown(0, 0, 0, 0, 0, score, ""),
            matched_keywords=[],
            relevance_score=0,
        )

    return _make
