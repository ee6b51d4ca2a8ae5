"""
Article collection coordinator that aggregates from multiple sources.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from app.core.subjects import SubjectRegistry
from app.models import Article
from app.sources.base import SourceProvider
from app.sources.devto import DevToFetcher
from app.sources.hacker_news import HackerNewsFetcher
from app.sources.reddit import RedditFetcher

logger = logging.getLogger(__name__)


@dataclass
class ProviderResult:
    """Outcome of one provider call: its articles, or the reason it failed."""

    provider: str
    articles: List[Article] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class AggregationResult:
    results: List[ProviderResult] = field(default_factory=list)

    @property
    def articles(self) -> List[Article]:
        """All articles in provider-registration order, then each provider's own order."""
        return [article for result in self.results for article in result.articles]

    @property
    def failed(self) -> List[ProviderResult]:
        return [result for result in self.results if not result.ok]

    @property
    def all_failed(self) -> bool:
        return bool(self.results) and len(self.failed) == len(self.results)


class ArticleAggregator:
    """Fans a subject request out to every provider and merges the results."""

    def __init__(self, providers: Sequence[SourceProvider]) -> None:
        self.providers = list(providers)

    async def _fetch_from(self, provider: SourceProvider, subject_id: str) -> ProviderResult:
        logger.info("Fetching from %s...", provider.name)
        try:
            articles = await provider.fetch_articles(subject_id)
        except Exception as e:
            logger.warning("Error in %s provider: %s: %s", provider.name, type(e).__name__, e)
            return ProviderResult(provider=provider.name, error=f"{type(e).__name__}: {e}")

        logger.info("Found %d relevant articles from %s", len(articles), provider.name)
        return ProviderResult(provider=provider.name, articles=list(articles))

    async def collect(self, subject_id: str) -> AggregationResult:
        """
        Fetch from all providers concurrently.

        Args:
            subject_id: Registered subject id, passed unchanged to every provider

        Returns:
            AggregationResult with one ProviderResult per provider, in
            registration order regardless of completion order
        """
        results = await asyncio.gather(
            *(self._fetch_from(provider, subject_id) for provider in self.providers)
        )
        aggregated = AggregationResult(results=list(results))

        if aggregated.all_failed:
            logger.error("All providers failed for subject %s", subject_id)

        return aggregated

    async def fetch_all_articles(self, subject_id: str) -> List[Article]:
        """Collect and flatten; no cross-provider de-duplication."""
        return (await self.collect(subject_id)).articles


def build_default_providers(registry: SubjectRegistry) -> List[SourceProvider]:
    """The built-in providers in registration order."""
    return [
        HackerNewsFetcher(registry),
        RedditFetcher(registry),
        DevToFetcher(registry),
    ]
