"""
Dev.to fetcher using the public tag search API.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional

import httpx

from app.models import Article, EngagementMetrics
from app.sources.base import SourceError, SourceProvider
from app.sources.common import clean_text, parse_utc_datetime

logger = logging.getLogger(__name__)

SEARCH_TAGS = ["ai", "artificial intelligence", "llm", "agents", "automation"]


class DevToFetcher(SourceProvider):
    """Fetches articles from Dev.to tag listings."""

    name = "Dev.to"
    BASE_URL = "https://dev.to/api"
    PER_PAGE = 30

    def __init__(self, *args, tags: List[str] | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.tags = list(tags) if tags is not None else list(SEARCH_TAGS)

    async def fetch_articles(self, subject_id: str) -> List[Article]:
        """
        Fetch relevant articles across all search tags.

        Articles listed under several tags are returned once, at the position
        of their first appearance.
        """
        articles: Dict[str, Article] = {}
        failures = 0

        async with self.client() as client:
            for tag in self.tags:
                try:
                    r = await client.get(
                        f"{self.BASE_URL}/articles",
                        params={"tag": tag, "per_page": self.PER_PAGE},
                    )
                    r.raise_for_status()
                    entries = r.json()
                except (httpx.HTTPError, ValueError) as e:
                    failures += 1
                    logger.warning("Error fetching Dev.to tag %r: %s", tag, e)
                    continue

                for entry in entries or []:
                    try:
                        article = self._to_article(entry, subject_id)
                    except (AttributeError, KeyError, TypeError, ValueError) as e:
                        logger.warning("Skipping malformed Dev.to entry from tag %r: %s", tag, e)
                        continue
                    if article is not None and article.id not in articles:
                        articles[article.id] = article

                await self.pause()

        if self.tags and failures == len(self.tags):
            raise SourceError("All Dev.to tag requests failed")

        return list(articles.values())

    def _to_article(self, entry: dict, subject_id: str) -> Article | None:
        title = clean_text(entry.get("title"))
        content = entry.get("description") or entry.get("body_markdown") or ""
        if not title or not self.is_relevant(title, content, subject_id):
            return None

        return Article(
            id=f"devto-{entry.get('id')}",
            title=title,
            url=entry.get("url") or "",
            content=content,
            source=self.name,
            published_at=self._published_at(entry),
            engagement=EngagementMetrics(
                reactions=entry.get("public_reactions_count"),
                comments=entry.get("comments_count"),
                views=entry.get("page_views_count"),
            ),
        )

    def _published_at(self, entry: dict) -> Optional[datetime]:
        try:
            return parse_utc_datetime(entry.get("published_at"))
        except (ValueError, OverflowError) as e:
            logger.warning("Unparseable Dev.to date for %s: %s", entry.get("id"), e)
            return None
