"""
Hacker News fetcher using the public Firebase API.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx

from app.models import Article, EngagementMetrics
from app.sources.base import SourceError, SourceProvider
from app.sources.common import clean_text, from_unix_timestamp

logger = logging.getLogger(__name__)


class HackerNewsFetcher(SourceProvider):
    """Fetches stories from the Hacker News top and new lists."""

    name = "Hacker News"
    BASE_URL = "https://hacker-news.firebaseio.com/v0"
    ITEM_URL = "https://news.ycombinator.com/item?id={id}"
    TOP_STORIES_LIMIT = 100
    NEW_STORIES_LIMIT = 50

    async def fetch_articles(self, subject_id: str) -> List[Article]:
        """
        Fetch relevant stories for a subject.

        Args:
            subject_id: Registered subject id

        Returns:
            List of Article objects in story-list order

        Raises:
            SourceError: If either story list cannot be fetched
        """
        async with self.client() as client:
            try:
                top_ids = await self._story_ids(client, "topstories", self.TOP_STORIES_LIMIT)
                new_ids = await self._story_ids(client, "newstories", self.NEW_STORIES_LIMIT)
            except (httpx.HTTPError, ValueError) as e:
                raise SourceError(f"Hacker News story lists unavailable: {e}") from e

            # De-duplicate, keeping the first position of each id
            story_ids = list(dict.fromkeys([*top_ids, *new_ids]))

            items = await asyncio.gather(*(self._item(client, story_id) for story_id in story_ids))

        articles: List[Article] = []
        for item in items:
            if not item or item.get("type") != "story" or not item.get("title"):
                continue

            title = clean_text(item.get("title"))
            content = item.get("text") or ""
            if not self.is_relevant(title, content, subject_id):
                continue

            articles.append(
                Article(
                    id=f"hn-{item['id']}",
                    title=title,
                    url=item.get("url") or self.ITEM_URL.format(id=item["id"]),
                    content=content,
                    source=self.name,
                    published_at=from_unix_timestamp(item.get("time")),
                    engagement=EngagementMetrics(
                        upvotes=item.get("score") or 0,
                        comments=item.get("descendants") or 0,
                    ),
                )
            )

        return articles

    async def _story_ids(self, client: httpx.AsyncClient, listing: str, limit: int) -> List[int]:
        r = await client.get(f"{self.BASE_URL}/{listing}.json")
        r.raise_for_status()
        return list(r.json() or [])[:limit]

    async def _item(self, client: httpx.AsyncClient, story_id: int) -> Optional[Dict[str, Any]]:
        """Fetch one item; a failed item is skipped rather than failing the batch."""
        try:
            r = await client.get(f"{self.BASE_URL}/item/{story_id}.json")
            r.raise_for_status()
            return r.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.debug("Skipping Hacker News item %s: %s", story_id, e)
            return None
