"""
File: app/sources/reddit.py
Reddit hot-listing JSON fetcher (unauthenticated). For production, prefer OAuth API.
"""

from __future__ import annotations

import logging
from typing import List

import httpx

from app.models import Article, EngagementMetrics
from app.sources.base import SourceError, SourceProvider
from app.sources.common import clean_text, from_unix_timestamp

logger = logging.getLogger(__name__)

TECH_SUBREDDITS = [
    "artificial",
    "MachineLearning",
    "technology",
    "programming",
    "LocalLLaMA",
    "singularity",
    "ChatGPT",
    "OpenAI",
]


class RedditFetcher(SourceProvider):
    name = "Reddit"
    BASE_URL = "https://www.reddit.com"
    LISTING_LIMIT = 50

    def __init__(self, *args, subreddits: List[str] | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.subreddits = list(subreddits) if subreddits is not None else list(TECH_SUBREDDITS)

    async def fetch_articles(self, subject_id: str) -> List[Article]:
        items: List[Article] = []
        failures = 0

        async with self.client() as client:
            for subreddit in self.subreddits:
                try:
                    r = await client.get(
                        f"{self.BASE_URL}/r/{subreddit}/hot.json",
                        params={"limit": self.LISTING_LIMIT},
                    )
                    r.raise_for_status()
                    data = r.json()
                except (httpx.HTTPError, ValueError) as e:
                    failures += 1
                    logger.warning("Error fetching from r/%s: %s", subreddit, e)
                    continue

                items.extend(self._parse_listing(data, subject_id))
                await self.pause()

        if self.subreddits and failures == len(self.subreddits):
            raise SourceError("All subreddit requests failed")

        return items

    def _parse_listing(self, data: dict, subject_id: str) -> List[Article]:
        items: List[Article] = []
        for child in (data or {}).get("data", {}).get("children", []):
            p = child.get("data", {})

            title = clean_text(p.get("title"))
            selftext = p.get("selftext") or ""
            if not title or not self.is_relevant(title, selftext, subject_id):
                continue

            url = p.get("url") or ""
            link = url if url.startswith("http") else f"{self.BASE_URL}{p.get('permalink', '')}"

            items.append(
                Article(
                    id=f"reddit-{p.get('id')}",
                    source=f"Reddit r/{p.get('subreddit', '')}",
                    title=title,
                    url=link,
                    content=selftext,
                    published_at=from_unix_timestamp(p.get("created_utc")),
                    engagement=EngagementMetrics(
                        upvotes=p.get("score"),
                        comments=p.get("num_comments"),
                    ),
                )
            )

        return items
