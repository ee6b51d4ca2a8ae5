"""
Best-effort enrichment of short article summaries with scraped page text.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import List, Optional, Sequence

import httpx
from bs4 import BeautifulSoup

from app.config import CONTENT_USER_AGENT, MAX_CONTENT_WORDS, MIN_CONTENT_LENGTH, settings
from app.models import ScoredArticle
from app.utils import normalize_text, truncate_words

logger = logging.getLogger(__name__)

# Boilerplate removed before extraction
STRIP_SELECTORS = "script, style, nav, header, footer, aside, .ads, .advertisement, .sidebar"

# Tried in order; the first selector with any match wins, else <body>
CONTENT_SELECTORS = [
    "article",
    '[role="main"]',
    ".post-content",
    ".article-content",
    ".entry-content",
    ".content",
    "main",
    ".story-body",
    "#article-body",
]


def extract_readable_text(html: str, max_words: int = MAX_CONTENT_WORDS) -> str:
    """
    Extract the main readable text from an HTML page.

    Args:
        html: Raw HTML document
        max_words: Word cap for the returned text

    Returns:
        Whitespace-normalized text, possibly empty
    """
    soup = BeautifulSoup(html, "lxml")

    for element in soup.select(STRIP_SELECTORS):
        element.decompose()

    text = ""
    for selector in CONTENT_SELECTORS:
        matches = soup.select(selector)
        if matches:
            text = " ".join(match.get_text(" ") for match in matches)
            break

    if not text and soup.body is not None:
        text = soup.body.get_text(" ")

    return truncate_words(normalize_text(text), max_words)


async def fetch_article_content(url: str, client: httpx.AsyncClient) -> str:
    """
    Fetch a page and extract its readable text.

    Any failure, including a timeout, yields an empty string.
    """
    try:
        r = await client.get(url)
        r.raise_for_status()
        return extract_readable_text(r.text)
    except Exception as e:
        logger.warning("Error fetching content from %s: %s: %s", url, type(e).__name__, e)
        return ""


async def enrich_articles_with_content(
    articles: Sequence[ScoredArticle],
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[ScoredArticle]:
    """
    Replace short summaries with scraped page text.

    Articles whose content is under MIN_CONTENT_LENGTH characters are fetched;
    when the fetch yields nothing the original content is kept. Longer content
    is capped at MAX_CONTENT_WORDS words. Order and length are preserved.
    """
    if not articles:
        return []

    sem = asyncio.Semaphore(max(1, settings.ENRICH_CONCURRENCY))

    async with httpx.AsyncClient(
        headers={"User-Agent": CONTENT_USER_AGENT},
        timeout=settings.CONTENT_FETCH_TIMEOUT_SECONDS,
        follow_redirects=True,
        transport=transport,
    ) as client:

        async def enrich_one(article: ScoredArticle) -> ScoredArticle:
            content = article.content or ""
            if len(content) >= MIN_CONTENT_LENGTH:
                return replace(article, content=truncate_words(content, MAX_CONTENT_WORDS))

            async with sem:
                fetched = await fetch_article_content(article.url, client)
            return replace(article, content=fetched) if fetched else article

        return list(await asyncio.gather(*(enrich_one(article) for article in articles)))
