"""
Shared contract for article source providers.
"""
from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import List, Optional

import httpx

from app.config import SOURCE_HEADERS, settings
from app.core.relevance import is_relevant_to_subject
from app.core.subjects import SubjectRegistry
from app.models import Article


class SourceError(Exception):
    """Raised when a provider cannot produce any result for a request."""


class SourceProvider(ABC):
    """Fetches normalized, subject-relevant articles from one content source."""

    name: str = ""

    def __init__(
        self,
        registry: SubjectRegistry,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        request_delay: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.registry = registry
        self._transport = transport
        self.request_delay = settings.REQUEST_DELAY_SECONDS if request_delay is None else request_delay
        self.timeout = settings.HTTP_TIMEOUT_SECONDS if timeout is None else timeout

    @abstractmethod
    async def fetch_articles(self, subject_id: str) -> List[Article]:
        """Return the source's articles relevant to subject_id, in source order."""

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=SOURCE_HEADERS,
            timeout=self.timeout,
            transport=self._transport,
        )

    def is_relevant(self, title: str, content: str, subject_id: str) -> bool:
        return is_relevant_to_subject(title, content, subject_id, self.registry)

    async def pause(self) -> None:
        # Self-throttle between sequential calls to the same API
        if self.request_delay > 0:
            await asyncio.sleep(self.request_delay)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
