"""Route tests for the FastAPI application."""

from __future__ import annotations

import re
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

import app.main as main_module
from app.main import app
from app.models import Subject
from app.sources.base import SourceProvider
from app.sources.collector import ArticleAggregator


class StubProvider(SourceProvider):
    def __init__(self, registry, name, articles=(), error=None):
        super().__init__(registry, request_delay=0)
        self.name = name
        self.articles = list(articles)
        self.error = error
        self.calls = []

    async def fetch_articles(self, subject_id):
        self.calls.append(subject_id)
        if self.error is not None:
            raise self.error
        return list(self.articles)


@pytest.fixture
def enrich_calls(monkeypatch):
    calls = []

    async def passthrough(articles):
        calls.append(list(articles))
        return list(articles)

    monkeypatch.setattr(main_module, "enrich_articles_with_content", passthrough)
    return calls


@pytest.fixture
def client(monkeypatch, registry):
    monkeypatch.setattr(main_module, "registry", registry)
    return TestClient(app)


def use_providers(monkeypatch, providers):
    monkeypatch.setattr(main_module, "aggregator", ArticleAggregator(providers))


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    timestamp = body["timestamp"]
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", timestamp)
    assert datetime.fromisoformat(timestamp.replace("Z", "+00:00")).utcoffset() == timedelta(0)


def test_list_subjects(client):
    response = client.get("/api/subjects")

    assert response.status_code == 200
    subjects = response.json()["subjects"]
    agentic = next(s for s in subjects if s["id"] == "agentic-ai")
    assert agentic["name"] == "Agentic AI"
    assert set(agentic) == {"id", "name", "description", "keywords", "relatedTerms"}


def test_get_subject(client):
    response = client.get("/api/subjects/agentic-ai")

    assert response.status_code == 200
    assert response.json()["subject"]["id"] == "agentic-ai"


def test_get_subject_added_at_runtime(client, registry):
    registry.add(Subject("rust", "Rust", "The language", ["rust"], ["cargo"]))

    response = client.get("/api/subjects/rust")

    assert response.json()["subject"]["relatedTerms"] == ["cargo"]


def test_get_subject_not_found(client):
    response = client.get("/api/subjects/non-existent")

    assert response.status_code == 404
    assert response.json() == {"error": "Subject not found"}


def test_scoring_method(client):
    response = client.get("/api/scoring-method")

    assert response.status_code == 200
    body = response.json()
    assert "Formula" in body["explanation"]
    assert body["weights"] == {"upvotes": 1.0, "comments": 2.0, "shares": 1.5, "reactions": 0.8, "views": 0.01}


def test_articles_unknown_subject_makes_no_provider_calls(client, monkeypatch, registry, enrich_calls):
    provider = StubProvider(registry, "HN")
    use_providers(monkeypatch, [provider])

    response = client.get("/api/articles/unknown-subject")

    assert response.status_code == 404
    assert response.json() == {"error": "Subject not found"}
    assert provider.calls == []
    assert enrich_calls == []


def test_articles_pipeline(client, monkeypatch, registry, make_article, enrich_calls):
    use_providers(
        monkeypatch,
        [
            StubProvider(registry, "HN", [make_article("hn-1", "Agentic AI launch", upvotes=10, comments=1)]),
            StubProvider(registry, "Dev.to", [make_article("devto-1", "ai agents intro", reactions=100, views=0)]),
        ],
    )

    response = client.get("/api/articles/agentic-ai")

    assert response.status_code == 200
    body = response.json()
    assert body["subject"] == "Agentic AI"
    assert body["totalFound"] == 2
    assert body["returned"] == 2
    assert "Formula" in body["scoringMethod"]
    assert body["weights"]["comments"] == 2.0

    first, second = body["articles"]
    assert first["id"] == "devto-1"
    assert first["engagementScore"] == pytest.approx(80)
    assert first["engagement"] == {"reactions": 100, "views": 0}
    assert first["scoreBreakdown"]["totalScore"] == first["engagementScore"]
    assert first["matchedKeywords"] == ["ai agents", "ai agent"]
    assert first["relevanceScore"] == 20
    assert second["id"] == "hn-1"
    assert second["engagement"] == {"upvotes": 10, "comments": 1}
    assert second["publishedAt"].startswith("2024-05-01T00:00:00")
    assert len(enrich_calls) == 1


def test_articles_limit(client, monkeypatch, registry, make_article, enrich_calls):
    articles = [make_article(f"hn-{i}", "agentic ai", upvotes=i) for i in range(15)]
    use_providers(monkeypatch, [StubProvider(registry, "HN", articles)])

    default = client.get("/api/articles/agentic-ai").json()
    limited = client.get("/api/articles/agentic-ai?limit=5").json()
    invalid = client.get("/api/articles/agentic-ai?limit=abc").json()

    assert default["returned"] == 10
    assert limited["returned"] == 5
    assert limited["totalFound"] == 15
    assert [a["id"] for a in limited["articles"]] == ["hn-14", "hn-13", "hn-12", "hn-11", "hn-10"]
    assert invalid["returned"] == 10


def test_articles_limit_zero_returns_no_articles(client, monkeypatch, registry, make_article, enrich_calls):
    articles = [make_article(f"hn-{i}", "agentic ai", upvotes=i) for i in range(3)]
    use_providers(monkeypatch, [StubProvider(registry, "HN", articles)])

    response = client.get("/api/articles/agentic-ai?limit=0")

    assert response.status_code == 200
    body = response.json()
    assert body["totalFound"] == 3
    assert body["returned"] == 0
    assert body["articles"] == []


def test_articles_partial_provider_failure(client, monkeypatch, registry, make_article, enrich_calls):
    use_providers(
        monkeypatch,
        [
            StubProvider(registry, "HN", error=RuntimeError("HN down")),
            StubProvider(registry, "Reddit", [make_article("reddit-1", "agentic ai", upvotes=3)]),
        ],
    )

    body = client.get("/api/articles/agentic-ai").json()

    assert body["totalFound"] == 1
    assert [a["id"] for a in body["articles"]] == ["reddit-1"]


def test_articles_all_providers_fail_is_empty_not_error(client, monkeypatch, registry, enrich_calls):
    use_providers(monkeypatch, [StubProvider(registry, "HN", error=RuntimeError("down"))])

    response = client.get("/api/articles/agentic-ai")

    assert response.status_code == 200
    assert response.json()["totalFound"] == 0
    assert response.json()["articles"] == []


def test_articles_pipeline_error_returns_500(client, monkeypatch, registry, make_article):
    use_providers(monkeypatch, [StubProvider(registry, "HN", [make_article("hn-1", "agentic ai")])])

    async def broken(articles):
        raise RuntimeError("enrichment bug")

    monkeypatch.setattr(main_module, "enrich_articles_with_content", broken)

    response = client.get("/api/articles/agentic-ai")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch articles"}
