"""
Main FastAPI application and routing layer.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.core.scoring import (
    DEFAULT_WEIGHTS,
    get_scoring_method_explanation,
    get_top_articles,
    score_articles,
)
from app.core.subjects import build_default_registry
from app.schemas import (
    ArticleOut,
    ArticlesResponse,
    ErrorResponse,
    HealthResponse,
    ScoringMethodResponse,
    SubjectListResponse,
    SubjectOut,
    SubjectResponse,
    WeightsOut,
)
from app.services.enrichment import enrich_articles_with_content
from app.sources.collector import ArticleAggregator, build_default_providers
from app.utils import now_utc

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
logger = logging.getLogger(__name__)

SUBJECT_NOT_FOUND = "Subject not found"
PIPELINE_FAILED = "Failed to fetch articles"

# Built once at startup and shared by every request
registry = build_default_registry()
aggregator = ArticleAggregator(build_default_providers(registry))


def parse_limit(raw: Optional[str], default: int = settings.DEFAULT_ARTICLE_LIMIT) -> int:
    """
    Parse the limit query parameter, falling back to the default.

    Args:
        raw: Raw query string value (can be None)
        default: Value used when raw is missing or not an integer

    Returns:
        Parsed limit
    """
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def not_found() -> JSONResponse:
    return JSONResponse(status_code=404, content=ErrorResponse(error=SUBJECT_NOT_FOUND).model_dump())


# Initialize FastAPI app
app = FastAPI(
    title="Subject News Aggregator API",
    version="0.1.0",
    description="Aggregates articles about a subject and ranks them by engagement",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/subjects", response_model=SubjectListResponse)
async def list_subjects():
    return SubjectListResponse(subjects=[SubjectOut.from_subject(s) for s in registry.get_all()])


@app.get(
    "/api/subjects/{subject_id}",
    response_model=SubjectResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_subject(subject_id: str):
    subject = registry.get(subject_id)
    if subject is None:
        return not_found()
    return SubjectResponse(subject=SubjectOut.from_subject(subject))


@app.get("/api/scoring-method", response_model=ScoringMethodResponse)
async def get_scoring_method():
    return ScoringMethodResponse(
        explanation=get_scoring_method_explanation(DEFAULT_WEIGHTS),
        weights=WeightsOut.from_weights(DEFAULT_WEIGHTS),
    )


@app.get(
    "/api/articles/{subject_id}",
    response_model=ArticlesResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_articles(
    subject_id: str,
    limit: Optional[str] = Query(None, description="Maximum number of articles to return (default 10)"),
):
    """
    Fetch, score and rank articles for a subject.

    Args:
        subject_id: Registered subject id
        limit: Maximum number of articles to return

    Returns:
        ArticlesResponse with the top articles, best first
    """
    subject = registry.get(subject_id)
    if subject is None:
        return not_found()

    top_n = parse_limit(limit)

    try:
        logger.info("Fetching articles for subject: %s", subject.name)
        articles = await aggregator.fetch_all_articles(subject_id)
        logger.info("Total articles found: %d", len(articles))

        scored = score_articles(articles, subject_id, registry, DEFAULT_WEIGHTS)
        top_articles = get_top_articles(scored, top_n)
        logger.info("Returning top %d articles", len(top_articles))

        enriched = await enrich_articles_with_content(top_articles)

        return ArticlesResponse(
            subject=subject.name,
            total_found=len(articles),
            returned=len(enriched),
            scoring_method=get_scoring_method_explanation(DEFAULT_WEIGHTS),
            weights=WeightsOut.from_weights(DEFAULT_WEIGHTS),
            articles=[ArticleOut.from_article(article) for article in enriched],
        )
    except Exception:
        logger.exception("Error fetching articles for %s", subject_id)
        return JSONResponse(status_code=500, content=ErrorResponse(error=PIPELINE_FAILED).model_dump())


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="ok", timestamp=now_utc().isoformat(timespec="milliseconds").replace("+00:00", "Z"))


if __name__ == "__main__":
    # For development
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT, reload=True)
