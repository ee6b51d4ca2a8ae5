# app/schemas.py
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from app.models import ScoredArticle, ScoringWeights, Subject


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SubjectOut(ApiModel):
    id: str
    name: str
    description: str
    keywords: List[str]
    related_terms: List[str] = Field(alias="relatedTerms")

    @classmethod
    def from_subject(cls, subject: Subject) -> "SubjectOut":
        return cls(
            id=subject.id,
            name=subject.name,
            description=subject.description,
            keywords=list(subject.keywords),
            related_terms=list(subject.related_terms),
        )


class SubjectListResponse(ApiModel):
    subjects: List[SubjectOut]


class SubjectResponse(ApiModel):
    subject: SubjectOut


class WeightsOut(ApiModel):
    upvotes: float
    comments: float
    shares: float
    reactions: float
    views: float

    @classmethod
    def from_weights(cls, weights: ScoringWeights) -> "WeightsOut":
        return cls(
            upvotes=weights.upvotes,
            comments=weights.comments,
            shares=weights.shares,
            reactions=weights.reactions,
            views=weights.views,
        )


class ScoringMethodResponse(ApiModel):
    explanation: str
    weights: WeightsOut


class ScoreBreakdownOut(ApiModel):
    upvotes_contribution: float = Field(alias="upvotesContribution")
    comments_contribution: float = Field(alias="commentsContribution")
    shares_contribution: float = Field(alias="sharesContribution")
    reactions_contribution: float = Field(alias="reactionsContribution")
    views_contribution: float = Field(alias="viewsContribution")
    total_score: float = Field(alias="totalScore")
    explanation: str


class ArticleOut(ApiModel):
    id: str
    title: str
    url: str
    content: str
    source: str
    published_at: Optional[datetime] = Field(alias="publishedAt")
    # Only the metrics the source reports; absent ones are omitted, not zeroed
    engagement: Dict[str, Union[int, float]]
    engagement_score: float = Field(alias="engagementScore")
    score_breakdown: ScoreBreakdownOut = Field(alias="scoreBreakdown")
    matched_keywords: List[str] = Field(alias="matchedKeywords")
    relevance_score: int = Field(alias="relevanceScore")

    @classmethod
    def from_article(cls, article: ScoredArticle) -> "ArticleOut":
        breakdown = article.score_breakdown
        return cls(
            id=article.id,
            title=article.title,
            url=article.url,
            content=article.content,
            source=article.source,
            published_at=article.published_at,
            engagement=article.engagement.reported(),
            engagement_score=article.engagement_score,
            score_breakdown=ScoreBreakdownOut(
                upvotes_contribution=breakdown.upvotes_contribution,
                comments_contribution=breakdown.comments_contribution,
                shares_contribution=breakdown.shares_contribution,
                reactions_contribution=breakdown.reactions_contribution,
                views_contribution=breakdown.views_contribution,
                total_score=breakdown.total_score,
                explanation=breakdown.explanation,
            ),
            matched_keywords=list(article.matched_keywords),
            relevance_score=article.relevance_score,
        )


class ArticlesResponse(ApiModel):
    subject: str
    total_found: int = Field(alias="totalFound")
    returned: int
    scoring_method: str = Field(alias="scoringMethod")
    weights: WeightsOut
    articles: List[ArticleOut]


class HealthResponse(ApiModel):
    status: str
    timestamp: str


class ErrorResponse(ApiModel):
    error: str
