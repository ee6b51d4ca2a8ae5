"""
File: app/models.py
Internal data structures used during collection/scoring.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Dict, List, Optional, Union


JsonDict = Dict[str, Any]
Number = Union[int, float]


@dataclass(frozen=True)
class Subject:
    """A named topic definition used to filter articles."""

    id: str
    name: str
    description: str
    keywords: List[str] = field(default_factory=list)  # primary terms, 10 points each
    related_terms: List[str] = field(default_factory=list)  # secondary terms, 5 points each


@dataclass
class SubjectMatch:
    subject_id: str
    matched_keywords: List[str]
    relevance_score: int


@dataclass(frozen=True)
class EngagementMetrics:
    """Source-reported popularity signals.

    None means the source does not report the metric. It counts as 0 for
    scoring but is left out when the metrics are serialised.
    """

    upvotes: Optional[Number] = None
    comments: Optional[Number] = None
    shares: Optional[Number] = None
    reactions: Optional[Number] = None
    views: Optional[Number] = None

    def reported(self) -> Dict[str, Number]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass(frozen=True)
class ScoringWeights:
    upvotes: float = 1.0
    comments: float = 2.0
    shares: float = 1.5
    reactions: float = 0.8
    views: float = 0.01


@dataclass(frozen=True)
class Article:
    """Normalized article as returned by a source provider."""

    # Identity & content
    id: str  # namespaced by source, e.g. "hn-12345"
    title: str
    url: str
    content: str
    source: str  # human readable, e.g. "Reddit r/MachineLearning"
    published_at: Optional[datetime]
    engagement: EngagementMetrics = field(default_factory=EngagementMetrics)


@dataclass(frozen=True)
class ScoreBreakdown:
    upvotes_contribution: float
    comments_contribution: float
    shares_contribution: float
    reactions_contribution: float
    views_contribution: float
    total_score: float
    explanation: str


@dataclass(frozen=True)
class ScoredArticle(Article):
    """Article with engagement score and relevance details attached.

    engagement_score always equals score_breakdown.total_score.
    """

    engagement_score: float = 0.0
    score_breakdown: Optional[ScoreBreakdown] = None
    matched_keywords: List[str] = field(default_factory=list)
    relevance_score: int = 0


__all__ = [
    "Article",
    "EngagementMetrics",
    "JsonDict",
    "ScoreBreakdown",
    "ScoredArticle",
    "ScoringWeights",
    "Subject",
    "SubjectMatch",
]
