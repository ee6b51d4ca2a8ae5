"""
Engagement scoring and ranking.

Every article gets a weighted linear score over the engagement metrics its
source reports, together with a breakdown that explains the number. Ranking
is a stable sort on that score so equal scores keep their collection order.
"""
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from app.core.relevance import match_content
from app.core.subjects import SubjectRegistry
from app.models import Article, ScoreBreakdown, ScoredArticle, ScoringWeights
from app.utils import format_number

DEFAULT_WEIGHTS = ScoringWeights()

# Fixed rendering order for breakdowns and explanations
METRIC_NAMES: Tuple[str, ...] = ("upvotes", "comments", "shares", "reactions", "views")

NO_METRICS_EXPLANATION = "No engagement metrics available"


def calculate_engagement_score(article: Article, weights: ScoringWeights = DEFAULT_WEIGHTS) -> ScoreBreakdown:
    """
    Calculate the weighted engagement score for one article.

    Args:
        article: Article with engagement metrics
        weights: Per-metric multipliers

    Returns:
        ScoreBreakdown with per-metric contributions and a readable derivation
    """
    contributions = {}
    parts: List[str] = []

    for name in METRIC_NAMES:
        value = getattr(article.engagement, name)
        weight = getattr(weights, name)
        contribution = (value or 0) * weight
        contributions[name] = contribution
        if value:
            parts.append(f"{format_number(value)} {name} x {format_number(weight)} = {contribution:.1f}")

    total = sum(contributions[name] for name in METRIC_NAMES)

    if parts:
        explanation = f"Score calculation: {' + '.join(parts)} = {total:.1f}"
    else:
        explanation = NO_METRICS_EXPLANATION

    return ScoreBreakdown(
        upvotes_contribution=contributions["upvotes"],
        comments_contribution=contributions["comments"],
        shares_contribution=contributions["shares"],
        reactions_contribution=contributions["reactions"],
        views_contribution=contributions["views"],
        total_score=total,
        explanation=explanation,
    )


def score_articles(
    articles: Iterable[Article],
    subject_id: str,
    registry: SubjectRegistry,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> List[ScoredArticle]:
    """
    Score every article and attach its keyword matches.

    Relevance is re-checked here independently of any provider gating. An
    article without a match is kept with no keywords and relevance 0.
    Output order and length match the input.
    """
    scored: List[ScoredArticle] = []

    for article in articles:
        breakdown = calculate_engagement_score(article, weights)
        match = match_content(f"{article.title} {article.content}", subject_id, registry)

        scored.append(
            ScoredArticle(
                id=article.id,
                title=article.title,
                url=article.url,
                content=article.content,
                source=article.source,
                published_at=article.published_at,
                engagement=article.engagement,
                engagement_score=breakdown.total_score,
                score_breakdown=breakdown,
                matched_keywords=list(match.matched_keywords) if match else [],
                relevance_score=match.relevance_score if match else 0,
            )
        )

    return scored


def get_top_articles(scored_articles: Sequence[ScoredArticle], limit: int = 10) -> List[ScoredArticle]:
    """
    Return the highest scoring articles, best first.

    The sort is stable, so ties keep their input order. The input sequence is
    not modified.
    """
    if limit <= 0:
        return []
    ranked = sorted(scored_articles, key=lambda article: article.engagement_score, reverse=True)
    return ranked[:limit]


def get_scoring_method_explanation(weights: ScoringWeights = DEFAULT_WEIGHTS) -> str:
    """Describe the scoring formula using the given weights."""
    w = {name: format_number(getattr(weights, name)) for name in METRIC_NAMES}
    formula = " + ".join(f"({name} × {w[name]})" for name in METRIC_NAMES)

    return f"""
## Engagement Score Calculation

The engagement score is calculated using a weighted sum of various engagement metrics:

### Weights Used:
- **Upvotes**: {w['upvotes']}x - Direct measure of user approval
- **Comments**: {w['comments']}x - Comments indicate deeper engagement
- **Shares**: {w['shares']}x - Indicates content worth spreading
- **Reactions**: {w['reactions']}x - Quick engagement indicator
- **Views**: {w['views']}x - Views alone don't indicate quality

### Formula:
`Score = {formula}`

Metrics a source does not report count as zero.

### Data Sources:
- **Hacker News**: Provides upvotes (points) and comment counts
- **Reddit**: Provides upvotes (score) and comment counts
- **Dev.to**: Provides reactions, comments, and sometimes view counts

### Why These Weights?
- Comments ({w['comments']}x) require the most effort and indicate genuine interest
- Shares ({w['shares']}x) show users found content valuable enough to spread
- Upvotes ({w['upvotes']}x) are the baseline engagement metric
- Reactions ({w['reactions']}x) are easier to give than upvotes on some platforms
- Views ({w['views']}x) don't indicate quality or engagement depth
""".strip()
