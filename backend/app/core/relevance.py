"""
Keyword-based relevance matching between free text and a subject.
"""
from __future__ import annotations

from typing import List, Optional

from app.core.subjects import SubjectRegistry
from app.models import SubjectMatch

KEYWORD_POINTS = 10
RELATED_TERM_POINTS = 5


def match_content(text: str, subject_id: str, registry: SubjectRegistry) -> Optional[SubjectMatch]:
    """
    Match text against a subject's keywords and related terms.

    Matching is a case-insensitive substring test, counted once per term
    regardless of how often the term occurs.

    Args:
        text: Free text to inspect
        subject_id: Registered subject id
        registry: Registry the subject is looked up in

    Returns:
        SubjectMatch, or None when the subject is unknown or nothing matched
    """
    subject = registry.get(subject_id)
    if subject is None or not text:
        return None

    lowered = text.lower()
    matched: List[str] = []
    score = 0

    for keyword in subject.keywords:
        if keyword.lower() in lowered:
            matched.append(keyword)
            score += KEYWORD_POINTS

    for term in subject.related_terms:
        if term.lower() in lowered:
            matched.append(term)
            score += RELATED_TERM_POINTS

    if not matched:
        return None

    return SubjectMatch(subject_id=subject_id, matched_keywords=matched, relevance_score=score)


def is_relevant_to_subject(title: str, content: str, subject_id: str, registry: SubjectRegistry) -> bool:
    """Return True if title and content together match the subject."""
    match = match_content(f"{title} {content}", subject_id, registry)
    return match is not None and match.relevance_score > 0
