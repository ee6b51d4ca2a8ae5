"""
Subject definitions and the in-memory subject registry.
"""
from __future__ import annotations

import threading
from typing import Dict, Iterable, List, Optional

from app.models import Subject


AGENTIC_AI_SUBJECT = Subject(
    id="agentic-ai",
    name="Agentic AI",
    description=(
        "Autonomous AI systems that plan, call tools and act on their own "
        "to accomplish multi-step goals."
    ),
    keywords=[
        "agentic ai",
        "ai agents",
        "ai agent",
        "autonomous agents",
        "autonomous agent",
        "multi-agent",
        "agentic workflow",
        "agent framework",
    ],
    related_terms=[
        "langchain",
        "langgraph",
        "autogen",
        "crewai",
        "llamaindex",
        "auto-gpt",
        "babyagi",
        "function calling",
        "tool calling",
        "tool use",
        "model context protocol",
        "retrieval augmented",
        "large language model",
        "llm",
        "copilot",
    ],
)

DEFAULT_SUBJECTS: List[Subject] = [AGENTIC_AI_SUBJECT]


class SubjectRegistry:
    """Subjects keyed by id, kept in registration order.

    Writes are last-writer-wins per id; an overwritten subject keeps its
    original position in get_all().
    """

    def __init__(self, subjects: Iterable[Subject] = ()) -> None:
        self._subjects: Dict[str, Subject] = {}
        self._lock = threading.Lock()
        for subject in subjects:
            self.add(subject)

    def get(self, subject_id: str) -> Optional[Subject]:
        with self._lock:
            return self._subjects.get(subject_id)

    def get_all(self) -> List[Subject]:
        with self._lock:
            return list(self._subjects.values())

    def add(self, subject: Subject) -> None:
        with self._lock:
            self._subjects[subject.id] = subject

    def __contains__(self, subject_id: object) -> bool:
        with self._lock:
            return subject_id in self._subjects

    def __len__(self) -> int:
        with self._lock:
            return len(self._subjects)


def build_default_registry() -> SubjectRegistry:
    """Create a registry seeded with the built-in subjects."""
    return SubjectRegistry(DEFAULT_SUBJECTS)
