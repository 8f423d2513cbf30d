"""Shared domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class PlannerDecision(str, Enum):
    KEYWORD_SEARCH = "keyword_search"
    SEMANTIC_SEARCH = "semantic_search"
    HYBRID = "hybrid"


@dataclass(frozen=True, slots=True)
class Document:
    """A corpus entry; immutable once loaded."""

    id: int
    text: str


@dataclass(slots=True)
class ScoredMatch:
    """A retrieval result with score and the source that produced it."""

    text: str
    score: float
    source: str = "local"


@dataclass(slots=True)
class ToolTrace:
    """Trace record for an executed tool call."""

    name: str
    input_payload: dict[str, Any]
    output_preview: str
    latency_ms: float
