"""Length-based planner arbitrating between the local scorers."""

from __future__ import annotations

from hybrid_agent.config import PlannerConfig
from hybrid_agent.types import PlannerDecision, ScoredMatch


def decide_planner(
    token_count: int,
    semantic_top: ScoredMatch,
    keyword_top: ScoredMatch,
    config: PlannerConfig | None = None,
) -> PlannerDecision:
    """Choose which scorer's result to trust for a query of `token_count` tokens.

    Rules, first match wins:
    1. Short queries are taken literally: keyword search if its top score
       clears `keyword_confidence`, otherwise semantic search.
    2. Long queries carry enough context for vector similarity.
    3. Everything in between consults both scorers (hybrid).

    `semantic_top` is accepted so every strategy sees the same inputs, but
    no current rule reads it.
    """
    del semantic_top
    cfg = config or PlannerConfig()

    if token_count <= cfg.short_query_max_tokens:
        if keyword_top.score > cfg.keyword_confidence:
            return PlannerDecision.KEYWORD_SEARCH
        return PlannerDecision.SEMANTIC_SEARCH

    if token_count >= cfg.long_query_min_tokens:
        return PlannerDecision.SEMANTIC_SEARCH

    return PlannerDecision.HYBRID


def select_best(
    decision: PlannerDecision,
    semantic_top: ScoredMatch,
    keyword_top: ScoredMatch,
) -> ScoredMatch:
    if decision is PlannerDecision.KEYWORD_SEARCH:
        return keyword_top
    if decision is PlannerDecision.SEMANTIC_SEARCH:
        return semantic_top
    # Hybrid: keyword wins only on a strictly higher score.
    return semantic_top if semantic_top.score >= keyword_top.score else keyword_top
