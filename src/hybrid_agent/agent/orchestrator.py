"""Query orchestrator running the full hybrid retrieval pipeline."""

from __future__ import annotations

import asyncio
import logging
from math import isfinite
from typing import Any

from hybrid_agent.agent.fallback import PineconeStub, RemoteMatchSource
from hybrid_agent.agent.planner import decide_planner, select_best
from hybrid_agent.agent.registry import ToolRegistry
from hybrid_agent.agent.tools import KEYWORD_TOOL, SEMANTIC_TOOL, register_builtin_tools
from hybrid_agent.config import AgentConfig, PlannerConfig
from hybrid_agent.errors import FallbackUnavailable, InputError, InvariantViolation
from hybrid_agent.obs.tracing import Timer, TraceStore
from hybrid_agent.retrieval.retriever import LocalRetriever
from hybrid_agent.retrieval.tokenizer import tokenize
from hybrid_agent.types import ScoredMatch, ToolTrace

logger = logging.getLogger(__name__)


def validate_query(query: Any) -> str:
    """Return the trimmed query or raise `InputError`."""
    if query is None:
        raise InputError("query is required")
    if not isinstance(query, str):
        raise InputError(f"query must be a string, got {type(query).__name__}")
    trimmed = query.strip()
    if not trimmed:
        raise InputError("query must not be empty")
    return trimmed


class QueryOrchestrator:
    """Answers one query at a time from the local corpus or the remote source.

    Both local scorers always run. The planner then picks whose top match to
    trust, and a match below `confidence_threshold` is replaced by the remote
    source's answer. The remote call is the only await in the pipeline.
    """

    def __init__(
        self,
        retriever: LocalRetriever,
        *,
        remote_source: RemoteMatchSource | None = None,
        tool_registry: ToolRegistry | None = None,
        trace_store: TraceStore | None = None,
        config: AgentConfig | None = None,
        planner_config: PlannerConfig | None = None,
    ) -> None:
        self.retriever = retriever
        self.remote_source = remote_source or PineconeStub()
        self.trace_store = trace_store if trace_store is not None else TraceStore()
        self.config = config or AgentConfig()
        self.planner_config = planner_config or PlannerConfig()
        if tool_registry is None:
            tool_registry = ToolRegistry()
            register_builtin_tools(tool_registry, retriever)
        self.tool_registry = tool_registry

    async def process_query(self, query: Any) -> dict[str, Any]:
        """Run one evaluation and return the JSON-ready result.

        Raises:
            InputError: the query is missing or blank.
            InvariantViolation: a scorer produced an inconsistent result.
        """
        query = validate_query(query)
        observed_tools: list[ToolTrace] = []
        fallback_error: str | None = None

        with Timer() as timer:
            query_tokens = tokenize(query)
            payload = {"query": query}
            semantic: list[ScoredMatch] = self.tool_registry.execute(
                SEMANTIC_TOOL, payload, observer=observed_tools.append
            )
            keyword: list[ScoredMatch] = self.tool_registry.execute(
                KEYWORD_TOOL, payload, observer=observed_tools.append
            )
            if not semantic or not keyword:
                raise InvariantViolation("local scorers returned no candidates")

            decision = decide_planner(
                len(query_tokens), semantic[0], keyword[0], self.planner_config
            )
            best = select_best(decision, semantic[0], keyword[0])
            best_local_score = best.score
            logger.debug(
                "query=%r tokens=%d decision=%s best_local=%.4f",
                query,
                len(query_tokens),
                decision.value,
                best_local_score,
            )

            used_fallback = False
            if best.score < self.config.confidence_threshold:
                try:
                    best = await self._fetch_remote(query)
                    used_fallback = True
                except FallbackUnavailable as exc:
                    fallback_error = str(exc)
                    logger.warning("Fallback unavailable, keeping local match: %s", exc)

        latency_ms = max(0, round(timer.elapsed_ms))
        digits = self.config.score_decimals
        reasoning = (
            f'Query: "{query}" | Tokens: {len(query_tokens)} | '
            f"Planner chose: {decision.value} | "
            f"Best local score: {best_local_score:.{digits}f} | "
            f"Fallback triggered: {str(used_fallback).lower()}"
        )
        trace: dict[str, Any] = {
            "reasoning": reasoning,
            "semantic_top_k_scores": [round(item.score, digits) for item in semantic],
            "keyword_top_k_scores": [item.score for item in keyword],
            "latency_ms": latency_ms,
        }
        if fallback_error is not None:
            trace["fallback_error"] = fallback_error

        self.trace_store.create_record(
            query=query,
            token_count=len(query_tokens),
            planner_decision=decision.value,
            used_fallback=used_fallback,
            best_local_score=best_local_score,
            final_score=best.score,
            final_source=best.source,
            tool_traces=observed_tools,
            latency_ms=timer.elapsed_ms,
            fallback_error=fallback_error,
        )
        logger.info(
            "decision=%s fallback=%s source=%s latency_ms=%d",
            decision.value,
            used_fallback,
            best.source,
            latency_ms,
        )

        return {
            "planner_decision": decision.value,
            "used_fallback_tool": used_fallback,
            "best_match": {
                "text": best.text,
                "score": round(best.score, digits),
                "source": best.source,
            },
            "trace": trace,
        }

    async def _fetch_remote(self, query: str) -> ScoredMatch:
        try:
            match = await asyncio.wait_for(
                self.remote_source.fetch_remote_match(query),
                timeout=self.config.fallback_timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise FallbackUnavailable(
                f"remote source timed out after {self.config.fallback_timeout_seconds}s"
            ) from exc
        if not isfinite(match.score):
            raise InvariantViolation(f"remote source returned non-finite score: {match.score}")
        return match
