import asyncio

import pytest

from hybrid_agent.agent.orchestrator import QueryOrchestrator
from hybrid_agent.config import AgentConfig
from hybrid_agent.corpus import Corpus, default_corpus
from hybrid_agent.errors import FallbackUnavailable, InputError, InvariantViolation
from hybrid_agent.obs.tracing import TraceStore
from hybrid_agent.retrieval.retriever import LocalRetriever
from hybrid_agent.types import Document, ScoredMatch


def _orchestrator(**kwargs) -> QueryOrchestrator:
    return QueryOrchestrator(LocalRetriever(default_corpus()), **kwargs)


def _run(orchestrator: QueryOrchestrator, query: object) -> dict:
    return asyncio.run(orchestrator.process_query(query))


class _FailingRemote:
    async def fetch_remote_match(self, query: str) -> ScoredMatch:
        raise FallbackUnavailable("remote index offline")


class _SlowRemote:
    async def fetch_remote_match(self, query: str) -> ScoredMatch:
        await asyncio.sleep(1.0)
        return ScoredMatch(text="late", score=0.99, source="pinecone")


class _NanRemote:
    async def fetch_remote_match(self, query: str) -> ScoredMatch:
        return ScoredMatch(text="broken", score=float("nan"), source="pinecone")


def test_short_keyword_hit_stays_local() -> None:
    result = _run(_orchestrator(), "pricing")

    assert result["planner_decision"] == "keyword_search"
    assert result["used_fallback_tool"] is False
    assert result["best_match"] == {
        "text": "Pricing plans include free tier, pro monthly, and enterprise options.",
        "score": 1.0,
        "source": "local",
    }
    assert result["trace"]["keyword_top_k_scores"] == [1.0, 0.0, 0.0]
    assert result["trace"]["semantic_top_k_scores"][0] == 0.32


def test_short_query_without_keyword_hit_falls_back() -> None:
    result = _run(_orchestrator(), "price")

    assert result["planner_decision"] == "semantic_search"
    assert result["used_fallback_tool"] is True
    assert result["best_match"]["source"] == "pinecone"
    assert result["best_match"]["score"] == 0.95
    assert "price" in result["best_match"]["text"]


def test_long_query_uses_semantic_search() -> None:
    query = "How does CentrAlign help with long term goals?"
    result = _run(_orchestrator(), query)

    assert result["planner_decision"] == "semantic_search"
    assert result["used_fallback_tool"] is True
    assert result["best_match"]["source"] == "pinecone"
    assert result["trace"]["reasoning"] == (
        f'Query: "{query}" | Tokens: 8 | Planner chose: semantic_search | '
        "Best local score: 0.34 | Fallback triggered: true"
    )


def test_medium_query_hybrid_picks_higher_score() -> None:
    result = _run(_orchestrator(), "free tier productivity features")

    assert result["planner_decision"] == "hybrid"
    assert result["used_fallback_tool"] is False
    assert result["best_match"]["text"].startswith("Free tier users")
    assert result["best_match"]["score"] == 1.0
    assert result["trace"]["semantic_top_k_scores"] == [0.67, 0.32, 0.17]
    assert result["trace"]["keyword_top_k_scores"] == [1.0, 0.5, 0.25]


def test_result_contract_fields() -> None:
    result = _run(_orchestrator(), "pricing")

    assert set(result) == {"planner_decision", "used_fallback_tool", "best_match", "trace"}
    assert set(result["best_match"]) == {"text", "score", "source"}
    assert set(result["trace"]) == {
        "reasoning",
        "semantic_top_k_scores",
        "keyword_top_k_scores",
        "latency_ms",
    }
    assert isinstance(result["trace"]["latency_ms"], int)
    assert result["trace"]["latency_ms"] >= 0


def test_results_are_idempotent_apart_from_latency() -> None:
    orchestrator = _orchestrator()
    first = _run(orchestrator, "organize tasks with smart categories")
    second = _run(orchestrator, "organize tasks with smart categories")

    first["trace"].pop("latency_ms")
    second["trace"].pop("latency_ms")
    assert first == second


@pytest.mark.parametrize("query", ["", "   \n\t", None, 42])
def test_invalid_queries_rejected_before_scoring(query: object) -> None:
    trace_store = TraceStore()
    with pytest.raises(InputError):
        _run(_orchestrator(trace_store=trace_store), query)
    assert len(trace_store) == 0


def test_fallback_failure_reports_local_match() -> None:
    result = _run(_orchestrator(remote_source=_FailingRemote()), "price")

    assert result["used_fallback_tool"] is False
    assert result["best_match"]["source"] == "local"
    assert result["best_match"]["score"] == 0.0
    assert result["trace"]["fallback_error"] == "remote index offline"


def test_fallback_timeout_is_reported_as_unavailable() -> None:
    orchestrator = _orchestrator(
        remote_source=_SlowRemote(),
        config=AgentConfig(fallback_timeout_seconds=0.01),
    )

    result = _run(orchestrator, "price")

    assert result["used_fallback_tool"] is False
    assert "timed out" in result["trace"]["fallback_error"]


def test_non_finite_remote_score_is_fatal() -> None:
    with pytest.raises(InvariantViolation):
        _run(_orchestrator(remote_source=_NanRemote()), "price")


def test_trace_store_records_tool_calls() -> None:
    trace_store = TraceStore()
    _run(_orchestrator(trace_store=trace_store), "pricing")

    [record] = trace_store.list_recent()
    assert record.planner_decision == "keyword_search"
    assert record.best_local_score == 1.0
    assert [tool.name for tool in record.tool_traces] == ["semantic_search", "keyword_search"]


def test_injected_corpus_is_used() -> None:
    corpus = Corpus([Document(1, "Quarterly roadmap review"), Document(2, "Lunch menu")])
    orchestrator = QueryOrchestrator(LocalRetriever(corpus))

    result = _run(orchestrator, "roadmap")

    assert result["best_match"] == {
        "text": "Quarterly roadmap review",
        "score": 1.0,
        "source": "local",
    }


def test_concurrent_evaluations_do_not_interfere() -> None:
    orchestrator = _orchestrator()
    queries = ["pricing", "price", "free tier productivity features"]

    async def _gather() -> list[dict]:
        return await asyncio.gather(*(orchestrator.process_query(q) for q in queries))

    results = asyncio.run(_gather())

    assert [r["planner_decision"] for r in results] == [
        "keyword_search",
        "semantic_search",
        "hybrid",
    ]
