"""Built-in tool implementations for the hybrid agent."""

from __future__ import annotations

from pydantic import BaseModel, Field

from hybrid_agent.agent.registry import ToolRegistry, ToolSpec
from hybrid_agent.retrieval.retriever import LocalRetriever
from hybrid_agent.types import ScoredMatch

SEMANTIC_TOOL = "semantic_search"
KEYWORD_TOOL = "keyword_search"


class SearchToolInput(BaseModel):
    query: str
    top_k: int | None = Field(default=None, ge=1, le=50)


def register_builtin_tools(registry: ToolRegistry, retriever: LocalRetriever) -> None:
    """Register the local scorers used by the orchestrator.

    Tools:
    - `semantic_search`: cosine similarity over term-frequency vectors.
    - `keyword_search`: normalized distinct-token overlap.
    """

    def _semantic(input_data: SearchToolInput) -> list[ScoredMatch]:
        return retriever.semantic_search(input_data.query, input_data.top_k)

    def _keyword(input_data: SearchToolInput) -> list[ScoredMatch]:
        return retriever.keyword_search(input_data.query, input_data.top_k)

    registry.register(
        ToolSpec(
            name=SEMANTIC_TOOL,
            description="Rank corpus documents by vector-space similarity to the query.",
            args_schema=SearchToolInput,
            handler=_semantic,
            tags=["retrieval", "semantic"],
        )
    )
    registry.register(
        ToolSpec(
            name=KEYWORD_TOOL,
            description="Rank corpus documents by overlap with the query's keywords.",
            args_schema=SearchToolInput,
            handler=_keyword,
            tags=["retrieval", "keyword"],
        )
    )
