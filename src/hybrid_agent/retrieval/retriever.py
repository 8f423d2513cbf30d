"""Local retriever bundling both scoring strategies over one corpus."""

from __future__ import annotations

from hybrid_agent.config import RetrievalConfig
from hybrid_agent.corpus import Corpus
from hybrid_agent.retrieval.search import KeywordSearch, SearchStrategy, SemanticSearch
from hybrid_agent.retrieval.vectorizer import Vectorizer
from hybrid_agent.types import ScoredMatch


class LocalRetriever:
    """Owns the read-only corpus and the two scorers built on top of it.

    Both routes are independent: neither reads the other's output, and
    neither keeps state between calls, so one retriever can serve many
    concurrent evaluations.
    """

    def __init__(
        self,
        corpus: Corpus,
        *,
        vectorizer: Vectorizer | None = None,
        config: RetrievalConfig | None = None,
    ) -> None:
        self.corpus = corpus
        self.config = config or RetrievalConfig()
        self.semantic: SearchStrategy = SemanticSearch(corpus, vectorizer, self.config)
        self.keyword: SearchStrategy = KeywordSearch(corpus, self.config)

    def semantic_search(self, query: str, top_k: int | None = None) -> list[ScoredMatch]:
        return self.semantic.search(query, top_k)

    def keyword_search(self, query: str, top_k: int | None = None) -> list[ScoredMatch]:
        return self.keyword.search(query, top_k)
