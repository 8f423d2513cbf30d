"""Local scoring strategies over the in-memory corpus."""

from __future__ import annotations

from math import isfinite
from typing import Protocol

from hybrid_agent.config import RetrievalConfig
from hybrid_agent.corpus import Corpus
from hybrid_agent.errors import InvariantViolation
from hybrid_agent.retrieval.tokenizer import tokenize
from hybrid_agent.retrieval.vectorizer import (
    TermFrequencyVectorizer,
    Vectorizer,
    build_vocabulary,
    cosine_similarity,
)
from hybrid_agent.types import ScoredMatch


class SearchStrategy(Protocol):
    """Minimal contract shared by the local scorers."""

    name: str

    def search(self, query: str, k: int | None = None) -> list[ScoredMatch]:
        """Return at most `k` matches ordered by descending score."""


class SemanticSearch:
    """Ranks documents by term-frequency cosine similarity to the query."""

    name = "semantic_search"

    def __init__(
        self,
        corpus: Corpus,
        vectorizer: Vectorizer | None = None,
        config: RetrievalConfig | None = None,
    ) -> None:
        self.corpus = corpus
        self.vectorizer = vectorizer or TermFrequencyVectorizer()
        self.config = config or RetrievalConfig()

    def search(self, query: str, k: int | None = None) -> list[ScoredMatch]:
        texts = self.corpus.texts()
        vocabulary = build_vocabulary(tokenize(query), texts)
        query_vector = self.vectorizer.vectorize(query, vocabulary)

        scored = [
            ScoredMatch(
                text=text,
                score=_checked(
                    cosine_similarity(query_vector, self.vectorizer.vectorize(text, vocabulary))
                ),
            )
            for text in texts
        ]
        return _top_k(scored, k or self.config.top_k)


class KeywordSearch:
    """Ranks documents by how many distinct query tokens they contain.

    Raw overlap counts are divided by the best count seen for this query
    (never less than 1), so a query that matches nothing yields all-zero
    scores rather than an error.
    """

    name = "keyword_search"

    def __init__(self, corpus: Corpus, config: RetrievalConfig | None = None) -> None:
        self.corpus = corpus
        self.config = config or RetrievalConfig()

    def search(self, query: str, k: int | None = None) -> list[ScoredMatch]:
        query_terms = set(tokenize(query))
        raw = [
            (doc.text, len(query_terms & set(tokenize(doc.text))))
            for doc in self.corpus
        ]
        denom = max(max(count for _, count in raw), 1)

        scored = [
            ScoredMatch(
                text=text,
                score=round(count / denom, self.config.keyword_score_decimals),
            )
            for text, count in raw
        ]
        return _top_k(scored, k or self.config.top_k)


def _checked(score: float) -> float:
    if not isfinite(score):
        raise InvariantViolation(f"non-finite similarity score: {score}")
    return score


def _top_k(items: list[ScoredMatch], k: int) -> list[ScoredMatch]:
    # sorted() is stable, so equal scores keep corpus order.
    return sorted(items, key=lambda item: item.score, reverse=True)[:k]
