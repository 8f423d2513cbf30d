"""Term-frequency vector space built fresh for each query."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import Counter
from collections.abc import Iterable, Sequence
from math import sqrt

from hybrid_agent.errors import InvariantViolation
from hybrid_agent.retrieval.tokenizer import tokenize


class Vocabulary:
    """Fixed enumeration of distinct tokens for one query evaluation."""

    __slots__ = ("_tokens", "_index")

    def __init__(self, tokens: Iterable[str]) -> None:
        self._tokens: tuple[str, ...] = tuple(dict.fromkeys(tokens))
        self._index = {token: i for i, token in enumerate(self._tokens)}

    @property
    def tokens(self) -> tuple[str, ...]:
        return self._tokens

    def __contains__(self, token: object) -> bool:
        return token in self._index

    def __len__(self) -> int:
        return len(self._tokens)


def build_vocabulary(query_tokens: Sequence[str], texts: Iterable[str]) -> Vocabulary:
    """Union of the query tokens and every text's tokens, in first-seen order."""

    def _all_tokens() -> Iterable[str]:
        yield from query_tokens
        for text in texts:
            yield from tokenize(text)

    return Vocabulary(_all_tokens())


class Vectorizer(ABC):
    """Maps text to a numeric vector over a vocabulary."""

    @abstractmethod
    def vectorize(self, text: str, vocabulary: Vocabulary) -> list[int]:
        """Return one component per vocabulary entry."""


class TermFrequencyVectorizer(Vectorizer):
    """Counts exact-match token occurrences per vocabulary entry."""

    def vectorize(self, text: str, vocabulary: Vocabulary) -> list[int]:
        counts = Counter(tokenize(text))
        return [counts.get(token, 0) for token in vocabulary.tokens]


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between `a` and `b`; 0.0 when either is a zero vector."""
    if len(a) != len(b):
        raise InvariantViolation(
            f"vector length mismatch: {len(a)} != {len(b)}"
        )
    numerator = sum(x * y for x, y in zip(a, b, strict=True))
    norm_a = sqrt(sum(x * x for x in a))
    norm_b = sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return numerator / (norm_a * norm_b)
