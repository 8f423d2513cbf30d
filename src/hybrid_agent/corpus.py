"""Static, read-only document corpus."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from hybrid_agent.types import Document

DEFAULT_DOCUMENTS: tuple[Document, ...] = (
    Document(1, "CentrAlign helps you align your daily tasks with long-term goals."),
    Document(2, "Pricing plans include free tier, pro monthly, and enterprise options."),
    Document(3, "Security is top priority with end-to-end encryption."),
    Document(4, "You can organize tasks using smart categories in CentrAlign."),
    Document(5, "CentrAlign uses AI to optimize your productivity each day."),
    Document(6, "Enterprise version includes team collaboration tools."),
    Document(7, "Data privacy is ensured through secure on-device processing."),
    Document(8, "CentrAlign supports integration with Google Calendar."),
    Document(9, "Free tier users get access to core productivity features."),
    Document(10, "Premium subscription unlocks advanced analytics."),
)


class Corpus:
    """Ordered document collection shared by every query evaluation.

    Insertion order is preserved and only matters for tie-breaking between
    equally scored documents. The collection cannot be changed after
    construction, so a single instance is safe to share across concurrent
    evaluations.
    """

    __slots__ = ("_documents",)

    def __init__(self, documents: Iterable[Document]) -> None:
        docs = tuple(documents)
        if not docs:
            raise ValueError("corpus must contain at least one document")
        seen: set[int] = set()
        for doc in docs:
            if doc.id in seen:
                raise ValueError(f"Duplicate document id: {doc.id}")
            seen.add(doc.id)
        self._documents = docs

    @property
    def documents(self) -> tuple[Document, ...]:
        return self._documents

    def texts(self) -> list[str]:
        return [doc.text for doc in self._documents]

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)


def default_corpus() -> Corpus:
    return Corpus(DEFAULT_DOCUMENTS)
