import pytest

from hybrid_agent.corpus import DEFAULT_DOCUMENTS, Corpus, default_corpus
from hybrid_agent.types import Document


def test_default_corpus_preserves_order() -> None:
    corpus = default_corpus()

    assert len(corpus) == 10
    assert [doc.id for doc in corpus] == list(range(1, 11))
    assert corpus.documents == DEFAULT_DOCUMENTS


def test_corpus_rejects_empty_and_duplicate_ids() -> None:
    with pytest.raises(ValueError):
        Corpus([])
    with pytest.raises(ValueError):
        Corpus([Document(1, "a"), Document(1, "b")])
