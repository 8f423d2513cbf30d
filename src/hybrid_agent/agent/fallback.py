"""Remote retrieval capability used when local confidence is too low."""

from __future__ import annotations

from typing import Protocol

from hybrid_agent.types import ScoredMatch

PINECONE_SOURCE = "pinecone"


class RemoteMatchSource(Protocol):
    """Asynchronous remote lookup injected into the orchestrator.

    Implementations should raise `FallbackUnavailable` when the remote
    service cannot answer.
    """

    async def fetch_remote_match(self, query: str) -> ScoredMatch:
        """Return the remote service's best match for `query`."""


class PineconeStub:
    """Deterministic stand-in for a hosted vector database.

    Always succeeds with a fixed score and never consults the local corpus.
    Swap in a real `RemoteMatchSource` to query an actual index.
    """

    def __init__(
        self,
        *,
        score: float = 0.95,
        template: str = (
            'Remote: CentrAlign leverages advanced vector databases for memory '
            '(context: "{query}").'
        ),
    ) -> None:
        self.score = score
        self.template = template

    async def fetch_remote_match(self, query: str) -> ScoredMatch:
        return ScoredMatch(
            text=self.template.format(query=query),
            score=self.score,
            source=PINECONE_SOURCE,
        )
