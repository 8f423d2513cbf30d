"""Error taxonomy surfaced at the query boundary."""

from __future__ import annotations


class HybridAgentError(Exception):
    """Base class for every failure raised by the agent."""


class InputError(HybridAgentError, ValueError):
    """The query is missing, not a string, or blank after trimming."""


class FallbackUnavailable(HybridAgentError, RuntimeError):
    """The remote retrieval source failed or did not answer in time."""


class InvariantViolation(HybridAgentError, RuntimeError):
    """An internal consistency check failed (vector shape, non-finite score)."""
