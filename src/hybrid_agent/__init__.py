"""Hybrid retrieval agent package."""

from .config import AgentConfig, PlannerConfig, RetrievalConfig

__all__ = ["AgentConfig", "PlannerConfig", "RetrievalConfig"]
